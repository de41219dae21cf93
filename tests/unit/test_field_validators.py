import pytest

from onboarding.validation.field_validators import TAX_ID_EXAMPLE, validate_field
from onboarding.validation.models import Severity


class TestTaxId:
    @pytest.mark.parametrize("value", ["ABCDE1234F", "ZZZZZ0000A", "PQRST9876Z"])
    def test_accepts_valid_pattern(self, value: str) -> None:
        outcome = validate_field("tax_id", value)
        assert outcome.is_valid
        assert outcome.normalized_value == value

    def test_lowercase_input_is_normalized_to_uppercase(self) -> None:
        outcome = validate_field("tax_id", "abcde1234f")
        assert outcome.is_valid
        assert outcome.normalized_value == "ABCDE1234F"

    def test_digit_in_final_position_is_rejected_with_example(self) -> None:
        outcome = validate_field("tax_id", "ABCDE12345")
        assert not outcome.is_valid
        assert outcome.severity is Severity.ERROR
        assert outcome.suggestion is not None
        assert TAX_ID_EXAMPLE in outcome.suggestion

    @pytest.mark.parametrize("value", ["", "A", "ABCDE1234", "ABCDE1234FG", "ABCDE1234F " * 2])
    def test_any_other_length_is_rejected_with_suggestion(self, value: str) -> None:
        outcome = validate_field("tax_id", value)
        assert not outcome.is_valid
        assert outcome.suggestion


class TestTaxRegistrationNumber:
    def test_accepts_valid_number(self) -> None:
        outcome = validate_field("tax_registration_number", "27aabcu9603r1zm")
        assert outcome.is_valid
        assert outcome.normalized_value == "27AABCU9603R1ZM"

    def test_is_optional(self) -> None:
        assert validate_field("tax_registration_number", "").is_valid
        assert validate_field("tax_registration_number", None).is_valid

    @pytest.mark.parametrize("value", ["27AABCU9603R1XM", "27AABCU9603R1Z", "AAAABCU9603R1ZM"])
    def test_rejects_bad_shape(self, value: str) -> None:
        assert not validate_field("tax_registration_number", value).is_valid


class TestPhone:
    @pytest.mark.parametrize("value", ["9876543210", "98765 43210", "(987) 654-3210", "6000000000"])
    def test_accepts_ten_digits_starting_six_to_nine(self, value: str) -> None:
        outcome = validate_field("phone", value)
        assert outcome.is_valid
        assert outcome.normalized_value is not None
        assert len(outcome.normalized_value) == 10

    @pytest.mark.parametrize("value", ["5876543210", "987654321", "98765432101", "98765abcde", ""])
    def test_rejects_everything_else(self, value: str) -> None:
        assert not validate_field("phone", value).is_valid

    def test_accepts_numeric_input(self) -> None:
        assert validate_field("phone", 9876543210).is_valid


class TestEmail:
    def test_accepts_standard_shape(self) -> None:
        outcome = validate_field("email", " Owner@Example.com ")
        assert outcome.is_valid
        assert outcome.normalized_value == "owner@example.com"

    @pytest.mark.parametrize("value", ["owner.example.com", "owner@example", "a b@c.de", ""])
    def test_rejects_other_shapes(self, value: str) -> None:
        assert not validate_field("email", value).is_valid


class TestPostalCode:
    def test_accepts_six_digits(self) -> None:
        assert validate_field("postal_code", "400001").is_valid

    @pytest.mark.parametrize("value", ["040001", "40001", "4000011", "40000A"])
    def test_rejects_other_values(self, value: str) -> None:
        assert not validate_field("postal_code", value).is_valid


class TestBankRoutingCode:
    def test_accepts_and_uppercases(self) -> None:
        outcome = validate_field("bank_routing_code", "sbin0001234")
        assert outcome.is_valid
        assert outcome.normalized_value == "SBIN0001234"

    @pytest.mark.parametrize("value", ["SBIN1001234", "SBIN000123", "SBI00001234", ""])
    def test_rejects_other_values(self, value: str) -> None:
        assert not validate_field("bank_routing_code", value).is_valid


class TestBankAccountNumber:
    def test_strips_spaces_and_hyphens(self) -> None:
        outcome = validate_field("bank_account_number", "1234-5678 90")
        assert outcome.is_valid
        assert outcome.normalized_value == "1234567890"

    @pytest.mark.parametrize("value", ["12345678", "1" * 19, "12345abc90", ""])
    def test_rejects_other_values(self, value: str) -> None:
        assert not validate_field("bank_account_number", value).is_valid


class TestSupplementaryFields:
    def test_business_name_length(self) -> None:
        assert not validate_field("business_name", "A").is_valid
        assert not validate_field("business_name", "A" * 101).is_valid
        assert validate_field("business_name", "ABC Traders").is_valid

    def test_person_names_reject_digits(self) -> None:
        assert not validate_field("owner_name", "John 2").is_valid
        assert validate_field("account_holder_name", "Ravi Kumar").is_valid

    def test_choices_are_case_insensitive(self) -> None:
        outcome = validate_field("account_type", "Savings")
        assert outcome.is_valid
        assert outcome.normalized_value == "savings"
        assert not validate_field("business_category", "casino").is_valid
        assert validate_field("legal_form", "sole_proprietorship").is_valid
        assert not validate_field("legal_form", "private_limited").is_valid

    def test_amounts_must_be_positive(self) -> None:
        assert validate_field("monthly_volume", 50000.0).is_valid
        assert validate_field("average_transaction_size", "1,250").is_valid
        assert not validate_field("monthly_volume", -5).is_valid
        assert not validate_field("monthly_volume", "lots").is_valid

    @pytest.mark.parametrize("value", ["nan", "inf", "-Infinity", float("inf")])
    def test_non_finite_amounts_are_rejected(self, value: object) -> None:
        outcome = validate_field("monthly_volume", value)
        assert not outcome.is_valid
        assert outcome.error == "Amount must be a number"

    def test_required_text_fields(self) -> None:
        assert not validate_field("city", "  ").is_valid
        assert validate_field("city", "Mumbai").is_valid


class TestTotality:
    def test_unknown_field_is_valid_info(self) -> None:
        outcome = validate_field("favourite_colour", "blue")
        assert outcome.is_valid
        assert outcome.severity is Severity.INFO

    @pytest.mark.parametrize("value", [None, 12, 3.5, [], {}, object(), "\x00", "💳" * 20])
    @pytest.mark.parametrize(
        "field",
        ["tax_id", "tax_registration_number", "phone", "email", "postal_code",
         "bank_routing_code", "bank_account_number", "monthly_volume", "business_category"],
    )
    def test_never_raises(self, field: str, value: object) -> None:
        outcome = validate_field(field, value)
        assert outcome.field == field
        if not outcome.is_valid:
            assert outcome.error
