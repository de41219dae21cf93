"""Stateless, total validators for individual merchant record fields.

Every validator returns a ValidationOutcome and never raises, whatever the
input. None of them consult external services.
"""

import math
import re
import string
from collections.abc import Callable

from onboarding.domain.models import AccountType, BusinessCategory, LegalForm
from onboarding.validation.models import Severity, ValidationOutcome

TAX_ID_EXAMPLE = "ABCDE1234F"
TAX_REGISTRATION_EXAMPLE = "27AABCU9603R1ZM"
ROUTING_CODE_EXAMPLE = "SBIN0001234"

_TAX_ID_RE = re.compile(r"[A-Z]{5}[0-9]{4}[A-Z]")
_TAX_REGISTRATION_RE = re.compile(r"[0-9]{2}[A-Z]{5}[0-9]{4}[A-Z][A-Z0-9]Z[A-Z0-9]")
_PHONE_RE = re.compile(r"[6-9][0-9]{9}")
_EMAIL_RE = re.compile(r"[^\s@]+@[^\s@]+\.[^\s@]+")
_POSTAL_CODE_RE = re.compile(r"[1-9][0-9]{5}")
_ROUTING_CODE_RE = re.compile(r"[A-Z]{4}0[A-Z0-9]{6}")
_ACCOUNT_NUMBER_RE = re.compile(r"[0-9]{9,18}")

_PHONE_NOISE_RE = re.compile(f"[\\s{re.escape(string.punctuation)}]")
_ACCOUNT_NOISE_RE = re.compile(r"[\s\-]")
_DIGIT_RE = re.compile(r"\d")

_BUSINESS_NAME_MAX = 100
_ACCOUNT_TYPES = frozenset(t.value for t in AccountType)
_BUSINESS_CATEGORIES = frozenset(c.value for c in BusinessCategory)
_LEGAL_FORMS = frozenset(f.value for f in LegalForm)

_TAX_ID_SUGGESTION = (
    f"Use the format {TAX_ID_EXAMPLE}: 5 letters, 4 digits, then 1 letter"
)


def validate_field(field: str, value: object) -> ValidationOutcome:
    """Validate one raw field value.

    Unknown fields are accepted with severity 'info'.
    """
    validator = _VALIDATORS.get(field)
    if validator is None:
        return ValidationOutcome(field=field, is_valid=True)
    return validator(_as_text(value))


def _as_text(value: object) -> str:
    if value is None:
        return ""
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def _ok(field: str, normalized: str | None = None) -> ValidationOutcome:
    return ValidationOutcome(field=field, is_valid=True, normalized_value=normalized)


def _fail(field: str, error: str, suggestion: str | None = None) -> ValidationOutcome:
    return ValidationOutcome(
        field=field,
        is_valid=False,
        error=error,
        suggestion=suggestion,
        severity=Severity.ERROR,
    )


def _validate_tax_id(value: str) -> ValidationOutcome:
    field = "tax_id"
    if not value.strip():
        return _fail(field, "Tax ID is required", _TAX_ID_SUGGESTION)
    normalized = value.upper()
    if len(normalized) != 10:
        return _fail(
            field,
            f"Tax ID must be exactly 10 characters, got {len(normalized)}",
            _TAX_ID_SUGGESTION,
        )
    if not _TAX_ID_RE.fullmatch(normalized):
        return _fail(field, "Invalid tax ID format", _TAX_ID_SUGGESTION)
    return _ok(field, normalized)


def _validate_tax_registration_number(value: str) -> ValidationOutcome:
    field = "tax_registration_number"
    if not value.strip():
        return _ok(field)
    normalized = value.strip().upper()
    if len(normalized) != 15 or not _TAX_REGISTRATION_RE.fullmatch(normalized):
        return _fail(
            field,
            "Invalid tax registration number format",
            f"It should be 15 characters (e.g., {TAX_REGISTRATION_EXAMPLE})",
        )
    return _ok(field, normalized)


def _validate_phone(value: str) -> ValidationOutcome:
    field = "phone"
    if not value.strip():
        return _fail(field, "Phone number is required", "We'll use this for important notifications")
    digits = _PHONE_NOISE_RE.sub("", value)
    if not _PHONE_RE.fullmatch(digits):
        return _fail(
            field,
            "Invalid phone number",
            "Please enter a 10-digit mobile number starting with 6, 7, 8 or 9",
        )
    return _ok(field, digits)


def _validate_email(value: str) -> ValidationOutcome:
    field = "email"
    candidate = value.strip()
    if not candidate:
        return _fail(
            field,
            "Email is required",
            "We'll use this to send important updates about your application",
        )
    if not _EMAIL_RE.fullmatch(candidate):
        return _fail(field, "Invalid email format", "Please enter a valid email (e.g., yourname@example.com)")
    return _ok(field, candidate.lower())


def _validate_postal_code(value: str) -> ValidationOutcome:
    field = "postal_code"
    candidate = value.strip()
    if not candidate:
        return _fail(field, "Postal code is required")
    if not _POSTAL_CODE_RE.fullmatch(candidate):
        return _fail(field, "Invalid postal code", "Please enter a 6-digit postal code not starting with 0")
    return _ok(field, candidate)


def _validate_bank_routing_code(value: str) -> ValidationOutcome:
    field = "bank_routing_code"
    candidate = value.strip().upper()
    if not candidate:
        return _fail(field, "Bank routing code is required", "You can find this on your cheque or passbook")
    if len(candidate) != 11 or not _ROUTING_CODE_RE.fullmatch(candidate):
        return _fail(
            field,
            "Invalid bank routing code",
            f"It should be 11 characters (e.g., {ROUTING_CODE_EXAMPLE})",
        )
    return _ok(field, candidate)


def _validate_bank_account_number(value: str) -> ValidationOutcome:
    field = "bank_account_number"
    candidate = _ACCOUNT_NOISE_RE.sub("", value)
    if not candidate:
        return _fail(field, "Account number is required")
    if not candidate.isascii() or not candidate.isdigit():
        return _fail(field, "Account number should contain only digits")
    if not _ACCOUNT_NUMBER_RE.fullmatch(candidate):
        return _fail(
            field,
            "Invalid account number length",
            "Account number should be between 9 and 18 digits",
        )
    return _ok(field, candidate)


def _validate_business_name(value: str) -> ValidationOutcome:
    field = "business_name"
    candidate = value.strip()
    if len(candidate) < 2:
        return _fail(field, "Business name is too short", "Please enter your complete business name as registered")
    if len(candidate) > _BUSINESS_NAME_MAX:
        return _fail(
            field,
            "Business name is too long",
            f"Please use the official registered name (max {_BUSINESS_NAME_MAX} characters)",
        )
    return _ok(field, candidate)


def _person_name_validator(field: str, label: str) -> Callable[[str], ValidationOutcome]:
    def validate(value: str) -> ValidationOutcome:
        candidate = value.strip()
        if len(candidate) < 2:
            return _fail(field, f"Please enter the full {label}", "Use the name as it appears on official documents")
        if _DIGIT_RE.search(candidate):
            return _fail(field, "Name should not contain numbers", "Please enter the name using only letters")
        return _ok(field, candidate)

    return validate


def _required_text_validator(field: str, label: str) -> Callable[[str], ValidationOutcome]:
    def validate(value: str) -> ValidationOutcome:
        candidate = value.strip()
        if not candidate:
            return _fail(field, f"{label} is required")
        return _ok(field, candidate)

    return validate


def _choice_validator(field: str, choices: frozenset[str]) -> Callable[[str], ValidationOutcome]:
    def validate(value: str) -> ValidationOutcome:
        candidate = value.strip().lower()
        if candidate not in choices:
            return _fail(
                field,
                f"'{value}' is not a valid option",
                f"Choose one of: {', '.join(sorted(choices))}",
            )
        return _ok(field, candidate)

    return validate


def _positive_amount_validator(field: str) -> Callable[[str], ValidationOutcome]:
    def validate(value: str) -> ValidationOutcome:
        candidate = value.replace(",", "").strip()
        if not candidate:
            return _ok(field)
        try:
            amount = float(candidate)
        except ValueError:
            return _fail(field, "Amount must be a number", "Enter digits only, e.g. 50000")
        if not math.isfinite(amount):
            return _fail(field, "Amount must be a number", "Enter digits only, e.g. 50000")
        if amount <= 0:
            return _fail(field, "Amount must be greater than zero")
        return _ok(field, candidate)

    return validate


_VALIDATORS: dict[str, Callable[[str], ValidationOutcome]] = {
    "tax_id": _validate_tax_id,
    "tax_registration_number": _validate_tax_registration_number,
    "phone": _validate_phone,
    "email": _validate_email,
    "postal_code": _validate_postal_code,
    "bank_routing_code": _validate_bank_routing_code,
    "bank_account_number": _validate_bank_account_number,
    "business_name": _validate_business_name,
    "owner_name": _person_name_validator("owner_name", "owner name"),
    "account_holder_name": _person_name_validator("account_holder_name", "account holder name"),
    "street_address": _required_text_validator("street_address", "Street address"),
    "city": _required_text_validator("city", "City"),
    "state": _required_text_validator("state", "State"),
    "account_type": _choice_validator("account_type", _ACCOUNT_TYPES),
    "business_category": _choice_validator("business_category", _BUSINESS_CATEGORIES),
    "legal_form": _choice_validator("legal_form", _LEGAL_FORMS),
    "monthly_volume": _positive_amount_validator("monthly_volume"),
    "average_transaction_size": _positive_amount_validator("average_transaction_size"),
}

VALIDATED_FIELDS: frozenset[str] = frozenset(_VALIDATORS)
