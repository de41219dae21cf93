import json

import httpx
import pytest

from onboarding.domain.models import VerificationStatus, VerificationType
from onboarding.verification.base import names_match
from onboarding.verification.exceptions import VerificationError, VerificationNetworkError
from onboarding.verification.http_verifier import (
    HttpBankAccountVerifier,
    HttpKycVerifier,
    HttpNegativeListVerifier,
    HttpTaxIdVerifier,
    HttpTaxRegistrationVerifier,
    HttpVerifier,
)
from onboarding.verification.static_verifier import (
    StaticBankAccountVerifier,
    StaticKycVerifier,
    StaticNegativeListVerifier,
    StaticTaxIdVerifier,
)

BANK_SUBJECT = {
    "bank_account_number": "123456789012",
    "bank_routing_code": "HDFC0000123",
    "account_holder_name": "Ravi Kumar",
}

SCREENING_SUBJECT = {
    "business_name": "ABC Traders",
    "owner_name": "Ravi Kumar",
    "tax_id": "ABCDE1234F",
}


def _client(handler) -> httpx.Client:  # type: ignore[no-untyped-def]
    return httpx.Client(transport=httpx.MockTransport(handler))


def _answer(payload: object, status_code: int = 200) -> httpx.Client:
    return _client(lambda request: httpx.Response(status_code, json=payload))


class TestNamesMatch:
    def test_ignores_case_spacing_and_punctuation(self) -> None:
        assert names_match("RAVI  KUMAR", "ravi kumar")
        assert names_match("A.B.C. Traders", "abc traders")

    def test_different_or_empty_names(self) -> None:
        assert not names_match("Ravi Kumar", "Ravi Kumari")
        assert not names_match("", "")


class TestStaticVerifiers:
    def test_bank_account_echoes_holder_name(self) -> None:
        result = StaticBankAccountVerifier().verify(BANK_SUBJECT)
        assert result.verification_type is VerificationType.BANK_ACCOUNT
        assert result.status is VerificationStatus.VERIFIED
        assert result.details == {"name_at_bank": "Ravi Kumar"}

    def test_kyc_reports_low_risk(self) -> None:
        result = StaticKycVerifier().verify({"tax_id": "ABCDE1234F"})
        assert result.status is VerificationStatus.VERIFIED
        assert result.details["risk_score"] == "0.15"
        assert result.alerts == []

    def test_tax_id_is_active(self) -> None:
        result = StaticTaxIdVerifier().verify({"tax_id": "ABCDE1234F", "owner_name": "Ravi Kumar"})
        assert result.status is VerificationStatus.VERIFIED

    def test_negative_list_is_clear_by_default(self) -> None:
        result = StaticNegativeListVerifier().verify(SCREENING_SUBJECT)
        assert result.status is VerificationStatus.VERIFIED
        assert result.alerts == []

    def test_negative_list_matches_owner_or_business(self) -> None:
        verifier = StaticNegativeListVerifier(["ravi kumar", "Shady Traders"])
        result = verifier.verify(SCREENING_SUBJECT)
        assert result.status is VerificationStatus.REJECTED
        assert result.alerts == ["ravi kumar"]


class TestHttpVerifier:
    def test_base_verifier_cannot_be_instantiated(self) -> None:
        with pytest.raises(TypeError):
            HttpVerifier("https://verify.test")  # type: ignore[abstract]

    def test_posts_subject_as_json(self) -> None:
        seen: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            return httpx.Response(200, json={"account_exists": True, "name_at_bank": "RAVI KUMAR"})

        HttpBankAccountVerifier("https://verify.test/bank", client=_client(handler)).verify(BANK_SUBJECT)

        assert seen[0].method == "POST"
        assert seen[0].url.path == "/bank"
        assert json.loads(seen[0].content) == BANK_SUBJECT

    def test_server_error_raises(self) -> None:
        verifier = HttpKycVerifier("https://verify.test", client=_answer({}, status_code=502))
        with pytest.raises(VerificationError, match="502"):
            verifier.verify({"tax_id": "ABCDE1234F"})

    def test_invalid_json_raises(self) -> None:
        verifier = HttpKycVerifier(
            "https://verify.test",
            client=_client(lambda request: httpx.Response(200, text="<html>")),
        )
        with pytest.raises(VerificationError, match="invalid JSON"):
            verifier.verify({"tax_id": "ABCDE1234F"})

    def test_non_object_payload_raises(self) -> None:
        verifier = HttpKycVerifier("https://verify.test", client=_answer(["VERIFIED"]))
        with pytest.raises(VerificationError, match="Unexpected"):
            verifier.verify({"tax_id": "ABCDE1234F"})

    def test_transport_failure_is_a_network_error(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectTimeout("timed out", request=request)

        verifier = HttpKycVerifier("https://verify.test", client=_client(handler))
        with pytest.raises(VerificationNetworkError):
            verifier.verify({"tax_id": "ABCDE1234F"})


class TestHttpBankAccountVerifier:
    def test_matching_name_is_verified(self) -> None:
        verifier = HttpBankAccountVerifier(
            "https://verify.test",
            client=_answer({"account_exists": True, "name_at_bank": "RAVI KUMAR"}),
        )
        result = verifier.verify(BANK_SUBJECT)
        assert result.status is VerificationStatus.VERIFIED
        assert result.details == {"name_at_bank": "RAVI KUMAR"}

    def test_different_name_is_rejected(self) -> None:
        verifier = HttpBankAccountVerifier(
            "https://verify.test",
            client=_answer({"account_exists": True, "name_at_bank": "Sunita Sharma"}),
        )
        result = verifier.verify(BANK_SUBJECT)
        assert result.status is VerificationStatus.REJECTED
        assert result.alerts == ["account_holder_name"]

    def test_missing_account_is_rejected(self) -> None:
        verifier = HttpBankAccountVerifier("https://verify.test", client=_answer({"account_exists": False}))
        result = verifier.verify(BANK_SUBJECT)
        assert result.status is VerificationStatus.REJECTED
        assert result.message == "Bank account not found"

    def test_unexpected_payload_raises(self) -> None:
        verifier = HttpBankAccountVerifier("https://verify.test", client=_answer({"account_exists": "yes"}))
        with pytest.raises(VerificationError):
            verifier.verify(BANK_SUBJECT)


class TestHttpTaxVerifiers:
    def test_active_tax_id_with_owner_name_is_verified(self) -> None:
        verifier = HttpTaxIdVerifier(
            "https://verify.test",
            client=_answer({"status": "Active", "name": "Ravi Kumar"}),
        )
        result = verifier.verify({"tax_id": "ABCDE1234F", "owner_name": "ravi kumar"})
        assert result.status is VerificationStatus.VERIFIED

    def test_tax_id_name_mismatch_is_rejected(self) -> None:
        verifier = HttpTaxIdVerifier(
            "https://verify.test",
            client=_answer({"status": "Active", "name": "Someone Else"}),
        )
        result = verifier.verify({"tax_id": "ABCDE1234F", "owner_name": "Ravi Kumar"})
        assert result.status is VerificationStatus.REJECTED
        assert result.alerts == ["owner_name"]

    def test_inactive_registration_is_rejected(self) -> None:
        verifier = HttpTaxRegistrationVerifier(
            "https://verify.test", client=_answer({"status": "Cancelled"})
        )
        result = verifier.verify({
            "tax_registration_number": "27AABCU9603R1ZM",
            "business_name": "ABC Traders",
        })
        assert result.status is VerificationStatus.REJECTED
        assert result.details == {"registration_status": "Cancelled"}


class TestHttpKycVerifier:
    @pytest.mark.parametrize(
        ("remote", "expected"),
        [
            ("VERIFIED", VerificationStatus.VERIFIED),
            ("pending", VerificationStatus.PENDING),
            ("FAILED", VerificationStatus.REJECTED),
        ],
    )
    def test_maps_provider_status(self, remote: str, expected: VerificationStatus) -> None:
        verifier = HttpKycVerifier(
            "https://verify.test",
            client=_answer({"status": remote, "risk_score": 0.15, "alerts": []}),
        )
        result = verifier.verify({"tax_id": "ABCDE1234F"})
        assert result.status is expected
        assert result.details == {"risk_score": "0.15"}

    def test_unknown_status_raises(self) -> None:
        verifier = HttpKycVerifier("https://verify.test", client=_answer({"status": "MAYBE"}))
        with pytest.raises(VerificationError, match="Unexpected KYC payload"):
            verifier.verify({"tax_id": "ABCDE1234F"})


class TestHttpNegativeListVerifier:
    def test_matches_are_reported_as_alerts(self) -> None:
        verifier = HttpNegativeListVerifier(
            "https://verify.test",
            client=_answer({"clear": False, "matches": ["RBI defaulter list"]}),
        )
        result = verifier.verify(SCREENING_SUBJECT)
        assert result.status is VerificationStatus.REJECTED
        assert result.alerts == ["RBI defaulter list"]

    def test_clear_is_verified(self) -> None:
        verifier = HttpNegativeListVerifier(
            "https://verify.test", client=_answer({"clear": True, "matches": []})
        )
        assert verifier.verify(SCREENING_SUBJECT).status is VerificationStatus.VERIFIED
