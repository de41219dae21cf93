"""Offline verifiers with canned answers, for local runs and demos."""

from collections.abc import Iterable, Mapping
from typing import ClassVar

from onboarding.domain.models import VerificationResult, VerificationStatus, VerificationType
from onboarding.verification.base import BaseVerifier, names_match


class StaticTaxIdVerifier(BaseVerifier):
    VERIFICATION_TYPE: ClassVar[VerificationType] = VerificationType.TAX_ID
    REQUIRED_FIELDS: ClassVar[tuple[str, ...]] = ("tax_id", "owner_name")

    def verify(self, subject: Mapping[str, str]) -> VerificationResult:
        return VerificationResult(
            verification_type=self.VERIFICATION_TYPE,
            status=VerificationStatus.VERIFIED,
            message="Tax ID is active",
            details={"name_on_record": subject["owner_name"]},
        )


class StaticTaxRegistrationVerifier(BaseVerifier):
    VERIFICATION_TYPE: ClassVar[VerificationType] = VerificationType.TAX_REGISTRATION_NUMBER
    REQUIRED_FIELDS: ClassVar[tuple[str, ...]] = ("tax_registration_number", "business_name")

    def verify(self, subject: Mapping[str, str]) -> VerificationResult:
        return VerificationResult(
            verification_type=self.VERIFICATION_TYPE,
            status=VerificationStatus.VERIFIED,
            message="Tax registration is active",
            details={"registration_status": "Active"},
        )


class StaticBankAccountVerifier(BaseVerifier):
    """Simulated penny drop: the bank reports the holder name it was given."""

    VERIFICATION_TYPE: ClassVar[VerificationType] = VerificationType.BANK_ACCOUNT
    REQUIRED_FIELDS: ClassVar[tuple[str, ...]] = (
        "bank_account_number",
        "bank_routing_code",
        "account_holder_name",
    )

    def verify(self, subject: Mapping[str, str]) -> VerificationResult:
        return VerificationResult(
            verification_type=self.VERIFICATION_TYPE,
            status=VerificationStatus.VERIFIED,
            message="Account holder name matches",
            details={"name_at_bank": subject["account_holder_name"]},
        )


class StaticKycVerifier(BaseVerifier):
    VERIFICATION_TYPE: ClassVar[VerificationType] = VerificationType.KYC
    REQUIRED_FIELDS: ClassVar[tuple[str, ...]] = ("tax_id",)

    RISK_SCORE = "0.15"

    def verify(self, subject: Mapping[str, str]) -> VerificationResult:
        return VerificationResult(
            verification_type=self.VERIFICATION_TYPE,
            status=VerificationStatus.VERIFIED,
            message="KYC check passed",
            details={"risk_score": self.RISK_SCORE},
        )


class StaticNegativeListVerifier(BaseVerifier):
    VERIFICATION_TYPE: ClassVar[VerificationType] = VerificationType.NEGATIVE_LIST
    REQUIRED_FIELDS: ClassVar[tuple[str, ...]] = ("business_name", "owner_name", "tax_id")

    def __init__(self, listed_names: Iterable[str] = ()) -> None:
        self._listed_names = tuple(listed_names)

    def verify(self, subject: Mapping[str, str]) -> VerificationResult:
        matches = [
            listed
            for listed in self._listed_names
            if names_match(listed, subject["business_name"])
            or names_match(listed, subject["owner_name"])
        ]
        if matches:
            return VerificationResult(
                verification_type=self.VERIFICATION_TYPE,
                status=VerificationStatus.REJECTED,
                message="Found on a negative list, manual review required",
                alerts=matches,
            )
        return VerificationResult(
            verification_type=self.VERIFICATION_TYPE,
            status=VerificationStatus.VERIFIED,
            message="No negative list matches",
        )
