from collections.abc import Iterable
from dataclasses import replace
from datetime import datetime

from onboarding.domain.models import (
    MerchantRecord,
    VerificationResult,
    VerificationStatus,
    VerificationType,
    utcnow,
)
from onboarding.logging.logger import Log
from onboarding.validation.field_validators import validate_field
from onboarding.validation.record_validator import field_label
from onboarding.verification.base import BaseVerifier
from onboarding.verification.exceptions import VerificationError


class VerificationGateway:
    """Runs one configured verifier against the current record.

    Verification is advisory. A missing verifier, missing record values and
    provider failures all become a result instead of an exception.
    """

    def __init__(self, verifiers: Iterable[BaseVerifier]) -> None:
        self._verifiers = {verifier.VERIFICATION_TYPE: verifier for verifier in verifiers}

    @property
    def available(self) -> list[VerificationType]:
        return list(self._verifiers)

    def verify(
        self,
        verification_type: VerificationType,
        record: MerchantRecord,
        now: datetime | None = None,
    ) -> VerificationResult:
        checked_at = now or utcnow()
        verifier = self._verifiers.get(verification_type)
        if verifier is None:
            return VerificationResult(
                verification_type=verification_type,
                status=VerificationStatus.UNAVAILABLE,
                message=f"{field_label(verification_type.value)} verification is not configured",
                checked_at=checked_at,
            )

        subject: dict[str, str] = {}
        unusable: list[str] = []
        for name in verifier.REQUIRED_FIELDS:
            value = record.get(name)
            outcome = validate_field(name, value)
            if not record.is_filled(name) or not outcome.is_valid:
                unusable.append(name)
                continue
            subject[name] = outcome.normalized_value or str(value).strip()
        if unusable:
            return VerificationResult(
                verification_type=verification_type,
                status=VerificationStatus.INCOMPLETE,
                message="Complete these fields first: "
                + ", ".join(field_label(name).lower() for name in unusable),
                alerts=unusable,
                checked_at=checked_at,
            )

        try:
            result = verifier.verify(subject)
        except VerificationError as exc:
            Log.warning(f"Verification failed: {exc}", verification_type=verification_type.value)
            return VerificationResult(
                verification_type=verification_type,
                status=VerificationStatus.UNAVAILABLE,
                message="Verification is temporarily unavailable, please try again later",
                checked_at=checked_at,
            )
        Log.info(
            "Verification finished",
            verification_type=verification_type.value,
            status=result.status.value,
        )
        return replace(result, checked_at=checked_at)
