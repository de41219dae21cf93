from abc import abstractmethod
from collections.abc import Mapping
from typing import Any, ClassVar

import httpx

from onboarding.domain.models import VerificationResult, VerificationStatus, VerificationType
from onboarding.verification.base import BaseVerifier, names_match
from onboarding.verification.exceptions import VerificationError, VerificationNetworkError

_ACTIVE_STATUSES = frozenset({"active", "valid"})


class HttpVerifier(BaseVerifier):
    """POST the subject as JSON to ``url`` and map the JSON answer to a result.

    Subclasses implement ``_to_result``.
    """

    def __init__(
        self,
        url: str,
        *,
        timeout_seconds: int = 10,
        client: httpx.Client | None = None,
    ) -> None:
        self._url = url
        self._client = client or httpx.Client(timeout=timeout_seconds)

    def verify(self, subject: Mapping[str, str]) -> VerificationResult:
        try:
            response = self._client.post(self._url, json=dict(subject))
        except httpx.TransportError as exc:
            raise VerificationNetworkError(f"Verification network error: {exc}") from exc
        if response.status_code >= 400:
            raise VerificationError(f"Verification provider returned HTTP {response.status_code}")
        try:
            payload = response.json()
        except ValueError as exc:
            raise VerificationError(f"Verification provider returned invalid JSON: {exc}") from exc
        if not isinstance(payload, dict):
            raise VerificationError("Unexpected verification payload")
        return self._to_result(subject, payload)

    @abstractmethod
    def _to_result(self, subject: Mapping[str, str], payload: dict[str, Any]) -> VerificationResult:
        """Map a decoded body, raising VerificationError on a bad shape."""

    def _result(self, status: VerificationStatus, message: str, **kwargs: Any) -> VerificationResult:
        return VerificationResult(
            verification_type=self.VERIFICATION_TYPE,
            status=status,
            message=message,
            **kwargs,
        )


class HttpTaxIdVerifier(HttpVerifier):
    """``{"status": "Active", "name": "..."}``; the name must match the owner."""

    VERIFICATION_TYPE: ClassVar[VerificationType] = VerificationType.TAX_ID
    REQUIRED_FIELDS: ClassVar[tuple[str, ...]] = ("tax_id", "owner_name")

    def _to_result(self, subject: Mapping[str, str], payload: dict[str, Any]) -> VerificationResult:
        status = str(payload.get("status") or "")
        name = str(payload.get("name") or "")
        details = {"registry_status": status, "name_on_record": name}
        if status.lower() not in _ACTIVE_STATUSES:
            return self._result(VerificationStatus.REJECTED, "Tax ID is not active", details=details)
        if not names_match(name, subject["owner_name"]):
            return self._result(
                VerificationStatus.REJECTED,
                "Name on the tax ID differs from the owner name",
                details=details,
                alerts=["owner_name"],
            )
        return self._result(VerificationStatus.VERIFIED, "Tax ID is active", details=details)


class HttpTaxRegistrationVerifier(HttpVerifier):
    """``{"status": "Active", ...}``."""

    VERIFICATION_TYPE: ClassVar[VerificationType] = VerificationType.TAX_REGISTRATION_NUMBER
    REQUIRED_FIELDS: ClassVar[tuple[str, ...]] = ("tax_registration_number", "business_name")

    def _to_result(self, subject: Mapping[str, str], payload: dict[str, Any]) -> VerificationResult:
        status = str(payload.get("status") or "")
        details = {"registration_status": status}
        if status.lower() not in _ACTIVE_STATUSES:
            return self._result(
                VerificationStatus.REJECTED, "Tax registration is not active", details=details
            )
        return self._result(VerificationStatus.VERIFIED, "Tax registration is active", details=details)


class HttpBankAccountVerifier(HttpVerifier):
    """Penny drop: ``{"account_exists": true, "name_at_bank": "..."}``."""

    VERIFICATION_TYPE: ClassVar[VerificationType] = VerificationType.BANK_ACCOUNT
    REQUIRED_FIELDS: ClassVar[tuple[str, ...]] = (
        "bank_account_number",
        "bank_routing_code",
        "account_holder_name",
    )

    def _to_result(self, subject: Mapping[str, str], payload: dict[str, Any]) -> VerificationResult:
        exists = payload.get("account_exists")
        if not isinstance(exists, bool):
            raise VerificationError("Unexpected bank verification payload")
        if not exists:
            return self._result(VerificationStatus.REJECTED, "Bank account not found")
        name = str(payload.get("name_at_bank") or "")
        details = {"name_at_bank": name}
        if not names_match(name, subject["account_holder_name"]):
            return self._result(
                VerificationStatus.REJECTED,
                "Account holder name differs from the name at the bank",
                details=details,
                alerts=["account_holder_name"],
            )
        return self._result(VerificationStatus.VERIFIED, "Account holder name matches", details=details)


class HttpKycVerifier(HttpVerifier):
    """``{"status": "VERIFIED" | "PENDING" | "FAILED", "risk_score": 0.15, "alerts": []}``."""

    VERIFICATION_TYPE: ClassVar[VerificationType] = VerificationType.KYC
    REQUIRED_FIELDS: ClassVar[tuple[str, ...]] = ("tax_id",)

    STATUSES: ClassVar[dict[str, tuple[VerificationStatus, str]]] = {
        "VERIFIED": (VerificationStatus.VERIFIED, "KYC check passed"),
        "PENDING": (VerificationStatus.PENDING, "KYC check is in progress"),
        "FAILED": (VerificationStatus.REJECTED, "KYC check failed"),
    }

    def _to_result(self, subject: Mapping[str, str], payload: dict[str, Any]) -> VerificationResult:
        mapped = self.STATUSES.get(str(payload.get("status") or "").upper())
        alerts = payload.get("alerts") or []
        if mapped is None or not isinstance(alerts, list):
            raise VerificationError("Unexpected KYC payload")
        status, message = mapped
        details: dict[str, str] = {}
        if payload.get("risk_score") is not None:
            details["risk_score"] = str(payload["risk_score"])
        return self._result(status, message, details=details, alerts=[str(a) for a in alerts])


class HttpNegativeListVerifier(HttpVerifier):
    """``{"clear": true, "matches": []}``."""

    VERIFICATION_TYPE: ClassVar[VerificationType] = VerificationType.NEGATIVE_LIST
    REQUIRED_FIELDS: ClassVar[tuple[str, ...]] = ("business_name", "owner_name", "tax_id")

    def _to_result(self, subject: Mapping[str, str], payload: dict[str, Any]) -> VerificationResult:
        clear = payload.get("clear")
        matches = payload.get("matches") or []
        if not isinstance(clear, bool) or not isinstance(matches, list):
            raise VerificationError("Unexpected negative list payload")
        if clear:
            return self._result(VerificationStatus.VERIFIED, "No negative list matches")
        return self._result(
            VerificationStatus.REJECTED,
            "Found on a negative list, manual review required",
            alerts=[str(m) for m in matches],
        )
