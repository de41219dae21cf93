import httpx

from onboarding.config.settings import Settings
from onboarding.verification.base import BaseVerifier
from onboarding.verification.gateway import VerificationGateway
from onboarding.verification.http_verifier import (
    HttpBankAccountVerifier,
    HttpKycVerifier,
    HttpNegativeListVerifier,
    HttpTaxIdVerifier,
    HttpTaxRegistrationVerifier,
)
from onboarding.verification.static_verifier import (
    StaticBankAccountVerifier,
    StaticKycVerifier,
    StaticNegativeListVerifier,
    StaticTaxIdVerifier,
    StaticTaxRegistrationVerifier,
)


class VerificationGatewayFactory:
    """Creates the verification gateway for the configured provider."""

    PROVIDERS = ("example", "http")

    @classmethod
    def create(cls, settings: Settings) -> VerificationGateway:
        provider = settings.verification_provider.lower()
        if provider == "example":
            return VerificationGateway([
                StaticTaxIdVerifier(),
                StaticTaxRegistrationVerifier(),
                StaticBankAccountVerifier(),
                StaticKycVerifier(),
                StaticNegativeListVerifier(settings.negative_listed_names),
            ])
        if provider == "http":
            return VerificationGateway(cls._http_verifiers(settings))
        raise ValueError(
            f"Unknown verification provider '{provider}'. Choose from: {list(cls.PROVIDERS)}"
        )

    @classmethod
    def _http_verifiers(cls, settings: Settings) -> list[BaseVerifier]:
        client = httpx.Client(timeout=settings.verification_timeout_seconds)
        verifiers: list[BaseVerifier] = []
        if settings.tax_id_verification_url:
            verifiers.append(HttpTaxIdVerifier(settings.tax_id_verification_url, client=client))
        if settings.tax_registration_verification_url:
            verifiers.append(
                HttpTaxRegistrationVerifier(settings.tax_registration_verification_url, client=client)
            )
        if settings.bank_account_verification_url:
            verifiers.append(
                HttpBankAccountVerifier(settings.bank_account_verification_url, client=client)
            )
        if settings.kyc_verification_url:
            verifiers.append(HttpKycVerifier(settings.kyc_verification_url, client=client))
        if settings.negative_list_verification_url:
            verifiers.append(
                HttpNegativeListVerifier(settings.negative_list_verification_url, client=client)
            )
        return verifiers
