import httpx

from onboarding.config.settings import Settings
from onboarding.enrichment.base import BaseRegistryClient
from onboarding.enrichment.gateway import EnrichmentGateway
from onboarding.enrichment.http_client import (
    JsonRegistryClient,
    PostalCodeRegistryClient,
    RoutingCodeRegistryClient,
)
from onboarding.enrichment.static_client import (
    StaticPostalCodeRegistry,
    StaticRoutingCodeRegistry,
)

TAX_ID_FIELD_MAP = {"name": "owner_name"}
TAX_REGISTRATION_FIELD_MAP = {
    "business_name": "business_name",
    "address": "street_address",
    "state": "state",
}


class EnrichmentGatewayFactory:
    """Creates the enrichment gateway for the configured provider."""

    PROVIDERS = ("http", "example")

    @classmethod
    def create(cls, settings: Settings) -> EnrichmentGateway:
        provider = settings.enrichment_provider.lower()
        if provider == "example":
            return EnrichmentGateway({
                "postal_code": StaticPostalCodeRegistry(),
                "bank_routing_code": StaticRoutingCodeRegistry(),
            })
        if provider == "http":
            return EnrichmentGateway(cls._http_registries(settings))
        raise ValueError(
            f"Unknown enrichment provider '{provider}'. Choose from: {list(cls.PROVIDERS)}"
        )

    @classmethod
    def _http_registries(cls, settings: Settings) -> dict[str, BaseRegistryClient]:
        client = httpx.Client(timeout=settings.enrichment_timeout_seconds)
        registries: dict[str, BaseRegistryClient] = {}
        if settings.postal_code_registry_url:
            registries["postal_code"] = PostalCodeRegistryClient(
                settings.postal_code_registry_url, client=client
            )
        if settings.routing_code_registry_url:
            registries["bank_routing_code"] = RoutingCodeRegistryClient(
                settings.routing_code_registry_url, client=client
            )
        if settings.tax_id_registry_url:
            registries["tax_id"] = JsonRegistryClient(
                settings.tax_id_registry_url, TAX_ID_FIELD_MAP, client=client
            )
        if settings.tax_registration_registry_url:
            registries["tax_registration_number"] = JsonRegistryClient(
                settings.tax_registration_registry_url,
                TAX_REGISTRATION_FIELD_MAP,
                client=client,
            )
        return registries
