from collections.abc import Mapping

from onboarding.enrichment.base import BaseRegistryClient
from onboarding.enrichment.exceptions import RegistryError
from onboarding.enrichment.models import EnrichmentResult
from onboarding.logging.logger import Log
from onboarding.validation.field_validators import validate_field

LOOKUP_FIELDS: tuple[str, ...] = (
    "tax_id",
    "tax_registration_number",
    "postal_code",
    "bank_routing_code",
)


class EnrichmentGateway:
    """Queries one registry per lookup key, one after another.

    Each lookup is isolated: an invalid key is skipped, a failing registry
    is logged and recorded in ``failures``, and neither affects the others.
    When two registries return the same field the earlier lookup wins.
    """

    def __init__(self, registries: Mapping[str, BaseRegistryClient]) -> None:
        self._registries = dict(registries)

    def enrich(self, lookups: Mapping[str, str]) -> EnrichmentResult:
        result = EnrichmentResult()
        for field_name, raw_value in lookups.items():
            registry = self._registries.get(field_name)
            outcome = validate_field(field_name, raw_value)
            if registry is None or not outcome.is_valid or not outcome.normalized_value:
                result.skipped.append(field_name)
                continue
            try:
                found = registry.lookup(outcome.normalized_value)
            except RegistryError as exc:
                Log.warning(f"Registry lookup failed: {exc}", field=field_name)
                result.failures.append(field_name)
                continue
            result.looked_up.append(field_name)
            for name, value in found.items():
                result.patch.setdefault(name, value)
        Log.info(
            "Enrichment finished",
            looked_up=len(result.looked_up),
            failures=len(result.failures),
            fields=len(result.patch),
        )
        return result
