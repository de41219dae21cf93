"""Static mapping from extracted document keys to MerchantRecord fields."""

from collections.abc import Mapping

from onboarding.domain.models import DocumentCategory, MerchantRecord
from onboarding.validation.field_validators import VALIDATED_FIELDS, validate_field

DOCUMENT_FIELD_MAP: dict[DocumentCategory, dict[str, str]] = {
    DocumentCategory.BUSINESS_PROOF: {
        "business_name": "business_name",
        "gstin": "tax_registration_number",
        "address": "street_address",
        "city": "city",
        "state": "state",
        "pincode": "postal_code",
    },
    DocumentCategory.IDENTITY_PROOF: {
        "name": "owner_name",
        "pan": "tax_id",
        "address": "street_address",
    },
    DocumentCategory.BANK_PROOF: {
        "account_number": "bank_account_number",
        "ifsc": "bank_routing_code",
        "bank_name": "bank_name",
        "account_holder": "account_holder_name",
        "account_type": "account_type",
    },
    DocumentCategory.ADDRESS_PROOF: {
        "address": "street_address",
        "city": "city",
        "state": "state",
        "pincode": "postal_code",
    },
}


def map_extraction(
    category: DocumentCategory,
    extracted: Mapping[str, str],
) -> dict[str, str]:
    """Translate extracted keys into record fields, dropping unmapped keys.

    Values that pass their field validator are stored in normalized form.
    """
    mapped: dict[str, str] = {}
    for doc_key, record_field in DOCUMENT_FIELD_MAP[category].items():
        value = (extracted.get(doc_key) or "").strip()
        if not value:
            continue
        if record_field in VALIDATED_FIELDS:
            outcome = validate_field(record_field, value)
            if outcome.is_valid and outcome.normalized_value:
                value = outcome.normalized_value
        mapped[record_field] = value
    return mapped


def build_patch(
    category: DocumentCategory,
    extracted: Mapping[str, str],
    record: MerchantRecord,
) -> dict[str, str]:
    """Patch that only targets fields still empty on the record."""
    return {
        name: value
        for name, value in map_extraction(category, extracted).items()
        if not record.is_filled(name)
    }
