"""Whole-record checks run before an application may be submitted."""

import re

from onboarding.domain.models import (
    RECORD_FIELDS,
    SUBMISSION_REQUIRED_FIELDS,
    MerchantRecord,
    UploadedDocument,
)
from onboarding.validation.field_validators import VALIDATED_FIELDS, validate_field
from onboarding.validation.models import Severity, ValidationReport

_NON_LETTERS_RE = re.compile(r"[^a-z]")
_NON_ALNUM_RE = re.compile(r"[^a-z0-9]")


def field_label(name: str) -> str:
    return name.replace("_", " ").capitalize()


def validate_record(record: MerchantRecord) -> ValidationReport:
    """Required-field, per-field format and cross-field checks."""
    report = ValidationReport()
    for name in record.missing(SUBMISSION_REQUIRED_FIELDS):
        report.add(
            name,
            Severity.ERROR,
            f"{field_label(name)} is required",
            f"Please provide {field_label(name).lower()}",
        )
    for name in RECORD_FIELDS:
        if name not in VALIDATED_FIELDS or not record.is_filled(name):
            continue
        outcome = validate_field(name, record.get(name))
        if not outcome.is_valid:
            report.add(name, Severity.ERROR, outcome.error or "Invalid value", outcome.suggestion)
    report.extend(_cross_field_checks(record))
    return report


def _cross_field_checks(record: MerchantRecord) -> ValidationReport:
    report = ValidationReport()

    tax_id = validate_field("tax_id", record.tax_id)
    registration = validate_field("tax_registration_number", record.tax_registration_number)
    if (
        tax_id.is_valid
        and registration.is_valid
        and registration.normalized_value
        and registration.normalized_value[2:12] != tax_id.normalized_value
    ):
        report.add(
            "tax_registration_number",
            Severity.WARNING,
            "Tax registration number does not contain your tax ID",
            "Characters 3 to 12 of the tax registration number should match your tax ID",
        )

    if record.is_filled("account_holder_name"):
        holder = _letters(str(record.account_holder_name))
        candidates = {
            _letters(str(record.get(name)))
            for name in ("owner_name", "business_name")
            if record.is_filled(name)
        }
        if candidates and holder not in candidates:
            report.add(
                "account_holder_name",
                Severity.WARNING,
                "Account holder name differs from owner and business name",
                "Payouts are only made to accounts held by the owner or the business",
            )
    return report


def cross_validate_documents(documents: list[UploadedDocument]) -> ValidationReport:
    """Consistency checks across all uploaded documents of a session."""
    report = ValidationReport()

    names = [_letters(d.extracted_fields["name"]) for d in documents if d.extracted_fields.get("name")]
    if len(set(names)) > 1:
        report.add(
            "owner_name",
            Severity.WARNING,
            "Name appears different on different documents",
            "Please ensure all documents belong to the same person",
        )

    addresses = [
        _NON_ALNUM_RE.sub("", d.extracted_fields["address"].lower())
        for d in documents
        if d.extracted_fields.get("address")
    ]
    if len(set(addresses)) > 1:
        report.add(
            "street_address",
            Severity.WARNING,
            "Addresses on documents don't match",
            "Different addresses are okay, but ensure all documents are current",
        )

    tax_ids = {d.extracted_fields["pan"].upper() for d in documents if d.extracted_fields.get("pan")}
    if len(tax_ids) > 1:
        report.add(
            "tax_id",
            Severity.ERROR,
            "Different tax IDs found on documents",
            "All documents must show the same tax ID",
        )
    return report


def _letters(value: str) -> str:
    return _NON_LETTERS_RE.sub("", value.lower())
