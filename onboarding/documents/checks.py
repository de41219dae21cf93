"""Per-category checks of a single document's extracted fields."""

from collections.abc import Mapping

from onboarding.domain.models import DocumentCategory
from onboarding.validation.field_validators import (
    ROUTING_CODE_EXAMPLE,
    TAX_ID_EXAMPLE,
    TAX_REGISTRATION_EXAMPLE,
    validate_field,
)
from onboarding.validation.models import Severity, ValidationReport

LOW_QUALITY_THRESHOLD = 0.6
UNCLEAR_QUALITY_THRESHOLD = 0.8

# Keys that must be readable for the upload to count as complete.
CRITICAL_KEYS: dict[DocumentCategory, tuple[str, ...]] = {
    DocumentCategory.BUSINESS_PROOF: ("business_name", "address", "pincode"),
    DocumentCategory.IDENTITY_PROOF: ("name", "pan"),
    DocumentCategory.BANK_PROOF: ("account_number", "ifsc", "bank_name"),
    DocumentCategory.ADDRESS_PROOF: ("address", "pincode"),
}


def check_document(
    category: DocumentCategory,
    extracted: Mapping[str, str],
) -> ValidationReport:
    report = ValidationReport()
    match category:
        case DocumentCategory.BUSINESS_PROOF:
            if not extracted.get("business_name"):
                report.add(
                    "business_name",
                    Severity.ERROR,
                    "Business name is required",
                    "Please ensure the business name is clearly visible on the document",
                )
            _check_format(
                report,
                extracted,
                "gstin",
                "tax_registration_number",
                "Invalid GSTIN format",
                f"GSTIN should be 15 characters (e.g., {TAX_REGISTRATION_EXAMPLE})",
            )
            if not extracted.get("address"):
                report.add(
                    "address",
                    Severity.ERROR,
                    "Business address not found",
                    "Please upload a document with complete address details",
                )
            _check_pincode(report, extracted)
        case DocumentCategory.IDENTITY_PROOF:
            if not extracted.get("name"):
                report.add("name", Severity.ERROR, "Name not found on document")
            _check_format(
                report,
                extracted,
                "pan",
                "tax_id",
                "Invalid PAN format",
                f"PAN should be 10 characters (e.g., {TAX_ID_EXAMPLE})",
            )
        case DocumentCategory.BANK_PROOF:
            if not extracted.get("account_number"):
                report.add(
                    "account_number",
                    Severity.ERROR,
                    "Account number not found",
                    "Please upload a cancelled cheque or bank statement with account details",
                )
            _check_format(
                report,
                extracted,
                "ifsc",
                "bank_routing_code",
                "Invalid IFSC code",
                f"IFSC should be 11 characters (e.g., {ROUTING_CODE_EXAMPLE})",
            )
            if not extracted.get("bank_name"):
                report.add(
                    "bank_name",
                    Severity.WARNING,
                    "Bank name not detected, you may need to enter it manually",
                )
        case DocumentCategory.ADDRESS_PROOF:
            if not extracted.get("address"):
                report.add(
                    "address",
                    Severity.ERROR,
                    "Address not found on document",
                    "Please upload a recent utility bill or rent agreement",
                )
            if not extracted.get("pincode"):
                report.add("pincode", Severity.ERROR, "Pincode not found on document")
            _check_pincode(report, extracted)
    return report


def check_quality(quality: float) -> ValidationReport:
    report = ValidationReport()
    if quality < LOW_QUALITY_THRESHOLD:
        report.add(
            "document",
            Severity.WARNING,
            "Low image quality detected",
            "Please retake the photo in better lighting",
        )
    if quality < UNCLEAR_QUALITY_THRESHOLD:
        report.add(
            "document",
            Severity.WARNING,
            "Some text may be unclear",
            "Ensure the document is flat and in focus",
        )
    return report


def missing_critical_keys(
    category: DocumentCategory,
    extracted: Mapping[str, str],
) -> list[str]:
    return [key for key in CRITICAL_KEYS[category] if not extracted.get(key)]


def confidence_score(quality: float, extracted: Mapping[str, str], is_valid: bool) -> float:
    """OCR quality x 0.4 + completeness x 0.3 + 0.3 when the checks pass."""
    completeness = min(len(extracted) / 10, 1.0)
    score = quality * 0.4 + completeness * 0.3 + (0.3 if is_valid else 0.0)
    return round(min(max(score, 0.0), 1.0), 4)


def upload_feedback(
    category: DocumentCategory,
    extracted: Mapping[str, str],
    quality: float,
) -> str:
    if quality < LOW_QUALITY_THRESHOLD:
        return (
            "The image quality is quite low. Please retake the photo ensuring:\n"
            "- Good lighting (natural light works best)\n"
            "- Document is flat and fully visible\n"
            "- Camera is steady and in focus"
        )
    if quality < UNCLEAR_QUALITY_THRESHOLD:
        return (
            "I can read most of the document, but some parts are unclear. "
            "For best results:\n"
            "- Ensure the entire document is in frame\n"
            "- Avoid shadows on the document\n"
            "- Make sure text is clearly readable"
        )
    missing = missing_critical_keys(category, extracted)
    if missing:
        return (
            f"Great photo! However, I couldn't find: {', '.join(missing)}.\n"
            "Please ensure these details are visible on the document."
        )
    label = category.value.replace("_", " ")
    return f"Perfect! I've successfully extracted all the information from your {label}."


def _check_format(
    report: ValidationReport,
    extracted: Mapping[str, str],
    key: str,
    record_field: str,
    message: str,
    suggestion: str,
) -> None:
    value = extracted.get(key)
    if value and not validate_field(record_field, value).is_valid:
        report.add(key, Severity.ERROR, message, suggestion)


def _check_pincode(report: ValidationReport, extracted: Mapping[str, str]) -> None:
    _check_format(
        report,
        extracted,
        "pincode",
        "postal_code",
        "Invalid pincode format",
        "Pincode should be 6 digits and not start with 0",
    )
