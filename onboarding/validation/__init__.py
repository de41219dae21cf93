from onboarding.validation.field_validators import validate_field
from onboarding.validation.models import Severity, ValidationIssue, ValidationOutcome, ValidationReport
from onboarding.validation.record_validator import cross_validate_documents, validate_record

__all__ = [
    "Severity",
    "ValidationIssue",
    "ValidationOutcome",
    "ValidationReport",
    "cross_validate_documents",
    "validate_field",
    "validate_record",
]
