"""Final checks before an application leaves the wizard."""

from dataclasses import dataclass, field
from datetime import datetime

from onboarding.domain.models import Session, Step
from onboarding.validation.models import Severity, ValidationIssue, ValidationReport
from onboarding.validation.record_validator import cross_validate_documents, validate_record

ESTIMATED_APPROVAL_TIME = "2-4 hours"


@dataclass(frozen=True)
class SubmissionResult:
    accepted: bool
    message: str
    issues: list[ValidationIssue] = field(default_factory=list)
    application_id: str | None = None
    submitted_at: datetime | None = None
    estimated_approval_time: str | None = None


def check_submission(session: Session, accepted_terms: bool) -> ValidationReport:
    report = ValidationReport()
    if session.current_step is Step.SUBMITTED:
        report.add("application", Severity.ERROR, "This application has already been submitted")
        return report
    if not accepted_terms:
        report.add(
            "terms",
            Severity.ERROR,
            "Please accept the terms and conditions",
            "Review the merchant agreement and tick the acceptance box",
        )
    if session.current_step is not Step.REVIEW:
        report.add(
            "current_step",
            Severity.ERROR,
            f"Finish the {session.current_step.value.replace('_', ' ')} step before submitting",
        )
    report.extend(validate_record(session.record))
    report.extend(cross_validate_documents(session.documents))
    return report
