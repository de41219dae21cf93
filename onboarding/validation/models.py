from dataclasses import dataclass, field
from enum import StrEnum


class Severity(StrEnum):
    ERROR = "error"
    WARNING = "warning"
    INFO = "info"


@dataclass(frozen=True)
class ValidationOutcome:
    """Result of validating one field value. Never persisted."""

    field: str
    is_valid: bool
    error: str | None = None
    suggestion: str | None = None
    severity: Severity = Severity.INFO
    normalized_value: str | None = None


@dataclass(frozen=True)
class ValidationIssue:
    field: str
    severity: Severity
    message: str
    suggestion: str | None = None


@dataclass
class ValidationReport:
    """Outcome of a multi-field check (a document, a record, a submission)."""

    issues: list[ValidationIssue] = field(default_factory=list)

    @property
    def is_valid(self) -> bool:
        return not self.errors

    @property
    def errors(self) -> list[ValidationIssue]:
        return [i for i in self.issues if i.severity is Severity.ERROR]

    @property
    def warnings(self) -> list[ValidationIssue]:
        return [i for i in self.issues if i.severity is Severity.WARNING]

    def add(
        self,
        field_name: str,
        severity: Severity,
        message: str,
        suggestion: str | None = None,
    ) -> None:
        self.issues.append(ValidationIssue(field_name, severity, message, suggestion))

    def extend(self, other: "ValidationReport") -> None:
        self.issues.extend(other.issues)
