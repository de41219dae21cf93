"""Domain model of one onboarding attempt.

A Session owns exactly one MerchantRecord, its list of UploadedDocument and
the conversation log. Nothing here is shared across sessions.
"""

from collections.abc import Mapping
from dataclasses import dataclass, field, fields
from datetime import datetime, timezone
from enum import StrEnum


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Step(StrEnum):
    WELCOME = "welcome"
    BUSINESS_INFO = "business_info"
    DOCUMENT_UPLOAD = "document_upload"
    FORM_COMPLETION = "form_completion"
    VERIFICATION = "verification"
    REVIEW = "review"
    SUBMITTED = "submitted"


STEP_ORDER: tuple[Step, ...] = tuple(Step)


class SessionStatus(StrEnum):
    IN_PROGRESS = "in_progress"
    PAUSED = "paused"
    COMPLETED = "completed"


class DocumentCategory(StrEnum):
    BUSINESS_PROOF = "business_proof"
    IDENTITY_PROOF = "identity_proof"
    BANK_PROOF = "bank_proof"
    ADDRESS_PROOF = "address_proof"


MANDATORY_DOCUMENT_CATEGORIES: frozenset[DocumentCategory] = frozenset({
    DocumentCategory.BUSINESS_PROOF,
    DocumentCategory.IDENTITY_PROOF,
    DocumentCategory.BANK_PROOF,
})


class ValidationStatus(StrEnum):
    PENDING = "pending"
    VALID = "valid"
    INVALID = "invalid"


class LegalForm(StrEnum):
    SOLE_PROPRIETORSHIP = "sole_proprietorship"


class AccountType(StrEnum):
    CURRENT = "current"
    SAVINGS = "savings"


class BusinessCategory(StrEnum):
    RETAIL = "retail"
    FOOD = "food"
    EDUCATION = "education"
    HEALTHCARE = "healthcare"
    TRAVEL = "travel"
    ENTERTAINMENT = "entertainment"
    SERVICES = "services"
    LOGISTICS = "logistics"
    REAL_ESTATE = "realestate"
    MANUFACTURING = "manufacturing"
    TECHNOLOGY = "technology"
    OTHER = "other"


class FieldSource(StrEnum):
    """Where the current value of a record field came from."""

    USER = "user"
    CONVERSATION = "conversation"
    DOCUMENT = "document"
    ENRICHMENT = "enrichment"


# Writes from these sources replace existing values; all other sources only
# fill fields that are still empty.
OVERWRITING_SOURCES: frozenset[FieldSource] = frozenset({
    FieldSource.USER,
    FieldSource.CONVERSATION,
})

NUMERIC_FIELDS: frozenset[str] = frozenset({"monthly_volume", "average_transaction_size"})

FORM_REQUIRED_FIELDS: tuple[str, ...] = (
    "business_name",
    "owner_name",
    "email",
    "phone",
    "tax_id",
    "street_address",
    "city",
    "state",
    "postal_code",
    "bank_account_number",
    "bank_routing_code",
    "business_category",
)

SUBMISSION_REQUIRED_FIELDS: tuple[str, ...] = (*FORM_REQUIRED_FIELDS, "account_holder_name")


def _is_blank(value: object) -> bool:
    if value is None:
        return True
    return isinstance(value, str) and not value.strip()


@dataclass
class MerchantRecord:
    """The accumulating business application collected across the wizard."""

    business_name: str | None = None
    legal_form: str | None = LegalForm.SOLE_PROPRIETORSHIP.value
    tax_registration_number: str | None = None
    tax_id: str | None = None
    owner_name: str | None = None
    email: str | None = None
    phone: str | None = None
    street_address: str | None = None
    city: str | None = None
    state: str | None = None
    postal_code: str | None = None
    bank_account_number: str | None = None
    bank_routing_code: str | None = None
    bank_name: str | None = None
    account_holder_name: str | None = None
    account_type: str | None = None
    business_category: str | None = None
    monthly_volume: float | None = None
    average_transaction_size: float | None = None
    sources: dict[str, FieldSource] = field(default_factory=dict)

    def get(self, name: str) -> object:
        if name not in RECORD_FIELDS:
            raise KeyError(name)
        return getattr(self, name)

    def is_filled(self, name: str) -> bool:
        return not _is_blank(self.get(name))

    def filled(self, names: tuple[str, ...]) -> list[str]:
        return [name for name in names if self.is_filled(name)]

    def missing(self, names: tuple[str, ...]) -> list[str]:
        return [name for name in names if not self.is_filled(name)]

    def values(self) -> dict[str, object]:
        """Populated fields only."""
        return {name: self.get(name) for name in RECORD_FIELDS if self.is_filled(name)}

    def apply_patch(
        self,
        patch: Mapping[str, object],
        source: FieldSource,
    ) -> dict[str, object]:
        """Write patch values according to the source precedence rule.

        Sources in OVERWRITING_SOURCES replace existing values (last write
        wins); document and enrichment values only fill empty fields (first
        write wins). A blank value from the user clears the field; blank
        values from any other source are ignored.

        Returns:
            The subset of the patch that was actually written.
        """
        applied: dict[str, object] = {}
        for name, value in patch.items():
            if name not in RECORD_FIELDS:
                raise KeyError(f"Unknown merchant record field: {name}")
            if _is_blank(value):
                if source is FieldSource.USER and self.is_filled(name):
                    setattr(self, name, None)
                    self.sources.pop(name, None)
                    applied[name] = None
                continue
            if source not in OVERWRITING_SOURCES and self.is_filled(name):
                continue
            if self.get(name) == value and self.sources.get(name) == source:
                continue
            setattr(self, name, value)
            self.sources[name] = source
            applied[name] = value
        return applied


RECORD_FIELDS: tuple[str, ...] = tuple(
    f.name for f in fields(MerchantRecord) if f.name != "sources"
)


@dataclass(frozen=True)
class UploadedDocument:
    """One processed upload. Never re-validated after creation."""

    document_id: str
    category: DocumentCategory
    extracted_fields: dict[str, str]
    confidence: float
    validation_status: ValidationStatus
    issues: list[str] = field(default_factory=list)
    file_name: str = ""
    mime_type: str = ""
    uploaded_at: datetime = field(default_factory=utcnow)


@dataclass
class ConversationMessage:
    role: str
    content: str
    timestamp: datetime = field(default_factory=utcnow)
    metadata: dict[str, object] = field(default_factory=dict)


class VerificationType(StrEnum):
    TAX_ID = "tax_id"
    TAX_REGISTRATION_NUMBER = "tax_registration_number"
    BANK_ACCOUNT = "bank_account"
    KYC = "kyc"
    NEGATIVE_LIST = "negative_list"


class VerificationStatus(StrEnum):
    VERIFIED = "verified"
    REJECTED = "rejected"
    PENDING = "pending"
    INCOMPLETE = "incomplete"
    UNAVAILABLE = "unavailable"


@dataclass(frozen=True)
class VerificationResult:
    """Outcome of one external check. Advisory only, it never gates a step."""

    verification_type: VerificationType
    status: VerificationStatus
    message: str = ""
    details: dict[str, str] = field(default_factory=dict)
    alerts: list[str] = field(default_factory=list)
    checked_at: datetime = field(default_factory=utcnow)


@dataclass
class ActivityCounters:
    """Client-reported behaviour signals used for drop-off risk."""

    validation_failures: int = 0
    help_requests: int = 0
    tab_hidden_events: int = 0
    field_revisits: int = 0


@dataclass
class Session:
    session_id: str
    user_id: str | None = None
    current_step: Step = Step.WELCOME
    record: MerchantRecord = field(default_factory=MerchantRecord)
    documents: list[UploadedDocument] = field(default_factory=list)
    conversation: list[ConversationMessage] = field(default_factory=list)
    activity: ActivityCounters = field(default_factory=ActivityCounters)
    verifications: dict[str, VerificationResult] = field(default_factory=dict)
    status: SessionStatus = SessionStatus.IN_PROGRESS
    created_at: datetime = field(default_factory=utcnow)
    last_activity_at: datetime = field(default_factory=utcnow)
    step_entered_at: datetime = field(default_factory=utcnow)
    submitted_at: datetime | None = None
    application_id: str | None = None

    def touch(self, now: datetime | None = None) -> None:
        self.last_activity_at = now or utcnow()

    def move_to(self, step: Step, now: datetime | None = None) -> None:
        if step is self.current_step:
            return
        self.current_step = step
        self.step_entered_at = now or utcnow()

    def uploaded_categories(self) -> set[DocumentCategory]:
        return {doc.category for doc in self.documents}


class ActivityEvent(StrEnum):
    HELP_REQUEST = "help_request"
    TAB_HIDDEN = "tab_hidden"
    FIELD_REVISIT = "field_revisit"
    VALIDATION_FAILURE = "validation_failure"
