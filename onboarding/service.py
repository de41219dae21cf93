"""Boundary operations of the onboarding core.

Every operation validates its request before loading the session, loads the
session (raising SessionNotFoundError before any mutation), mutates it and
writes it back. External failures are absorbed by the collaborators.
"""

from collections.abc import Callable, Mapping
from datetime import datetime
from enum import StrEnum
from typing import TypeVar
from uuid import uuid4

from onboarding.config.settings import Settings
from onboarding.conversation.models import ConversationReply
from onboarding.conversation.orchestrator import ConversationOrchestrator
from onboarding.documents.entity_extractor import EntityExtractor
from onboarding.documents.field_mapper import build_patch
from onboarding.documents.models import DocumentUploadResult
from onboarding.documents.processor import DocumentProcessor
from onboarding.domain.models import (
    SUBMISSION_REQUIRED_FIELDS,
    ActivityEvent,
    DocumentCategory,
    FieldSource,
    MerchantRecord,
    Session,
    SessionStatus,
    Step,
    VerificationResult,
    VerificationType,
    utcnow,
)
from onboarding.domain.patches import coerce_patch
from onboarding.enrichment.factory import EnrichmentGatewayFactory
from onboarding.enrichment.gateway import LOOKUP_FIELDS, EnrichmentGateway
from onboarding.enrichment.models import EnrichmentResult
from onboarding.exceptions import InvalidRequestError
from onboarding.llm.factory import LLMClientFactory
from onboarding.logging.logger import Log
from onboarding.ocr.factory import OcrEngineFactory
from onboarding.progression import engine
from onboarding.progression.models import ProgressReport
from onboarding.risk.models import BehaviorCounters, RiskAssessment, RiskWeights
from onboarding.risk.scorer import assess
from onboarding.session.exceptions import SessionNotFoundError
from onboarding.session.factory import SessionRepositoryFactory
from onboarding.session.repository import BaseSessionRepository
from onboarding.submission import ESTIMATED_APPROVAL_TIME, SubmissionResult, check_submission
from onboarding.validation.field_validators import validate_field
from onboarding.validation.models import ValidationOutcome
from onboarding.verification.factory import VerificationGatewayFactory
from onboarding.verification.gateway import VerificationGateway

_E = TypeVar("_E", bound=StrEnum)


class OnboardingService:
    def __init__(
        self,
        repository: BaseSessionRepository,
        orchestrator: ConversationOrchestrator,
        document_processor: DocumentProcessor,
        enrichment_gateway: EnrichmentGateway,
        verification_gateway: VerificationGateway,
        settings: Settings,
        clock: Callable[[], datetime] = utcnow,
    ) -> None:
        self._repository = repository
        self._orchestrator = orchestrator
        self._document_processor = document_processor
        self._enrichment_gateway = enrichment_gateway
        self._verification_gateway = verification_gateway
        self._settings = settings
        self._risk_weights = RiskWeights.from_settings(settings)
        self._clock = clock

    def create_session(self, user_id: str | None = None) -> Session:
        now = self._clock()
        session = Session(
            session_id=uuid4().hex,
            user_id=user_id,
            created_at=now,
            last_activity_at=now,
            step_entered_at=now,
        )
        self._repository.put(session)
        Log.info("Session created", session_id=session.session_id, user_id=user_id)
        return session

    def resume_session(self, session_id: str) -> Session:
        session = self._load(session_id)
        if session.status is SessionStatus.PAUSED:
            session.status = SessionStatus.IN_PROGRESS
        return self._save(session)

    def send_message(self, session_id: str, message: str) -> ConversationReply:
        _require_text(message, "message")
        session = self._load(session_id)
        _reopen(session)
        risk = self._assess(session)
        reply = self._orchestrator.respond(session, message.strip(), risk, self._clock())
        self._save(session)
        return reply

    def upload_document(
        self,
        session_id: str,
        category: str,
        file_bytes: bytes,
        mime_type: str,
        file_name: str = "",
    ) -> DocumentUploadResult:
        document_category = _parse_enum(DocumentCategory, category, "document category")
        if not file_bytes:
            raise InvalidRequestError("Uploaded file is empty")
        if len(file_bytes) > self._settings.max_upload_bytes:
            raise InvalidRequestError(
                f"File too large: {len(file_bytes)} bytes, "
                f"limit is {self._settings.max_upload_bytes}"
            )
        if mime_type.lower() not in self._settings.allowed_mime_types:
            raise InvalidRequestError(f"Unsupported file type '{mime_type}'")
        session = self._load(session_id)
        _reopen(session)

        processed = self._document_processor.process(
            document_category, file_bytes, mime_type.lower(), file_name
        )
        document = processed.document
        session.documents.append(document)
        applied: dict[str, object] = {}
        if document.confidence >= self._settings.auto_fill_min_confidence:
            patch = build_patch(document_category, document.extracted_fields, session.record)
            applied = session.record.apply_patch(patch, FieldSource.DOCUMENT)
        engine.advance(session, self._clock())
        self._save(session)
        return DocumentUploadResult(
            document=document,
            feedback=processed.feedback,
            suggestions=processed.suggestions,
            applied_patch=applied,
            current_step=session.current_step,
        )

    def update_record(self, session_id: str, fields: Mapping[str, object]) -> MerchantRecord:
        patch = _parse_patch(fields)
        session = self._load(session_id)
        _reopen(session)
        self._apply_user_patch(session, patch)
        engine.advance(session, self._clock())
        self._save(session)
        return session.record

    def enrich(
        self,
        session_id: str,
        lookups: Mapping[str, str] | None = None,
    ) -> EnrichmentResult:
        """Best-effort registry lookups; defaults to the record's own keys."""
        if lookups is not None:
            unknown = sorted(set(lookups) - set(LOOKUP_FIELDS))
            if unknown:
                raise InvalidRequestError(f"Cannot enrich from {unknown}")
            if not lookups:
                raise InvalidRequestError("No lookup keys given")
        session = self._load(session_id)
        _reopen(session)
        if lookups is None:
            lookups = {
                name: str(session.record.get(name))
                for name in LOOKUP_FIELDS
                if session.record.is_filled(name)
            }
        result = self._enrichment_gateway.enrich(lookups)
        result.applied = session.record.apply_patch(result.patch, FieldSource.ENRICHMENT)
        engine.advance(session, self._clock())
        self._save(session)
        return result

    def verify(self, session_id: str, verification_type: str) -> VerificationResult:
        """Run one advisory check and keep the latest result per check type.

        The outcome never affects step progression.
        """
        check = _parse_enum(VerificationType, verification_type, "verification type")
        session = self._load(session_id)
        _reopen(session)
        result = self._verification_gateway.verify(check, session.record, self._clock())
        session.verifications[check.value] = result
        self._save(session)
        return result

    def validate_field(self, field: str, value: object) -> ValidationOutcome:
        _require_text(field, "field")
        return validate_field(field, value)

    def get_progress(self, session_id: str) -> ProgressReport:
        return engine.build_progress(self._load(session_id))

    def go_back(self, session_id: str, step: str) -> Session:
        target = _parse_enum(Step, step, "step")
        session = self._load(session_id)
        if not engine.can_go_back(session.current_step, target):
            raise InvalidRequestError(
                f"Cannot go back from {session.current_step.value} to {target.value}"
            )
        session.move_to(target, self._clock())
        Log.info("Stepped back", session_id=session.session_id, step=target.value)
        return self._save(session)

    def report_activity(self, session_id: str, event: str) -> RiskAssessment:
        activity_event = _parse_enum(ActivityEvent, event, "activity event")
        session = self._load(session_id)
        activity = session.activity
        match activity_event:
            case ActivityEvent.HELP_REQUEST:
                activity.help_requests += 1
            case ActivityEvent.TAB_HIDDEN:
                activity.tab_hidden_events += 1
            case ActivityEvent.FIELD_REVISIT:
                activity.field_revisits += 1
            case ActivityEvent.VALIDATION_FAILURE:
                activity.validation_failures += 1
        self._save(session)
        return self._assess(session)

    def assess_risk(self, session_id: str) -> RiskAssessment:
        return self._assess(self._load(session_id))

    def save_draft(
        self,
        session_id: str,
        fields: Mapping[str, object] | None = None,
    ) -> Session:
        patch = _parse_patch(fields) if fields else {}
        session = self._load(session_id)
        _require_open(session)
        if patch:
            self._apply_user_patch(session, patch)
            engine.advance(session, self._clock())
        session.status = SessionStatus.PAUSED
        Log.info("Draft saved", session_id=session.session_id)
        return self._save(session)

    def submit(self, session_id: str, accepted_terms: bool) -> SubmissionResult:
        session = self._load(session_id)
        report = check_submission(session, accepted_terms)
        if not report.is_valid:
            Log.info(
                "Submission rejected",
                session_id=session.session_id,
                errors=len(report.errors),
            )
            return SubmissionResult(
                accepted=False,
                message="Please fix all validation errors",
                issues=report.issues,
            )

        now = self._clock()
        session.move_to(Step.SUBMITTED, now)
        session.status = SessionStatus.COMPLETED
        session.application_id = uuid4().hex
        session.submitted_at = now
        self._save(session)
        Log.info(
            "Application submitted",
            session_id=session.session_id,
            application_id=session.application_id,
        )
        return SubmissionResult(
            accepted=True,
            message="Application submitted successfully",
            issues=report.issues,
            application_id=session.application_id,
            submitted_at=now,
            estimated_approval_time=ESTIMATED_APPROVAL_TIME,
        )

    def _load(self, session_id: str) -> Session:
        _require_text(session_id, "session_id")
        session = self._repository.get(session_id)
        if session is None:
            raise SessionNotFoundError(f"Session {session_id} not found")
        return session

    def _save(self, session: Session) -> Session:
        session.touch(self._clock())
        self._repository.put(session)
        return session

    def _apply_user_patch(self, session: Session, patch: dict[str, object]) -> None:
        record = session.record
        for name, value in patch.items():
            if record.is_filled(name) and record.get(name) != value:
                session.activity.field_revisits += 1
            if value is not None and not validate_field(name, value).is_valid:
                session.activity.validation_failures += 1
        record.apply_patch(patch, FieldSource.USER)

    def _assess(self, session: Session) -> RiskAssessment:
        now = self._clock()
        counters = BehaviorCounters(
            seconds_on_step=max(0.0, (now - session.step_entered_at).total_seconds()),
            seconds_in_session=max(0.0, (now - session.created_at).total_seconds()),
            fields_completed=len(session.record.filled(SUBMISSION_REQUIRED_FIELDS)),
            fields_required=len(SUBMISSION_REQUIRED_FIELDS),
            validation_failures=session.activity.validation_failures,
            help_requests=session.activity.help_requests,
            tab_hidden_events=session.activity.tab_hidden_events,
            field_revisits=session.activity.field_revisits,
        )
        return assess(counters, self._risk_weights)


def _require_text(value: object, name: str) -> None:
    if not isinstance(value, str) or not value.strip():
        raise InvalidRequestError(f"'{name}' must be a non-empty string")


def _require_open(session: Session) -> None:
    if session.status is SessionStatus.COMPLETED:
        raise InvalidRequestError(f"Session {session.session_id} has already been submitted")


def _reopen(session: Session) -> None:
    """Mutating requests on a paused draft put it back in progress."""
    _require_open(session)
    if session.status is SessionStatus.PAUSED:
        session.status = SessionStatus.IN_PROGRESS


def _parse_patch(fields: Mapping[str, object] | None) -> dict[str, object]:
    if not fields:
        raise InvalidRequestError("No fields given")
    try:
        return coerce_patch(fields)
    except ValueError as exc:
        raise InvalidRequestError(str(exc)) from exc


def _parse_enum(enum_cls: type[_E], value: str, label: str) -> _E:
    try:
        return enum_cls(value)
    except ValueError as exc:
        choices = [member.value for member in enum_cls]
        raise InvalidRequestError(f"Unknown {label} '{value}'. Choose from: {choices}") from exc


def build_onboarding_service(settings: Settings) -> OnboardingService:
    """Build an OnboardingService with the adapters selected by settings."""
    client = LLMClientFactory.create(settings)
    model = LLMClientFactory.resolve_model_name(settings)
    extractor = EntityExtractor(client=client, model=model)
    return OnboardingService(
        repository=SessionRepositoryFactory.create(settings),
        orchestrator=ConversationOrchestrator(
            client=client,
            model=model,
            temperature=settings.llm_temperature,
        ),
        document_processor=DocumentProcessor(
            ocr_engine=OcrEngineFactory.create(settings),
            extractor=extractor,
        ),
        enrichment_gateway=EnrichmentGatewayFactory.create(settings),
        verification_gateway=VerificationGatewayFactory.create(settings),
        settings=settings,
    )
