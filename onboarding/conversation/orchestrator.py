from datetime import datetime

from onboarding.conversation.models import ConversationReply
from onboarding.domain.models import (
    RECORD_FIELDS,
    SUBMISSION_REQUIRED_FIELDS,
    ConversationMessage,
    FieldSource,
    Session,
    Step,
)
from onboarding.domain.patches import coerce_patch
from onboarding.llm.client_base import BaseLLMClient
from onboarding.llm.exceptions import LLMError, LLMResponseError
from onboarding.llm.json_decoder import (
    decode_string_fields,
    nullable_string_schema,
    parse_json_object,
)
from onboarding.llm.prompt_loader import load_prompt
from onboarding.logging.logger import Log
from onboarding.progression import engine
from onboarding.risk.models import InterventionLevel, RiskAssessment

APOLOGY = (
    "I'm sorry, I'm having trouble responding right now. "
    "Your progress is saved, please try again in a moment."
)

INTENTS: frozenset[str] = frozenset({
    "provide_information",
    "ask_question",
    "express_confusion",
    "request_help",
    "ready_to_proceed",
    "go_back",
})

EXTRACTABLE_FIELDS: tuple[str, ...] = tuple(f for f in RECORD_FIELDS if f != "legal_form")

HISTORY_LIMIT = 10

_REPLY_SCHEMA: dict[str, object] = {
    "type": "object",
    "properties": {
        "intent": {"type": "string", "enum": sorted(INTENTS)},
        "reply": {"type": "string"},
    },
    "required": ["intent", "reply"],
    "additionalProperties": False,
}


def suggested_actions(session: Session) -> list[str]:
    match session.current_step:
        case Step.WELCOME:
            return ["Get started", "Learn more about the process", "Estimated time: 10 minutes"]
        case Step.BUSINESS_INFO:
            if not session.record.is_filled("tax_registration_number"):
                return ["Enter GST number", "I don't have GST", "What is GST?"]
            return ["Continue", "Review information"]
        case Step.DOCUMENT_UPLOAD:
            return [
                "Upload document",
                "Take a photo",
                "What documents do I need?",
                "Why is this needed?",
            ]
        case Step.FORM_COMPLETION:
            return ["Auto-fill from documents", "Continue manually", "Save and continue later"]
        case Step.REVIEW:
            return ["Submit application", "Edit information", "How long for approval?"]
    return ["Continue", "Get help"]


class ConversationOrchestrator:
    """Sequences reply generation, field extraction, patching and advancing.

    Call 1 classifies intent and writes the reply; call 2 extracts record
    fields from the exchange. Provider failures never reach the caller:
    a failed call 1 yields an apology with record and step untouched, a
    failed call 2 yields an empty patch.
    """

    def __init__(
        self,
        client: BaseLLMClient,
        model: str,
        temperature: float = 0.3,
    ) -> None:
        self._client = client
        self._model = model
        self._temperature = temperature
        self._system_prompt = load_prompt("conversation_system")

    def respond(
        self,
        session: Session,
        message: str,
        risk: RiskAssessment | None = None,
        now: datetime | None = None,
    ) -> ConversationReply:
        history = self._render_history(session)
        session.conversation.append(ConversationMessage(role="user", content=message))

        if (
            risk is not None
            and risk.intervention is not None
            and risk.intervention.level is InterventionLevel.HIGH
        ):
            Log.info("Proactive intervention", session_id=session.session_id, risk=risk.risk)
            return self._finish(
                session,
                reply=risk.intervention.message,
                actions=list(risk.intervention.suggested_actions),
                intervention=True,
            )

        try:
            intent, reply = self._converse(session, message, history)
        except LLMError as exc:
            Log.warning(f"Conversation reply failed: {exc}", session_id=session.session_id)
            return self._finish(
                session,
                reply=APOLOGY,
                actions=suggested_actions(session),
                degraded=True,
            )

        try:
            extracted = self._extract_fields(session, message, reply)
        except LLMError as exc:
            Log.warning(f"Field extraction failed: {exc}", session_id=session.session_id)
            extracted = {}

        applied = session.record.apply_patch(_coerce(extracted), FieldSource.CONVERSATION)
        engine.advance(session, now)
        return self._finish(
            session,
            reply=reply,
            actions=suggested_actions(session),
            intent=intent,
            patch=applied,
        )

    def _converse(self, session: Session, message: str, history: str) -> tuple[str, str]:
        progress = engine.build_progress(session)
        prompt = load_prompt("conversation_user").format(
            current_step=session.current_step.value,
            fields_completed=progress.fields_completed,
            fields_total=progress.fields_total,
            documents_uploaded=progress.documents_uploaded,
            documents_required=progress.documents_required,
            missing_fields=", ".join(session.record.missing(SUBMISSION_REQUIRED_FIELDS)) or "none",
            history=history or "(none)",
            message=message,
        )
        raw = self._client.create_chat_completion(
            model=self._model,
            temperature=self._temperature,
            system_prompt=self._system_prompt,
            user_prompt=prompt,
            json_schema=_REPLY_SCHEMA,
            schema_name="conversation_reply",
        )
        Log.debug("Conversation response", session_id=session.session_id, raw=raw)
        decoded = decode_string_fields(parse_json_object(raw), ("intent", "reply"))
        intent = decoded.get("intent", "")
        reply = decoded.get("reply", "")
        if intent not in INTENTS:
            raise LLMResponseError(f"Unknown intent: {intent!r}")
        if not reply:
            raise LLMResponseError("Reply is empty")
        return intent, reply

    def _extract_fields(self, session: Session, message: str, reply: str) -> dict[str, str]:
        prompt = load_prompt("field_extraction").format(
            message=message,
            reply=reply,
            current_step=session.current_step.value,
            field_names=", ".join(EXTRACTABLE_FIELDS),
        )
        raw = self._client.create_chat_completion(
            model=self._model,
            temperature=0.0,
            system_prompt=self._system_prompt,
            user_prompt=prompt,
            json_schema=nullable_string_schema(EXTRACTABLE_FIELDS),
            schema_name="field_extraction",
        )
        return decode_string_fields(parse_json_object(raw), EXTRACTABLE_FIELDS)

    @staticmethod
    def _render_history(session: Session) -> str:
        recent = session.conversation[-HISTORY_LIMIT:]
        return "\n".join(f"{m.role}: {m.content}" for m in recent)

    @staticmethod
    def _finish(
        session: Session,
        *,
        reply: str,
        actions: list[str],
        intent: str | None = None,
        patch: dict[str, object] | None = None,
        degraded: bool = False,
        intervention: bool = False,
    ) -> ConversationReply:
        metadata: dict[str, object] = {"suggested_actions": actions}
        if intent:
            metadata["intent"] = intent
        if patch:
            metadata["field_patch"] = dict(patch)
        session.conversation.append(
            ConversationMessage(role="assistant", content=reply, metadata=metadata)
        )
        return ConversationReply(
            reply=reply,
            suggested_actions=actions,
            current_step=session.current_step,
            field_patch=patch or {},
            intent=intent,
            degraded=degraded,
            intervention=intervention,
        )


def _coerce(extracted: dict[str, str]) -> dict[str, object]:
    """Coerce field by field; values that cannot be parsed are dropped."""
    patch: dict[str, object] = {}
    for name, value in extracted.items():
        try:
            patch.update(coerce_patch({name: value}))
        except ValueError:
            Log.debug("Dropped unparseable extracted value", field=name)
    return patch
