"""JSON-safe dict form of a Session, used by persistent stores."""

from dataclasses import asdict
from datetime import datetime
from typing import Any

from onboarding.domain.models import (
    RECORD_FIELDS,
    ActivityCounters,
    ConversationMessage,
    DocumentCategory,
    FieldSource,
    MerchantRecord,
    Session,
    SessionStatus,
    Step,
    UploadedDocument,
    ValidationStatus,
    VerificationResult,
    VerificationStatus,
    VerificationType,
)
from onboarding.session.exceptions import SessionStoreError


def session_to_dict(session: Session) -> dict[str, Any]:
    record = session.record
    return {
        "session_id": session.session_id,
        "user_id": session.user_id,
        "current_step": session.current_step.value,
        "status": session.status.value,
        "record": {name: record.get(name) for name in RECORD_FIELDS},
        "sources": {name: source.value for name, source in record.sources.items()},
        "documents": [_document_to_dict(d) for d in session.documents],
        "conversation": [
            {
                "role": m.role,
                "content": m.content,
                "timestamp": m.timestamp.isoformat(),
                "metadata": m.metadata,
            }
            for m in session.conversation
        ],
        "activity": asdict(session.activity),
        "verifications": {
            name: _verification_to_dict(result) for name, result in session.verifications.items()
        },
        "created_at": session.created_at.isoformat(),
        "last_activity_at": session.last_activity_at.isoformat(),
        "step_entered_at": session.step_entered_at.isoformat(),
        "submitted_at": _iso(session.submitted_at),
        "application_id": session.application_id,
    }


def session_from_dict(payload: dict[str, Any]) -> Session:
    """Rebuild a Session.

    Raises:
        SessionStoreError: if the payload is missing keys or holds bad values.
    """
    try:
        record = MerchantRecord(**{
            name: value for name, value in payload["record"].items() if name in RECORD_FIELDS
        })
        record.sources = {
            name: FieldSource(source) for name, source in payload.get("sources", {}).items()
        }
        return Session(
            session_id=payload["session_id"],
            user_id=payload.get("user_id"),
            current_step=Step(payload["current_step"]),
            record=record,
            documents=[_document_from_dict(d) for d in payload.get("documents", [])],
            conversation=[
                ConversationMessage(
                    role=m["role"],
                    content=m["content"],
                    timestamp=datetime.fromisoformat(m["timestamp"]),
                    metadata=m.get("metadata", {}),
                )
                for m in payload.get("conversation", [])
            ],
            activity=ActivityCounters(**payload.get("activity", {})),
            verifications={
                name: _verification_from_dict(result)
                for name, result in payload.get("verifications", {}).items()
            },
            status=SessionStatus(payload["status"]),
            created_at=datetime.fromisoformat(payload["created_at"]),
            last_activity_at=datetime.fromisoformat(payload["last_activity_at"]),
            step_entered_at=datetime.fromisoformat(payload["step_entered_at"]),
            submitted_at=_parse_iso(payload.get("submitted_at")),
            application_id=payload.get("application_id"),
        )
    except (KeyError, TypeError, ValueError) as exc:
        raise SessionStoreError(f"Corrupt session payload: {exc}") from exc


def _document_to_dict(document: UploadedDocument) -> dict[str, Any]:
    return {
        "document_id": document.document_id,
        "category": document.category.value,
        "extracted_fields": document.extracted_fields,
        "confidence": document.confidence,
        "validation_status": document.validation_status.value,
        "issues": document.issues,
        "file_name": document.file_name,
        "mime_type": document.mime_type,
        "uploaded_at": document.uploaded_at.isoformat(),
    }


def _document_from_dict(payload: dict[str, Any]) -> UploadedDocument:
    return UploadedDocument(
        document_id=payload["document_id"],
        category=DocumentCategory(payload["category"]),
        extracted_fields=dict(payload["extracted_fields"]),
        confidence=float(payload["confidence"]),
        validation_status=ValidationStatus(payload["validation_status"]),
        issues=list(payload.get("issues", [])),
        file_name=payload.get("file_name", ""),
        mime_type=payload.get("mime_type", ""),
        uploaded_at=datetime.fromisoformat(payload["uploaded_at"]),
    )


def _verification_to_dict(result: VerificationResult) -> dict[str, Any]:
    return {
        "verification_type": result.verification_type.value,
        "status": result.status.value,
        "message": result.message,
        "details": result.details,
        "alerts": result.alerts,
        "checked_at": result.checked_at.isoformat(),
    }


def _verification_from_dict(payload: dict[str, Any]) -> VerificationResult:
    return VerificationResult(
        verification_type=VerificationType(payload["verification_type"]),
        status=VerificationStatus(payload["status"]),
        message=payload.get("message", ""),
        details=dict(payload.get("details", {})),
        alerts=list(payload.get("alerts", [])),
        checked_at=datetime.fromisoformat(payload["checked_at"]),
    )


def _iso(value: datetime | None) -> str | None:
    return value.isoformat() if value is not None else None


def _parse_iso(value: str | None) -> datetime | None:
    return datetime.fromisoformat(value) if value else None
