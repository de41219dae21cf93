from dataclasses import dataclass, field

from onboarding.domain.models import Step, UploadedDocument


@dataclass(frozen=True)
class ProcessedDocument:
    document: UploadedDocument
    feedback: str
    suggestions: list[str] = field(default_factory=list)


@dataclass(frozen=True)
class DocumentUploadResult:
    """What the caller sees after an upload has been processed and applied."""

    document: UploadedDocument
    feedback: str
    suggestions: list[str]
    applied_patch: dict[str, object]
    current_step: Step
