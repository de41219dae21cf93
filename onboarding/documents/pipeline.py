from abc import ABC, abstractmethod
from dataclasses import dataclass, field

from onboarding.domain.models import DocumentCategory
from onboarding.validation.models import ValidationReport


@dataclass(slots=True)
class DocumentContext:
    category: DocumentCategory
    raw_bytes: bytes
    mime_type: str
    file_name: str = ""
    text: str = ""
    quality: float = 0.0
    extracted: dict[str, str] = field(default_factory=dict)
    report: ValidationReport = field(default_factory=ValidationReport)
    confidence: float = 0.0
    failed: bool = False


class DocumentStep(ABC):
    @abstractmethod
    def run(self, context: DocumentContext) -> DocumentContext:
        raise NotImplementedError
