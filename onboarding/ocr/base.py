from abc import ABC, abstractmethod

from onboarding.ocr.models import OcrResult


class BaseOcrEngine(ABC):
    """Contract for all document text extraction adapters."""

    @abstractmethod
    def extract(self, raw_bytes: bytes, mime_type: str) -> OcrResult:
        """Read text from an uploaded document.

        Args:
            raw_bytes: Raw file content.
            mime_type: Declared content type of the upload.

        Returns:
            OcrResult with the text and a quality estimate.

        Raises:
            OcrError: if extraction fails for any reason.
        """
