"""Simulated OCR provider.

Stands in for a hosted OCR service (Vision, Textract and the like). Plain-text
uploads are passed through so local runs and tests can feed real content;
every other upload reads as a fixed sample business document.
"""

from typing import ClassVar

from onboarding.ocr.base import BaseOcrEngine
from onboarding.ocr.exceptions import OcrError
from onboarding.ocr.models import OcrResult


class SimulatedOcrAdapter(BaseOcrEngine):
    SAMPLE_TEXT: ClassVar[str] = (
        "Sample Business Document\n"
        "Business Name: ABC Enterprises\n"
        "GSTIN: 27AABCU9603R1ZM\n"
        "Address: 123 Main Street, Mumbai\n"
        "City: Mumbai\n"
        "State: Maharashtra\n"
        "Pincode: 400001"
    )
    SAMPLE_QUALITY: ClassVar[float] = 0.92

    def extract(self, raw_bytes: bytes, mime_type: str) -> OcrResult:
        if not raw_bytes:
            raise OcrError("Cannot read an empty document")
        if mime_type == "text/plain":
            try:
                text = raw_bytes.decode("utf-8").strip()
            except UnicodeDecodeError as exc:
                raise OcrError(f"Plain-text upload is not valid UTF-8: {exc}") from exc
            return OcrResult(text=text, quality=1.0 if text else 0.0, engine="simulated")
        return OcrResult(text=self.SAMPLE_TEXT, quality=self.SAMPLE_QUALITY, engine="simulated")
