import io

import pdfplumber

from onboarding.ocr.base import BaseOcrEngine
from onboarding.ocr.exceptions import OcrError, UnsupportedDocumentTypeError
from onboarding.ocr.models import OcrResult

PDF_MIME_TYPE = "application/pdf"


class PdfPlumberAdapter(BaseOcrEngine):
    """Reads the text layer of PDF uploads using pdfplumber."""

    def extract(self, raw_bytes: bytes, mime_type: str) -> OcrResult:
        if mime_type != PDF_MIME_TYPE:
            raise UnsupportedDocumentTypeError(f"pdfplumber cannot read '{mime_type}' documents")
        try:
            with pdfplumber.open(io.BytesIO(raw_bytes)) as pdf:
                pages = [page.extract_text() or "" for page in pdf.pages]
        except Exception as exc:
            raise OcrError(f"pdfplumber extraction failed: {exc}") from exc
        return OcrResult(
            text="\n".join(pages).strip(),
            quality=page_coverage(pages),
            engine="pdfplumber",
        )


def page_coverage(pages: list[str]) -> float:
    """Share of pages that yielded any text."""
    if not pages:
        return 0.0
    return sum(1 for page in pages if page.strip()) / len(pages)
