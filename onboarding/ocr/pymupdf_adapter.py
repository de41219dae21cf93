import pymupdf

from onboarding.ocr.base import BaseOcrEngine
from onboarding.ocr.exceptions import OcrError, UnsupportedDocumentTypeError
from onboarding.ocr.models import OcrResult
from onboarding.ocr.pdfplumber_adapter import PDF_MIME_TYPE, page_coverage


class PyMuPdfAdapter(BaseOcrEngine):
    """Reads the text layer of PDF uploads using PyMuPDF."""

    def extract(self, raw_bytes: bytes, mime_type: str) -> OcrResult:
        if mime_type != PDF_MIME_TYPE:
            raise UnsupportedDocumentTypeError(f"pymupdf cannot read '{mime_type}' documents")
        try:
            with pymupdf.open(stream=raw_bytes, filetype="pdf") as doc:  # type: ignore[no-untyped-call]
                pages = [page.get_text() for page in doc]
        except Exception as exc:
            raise OcrError(f"pymupdf extraction failed: {exc}") from exc
        return OcrResult(
            text="\n".join(pages).strip(),
            quality=page_coverage(pages),
            engine="pymupdf",
        )
