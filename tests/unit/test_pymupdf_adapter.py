import pytest

from onboarding.ocr.exceptions import OcrError, UnsupportedDocumentTypeError
from onboarding.ocr.pymupdf_adapter import PyMuPdfAdapter

PDF = "application/pdf"


class TestPyMuPdfAdapter:
    def test_extract_returns_text(self, sample_pdf_bytes: bytes) -> None:
        result = PyMuPdfAdapter().extract(sample_pdf_bytes, PDF)
        assert "ABC Traders" in result.text
        assert result.quality == 1.0
        assert result.engine == "pymupdf"

    def test_extract_multi_page(self, multi_page_pdf_bytes: bytes) -> None:
        result = PyMuPdfAdapter().extract(multi_page_pdf_bytes, PDF)
        assert "Page one content" in result.text
        assert "Page two content" in result.text

    def test_blank_pdf_has_zero_quality(self, empty_pdf_bytes: bytes) -> None:
        result = PyMuPdfAdapter().extract(empty_pdf_bytes, PDF)
        assert result.text == ""
        assert result.quality == 0.0

    def test_raises_on_invalid_bytes(self) -> None:
        with pytest.raises(OcrError):
            PyMuPdfAdapter().extract(b"not a pdf", PDF)

    def test_rejects_non_pdf(self) -> None:
        with pytest.raises(UnsupportedDocumentTypeError):
            PyMuPdfAdapter().extract(b"hello", "text/plain")
