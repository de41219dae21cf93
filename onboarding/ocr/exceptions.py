class OcrError(Exception):
    """Raised when text cannot be read from an uploaded document."""


class UnsupportedDocumentTypeError(OcrError):
    """Raised when an OCR engine cannot handle the document's mime type."""
