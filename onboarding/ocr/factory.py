from onboarding.config.settings import Settings
from onboarding.ocr.base import BaseOcrEngine
from onboarding.ocr.pdfplumber_adapter import PdfPlumberAdapter
from onboarding.ocr.pymupdf_adapter import PyMuPdfAdapter
from onboarding.ocr.simulated_adapter import SimulatedOcrAdapter


class OcrEngineFactory:
    """Creates the correct OCR engine based on settings."""

    ADAPTERS: dict[str, type[BaseOcrEngine]] = {
        "simulated": SimulatedOcrAdapter,
        "pdfplumber": PdfPlumberAdapter,
        "pymupdf": PyMuPdfAdapter,
    }

    @classmethod
    def create(cls, settings: Settings) -> BaseOcrEngine:
        engine = settings.ocr_engine.lower()
        adapter_cls = cls.ADAPTERS.get(engine)
        if adapter_cls is None:
            raise ValueError(
                f"Unknown OCR engine '{engine}'. Choose from: {list(cls.ADAPTERS)}"
            )
        return adapter_cls()
