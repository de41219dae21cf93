from onboarding.documents.checks import check_document, check_quality, confidence_score
from onboarding.documents.entity_extractor import EntityExtractor
from onboarding.documents.pipeline import DocumentContext, DocumentStep
from onboarding.llm.exceptions import LLMError
from onboarding.logging.logger import Log
from onboarding.ocr.base import BaseOcrEngine
from onboarding.ocr.exceptions import OcrError
from onboarding.validation.models import Severity


class ReadTextStep(DocumentStep):
    def __init__(self, ocr_engine: BaseOcrEngine) -> None:
        self._ocr_engine = ocr_engine

    def run(self, context: DocumentContext) -> DocumentContext:
        try:
            result = self._ocr_engine.extract(context.raw_bytes, context.mime_type)
        except OcrError as exc:
            Log.warning(f"OCR failed: {exc}", category=context.category.value)
            context.failed = True
            context.report.add(
                "document",
                Severity.ERROR,
                "We couldn't read this document",
                "Please upload a clearer photo or a PDF",
            )
            return context
        context.text = result.text
        context.quality = result.quality
        Log.info(
            f"Read {len(result.text)} chars with {result.engine}",
            category=context.category.value,
            quality=result.quality,
        )
        return context


class ExtractEntitiesStep(DocumentStep):
    def __init__(self, extractor: EntityExtractor) -> None:
        self._extractor = extractor

    def run(self, context: DocumentContext) -> DocumentContext:
        if context.failed:
            return context
        try:
            context.extracted = self._extractor.extract(context.text, context.category)
        except LLMError as exc:
            Log.warning(f"Entity extraction failed: {exc}", category=context.category.value)
            context.extracted = {}
        return context


class CheckDocumentStep(DocumentStep):
    def run(self, context: DocumentContext) -> DocumentContext:
        if context.failed:
            return context
        context.report.extend(check_document(context.category, context.extracted))
        context.report.extend(check_quality(context.quality))
        return context


class ScoreConfidenceStep(DocumentStep):
    def run(self, context: DocumentContext) -> DocumentContext:
        context.confidence = confidence_score(
            context.quality,
            context.extracted,
            context.report.is_valid,
        )
        return context
