from uuid import uuid4

from onboarding.documents.checks import upload_feedback
from onboarding.documents.entity_extractor import EntityExtractor
from onboarding.documents.models import ProcessedDocument
from onboarding.documents.pipeline import DocumentContext, DocumentStep
from onboarding.documents.steps import (
    CheckDocumentStep,
    ExtractEntitiesStep,
    ReadTextStep,
    ScoreConfidenceStep,
)
from onboarding.domain.models import DocumentCategory, UploadedDocument, ValidationStatus
from onboarding.logging.logger import Log
from onboarding.ocr.base import BaseOcrEngine


class DocumentProcessor:
    """Runs one upload through the document pipeline.

    Pipeline: read text -> extract entities -> check -> score confidence.
    OCR and model failures never escape; they show up as an invalid
    document with an issue and an empty extraction.
    """

    def __init__(self, ocr_engine: BaseOcrEngine, extractor: EntityExtractor) -> None:
        self._steps: list[DocumentStep] = [
            ReadTextStep(ocr_engine),
            ExtractEntitiesStep(extractor),
            CheckDocumentStep(),
            ScoreConfidenceStep(),
        ]

    def process(
        self,
        category: DocumentCategory,
        raw_bytes: bytes,
        mime_type: str,
        file_name: str = "",
    ) -> ProcessedDocument:
        context = DocumentContext(
            category=category,
            raw_bytes=raw_bytes,
            mime_type=mime_type,
            file_name=file_name,
        )
        for step in self._steps:
            context = step.run(context)

        report = context.report
        document = UploadedDocument(
            document_id=uuid4().hex,
            category=category,
            extracted_fields=dict(context.extracted),
            confidence=context.confidence,
            validation_status=(
                ValidationStatus.VALID if report.is_valid else ValidationStatus.INVALID
            ),
            issues=[issue.message for issue in report.issues],
            file_name=file_name,
            mime_type=mime_type,
        )
        if context.failed:
            feedback = "We couldn't read this document. Please upload a clearer photo or a PDF."
        else:
            feedback = upload_feedback(category, context.extracted, context.quality)
        Log.info(
            "Document processed",
            document_id=document.document_id,
            category=category.value,
            status=document.validation_status.value,
            confidence=document.confidence,
        )
        return ProcessedDocument(
            document=document,
            feedback=feedback,
            suggestions=[i.suggestion for i in report.issues if i.suggestion],
        )
