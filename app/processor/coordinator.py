from app.logging.logger import Log
from app.ocr.base import BaseOcrExtractor
from app.ocr.models import ProgressEvent, ProgressObserver
from app.pdf.base import BasePdfExtractor
from app.processor.classifier import Classification, DocumentClassifier, Rejected
from app.processor.exceptions import ProcessorError
from app.processor.models import (
    Extracted,
    ExtractionFailed,
    ExtractionOutcome,
    UploadedDocument,
)
from app.processor.pipeline import ExtractionState, PipelineContext, PipelineStep
from app.processor.steps import (
    DEFAULT_OCR_MAX_CONCURRENCY,
    ClassifyStep,
    ExtractTextStep,
    ValidateContentStep,
)

MIN_TEXT_LENGTH = 50


def log_ocr_progress(event: ProgressEvent) -> None:
    Log.debug(f"OCR Progress: {event.status} {event.progress:.2f}")


class ExtractionCoordinator:
    """Turns an uploaded document into extracted text or a single typed failure.

    States: received -> classified -> extracting -> validated -> done, with
    an early exit to rejected on the first failure.
    """

    def __init__(
        self,
        *,
        classifier: DocumentClassifier,
        pdf_extractor: BasePdfExtractor,
        ocr_extractor: BaseOcrExtractor,
        min_text_length: int = MIN_TEXT_LENGTH,
        timeout_seconds: float | None = None,
        progress: ProgressObserver | None = log_ocr_progress,
        ocr_max_concurrency: int = DEFAULT_OCR_MAX_CONCURRENCY,
    ) -> None:
        self._classifier = classifier
        self._steps: list[PipelineStep] = [
            ClassifyStep(classifier),
            ExtractTextStep(
                pdf_extractor=pdf_extractor,
                ocr_extractor=ocr_extractor,
                timeout_seconds=timeout_seconds,
                progress=progress,
                ocr_max_concurrency=ocr_max_concurrency,
            ),
            ValidateContentStep(min_text_length),
        ]

    def classify(self, mime_type: str, size_bytes: int) -> Classification:
        return self._classifier.classify(mime_type, size_bytes)

    @property
    def max_upload_size_bytes(self) -> int:
        return self._classifier.max_size_bytes

    def reject_oversized(self) -> Rejected:
        return self._classifier.oversized()

    async def extract(self, document: UploadedDocument) -> ExtractionOutcome:
        context = PipelineContext(document=document)
        try:
            for step in self._steps:
                context = await step.run(context)
        except ProcessorError as exc:
            Log.warning(
                f"Rejected {document.filename} in state {context.state.value}: "
                f"{exc.kind.value}: {exc.message}"
            )
            context.state = ExtractionState.REJECTED
            return ExtractionFailed(kind=exc.kind, detail=exc.message)

        if context.source_format is None:
            raise ValueError("PipelineContext.source_format must be set after extraction")
        text = context.extracted_text
        return Extracted(
            text=text,
            char_count=len(text),
            source_format=context.source_format,
        )
