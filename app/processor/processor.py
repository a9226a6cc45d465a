from app.analysis.base import BaseAnalyzer
from app.analysis.exceptions import MissingCredentialsError
from app.analysis.factory import AnalyzerFactory
from app.config.settings import Settings
from app.logging.logger import Log
from app.ocr.factory import OcrExtractorFactory
from app.pdf.factory import PdfExtractorFactory
from app.processor.classifier import Classification, DocumentClassifier, Rejected
from app.processor.coordinator import ExtractionCoordinator
from app.processor.models import AnalysisFailed, ExtractionFailed, PipelineResult, UploadedDocument

_PREVIEW_CHARS = 100


class Processor:
    """Runs one upload through the full pipeline.

    Pipeline: classify -> credential check -> extract -> validate -> analyze.
    Stages run strictly in order and the first failure ends the run.
    """

    def __init__(self, coordinator: ExtractionCoordinator, analyzer: BaseAnalyzer) -> None:
        self._coordinator = coordinator
        self._analyzer = analyzer

    def is_analysis_configured(self) -> bool:
        try:
            self._analyzer.ensure_configured()
        except MissingCredentialsError:
            return False
        return True

    def classify(self, mime_type: str, size_bytes: int) -> Classification:
        """Check an upload from its type and size alone."""
        return self._coordinator.classify(mime_type, size_bytes)

    @property
    def max_upload_size_bytes(self) -> int:
        return self._coordinator.max_upload_size_bytes

    def reject_oversized(self) -> Rejected:
        return self._coordinator.reject_oversized()

    async def process(self, document: UploadedDocument) -> PipelineResult:
        Log.info(
            f"File received: {document.filename} "
            f"({document.size_bytes} bytes, {document.mime_type})"
        )

        decision = self.classify(document.mime_type, document.size_bytes)
        if isinstance(decision, Rejected):
            Log.warning(f"Rejected {document.filename}: {decision.reason}")
            return PipelineResult.failed(decision.kind, decision.reason)

        try:
            self._analyzer.ensure_configured()
        except MissingCredentialsError as exc:
            Log.error(f"Cannot process {document.filename}: {exc}")
            return PipelineResult.failed(exc.kind, str(exc))

        extraction = await self._coordinator.extract(document)
        if isinstance(extraction, ExtractionFailed):
            return PipelineResult.failed(extraction.kind, extraction.detail)

        Log.info(f"Text extracted successfully: {extraction.char_count} characters")
        Log.debug(f"Preview: {extraction.text[:_PREVIEW_CHARS]} ...")

        analysis = await self._analyzer.analyze(extraction.text)
        if isinstance(analysis, AnalysisFailed):
            return PipelineResult.failed(analysis.kind, analysis.detail)

        return PipelineResult(
            success=True,
            filename=document.filename,
            file_size=document.size_bytes,
            mime_type=document.mime_type,
            extracted_text=extraction.text,
            text_length=extraction.char_count,
            analysis=analysis.narrative,
        )


def build_processor(settings: Settings) -> Processor:
    """Build a Processor with the adapters named in settings."""
    coordinator = ExtractionCoordinator(
        classifier=DocumentClassifier(settings.max_upload_size_bytes),
        pdf_extractor=PdfExtractorFactory.create(settings),
        ocr_extractor=OcrExtractorFactory.create(settings),
        min_text_length=settings.min_text_length,
        timeout_seconds=settings.extraction_timeout_seconds,
        ocr_max_concurrency=settings.ocr_max_concurrency,
    )
    analyzer = AnalyzerFactory.create(settings)
    return Processor(coordinator=coordinator, analyzer=analyzer)
