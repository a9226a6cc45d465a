import asyncio
from collections.abc import Callable
from concurrent.futures import Executor, ThreadPoolExecutor

from app.logging.logger import Log
from app.ocr.base import BaseOcrExtractor
from app.ocr.models import ProgressObserver
from app.pdf.base import BasePdfExtractor
from app.processor.classifier import DocumentClassifier, Rejected
from app.processor.exceptions import (
    DocumentRejectedError,
    InsufficientContentError,
    ProcessorError,
)
from app.processor.models import ErrorKind, SourceFormat
from app.processor.pipeline import ExtractionState, PipelineContext, PipelineStep

PDF_MIME_TYPE = "application/pdf"
DEFAULT_OCR_MAX_CONCURRENCY = 2


class ClassifyStep(PipelineStep):
    def __init__(self, classifier: DocumentClassifier) -> None:
        self._classifier = classifier

    async def run(self, context: PipelineContext) -> PipelineContext:
        document = context.document
        decision = self._classifier.classify(document.mime_type, document.size_bytes)
        if isinstance(decision, Rejected):
            raise DocumentRejectedError(decision.kind, decision.reason)
        context.state = ExtractionState.CLASSIFIED
        return context


class ExtractTextStep(PipelineStep):
    """Routes PDFs to the PDF extractor and images to OCR.

    PDF parsing runs on the loop's default thread pool. OCR runs on its own
    pool of ``ocr_max_concurrency`` threads, so queued OCR jobs wait in that
    pool's queue without holding threads PDF parsing needs. A queued OCR job
    is dropped when its task is cancelled or times out. A job that already
    started finishes on its own and its result is discarded.
    """

    def __init__(
        self,
        pdf_extractor: BasePdfExtractor,
        ocr_extractor: BaseOcrExtractor,
        timeout_seconds: float | None = None,
        progress: ProgressObserver | None = None,
        ocr_max_concurrency: int = DEFAULT_OCR_MAX_CONCURRENCY,
    ) -> None:
        self._pdf_extractor = pdf_extractor
        self._ocr_extractor = ocr_extractor
        self._timeout_seconds = timeout_seconds
        self._progress = progress
        self._ocr_workers = ThreadPoolExecutor(
            max_workers=max(1, ocr_max_concurrency), thread_name_prefix="ocr"
        )

    async def run(self, context: PipelineContext) -> PipelineContext:
        document = context.document
        executor: Executor | None
        if document.mime_type == PDF_MIME_TYPE:
            Log.info("Extracting text from PDF")
            source_format = SourceFormat.PDF
            kind, label = ErrorKind.PDF_PARSE_FAILURE, "PDF extraction failed"
            executor = None

            def extract() -> str:
                return self._pdf_extractor.extract(document.content)

        elif document.mime_type.startswith("image/"):
            Log.info("Extracting text from image using OCR")
            source_format = SourceFormat.IMAGE
            kind, label = ErrorKind.OCR_FAILURE, "OCR extraction failed"
            executor = self._ocr_workers

            def extract() -> str:
                return self._ocr_extractor.extract(document.content, self._progress)

        else:
            raise DocumentRejectedError(ErrorKind.UNSUPPORTED_TYPE, "Unsupported file type")

        context.state = ExtractionState.EXTRACTING
        context.source_format = source_format
        context.extracted_text = await self._run_extractor(extract, executor, kind, label)
        context.state = ExtractionState.VALIDATED
        return context

    async def _run_extractor(
        self,
        extract: Callable[[], str],
        executor: Executor | None,
        kind: ErrorKind,
        label: str,
    ) -> str:
        loop = asyncio.get_running_loop()
        try:
            text = await asyncio.wait_for(
                loop.run_in_executor(executor, extract), timeout=self._timeout_seconds
            )
        except TimeoutError as exc:
            raise ProcessorError(
                kind, f"{label}: timed out after {self._timeout_seconds}s"
            ) from exc
        except Exception as exc:
            raise ProcessorError(kind, f"{label}: {exc}") from exc
        return text or ""


class ValidateContentStep(PipelineStep):
    def __init__(self, min_text_length: int) -> None:
        self._min_text_length = min_text_length

    async def run(self, context: PipelineContext) -> PipelineContext:
        text = context.extracted_text.strip()
        if len(text) < self._min_text_length:
            Log.warning(
                f"Extracted text too short: {len(text)} chars "
                f"(minimum {self._min_text_length})"
            )
            raise InsufficientContentError()
        context.extracted_text = text
        context.state = ExtractionState.DONE
        return context
