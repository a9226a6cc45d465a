from dataclasses import dataclass, field
from enum import Enum


class SourceFormat(str, Enum):
    IMAGE = "image"
    PDF = "pdf"


class ErrorKind(str, Enum):
    """Failure kinds surfaced by the pipeline, each mapped to an HTTP status."""

    INVALID_FILE_TYPE = "invalid_file_type"
    TOO_LARGE = "too_large"
    UNSUPPORTED_TYPE = "unsupported_type"
    OCR_FAILURE = "ocr_failure"
    PDF_PARSE_FAILURE = "pdf_parse_failure"
    INSUFFICIENT_CONTENT = "insufficient_content"
    MISSING_CREDENTIALS = "missing_credentials"
    NETWORK_ERROR = "network_error"
    API_ERROR = "api_error"
    MALFORMED_RESPONSE = "malformed_response"

    @property
    def http_status(self) -> int:
        return 400 if self in _CLIENT_ERRORS else 500


_CLIENT_ERRORS = frozenset(
    {
        ErrorKind.INVALID_FILE_TYPE,
        ErrorKind.TOO_LARGE,
        ErrorKind.UNSUPPORTED_TYPE,
        ErrorKind.OCR_FAILURE,
        ErrorKind.PDF_PARSE_FAILURE,
        ErrorKind.INSUFFICIENT_CONTENT,
    }
)


@dataclass(frozen=True)
class UploadedDocument:
    """A single uploaded file, held in memory for one pipeline invocation."""

    content: bytes = field(repr=False)
    mime_type: str
    filename: str

    @property
    def size_bytes(self) -> int:
        return len(self.content)


@dataclass(frozen=True)
class Extracted:
    text: str
    char_count: int
    source_format: SourceFormat


@dataclass(frozen=True)
class ExtractionFailed:
    kind: ErrorKind
    detail: str


ExtractionOutcome = Extracted | ExtractionFailed


@dataclass(frozen=True)
class Analyzed:
    narrative: str


@dataclass(frozen=True)
class AnalysisFailed:
    kind: ErrorKind
    detail: str
    status_code: int | None = None


AnalysisOutcome = Analyzed | AnalysisFailed


@dataclass(frozen=True)
class PipelineResult:
    """Terminal value of one pipeline invocation.

    Success carries the document metadata, extracted text and narrative.
    Failure carries only the first error kind and its message.
    """

    success: bool
    filename: str = ""
    file_size: int = 0
    mime_type: str = ""
    extracted_text: str = ""
    text_length: int = 0
    analysis: str = ""
    error_kind: ErrorKind | None = None
    error_message: str = ""

    @classmethod
    def failed(cls, kind: ErrorKind, message: str) -> "PipelineResult":
        return cls(success=False, error_kind=kind, error_message=message)

    @property
    def http_status(self) -> int:
        if self.success or self.error_kind is None:
            return 200
        return self.error_kind.http_status
