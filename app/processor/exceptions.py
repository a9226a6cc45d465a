from app.processor.models import ErrorKind


class ProcessorError(Exception):
    """Base exception for all pipeline errors. Carries the surfaced error kind."""

    def __init__(self, kind: ErrorKind, message: str) -> None:
        super().__init__(message)
        self.kind = kind
        self.message = message


class DocumentRejectedError(ProcessorError):
    """Raised when a document fails classification or dispatch."""


class InsufficientContentError(ProcessorError):
    """Raised when extracted text is below the minimum meaningful length."""

    def __init__(self, message: str = "Could not extract meaningful text from file!") -> None:
        super().__init__(ErrorKind.INSUFFICIENT_CONTENT, message)
