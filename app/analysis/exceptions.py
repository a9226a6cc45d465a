from app.processor.models import ErrorKind


class AnalysisError(Exception):
    """Raised when CV analysis fails."""

    kind: ErrorKind = ErrorKind.MALFORMED_RESPONSE


class MissingCredentialsError(AnalysisError):
    """Raised when no API key is configured for the analysis provider."""

    kind = ErrorKind.MISSING_CREDENTIALS


class AnalysisNetworkError(AnalysisError):
    """Raised when the AI provider cannot be reached or the call times out."""

    kind = ErrorKind.NETWORK_ERROR


class AnalysisApiError(AnalysisError):
    """Raised when the AI provider answers with a non-success HTTP status."""

    kind = ErrorKind.API_ERROR

    def __init__(self, status_code: int, body: str) -> None:
        super().__init__(f"Analysis service returned HTTP {status_code}: {body}")
        self.status_code = status_code
        self.body = body


class MalformedResponseError(AnalysisError):
    """Raised when the AI provider response is empty or cannot be read."""

    kind = ErrorKind.MALFORMED_RESPONSE
