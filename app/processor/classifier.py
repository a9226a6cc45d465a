from dataclasses import dataclass

from app.processor.models import ErrorKind

ALLOWED_MIME_TYPES: frozenset[str] = frozenset(
    {"image/png", "image/jpeg", "image/jpg", "application/pdf"}
)
DEFAULT_MAX_SIZE_BYTES = 10 * 1024 * 1024


@dataclass(frozen=True)
class Accepted:
    mime_type: str


@dataclass(frozen=True)
class Rejected:
    kind: ErrorKind
    reason: str


Classification = Accepted | Rejected


class DocumentClassifier:
    """Accepts or rejects an upload from its declared type and size alone."""

    def __init__(self, max_size_bytes: int = DEFAULT_MAX_SIZE_BYTES) -> None:
        self._max_size_bytes = max_size_bytes

    @property
    def max_size_bytes(self) -> int:
        return self._max_size_bytes

    def classify(self, mime_type: str, size_bytes: int) -> Classification:
        """Check the allow-list first, then the size ceiling."""
        if mime_type not in ALLOWED_MIME_TYPES:
            return Rejected(
                ErrorKind.INVALID_FILE_TYPE,
                "Invalid file type. Only pdf, png and jpg are allowed",
            )
        if size_bytes > self._max_size_bytes:
            return self.oversized()
        return Accepted(mime_type)

    def oversized(self) -> Rejected:
        """Rejection for a payload known to exceed the ceiling."""
        return Rejected(
            ErrorKind.TOO_LARGE,
            f"File size exceeds {_format_limit(self._max_size_bytes)} limit",
        )


def _format_limit(size_bytes: int) -> str:
    mib, rest = divmod(size_bytes, 1024 * 1024)
    return f"{mib}MB" if mib and not rest else f"{size_bytes} bytes"
