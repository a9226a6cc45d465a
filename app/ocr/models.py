from collections.abc import Callable
from dataclasses import dataclass


@dataclass(frozen=True)
class ProgressEvent:
    """One progress notification from an OCR run."""

    status: str
    progress: float


ProgressObserver = Callable[[ProgressEvent], None]
