from abc import ABC, abstractmethod

from app.ocr.models import ProgressObserver


class BaseOcrExtractor(ABC):
    """Contract for all OCR adapters."""

    @abstractmethod
    def extract(self, image_bytes: bytes, progress: ProgressObserver | None = None) -> str:
        """Recognize text in a raster image.

        The call blocks until the engine finishes. Progress events are for
        observation only and do not change the result.

        Args:
            image_bytes: Raw PNG or JPEG content.
            progress: Optional callback invoked zero or more times.

        Returns:
            Recognized text, possibly empty.

        Raises:
            OcrError: on any engine failure.
        """
