import io

import pytesseract
from PIL import Image

from app.logging.logger import Log
from app.ocr.base import BaseOcrExtractor
from app.ocr.exceptions import OcrError
from app.ocr.models import ProgressEvent, ProgressObserver


class TesseractAdapter(BaseOcrExtractor):
    """Extracts text from images with the Tesseract engine.

    Each call spawns a tesseract process. The caller decides how many run at
    once.
    """

    def __init__(
        self,
        *,
        languages: str = "eng+ara+fra",
        timeout_seconds: float | None = None,
    ) -> None:
        self._languages = languages
        self._timeout = timeout_seconds or 0

    def extract(self, image_bytes: bytes, progress: ProgressObserver | None = None) -> str:
        self._notify(progress, "loading image", 0.0)
        try:
            with Image.open(io.BytesIO(image_bytes)) as image:
                image.load()
                self._notify(progress, "recognizing text", 0.5)
                text = pytesseract.image_to_string(
                    image, lang=self._languages, timeout=self._timeout
                )
        except Exception as exc:
            raise OcrError(str(exc) or type(exc).__name__) from exc
        self._notify(progress, "recognized text", 1.0)
        return text

    @staticmethod
    def _notify(progress: ProgressObserver | None, status: str, value: float) -> None:
        if progress is None:
            return
        try:
            progress(ProgressEvent(status=status, progress=value))
        except Exception as exc:
            Log.warning(f"OCR progress observer failed: {exc}")
