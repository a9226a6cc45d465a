from unittest.mock import MagicMock, patch

import pytesseract
import pytest

from app.ocr.exceptions import OcrError
from app.ocr.factory import OcrExtractorFactory
from app.ocr.models import ProgressEvent
from app.ocr.tesseract_adapter import TesseractAdapter

_IMAGE_TO_STRING = "app.ocr.tesseract_adapter.pytesseract.image_to_string"


class TestTesseractAdapter:
    def test_returns_engine_text(self, png_bytes: bytes) -> None:
        with patch(_IMAGE_TO_STRING, return_value="John Doe\nEngineer") as ocr:
            result = TesseractAdapter().extract(png_bytes)
        assert result == "John Doe\nEngineer"
        ocr.assert_called_once()

    def test_uses_configured_languages_and_timeout(self, jpeg_bytes: bytes) -> None:
        with patch(_IMAGE_TO_STRING, return_value="") as ocr:
            TesseractAdapter(languages="eng+ara+fra", timeout_seconds=12).extract(jpeg_bytes)
        assert ocr.call_args.kwargs["lang"] == "eng+ara+fra"
        assert ocr.call_args.kwargs["timeout"] == 12

    def test_no_timeout_by_default(self, png_bytes: bytes) -> None:
        with patch(_IMAGE_TO_STRING, return_value="") as ocr:
            TesseractAdapter().extract(png_bytes)
        assert ocr.call_args.kwargs["timeout"] == 0

    def test_reports_progress_in_order(self, png_bytes: bytes) -> None:
        events: list[ProgressEvent] = []
        with patch(_IMAGE_TO_STRING, return_value="text"):
            TesseractAdapter().extract(png_bytes, progress=events.append)
        assert [e.status for e in events] == [
            "loading image",
            "recognizing text",
            "recognized text",
        ]
        assert events[-1].progress == 1.0

    def test_failing_observer_does_not_change_result(self, png_bytes: bytes) -> None:
        observer = MagicMock(side_effect=RuntimeError("observer broke"))
        with patch(_IMAGE_TO_STRING, return_value="still here"):
            result = TesseractAdapter().extract(png_bytes, progress=observer)
        assert result == "still here"
        assert observer.call_count == 3

    def test_corrupt_image_raises_ocr_error(self) -> None:
        with pytest.raises(OcrError):
            TesseractAdapter().extract(b"\x89PNG not really")

    def test_engine_error_raises_ocr_error(self, png_bytes: bytes) -> None:
        error = pytesseract.TesseractError(1, "Failed loading language 'ara'")
        with patch(_IMAGE_TO_STRING, side_effect=error):
            with pytest.raises(OcrError, match="ara"):
                TesseractAdapter().extract(png_bytes)

    def test_engine_timeout_raises_ocr_error(self, png_bytes: bytes) -> None:
        with patch(_IMAGE_TO_STRING, side_effect=RuntimeError("Tesseract process timeout")):
            with pytest.raises(OcrError, match="timeout"):
                TesseractAdapter(timeout_seconds=1).extract(png_bytes)

    def test_missing_binary_raises_ocr_error(self, png_bytes: bytes) -> None:
        with patch(_IMAGE_TO_STRING, side_effect=pytesseract.TesseractNotFoundError()):
            with pytest.raises(OcrError):
                TesseractAdapter().extract(png_bytes)


class TestOcrExtractorFactory:
    def test_creates_tesseract_adapter(self) -> None:
        settings = MagicMock(
            ocr_engine="Tesseract",
            ocr_languages="eng",
            ocr_timeout_seconds=None,
        )
        assert isinstance(OcrExtractorFactory.create(settings), TesseractAdapter)

    def test_raises_for_unknown_engine(self) -> None:
        settings = MagicMock(ocr_engine="easyocr")
        with pytest.raises(ValueError, match="Unknown OCR engine"):
            OcrExtractorFactory.create(settings)
