from app.config.settings import Settings
from app.ocr.base import BaseOcrExtractor
from app.ocr.tesseract_adapter import TesseractAdapter


class OcrExtractorFactory:
    """Creates the OCR adapter named by settings.ocr_engine."""

    @classmethod
    def create(cls, settings: Settings) -> BaseOcrExtractor:
        engine = settings.ocr_engine.strip().lower()
        if engine != "tesseract":
            raise ValueError(f"Unknown OCR engine '{engine}'. Choose from: ['tesseract']")
        return TesseractAdapter(
            languages=settings.ocr_languages,
            timeout_seconds=settings.ocr_timeout_seconds,
        )
