from app.config.settings import Settings
from app.pdf.base import BasePdfExtractor
from app.pdf.pdfplumber_adapter import PdfPlumberAdapter
from app.pdf.pymupdf_adapter import PyMuPdfAdapter


class PdfExtractorFactory:
    """Maps settings.pdf_engine to a structural PDF text extractor."""

    ENGINES: dict[str, type[BasePdfExtractor]] = {
        "pdfplumber": PdfPlumberAdapter,
        "pymupdf": PyMuPdfAdapter,
    }

    @classmethod
    def create(cls, settings: Settings) -> BasePdfExtractor:
        name = settings.pdf_engine.strip().lower()
        try:
            engine_cls = cls.ENGINES[name]
        except KeyError:
            raise ValueError(
                f"Unknown PDF engine '{name}'. Choose from: {sorted(cls.ENGINES)}"
            ) from None
        return engine_cls()
