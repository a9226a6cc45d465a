import io

import pdfplumber
from pdfminer.pdfdocument import PDFEncryptionError, PDFPasswordIncorrect

from app.pdf.base import BasePdfExtractor
from app.pdf.exceptions import EncryptedPdfError, PdfExtractionError


class PdfPlumberAdapter(BasePdfExtractor):
    """Extracts text from PDF using pdfplumber."""

    def extract(self, pdf_bytes: bytes) -> str:
        try:
            with pdfplumber.open(io.BytesIO(pdf_bytes)) as pdf:
                pages = [page.extract_text() or "" for page in pdf.pages]
            return self.join_pages(pages)
        except PdfExtractionError:
            raise
        except (PDFPasswordIncorrect, PDFEncryptionError) as exc:
            raise EncryptedPdfError(f"document is encrypted: {exc}") from exc
        except Exception as exc:
            raise PdfExtractionError(f"pdfplumber extraction failed: {exc}") from exc
