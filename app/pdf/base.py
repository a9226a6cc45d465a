from abc import ABC, abstractmethod


class BasePdfExtractor(ABC):
    """Contract for all PDF text extraction adapters."""

    PAGE_SEPARATOR = "\n"

    @abstractmethod
    def extract(self, pdf_bytes: bytes) -> str:
        """Extract plain text from PDF bytes in document order.

        Only text objects are read; embedded scripts and other active
        content are never evaluated.

        Args:
            pdf_bytes: Raw PDF file content.

        Returns:
            Page texts joined by PAGE_SEPARATOR, stripped.

        Raises:
            PdfExtractionError: if the PDF is malformed, encrypted or the
                parser fails for any other reason.
        """

    @classmethod
    def join_pages(cls, pages: list[str]) -> str:
        return cls.PAGE_SEPARATOR.join(page.strip() for page in pages).strip()
