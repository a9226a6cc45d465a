class PdfExtractionError(Exception):
    """Raised when a PDF cannot be parsed into text."""


class EncryptedPdfError(PdfExtractionError):
    """Raised when a PDF is encrypted and its text is not readable."""
