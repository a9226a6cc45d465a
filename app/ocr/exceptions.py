class OcrError(Exception):
    """Raised when the OCR engine cannot produce text from an image."""
