import io
import shutil

import pytesseract
import pytest
from PIL import Image, ImageDraw, ImageFont

from app.ocr.tesseract_adapter import TesseractAdapter

LANGUAGES = "eng+ara+fra"


def _require_tesseract() -> None:
    if shutil.which("tesseract") is None:
        pytest.skip("tesseract binary not installed")
    installed = set(pytesseract.get_languages(config=""))
    missing = set(LANGUAGES.split("+")) - installed
    if missing:
        pytest.skip(f"tesseract language data missing: {sorted(missing)}")


def _text_image(text: str) -> bytes:
    image = Image.new("RGB", (900, 120), color="white")
    draw = ImageDraw.Draw(image)
    draw.text((20, 30), text, fill="black", font=ImageFont.load_default(size=48))
    buf = io.BytesIO()
    image.save(buf, format="PNG")
    return buf.getvalue()


class TestTesseractRoundTrip:
    def test_recognizes_rendered_text(self) -> None:
        _require_tesseract()
        result = TesseractAdapter(languages=LANGUAGES).extract(_text_image("CURRICULUM VITAE"))
        assert "VITAE" in result.upper()

    def test_blank_image_yields_no_text(self) -> None:
        _require_tesseract()
        buf = io.BytesIO()
        Image.new("RGB", (200, 200), color="white").save(buf, format="PNG")
        assert TesseractAdapter(languages=LANGUAGES).extract(buf.getvalue()).strip() == ""
