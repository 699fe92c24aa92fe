import pytest

from app.core.exceptions import ExtractionError
from app.services.pdf_extractor import PdfTextExtractor
from conftest import make_pdf


def test_extracts_text_from_pdf():
    text = PdfTextExtractor().extract_text(make_pdf("Hello thesis"))

    assert "Hello thesis" in text


@pytest.mark.parametrize("data", [b"", b"this is not a pdf", b"%PDF-1.4\ngarbage"])
def test_invalid_pdf_raises_extraction_error(data):
    with pytest.raises(ExtractionError, match="Failed to extract text from PDF"):
        PdfTextExtractor().extract_text(data)
