import io
import logging

from PyPDF2 import PdfReader

from app.core.exceptions import ExtractionError

logger = logging.getLogger(__name__)


class PdfTextExtractor:
    """PyPDF2 기반 텍스트 추출기. 시작 시 한 번 생성해서 의존성으로 주입합니다."""

    def extract_text(self, pdf_bytes: bytes) -> str:
        try:
            reader = PdfReader(io.BytesIO(pdf_bytes))
            pages = [page.extract_text() or "" for page in reader.pages]
        except Exception as e:
            logger.error(f"PDF 텍스트 추출 오류: {str(e)}")
            raise ExtractionError("Failed to extract text from PDF") from e

        return "\n".join(pages)
