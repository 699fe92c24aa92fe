import logging
import os
import tempfile
from typing import Optional

from fastapi import UploadFile

from app.core.config import MAX_UPLOAD_SIZE
from app.core.exceptions import UploadValidationError

logger = logging.getLogger(__name__)

PDF_MIME_TYPE = "application/pdf"


def ensure_temp_dir(temp_dir: str) -> None:
    os.makedirs(temp_dir, exist_ok=True)


def save_pdf_upload(file: Optional[UploadFile], temp_dir: str, max_size: int = MAX_UPLOAD_SIZE) -> str:
    """
    업로드된 PDF를 검증한 뒤 임시 디렉터리에 저장하고 경로를 반환합니다.

    Raises:
        UploadValidationError: 파일이 없거나, PDF가 아니거나, 크기 제한을 넘는 경우
    """
    if file is None:
        raise UploadValidationError("No PDF file uploaded")

    if file.content_type != PDF_MIME_TYPE:
        raise UploadValidationError("Only PDF files are allowed.")

    # 제한보다 1바이트 더 읽어서 초과 여부만 판단
    content = file.file.read(max_size + 1)
    if len(content) > max_size:
        raise UploadValidationError(f"File too large. Maximum size is {max_size // (1024 * 1024)}MB.")

    ensure_temp_dir(temp_dir)
    extension = os.path.splitext(file.filename or "")[1] or ".pdf"

    temp_path = None
    try:
        with tempfile.NamedTemporaryFile(prefix="ai-analysis-", suffix=extension, dir=temp_dir, delete=False) as temp_file:
            temp_path = temp_file.name
            temp_file.write(content)
    except OSError:
        # 쓰다 실패한 파일은 남기지 않는다
        remove_temp_file(temp_path)
        raise

    logger.info(f"업로드 파일 저장: {temp_path} ({len(content)} bytes)")
    return temp_path


def remove_temp_file(path: Optional[str]) -> None:
    if path and os.path.exists(path):
        os.unlink(path)
        logger.debug(f"임시 파일 삭제: {path}")
