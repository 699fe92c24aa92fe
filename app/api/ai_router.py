from fastapi import APIRouter, Depends, UploadFile, File
from fastapi.responses import JSONResponse
from typing import Any, Callable, Dict, Optional
import logging

from app.core import config
from app.core.exceptions import AIServiceUnavailable, UploadValidationError
from app.dependencies import get_current_user, get_llm_client, get_pdf_extractor
from app.schemas.thesis_ai import (
    SummarizeResponse,
    EstimateMarksResponse,
    AnalyzeResponse,
    ErrorResponse,
    HealthCheckResponse,
)
from app.services.llm_client import LLMClient
from app.services.pdf_extractor import PdfTextExtractor
from app.services.thesis_ai import run_summarize, run_estimate_marks, run_analyze
from app.services.uploads import save_pdf_upload, remove_temp_file

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/ai", tags=["thesis-ai"])

AI_UNAVAILABLE_MESSAGE = "AI service not available. Please check OpenAI API configuration."

ERROR_RESPONSES = {
    400: {"model": ErrorResponse},
    401: {"description": "Not authenticated"},
    500: {"model": ErrorResponse},
}


def _process_pdf(
    pdf: Optional[UploadFile],
    llm_client: LLMClient,
    extractor: PdfTextExtractor,
    runner: Callable[[LLMClient, str], Dict[str, Any]],
    error_message: str,
):
    """
    업로드 저장 → 텍스트 추출 → runner 실행 공통 흐름.
    어떤 경로로 끝나든 임시 파일은 finally에서 한 번만 삭제됩니다.
    """
    temp_path = None
    try:
        temp_path = save_pdf_upload(pdf, config.UPLOAD_TEMP_DIR, config.MAX_UPLOAD_SIZE)

        if not llm_client.available:
            raise AIServiceUnavailable(AI_UNAVAILABLE_MESSAGE)

        with open(temp_path, "rb") as f:
            pdf_bytes = f.read()
        text_content = extractor.extract_text(pdf_bytes)
        logger.info(f"PDF 텍스트 추출 완료: {len(text_content)}자")

        return runner(llm_client, text_content)

    except UploadValidationError as e:
        return JSONResponse(status_code=400, content={"message": str(e)})
    except AIServiceUnavailable as e:
        logger.error(str(e))
        return JSONResponse(status_code=500, content={"message": AI_UNAVAILABLE_MESSAGE})
    except Exception as e:
        logger.exception(f"{error_message} ({getattr(pdf, 'filename', None)})")
        return JSONResponse(status_code=500, content={"message": error_message, "error": str(e)})
    finally:
        remove_temp_file(temp_path)


@router.post("/summarize", response_model=SummarizeResponse, responses=ERROR_RESPONSES)
def summarize_pdf(
    pdf: Optional[UploadFile] = File(None),
    llm_client: LLMClient = Depends(get_llm_client),
    extractor: PdfTextExtractor = Depends(get_pdf_extractor),
    current_user=Depends(get_current_user)
):
    """
    PDF를 청크 단위로 요약한 뒤 하나의 요약으로 합칩니다.
    """
    return _process_pdf(pdf, llm_client, extractor, run_summarize, "Error processing PDF. Please try again.")


@router.post("/estimate-marks", response_model=EstimateMarksResponse, responses=ERROR_RESPONSES)
def estimate_marks_endpoint(
    pdf: Optional[UploadFile] = File(None),
    llm_client: LLMClient = Depends(get_llm_client),
    extractor: PdfTextExtractor = Depends(get_pdf_extractor),
    current_user=Depends(get_current_user)
):
    """
    논문 요약을 바탕으로 P1/P2/P3 단계별 예상 점수와 전체 평가를 반환합니다.
    AI 응답이 JSON 형식이 아니면 모든 점수가 0인 기본값을 반환합니다.
    """
    return _process_pdf(pdf, llm_client, extractor, run_estimate_marks, "Error estimating marks. Please try again.")


@router.post("/analyze", response_model=AnalyzeResponse, responses=ERROR_RESPONSES)
def analyze_thesis_endpoint(
    pdf: Optional[UploadFile] = File(None),
    llm_client: LLMClient = Depends(get_llm_client),
    extractor: PdfTextExtractor = Depends(get_pdf_extractor),
    current_user=Depends(get_current_user)
):
    """
    요약, 강점, 약점, 방법론, 기여도, 개선 제안 6개 항목의 분석 텍스트를 반환합니다.
    """
    return _process_pdf(pdf, llm_client, extractor, run_analyze, "Error analyzing thesis. Please try again.")


@router.get("/health", response_model=HealthCheckResponse)
def health_check(llm_client: LLMClient = Depends(get_llm_client)):
    if llm_client.available:
        return HealthCheckResponse(status="ok", message="AI service is available.")
    return HealthCheckResponse(status="unavailable", message=AI_UNAVAILABLE_MESSAGE)
