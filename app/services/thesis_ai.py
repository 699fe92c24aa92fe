import json
import logging
from typing import Any, Dict, List, Optional, Tuple

from pydantic import ValidationError

from app.schemas.thesis_ai import MarksResult
from app.services.llm_client import LLMClient
from app.services.prompts import (
    SUMMARIZER_SYSTEM_PROMPT,
    CHUNK_SUMMARY_PROMPT,
    FINAL_SUMMARY_PROMPT,
    EVALUATOR_SYSTEM_PROMPT,
    MARKS_PROMPT,
    REVIEWER_SYSTEM_PROMPT,
    ANALYSIS_PROMPT,
)

logger = logging.getLogger(__name__)

CHUNK_SIZE = 2000
FINAL_SUMMARY_THRESHOLD = 1000

PARSE_ERROR_JUSTIFICATION = "Unable to parse AI response"
PARSE_ERROR_ASSESSMENT = "Error in AI response parsing"


def chunk_text(text: str, chunk_size: int = CHUNK_SIZE) -> List[str]:
    """텍스트를 겹치지 않는 chunk_size 길이의 조각으로 나눕니다. 마지막 조각은 더 짧을 수 있습니다."""
    if chunk_size <= 0:
        raise ValueError("chunk_size must be positive")
    return [text[i:i + chunk_size] for i in range(0, len(text), chunk_size)]


def summarize_chunk(llm: LLMClient, chunk: str, chunk_index: int, total_chunks: int) -> str:
    prompt = CHUNK_SUMMARY_PROMPT.format(
        system_prompt=SUMMARIZER_SYSTEM_PROMPT,
        chunk_number=chunk_index + 1,
        total_chunks=total_chunks,
        chunk=chunk,
    )
    return llm.complete(
        SUMMARIZER_SYSTEM_PROMPT,
        prompt,
        max_tokens=500,
        temperature=0.1,
        top_p=0.9,
    )


def summarize_chunks(llm: LLMClient, chunks: List[str]) -> List[str]:
    """
    청크를 순서대로 하나씩 요약합니다.

    이전 청크의 요약이 끝난 뒤에 다음 청크를 요청하므로 summaries[i]는 항상 chunks[i]의 요약입니다.
    """
    summaries = []
    for i, chunk in enumerate(chunks):
        summaries.append(summarize_chunk(llm, chunk, i, len(chunks)))
        logger.info(f"청크 요약 완료 ({i + 1}/{len(chunks)})")
    return summaries


def create_final_summary(llm: LLMClient, summaries: List[str]) -> str:
    """
    청크 요약들을 합칩니다. 합친 결과가 FINAL_SUMMARY_THRESHOLD보다 길면
    한 번 더 요약을 요청하고, 그 결과를 그대로 반환합니다 (추가 재귀 없음).
    """
    combined_summaries = "\n\n".join(summaries)

    if len(combined_summaries) > FINAL_SUMMARY_THRESHOLD:
        logger.info(f"요약 길이 {len(combined_summaries)}자 → 최종 요약 생성")
        prompt = FINAL_SUMMARY_PROMPT.format(
            system_prompt=SUMMARIZER_SYSTEM_PROMPT,
            combined_summaries=combined_summaries,
        )
        return llm.complete(
            SUMMARIZER_SYSTEM_PROMPT,
            prompt,
            max_tokens=1000,
            temperature=0.1,
            top_p=0.9,
        )

    return combined_summaries


def summarize_document(llm: LLMClient, text: str) -> Tuple[List[str], str]:
    """청크 분할 → 청크별 요약 → 통합. (청크 목록, 통합 요약)을 반환합니다."""
    chunks = chunk_text(text, CHUNK_SIZE)
    summaries = summarize_chunks(llm, chunks)
    return chunks, create_final_summary(llm, summaries)


def fallback_marks() -> Dict[str, Any]:
    return {
        "p1": {"score": 0, "justification": PARSE_ERROR_JUSTIFICATION},
        "p2": {"score": 0, "justification": PARSE_ERROR_JUSTIFICATION},
        "p3": {"score": 0, "justification": PARSE_ERROR_JUSTIFICATION},
        "overall_assessment": PARSE_ERROR_ASSESSMENT,
    }


def _extract_json_text(result_text: str) -> str:
    # ```json 코드 블록이 있는 경우 내용만 추출
    if "```json" in result_text:
        json_start = result_text.find("```json") + 7
        json_end = result_text.find("```", json_start)
        if json_end == -1:
            json_end = len(result_text)
        return result_text[json_start:json_end].strip()
    # 앞뒤에 설명 문장이 붙은 경우 가장 바깥 중괄호 구간만 사용
    if "{" in result_text and "}" in result_text:
        json_start = result_text.find("{")
        json_end = result_text.rfind("}") + 1
        return result_text[json_start:json_end]
    return result_text.strip()


def parse_marks_response(response_text: Optional[str]) -> Dict[str, Any]:
    """
    LLM 응답을 점수 dict로 파싱합니다. JSON이 깨졌거나 형식이 다르면 예외 대신 fallback 값을 반환합니다.
    """
    try:
        data = json.loads(_extract_json_text(response_text or ""))
        return MarksResult.model_validate(data).model_dump()
    except (json.JSONDecodeError, ValidationError) as e:
        logger.warning(f"점수 응답 파싱 실패, 기본값 사용: {str(e)}")
        return fallback_marks()


def estimate_marks(llm: LLMClient, combined_content: str) -> Dict[str, Any]:
    prompt = MARKS_PROMPT.format(combined_content=combined_content)
    response = llm.complete(
        EVALUATOR_SYSTEM_PROMPT,
        prompt,
        max_tokens=800,
        temperature=0.2,
    )
    return parse_marks_response(response)


def analyze_thesis(llm: LLMClient, combined_content: str) -> str:
    prompt = ANALYSIS_PROMPT.format(combined_content=combined_content)
    return llm.complete(
        REVIEWER_SYSTEM_PROMPT,
        prompt,
        max_tokens=1200,
        temperature=0.3,
    )


def _build_result(text: str, chunks: List[str], **payload) -> Dict[str, Any]:
    return {
        "success": True,
        **payload,
        "originalTextLength": len(text),
        "processedTextLength": len(text),
        "chunksProcessed": len(chunks),
    }


def run_summarize(llm: LLMClient, text: str) -> Dict[str, Any]:
    chunks, combined_content = summarize_document(llm, text)
    return _build_result(text, chunks, summary=combined_content)


def run_estimate_marks(llm: LLMClient, text: str) -> Dict[str, Any]:
    chunks, combined_content = summarize_document(llm, text)
    marks = estimate_marks(llm, combined_content)
    return _build_result(text, chunks, marks=marks)


def run_analyze(llm: LLMClient, text: str) -> Dict[str, Any]:
    chunks, combined_content = summarize_document(llm, text)
    analysis = analyze_thesis(llm, combined_content)
    return _build_result(text, chunks, analysis=analysis)
