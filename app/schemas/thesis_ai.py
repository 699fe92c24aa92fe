from pydantic import BaseModel, Field
from typing import Optional, Union


class PhaseMark(BaseModel):
    """단계별(P1/P2/P3) 점수와 근거"""
    score: Union[int, float] = Field(..., description="100점 만점 기준 점수")
    justification: str = Field(..., description="점수 근거")


class MarksResult(BaseModel):
    """논문 단계별 예상 점수"""
    p1: PhaseMark = Field(..., description="P1 (Proposal)")
    p2: PhaseMark = Field(..., description="P2 (Progress)")
    p3: PhaseMark = Field(..., description="P3 (Final)")
    overall_assessment: str = Field(..., description="전체 평가")


class PipelineStats(BaseModel):
    success: bool = Field(True, description="처리 성공 여부")
    originalTextLength: int = Field(..., description="추출된 원문 길이")
    processedTextLength: int = Field(..., description="처리된 텍스트 길이 (원문 길이와 동일)")
    chunksProcessed: int = Field(..., description="요약한 청크 수")


class SummarizeResponse(PipelineStats):
    summary: str


class EstimateMarksResponse(PipelineStats):
    marks: MarksResult


class AnalyzeResponse(PipelineStats):
    analysis: str


class ErrorResponse(BaseModel):
    message: str
    error: Optional[str] = None


class HealthCheckResponse(BaseModel):
    """상태 확인 응답 스키마"""
    status: str = Field(..., description="서비스 상태")
    message: str = Field(..., description="상태 메시지")
