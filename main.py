from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
import logging
import os

from app.core import config
from app.api.ai_router import router as ai_router
from app.api.user import router as user_router
from app.db.create_tables import create_tables
from app.services.llm_client import LLMClient
from app.services.pdf_extractor import PdfTextExtractor
from app.services.uploads import ensure_temp_dir

logging.basicConfig(level=config.LOG_LEVEL)
logger = logging.getLogger(__name__)

app = FastAPI(title="Thesis AI API")

app.add_middleware(
    CORSMiddleware,
    allow_origins=config.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"]
)

@app.on_event("startup")
def on_startup():
    """
    DB 테이블, 업로드 임시 디렉터리, OpenAI 클라이언트, PDF 추출기를 준비합니다.
    """
    create_tables()
    ensure_temp_dir(config.UPLOAD_TEMP_DIR)
    app.state.llm_client = LLMClient(api_key=config.OPENAI_API_KEY, model=config.OPENAI_MODEL)
    app.state.pdf_extractor = PdfTextExtractor()
    if not app.state.llm_client.available:
        logger.warning("OpenAI 클라이언트를 사용할 수 없습니다. AI 엔드포인트는 500을 반환합니다.")

app.include_router(user_router, prefix="/api")
app.include_router(ai_router, prefix="/api")

if __name__ == "__main__":
    import uvicorn
    uvicorn.run("main:app", host="0.0.0.0", port=int(os.getenv("PORT", "8000")), reload=True)
