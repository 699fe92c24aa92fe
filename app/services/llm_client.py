import logging
from typing import Any, Dict, Optional

from openai import OpenAI

from app.core.exceptions import AIServiceUnavailable

logger = logging.getLogger(__name__)


class LLMClient:
    """
    OpenAI chat completion 클라이언트 래퍼.

    애플리케이션 시작 시 한 번 생성되어 app.state에 보관됩니다.
    API 키가 없거나 초기화에 실패하면 예외를 던지지 않고 available=False 상태가 됩니다.
    """

    def __init__(self, api_key: Optional[str] = None, model: str = "gpt-3.5-turbo"):
        self.model = model
        if not api_key:
            logger.error("OPENAI_API_KEY가 설정되지 않았습니다.")
            self._client = None
            return
        try:
            self._client = OpenAI(api_key=api_key)
        except Exception as e:
            logger.error(f"OpenAI 초기화 오류: {str(e)}")
            self._client = None

    @property
    def available(self) -> bool:
        return self._client is not None

    def complete(
        self,
        system_prompt: str,
        user_prompt: str,
        max_tokens: int,
        temperature: float,
        top_p: Optional[float] = None,
    ) -> str:
        if not self.available:
            raise AIServiceUnavailable("OpenAI client is not initialized.")

        request: Dict[str, Any] = {
            "model": self.model,
            "messages": [
                {"role": "system", "content": system_prompt},
                {"role": "user", "content": user_prompt}
            ],
            "max_tokens": max_tokens,
            "temperature": temperature,
        }
        if top_p is not None:
            request["top_p"] = top_p

        response = self._client.chat.completions.create(**request)
        # 거절/필터링된 응답은 content가 None으로 온다
        return response.choices[0].message.content or ""
