import os
import tempfile

# app 모듈이 import 되기 전에 테스트용 환경을 지정해야 config에 반영된다
_TEST_DIR = tempfile.mkdtemp(prefix="thesis-ai-tests-")
os.environ["DATABASE_URL"] = f"sqlite:///{os.path.join(_TEST_DIR, 'test.db')}"
os.environ["UPLOAD_TEMP_DIR"] = os.path.join(_TEST_DIR, "uploads")
os.environ["OPENAI_API_KEY"] = ""
os.environ["SECRET_KEY"] = "test-secret-key"

from types import SimpleNamespace

import pytest
from fastapi.testclient import TestClient

from app.core import config
from app.dependencies import get_current_user, get_llm_client, get_pdf_extractor
from main import app


class FakeLLMClient:
    """LLMClient 대체용. 호출 인자를 기록하고 responder 결과를 돌려준다."""

    def __init__(self, responder=None, available=True):
        self.calls = []
        self.available = available
        self._responder = responder or (lambda call: f"summary {len(self.calls)}")

    def complete(self, system_prompt, user_prompt, max_tokens, temperature, top_p=None):
        call = {
            "system_prompt": system_prompt,
            "user_prompt": user_prompt,
            "max_tokens": max_tokens,
            "temperature": temperature,
            "top_p": top_p,
        }
        self.calls.append(call)
        return self._responder(call)


class FakeExtractor:
    """고정 텍스트를 반환하며, 호출 시점의 임시 디렉터리 상태를 기록한다."""

    def __init__(self, text="", error=None):
        self.text = text
        self.error = error
        self.calls = 0
        self.temp_files_during_call = None

    def extract_text(self, pdf_bytes):
        self.calls += 1
        self.temp_files_during_call = list_temp_files()
        if self.error is not None:
            raise self.error
        return self.text


def list_temp_files():
    if not os.path.isdir(config.UPLOAD_TEMP_DIR):
        return []
    return sorted(os.listdir(config.UPLOAD_TEMP_DIR))


def make_pdf(text: str) -> bytes:
    """텍스트 한 줄이 들어간 1페이지짜리 PDF를 만든다."""
    stream = f"BT /F1 12 Tf 72 720 Td ({text}) Tj ET".encode("latin-1")
    objects = [
        b"<< /Type /Catalog /Pages 2 0 R >>",
        b"<< /Type /Pages /Kids [3 0 R] /Count 1 >>",
        b"<< /Type /Page /Parent 2 0 R /MediaBox [0 0 612 792] "
        b"/Contents 4 0 R /Resources << /Font << /F1 5 0 R >> >> >>",
        b"<< /Length %d >>\nstream\n" % len(stream) + stream + b"\nendstream",
        b"<< /Type /Font /Subtype /Type1 /BaseFont /Helvetica >>",
    ]

    out = bytearray(b"%PDF-1.4\n")
    offsets = []
    for number, body in enumerate(objects, start=1):
        offsets.append(len(out))
        out += b"%d 0 obj\n" % number + body + b"\nendobj\n"

    xref_offset = len(out)
    out += b"xref\n0 %d\n" % (len(objects) + 1)
    out += b"0000000000 65535 f \n"
    for offset in offsets:
        out += b"%010d 00000 n \n" % offset
    out += b"trailer\n<< /Size %d /Root 1 0 R >>\nstartxref\n%d\n%%%%EOF\n" % (len(objects) + 1, xref_offset)
    return bytes(out)


@pytest.fixture
def client():
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


@pytest.fixture
def fake_user():
    return SimpleNamespace(id=1, email="student@example.com", name="Student", role="user")


@pytest.fixture
def authed_client(client, fake_user):
    app.dependency_overrides[get_current_user] = lambda: fake_user
    return client


@pytest.fixture
def use_llm():
    def _install(llm):
        app.dependency_overrides[get_llm_client] = lambda: llm
        return llm
    return _install


@pytest.fixture
def use_extractor():
    def _install(extractor):
        app.dependency_overrides[get_pdf_extractor] = lambda: extractor
        return extractor
    return _install


@pytest.fixture
def pdf_upload():
    return {"pdf": ("thesis.pdf", make_pdf("Hello thesis"), "application/pdf")}
