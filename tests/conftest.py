"""Shared fixtures — clean env per test and a recording fake HTTP transport."""
import json

import httpx
import pytest
from PIL import Image

ENV_KEYS = (
    "CLAUDE_API_KEY",
    "GEMINI_API_KEY",
    "OPENAI_API_KEY",
    "CLAUDE_MODEL",
    "GEMINI_MODEL",
    "OPENAI_MODEL",
    "MAX_OUTPUT_TOKENS",
    "GEMINI_MAX_OUTPUT_TOKENS",
    "DEFAULT_PROVIDER",
    "LOG_LEVEL",
    "ANTHROPIC_BASE_URL",
    "OPENAI_BASE_URL",
)


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    """Keep a developer's .env and shell keys out of the tests."""
    monkeypatch.setattr("src.config.load_dotenv", lambda **_: None)
    list(map(lambda key: monkeypatch.delenv(key, raising=False), ENV_KEYS))


class FakeTransport:
    """Records every request and answers with a canned response."""

    def __init__(self, status: int = 200, body: object = None, *, error: type[Exception] | None = None):
        self.status = status
        self.body = body
        self.error = error
        self.requests: list[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        match (self.error, self.body):
            case (type() as error, _):
                raise error("connection refused", request=request)
            case (_, str() as text):
                return httpx.Response(self.status, text=text)
            case (_, payload):
                return httpx.Response(self.status, json=payload)

    @property
    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self)

    @property
    def calls(self) -> int:
        return len(self.requests)

    def sent_json(self, index: int = -1) -> dict:
        return json.loads(self.requests[index].content)


@pytest.fixture
def fake_http():
    return FakeTransport


@pytest.fixture
def photo() -> Image.Image:
    return Image.new("RGB", (2048, 1536), color=(200, 30, 30))
