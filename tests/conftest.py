"""
Pytest configuration and shared fixtures for Lead Chat tests.
"""

import json
import os

# The app exits at import time without an API key
os.environ.setdefault("OPENAI_API_KEY", "test-openai-key")
os.environ.pop("POSTHOG_API_KEY", None)

from unittest.mock import patch  # noqa: E402

import httpx  # noqa: E402
import pytest  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402

from leadchat.config import Settings  # noqa: E402
from leadchat.main import create_app  # noqa: E402
from leadchat.services import AIService, ChatService  # noqa: E402


def completion_payload(content: str) -> dict:
    """Chat completions response body carrying a single choice"""
    return {
        "id": "chatcmpl-test",
        "object": "chat.completion",
        "model": "gpt-4",
        "choices": [
            {
                "index": 0,
                "message": {"role": "assistant", "content": content},
                "finish_reason": "stop"
            }
        ],
        "usage": {"prompt_tokens": 10, "completion_tokens": 20, "total_tokens": 30}
    }


class UpstreamStub:
    """Stands in for the completion API behind an httpx.MockTransport"""

    def __init__(self):
        self.requests = []
        self.content = "Hello! How can I help you today?"
        self.status_code = 200
        self.raw_body = None
        self.error = None

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self.error is not None:
            raise self.error
        if self.raw_body is not None:
            return httpx.Response(self.status_code, content=self.raw_body)
        return httpx.Response(self.status_code, json=completion_payload(self.content))

    @property
    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self.handler)

    def last_payload(self) -> dict:
        return json.loads(self.requests[-1].content)


@pytest.fixture
def test_settings():
    """Create test settings with environment variables for testing."""
    test_env = {
        "OPENAI_API_KEY": "test-openai-key",
        "OPENAI_BASE_URL": "https://api.openai.test/v1",
        "ALLOWED_ORIGINS": "",
        "PORT": "5000",
        "DEBUG_LOGGING": "false"
    }

    with patch.dict(os.environ, test_env):
        yield Settings()


@pytest.fixture
def upstream():
    """Completion API stub returning a plain reply by default."""
    return UpstreamStub()


@pytest.fixture
def ai_service(test_settings, upstream):
    """AIService wired to the upstream stub."""
    return AIService(test_settings, transport=upstream.transport)


@pytest.fixture
def chat_service(test_settings, ai_service):
    return ChatService(test_settings, ai_service=ai_service)


@pytest.fixture
def app(test_settings, chat_service):
    """A fresh application per test so rate limit counters start at zero."""
    return create_app(test_settings, chat_service=chat_service)


@pytest.fixture
def client(app):
    with TestClient(app) as test_client:
        yield test_client
