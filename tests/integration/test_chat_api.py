"""
Integration tests for the relay API.
Validates: request validation, reply relay, lead flagging, generic upstream
errors, per-IP rate limiting, CORS and the widget page.
"""

import httpx
import pytest
from fastapi.testclient import TestClient

from leadchat.exceptions import GENERIC_ERROR_MESSAGE
from leadchat.main import create_app
from leadchat.services import AIService, ChatService

pytestmark = pytest.mark.integration


# ── Validation ───────────────────────────────────────────────

class TestChatValidation:

    @pytest.mark.parametrize("body", [{}, {"message": ""}, {"message": None}, {"message": 42}, ["hello"]])
    def test_missing_message_is_400(self, client, upstream, body):
        resp = client.post("/api/chat", json=body)

        assert resp.status_code == 400
        assert resp.json() == {"error": "Message is required"}
        assert upstream.requests == []

    def test_invalid_json_is_400(self, client, upstream):
        resp = client.post("/api/chat", content=b"{not json", headers={"Content-Type": "application/json"})

        assert resp.status_code == 400
        assert resp.json() == {"error": "Invalid JSON"}
        assert upstream.requests == []


# ── Relay ────────────────────────────────────────────────────

class TestChatRelay:

    def test_reply_is_trimmed_upstream_text(self, client, upstream):
        upstream.content = "  We are open Monday to Friday.\n"

        resp = client.post("/api/chat", json={"message": "When are you open?"})

        assert resp.status_code == 200
        assert resp.json() == {"reply": "We are open Monday to Friday.", "qualifyLead": False}
        assert upstream.last_payload()["messages"] == [{"role": "user", "content": "When are you open?"}]
        assert upstream.last_payload()["model"] == "gpt-4"

    @pytest.mark.parametrize("content", [
        "I'll connect you with a Sales Representative.",
        "a sales representative will follow up",
        "SALES REPRESENTATIVE",
    ])
    def test_lead_phrase_sets_qualify_lead(self, client, upstream, content):
        upstream.content = content

        resp = client.post("/api/chat", json={"message": "I'd like a quote"})

        assert resp.status_code == 200
        assert resp.json()["qualifyLead"] is True

    def test_request_id_header(self, client):
        resp = client.post("/api/chat", json={"message": "Hello"})

        assert len(resp.headers["X-Request-ID"]) == 8


# ── Upstream failures ────────────────────────────────────────

class TestUpstreamFailure:

    @pytest.mark.parametrize("configure", [
        lambda stub: setattr(stub, "error", httpx.ConnectError("secret-host.internal refused")),
        lambda stub: setattr(stub, "status_code", 401),
        lambda stub: setattr(stub, "raw_body", b'{"choices": []}'),
    ])
    def test_generic_500(self, client, upstream, configure):
        configure(upstream)

        resp = client.post("/api/chat", json={"message": "Hello"})

        assert resp.status_code == 500
        assert resp.json() == {"error": GENERIC_ERROR_MESSAGE}
        assert "Traceback" not in resp.text
        assert "secret-host" not in resp.text


# ── Rate limiting ────────────────────────────────────────────

class TestRateLimit:

    def test_101st_request_is_rate_limited(self, client):
        for i in range(100):
            resp = client.post("/api/chat", json={"message": f"Message {i}"})
            assert resp.status_code == 200

        resp = client.post("/api/chat", json={"message": "One too many"})

        assert resp.status_code == 429
        assert resp.json() == {"error": "Too many requests, please try again later."}
        assert int(resp.headers["Retry-After"]) > 0
        assert resp.headers["X-RateLimit-Remaining"] == "0"

    def test_rejected_requests_count_toward_limit(self, client):
        for _ in range(100):
            client.post("/api/chat", json={})

        assert client.post("/api/chat", json={"message": "Hello"}).status_code == 429

    def test_limit_headers(self, client):
        resp = client.post("/api/chat", json={"message": "Hello"})

        assert resp.headers["X-RateLimit-Limit"] == "100"
        assert resp.headers["X-RateLimit-Remaining"] == "99"

    def test_non_api_routes_not_limited(self, client):
        for _ in range(101):
            resp = client.get("/health")

        assert resp.status_code == 200
        assert "X-RateLimit-Limit" not in resp.headers


# ── CORS ─────────────────────────────────────────────────────

class TestCORS:

    def test_all_origins_by_default(self, client):
        resp = client.post("/api/chat", json={"message": "Hello"}, headers={"Origin": "https://anywhere.example.com"})

        assert resp.headers["access-control-allow-origin"] == "*"

    def test_allow_list(self, test_settings, upstream):
        settings = test_settings.model_copy(update={"allowed_origins": ["https://shop.example.com"]})
        service = ChatService(settings, ai_service=AIService(settings, transport=upstream.transport))
        app = create_app(settings, chat_service=service)

        with TestClient(app) as client:
            allowed = client.post("/api/chat", json={"message": "Hi"}, headers={"Origin": "https://shop.example.com"})
            blocked = client.post("/api/chat", json={"message": "Hi"}, headers={"Origin": "https://evil.example.com"})

        assert allowed.headers["access-control-allow-origin"] == "https://shop.example.com"
        assert "access-control-allow-origin" not in blocked.headers

    def test_preflight(self, client):
        resp = client.options(
            "/api/chat",
            headers={
                "Origin": "https://shop.example.com",
                "Access-Control-Request-Method": "POST",
                "Access-Control-Request-Headers": "content-type"
            }
        )

        assert resp.status_code == 200


# ── Pages ────────────────────────────────────────────────────

class TestPages:

    def test_health(self, client):
        resp = client.get("/health")

        assert resp.json() == {"status": "healthy", "service": "leadchat-api"}

    def test_widget_page(self, client):
        resp = client.get("/")

        assert resp.status_code == 200
        assert "Support Chat" in resp.text
        assert 'data-endpoint="/api/chat"' in resp.text
        assert "chatbot.js" in resp.text

    def test_widget_script_served(self, client):
        resp = client.get("/static/chatbot.js")

        assert resp.status_code == 200
        assert "sendMessage" in resp.text

    def test_unknown_route_uses_error_body(self, client):
        resp = client.get("/does-not-exist")

        assert resp.status_code == 404
        assert resp.json() == {"error": "Not Found"}
