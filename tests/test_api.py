# tests/test_api.py
"""
HTTP-level tests of the chat endpoint
Run: pytest tests/test_api.py -v
"""
import pytest
from fastapi.testclient import TestClient

from main import app
from rental_chat.api.v1.endpoints import chat as chat_endpoint
from rental_chat.ai.prompts import FAQ_REPLIES
from rental_chat.core.exceptions import GenerationRateLimitError, InputParseError
from tests.fakes import alert_tool_call, make_listing

CHAT_URL = "/api/v1/ai/chat"


@pytest.fixture
def client():
    return TestClient(app)


@pytest.fixture
def use_agent(monkeypatch, make_agent):
    def _use(**kwargs):
        agent, db, backend = make_agent(**kwargs)
        monkeypatch.setattr(chat_endpoint, "get_agent", lambda: agent)
        return db, backend
    return _use


def test_root_and_health(client):
    assert client.get("/").json()["status"] == "running"
    assert client.get("/health").json() == {"status": "healthy"}


def test_chat_success(client, use_agent):
    use_agent(
        listings=[make_listing("A"), make_listing("B")],
        results=["This one has great light! SELECTED_PROPERTY: [2]"],
    )
    response = client.post(CHAT_URL, json={
        "message": "any apartments?",
        "context": [{"role": "user", "content": "hi"}, {"role": "assistant", "content": "Hello!"}],
    })

    assert response.status_code == 200
    body = response.json()
    assert body["reply"] == "This one has great light!"
    assert [p["id"] for p in body["properties"]] == ["B"]
    assert body["properties"][0]["images"]
    assert "alertSaved" not in body
    assert "error" not in body


def test_chat_legacy_context_keys(client, use_agent):
    use_agent(listings=[make_listing("A"), make_listing("B")], results=["Here's another!"])
    response = client.post(CHAT_URL, json={
        "message": "show me more",
        "context": [{"role": "assistant", "content": "Look", "properties": [{"id": "A", "title": "Listing A"}]}],
    })
    assert [p["id"] for p in response.json()["properties"]] == ["B"]


def test_chat_faq(client, use_agent):
    db, backend = use_agent()
    response = client.post(CHAT_URL, json={"message": "how many views did my listing get?"})
    assert response.status_code == 200
    assert response.json() == {"reply": FAQ_REPLIES["view_stats"], "properties": []}
    assert backend.requests == []


def test_chat_alert_saved_flag(client, use_agent):
    use_agent(results=[alert_tool_call(), "Done, we'll notify you!"])
    body = client.post(CHAT_URL, json={"message": "Dana here, dana@example.com, notify me"}).json()
    assert body["alertSaved"] is True
    assert body["properties"] == []


@pytest.mark.parametrize("payload", [
    b"not json",
    b"[1, 2, 3]",
    b'{"context": []}',
    b'{"message": "   "}',
    b'{"message": "hi", "context": [{"role": "system", "content": "x"}]}',
])
def test_chat_malformed_input(client, use_agent, payload):
    db, backend = use_agent()
    response = client.post(CHAT_URL, content=payload, headers={"Content-Type": "application/json"})
    assert response.status_code == 400
    body = response.json()
    assert body["error"] == InputParseError.code
    assert body["reply"] == InputParseError.user_message
    assert body["properties"] == []
    assert backend.requests == []


def test_chat_missing_credential(client, use_agent, monkeypatch):
    monkeypatch.setattr("rental_chat.crud.ai_settings.settings.OPENAI_API_KEY", "")
    use_agent(ai_settings=[])
    response = client.post(CHAT_URL, json={"message": "any apartments?"})
    assert response.status_code == 500
    body = response.json()
    assert body["error"] == "configuration_error"
    assert "administrator" in body["reply"]


def test_chat_rate_limited(client, use_agent):
    use_agent(listings=[make_listing("A")], results=[GenerationRateLimitError("429")])
    response = client.post(CHAT_URL, json={"message": "any apartments?"})
    assert response.status_code == 500
    body = response.json()
    assert body["error"] == "generation_rate_limited"
    assert "try again shortly" in body["reply"]


def test_chat_unexpected_error(client, monkeypatch):
    class Broken:
        def handle_turn(self, message, history):
            raise RuntimeError("kaboom")

    monkeypatch.setattr(chat_endpoint, "get_agent", lambda: Broken())
    response = client.post(CHAT_URL, json={"message": "hello"})
    assert response.status_code == 500
    assert response.json()["error"] == "chat_error"
    assert "kaboom" not in response.json()["reply"]
