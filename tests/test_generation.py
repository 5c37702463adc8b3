# tests/test_generation.py
"""
Generation client tests (HTTP boundary monkeypatched)
Run: pytest tests/test_generation.py -v
"""
import pytest
import requests

from rental_chat.ai.composer import compose
from rental_chat.ai.generation import (
    GenerationClient,
    TextReply,
    ToolCallRequest,
    decode_completion,
)
from rental_chat.core.exceptions import (
    GenerationAuthError,
    GenerationError,
    GenerationRateLimitError,
    GenerationServerError,
    GenerationTimeoutError,
)
from rental_chat.models import ModelSettings


class FakeResponse:
    def __init__(self, status_code=200, body=None, text=""):
        self.status_code = status_code
        self._body = body
        self.text = text

    def json(self):
        if self._body is None:
            raise ValueError("no json")
        return self._body


SETTINGS = ModelSettings(
    api_credential="sk-test",
    model_id="gpt-4o-mini",
    temperature=0.2,
    max_tokens=300,
    system_instructions="Be nice",
)


@pytest.fixture
def request_obj():
    return compose(SETTINGS, [], set(), [], "hello")


def _patch_post(monkeypatch, outcome):
    calls = []

    def fake_post(url, headers=None, json=None, timeout=None):
        calls.append({"url": url, "headers": headers, "json": json, "timeout": timeout})
        if isinstance(outcome, Exception):
            raise outcome
        return outcome

    monkeypatch.setattr(requests, "post", fake_post)
    return calls


def test_text_reply(monkeypatch, request_obj):
    body = {"choices": [{"message": {"role": "assistant", "content": "Hi there!"}}]}
    calls = _patch_post(monkeypatch, FakeResponse(200, body))

    client = GenerationClient(SETTINGS, api_base="https://llm.example.com/v1/", timeout=5)
    result = client.generate(request_obj)

    assert result == TextReply(text="Hi there!")
    assert len(calls) == 1
    assert calls[0]["url"] == "https://llm.example.com/v1/chat/completions"
    assert calls[0]["headers"]["Authorization"] == "Bearer sk-test"
    assert calls[0]["timeout"] == 5
    assert calls[0]["json"]["model"] == "gpt-4o-mini"
    assert calls[0]["json"]["tools"][0]["function"]["name"] == "save_property_alert"


def test_tool_call_reply(monkeypatch, request_obj):
    body = {"choices": [{"message": {
        "role": "assistant",
        "content": None,
        "tool_calls": [{
            "id": "call_9",
            "type": "function",
            "function": {"name": "save_property_alert", "arguments": "{\"name\": \"Dana\"}"},
        }],
    }}]}
    _patch_post(monkeypatch, FakeResponse(200, body))

    result = GenerationClient(SETTINGS).generate(request_obj)

    assert isinstance(result, ToolCallRequest)
    assert result.id == "call_9"
    assert result.arguments_json == "{\"name\": \"Dana\"}"
    assert result.to_assistant_message()["tool_calls"][0]["function"]["name"] == "save_property_alert"


@pytest.mark.parametrize("status,error", [
    (401, GenerationAuthError),
    (403, GenerationAuthError),
    (429, GenerationRateLimitError),
    (500, GenerationServerError),
    (503, GenerationServerError),
    (400, GenerationError),
])
def test_status_classification(monkeypatch, request_obj, status, error):
    calls = _patch_post(monkeypatch, FakeResponse(status, text="nope"))
    with pytest.raises(error):
        GenerationClient(SETTINGS).generate(request_obj)
    assert len(calls) == 1  # no retry


def test_timeout_is_deadline_error(monkeypatch, request_obj):
    _patch_post(monkeypatch, requests.Timeout("slow"))
    with pytest.raises(GenerationTimeoutError):
        GenerationClient(SETTINGS).generate(request_obj)


def test_connection_error_is_server_error(monkeypatch, request_obj):
    _patch_post(monkeypatch, requests.ConnectionError("down"))
    with pytest.raises(GenerationServerError):
        GenerationClient(SETTINGS).generate(request_obj)


def test_invalid_json_body(monkeypatch, request_obj):
    _patch_post(monkeypatch, FakeResponse(200, None))
    with pytest.raises(GenerationError):
        GenerationClient(SETTINGS).generate(request_obj)


def test_decode_completion_edge_cases():
    assert decode_completion({"choices": [{"message": {"content": None}}]}) == TextReply(text="")
    with pytest.raises(GenerationError):
        decode_completion({"choices": []})
    with pytest.raises(GenerationError):
        decode_completion({})
