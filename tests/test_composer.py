# tests/test_composer.py
"""
Prompt composer tests
Run: pytest tests/test_composer.py -v
"""
from rental_chat.ai.composer import compose, detect_preferences, filter_unshown
from rental_chat.ai.prompts import DEFAULT_SYSTEM_PROMPT, NO_CANDIDATES_LEFT
from rental_chat.ai.tools import SAVE_ALERT_TOOL_NAME
from rental_chat.models import ModelSettings, PriorTurn, Property
from tests.fakes import make_listing


def _settings(**overrides):
    data = dict(
        api_credential="sk-test",
        model_id="gpt-4o-mini",
        temperature=0.5,
        max_tokens=600,
        system_instructions=DEFAULT_SYSTEM_PROMPT,
    )
    data.update(overrides)
    return ModelSettings(**data)


def _props(*ids):
    return [Property(**make_listing(id)) for id in ids]


def test_filter_unshown_keeps_order():
    assert [p.id for p in filter_unshown(_props("A", "B", "C", "D"), {"B", "D"})] == ["A", "C"]


def test_candidates_numbered_without_gaps():
    request = compose(_settings(), _props("A", "B", "C"), {"B"}, [], "any apartments?")
    system = request.messages[0]["content"]

    assert [p.id for p in request.unshown_candidates] == ["A", "C"]
    assert "[Property 1] ID: A" in system
    assert "[Property 2] ID: C" in system
    assert "ID: B" not in system
    assert "Previously Shown Properties: B" in system
    assert "SELECTED_PROPERTY: [X]" in system


def test_all_shown_block():
    request = compose(_settings(), _props("A"), {"A"}, [], "show me more")
    assert request.unshown_candidates == []
    assert NO_CANDIDATES_LEFT in request.messages[0]["content"]
    assert "property alert" in NO_CANDIDATES_LEFT


def test_non_property_turn_has_no_selection_block():
    request = compose(_settings(), [], set(), [], "hello")
    system = request.messages[0]["content"]
    assert "SELECTED_PROPERTY" not in system
    assert system.startswith(DEFAULT_SYSTEM_PROMPT)


def test_messages_order_and_payload():
    history = [
        PriorTurn(role="user", content="I have a tight budget"),
        PriorTurn(role="assistant", content="Take a look!", properties=[{"id": "A"}]),
    ]
    request = compose(_settings(), _props("A", "B"), {"A"}, history, "anything near the beach?")

    roles = [m["role"] for m in request.messages]
    assert roles == ["system", "user", "assistant", "user"]
    assert request.messages[-1]["content"] == "anything near the beach?"
    assert "properties" not in request.messages[2]

    payload = request.to_payload()
    assert payload["model"] == "gpt-4o-mini"
    assert payload["temperature"] == 0.5
    assert payload["max_tokens"] == 600
    assert payload["tool_choice"] == "auto"
    assert payload["tools"][0]["function"]["name"] == SAVE_ALERT_TOOL_NAME
    assert payload["tools"][0]["function"]["parameters"]["required"] == ["name", "email", "conversationSummary"]
    assert "unshown_candidates" not in payload
    assert "Budget-conscious" in request.messages[0]["content"]


def test_without_tools_appends_messages():
    request = compose(_settings(), [], set(), [], "notify me")
    follow_up = request.without_tools([{"role": "tool", "tool_call_id": "c1", "content": "{}"}])

    payload = follow_up.to_payload()
    assert "tools" not in payload
    assert "tool_choice" not in payload
    assert payload["messages"][-1]["role"] == "tool"
    assert len(request.messages) == 2


def test_detect_preferences():
    history = [
        PriorTurn(role="user", content="Something large near a park, I can't afford much"),
        PriorTurn(role="assistant", content="budget noted"),
    ]
    assert detect_preferences(history) == [
        "Budget-conscious", "Wants spacious property", "Location-focused"
    ]
    assert detect_preferences([]) == []
