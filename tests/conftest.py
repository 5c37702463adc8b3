# tests/conftest.py
"""
Shared fixtures for the chat pipeline tests.
"""
import pytest

from rental_chat.ai.agent import RentalChatAgent
from tests.fakes import FakeSupabase, ScriptedGenerationClient


@pytest.fixture
def settings_row():
    return {
        "openai_api_key": "sk-test",
        "model": "gpt-4o-mini",
        "temperature": 0.7,
        "max_tokens": 800,
        "system_prompt": None,
    }


@pytest.fixture
def make_agent(settings_row):
    """Build an agent over a fake store and a scripted backend"""

    def _make(listings=(), results=(), failing=(), ai_settings=None):
        db = FakeSupabase(
            tables={
                "ai_settings": [settings_row] if ai_settings is None else ai_settings,
                "listings": list(listings),
            },
            failing=failing,
        )
        client = ScriptedGenerationClient(*results)
        agent = RentalChatAgent(db, generation_client_factory=lambda model_settings: client)
        return agent, db, client

    return _make
