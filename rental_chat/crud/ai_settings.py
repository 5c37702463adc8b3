"""
Read access to the ai_settings table (model configuration).
"""
from typing import Any, Callable, Dict, Optional
from supabase import Client
import logging

from rental_chat.ai.prompts import DEFAULT_SYSTEM_PROMPT
from rental_chat.core.config import settings
from rental_chat.models import ModelSettings

logger = logging.getLogger(__name__)


def _numeric_field(row: Dict[str, Any], name: str, cast: Callable, default, valid: Callable[[Any], bool]):
    """Stored number for `name`, or the default when absent, unparsable or out of range"""
    value = row.get(name)
    if value is None:
        return default
    try:
        value = cast(value)
    except (TypeError, ValueError):
        logger.warning(f"⚠️ Invalid {name} {value!r} in AI settings, using {default}")
        return default
    if not valid(value):
        logger.warning(f"⚠️ {name} {value} out of range, using {default}")
        return default
    return value


class AISettingsCRUD:
    """
    Loads the generative backend configuration.

    The store is optional: a missing row, a missing field or an unreachable
    database all fall back to the defaults, field by field.
    """

    def __init__(self, db: Client):
        self.db = db
        self.table = "ai_settings"

    def _fetch_row(self) -> Optional[Dict[str, Any]]:
        try:
            result = self.db.table(self.table)\
                .select("openai_api_key, model, temperature, max_tokens, system_prompt")\
                .limit(1)\
                .execute()

            if result.data:
                return result.data[0]
            logger.info("No AI settings found in database, using defaults")
            return None

        except Exception as e:
            logger.warning(f"⚠️ Could not fetch AI settings, using defaults: {e}")
            return None

    def load(self) -> ModelSettings:
        """
        Load the model settings for the current request.

        Returns:
            ModelSettings with defaults substituted for absent fields
        """
        row = self._fetch_row() or {}

        api_credential = row.get("openai_api_key") or settings.OPENAI_API_KEY
        model_id = row.get("model") or settings.LLM_MODEL
        system_instructions = row.get("system_prompt") or DEFAULT_SYSTEM_PROMPT

        temperature = _numeric_field(
            row, "temperature", float, settings.LLM_TEMPERATURE, lambda v: 0 <= v <= 2
        )
        max_tokens = _numeric_field(
            row, "max_tokens", int, settings.LLM_MAX_TOKENS, lambda v: v > 0
        )

        model_settings = ModelSettings(
            api_credential=api_credential or "",
            model_id=model_id,
            temperature=temperature,
            max_tokens=max_tokens,
            system_instructions=system_instructions,
        )

        logger.info(
            f"AI settings loaded: model={model_settings.model_id}, "
            f"temperature={model_settings.temperature}, max_tokens={model_settings.max_tokens}, "
            f"custom_prompt={bool(row.get('system_prompt'))}"
        )
        return model_settings


def get_ai_settings_crud(db: Client) -> AISettingsCRUD:
    return AISettingsCRUD(db)
