"""
Client for the generative-text backend (OpenAI-compatible chat completions).

One HTTP call per `generate()`; no retries. The backend answer is decoded
once, here, into either a TextReply or a ToolCallRequest.
"""
from typing import Any, Dict, Literal, Optional, Union
from pydantic import BaseModel
import logging
import requests

from rental_chat.core.config import settings as app_settings
from rental_chat.core.exceptions import (
    GenerationAuthError,
    GenerationError,
    GenerationRateLimitError,
    GenerationServerError,
    GenerationTimeoutError,
)
from rental_chat.models import ModelSettings

logger = logging.getLogger(__name__)


class TextReply(BaseModel):
    kind: Literal["text"] = "text"
    text: str


class ToolCallRequest(BaseModel):
    kind: Literal["tool_call"] = "tool_call"
    id: str
    name: str
    arguments_json: str

    def to_assistant_message(self) -> Dict[str, Any]:
        """Assistant message echoing this call, for the follow-up request"""
        return {
            "role": "assistant",
            "content": None,
            "tool_calls": [{
                "id": self.id,
                "type": "function",
                "function": {"name": self.name, "arguments": self.arguments_json},
            }],
        }


GenerationResult = Union[TextReply, ToolCallRequest]


def decode_completion(data: Dict[str, Any]) -> GenerationResult:
    """
    Turn a chat-completions body into a GenerationResult.

    Raises:
        GenerationError: If the body has no usable choice
    """
    try:
        message = data["choices"][0]["message"]
    except (KeyError, IndexError, TypeError) as e:
        raise GenerationError(f"Unexpected completion body: {e}") from e

    tool_calls = message.get("tool_calls") or []
    if tool_calls:
        call = tool_calls[0]
        function = call.get("function") or {}
        if len(tool_calls) > 1:
            logger.warning(f"⚠️ Backend requested {len(tool_calls)} tool calls, only the first is handled")
        return ToolCallRequest(
            id=call.get("id") or "call_0",
            name=function.get("name") or "",
            arguments_json=function.get("arguments") or "",
        )

    return TextReply(text=message.get("content") or "")


class GenerationClient:
    """
    Sends composed requests to the generative backend.
    """

    def __init__(
        self,
        model_settings: ModelSettings,
        api_base: Optional[str] = None,
        timeout: Optional[float] = None
    ):
        """
        Args:
            model_settings: Credential and model parameters for this request
            api_base: Base URL of the chat-completions API
            timeout: Deadline in seconds for each call
        """
        self.model_settings = model_settings
        self.api_url = f"{(api_base or app_settings.OPENAI_API_BASE).rstrip('/')}/chat/completions"
        self.timeout = timeout or app_settings.LLM_TIMEOUT_SECONDS

        self.headers = {
            "Authorization": f"Bearer {model_settings.api_credential}",
            "Content-Type": "application/json"
        }

    def generate(self, request) -> GenerationResult:
        """
        Send one StructuredRequest.

        Returns:
            TextReply or ToolCallRequest

        Raises:
            GenerationAuthError: Credential rejected (401/403)
            GenerationRateLimitError: 429
            GenerationServerError: 5xx or connection failure
            GenerationTimeoutError: No answer within the deadline
            GenerationError: Any other unusable answer
        """
        payload = request.to_payload()

        logger.info(
            f"📡 Calling model {payload['model']} (temperature={payload['temperature']}, "
            f"max_tokens={payload['max_tokens']}, tools={'tools' in payload})"
        )

        try:
            response = requests.post(
                self.api_url,
                headers=self.headers,
                json=payload,
                timeout=self.timeout
            )
        except requests.Timeout as e:
            logger.error(f"❌ Backend deadline exceeded after {self.timeout}s")
            raise GenerationTimeoutError(str(e)) from e
        except requests.RequestException as e:
            logger.error(f"❌ Backend unreachable: {e}")
            raise GenerationServerError(str(e)) from e

        if response.status_code != 200:
            detail = f"OpenAI API error: {response.status_code}"
            logger.error(f"❌ {detail} - {response.text[:500]}")

            if response.status_code in (401, 403):
                raise GenerationAuthError(detail)
            if response.status_code == 429:
                raise GenerationRateLimitError(detail)
            if response.status_code >= 500:
                raise GenerationServerError(detail)
            raise GenerationError(detail)

        try:
            data = response.json()
        except ValueError as e:
            raise GenerationError(f"Invalid JSON from backend: {e}") from e

        result = decode_completion(data)
        if isinstance(result, ToolCallRequest):
            logger.info(f"🛠️ Backend requested tool {result.name}")
        else:
            logger.info(f"✅ Reply generated ({len(result.text)} chars)")
        return result
