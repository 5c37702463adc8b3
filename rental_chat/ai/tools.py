"""
Tools the assistant may call, and the executor for save_property_alert.
"""
from typing import Callable, Dict, List, Optional
from enum import Enum
from dataclasses import dataclass, field
from pydantic import ValidationError
import json
import logging

from rental_chat.core.exceptions import (
    AlertPersistenceError,
    GenerationError,
    ToolArgumentParseError,
)
from rental_chat.models import AlertRequest
from .generation import TextReply, ToolCallRequest
from .prompts import ALERT_FAILED_CONFIRMATION, ALERT_SAVED_CONFIRMATION

logger = logging.getLogger(__name__)

SAVE_ALERT_TOOL_NAME = "save_property_alert"

SAVE_ALERT_TOOL = {
    "type": "function",
    "function": {
        "name": SAVE_ALERT_TOOL_NAME,
        "description": (
            "Save a property alert so the user is notified when a matching rental "
            "becomes available. Use only when no available property matches and the "
            "user has provided their name and email."
        ),
        "parameters": {
            "type": "object",
            "properties": {
                "name": {"type": "string", "description": "User's full name"},
                "email": {"type": "string", "description": "User's email address"},
                "phone": {"type": "string", "description": "User's phone number"},
                "bedrooms": {"type": "integer", "description": "Desired number of bedrooms"},
                "bathrooms": {"type": "number", "description": "Desired number of bathrooms"},
                "minPrice": {"type": "integer", "description": "Minimum monthly rent in dollars"},
                "maxPrice": {"type": "integer", "description": "Maximum monthly rent in dollars"},
                "location": {"type": "string", "description": "Preferred city or neighborhood"},
                "amenities": {
                    "type": "array",
                    "items": {"type": "string"},
                    "description": "Required amenities (parking, pool, pets...)"
                },
                "conversationSummary": {
                    "type": "string",
                    "description": "One or two sentences summarizing what the user is looking for"
                },
            },
            "required": ["name", "email", "conversationSummary"],
        },
    },
}


class ToolState(str, Enum):
    idle = "idle"
    tool_requested = "tool_requested"
    tool_executed = "tool_executed"
    final_reply_requested = "final_reply_requested"
    done = "done"


@dataclass
class ToolOutcome:
    reply: str
    alert_saved: bool
    transitions: List[ToolState] = field(default_factory=list)


def parse_alert_arguments(tool_call: ToolCallRequest, raw_message: str) -> AlertRequest:
    """
    Build an AlertRequest from the backend's function-call arguments.

    Raises:
        ToolArgumentParseError: Unknown tool, invalid JSON or missing/invalid fields
    """
    if tool_call.name != SAVE_ALERT_TOOL_NAME:
        raise ToolArgumentParseError(f"Unknown tool: {tool_call.name!r}")

    try:
        arguments = json.loads(tool_call.arguments_json)
    except (TypeError, ValueError) as e:
        raise ToolArgumentParseError(f"Malformed tool arguments: {e}") from e

    if not isinstance(arguments, dict):
        raise ToolArgumentParseError("Tool arguments must be a JSON object")

    arguments["rawMessage"] = raw_message
    try:
        return AlertRequest.model_validate(arguments)
    except ValidationError as e:
        raise ToolArgumentParseError(f"Invalid alert arguments: {e.error_count()} error(s)") from e


class AlertToolExecutor:
    """
    Runs the save_property_alert path of a turn:

        Idle -> ToolRequested -> ToolExecuted -> FinalReplyRequested -> Done

    Only malformed arguments abort the path (ToolArgumentParseError, nothing
    persisted). A failed save or a failed follow-up call still yields a reply.
    """

    def __init__(self, save_alert: Callable[[AlertRequest], Dict[str, bool]], generation_client):
        """
        Args:
            save_alert: Alert persistence collaborator, returns {"success": bool}
            generation_client: Client used for the follow-up (tool-less) call
        """
        self.save_alert = save_alert
        self.generation_client = generation_client
        self.state = ToolState.idle
        self._transitions: List[ToolState] = []

    def _enter(self, state: ToolState):
        logger.debug(f"Tool path: {self.state.value} -> {state.value}")
        self.state = state
        self._transitions.append(state)

    def execute(self, request, tool_call: ToolCallRequest, raw_message: str) -> ToolOutcome:
        """
        Execute the tool call and obtain the confirmation reply.

        Args:
            request: StructuredRequest that produced the tool call
            tool_call: Decoded tool call
            raw_message: User message of this turn

        Returns:
            ToolOutcome with the confirmation text and the persistence flag

        Raises:
            ToolArgumentParseError: If the arguments cannot be parsed
        """
        self._enter(ToolState.tool_requested)
        alert = parse_alert_arguments(tool_call, raw_message)

        success = False
        try:
            success = bool(self.save_alert(alert).get("success"))
        except AlertPersistenceError as e:
            logger.error(f"❌ Alert persistence failed, continuing: {e.detail}")
        self._enter(ToolState.tool_executed)
        logger.info(f"Alert for {alert.email} saved={success}")

        self._enter(ToolState.final_reply_requested)
        follow_up = request.without_tools([
            tool_call.to_assistant_message(),
            {
                "role": "tool",
                "tool_call_id": tool_call.id,
                "content": json.dumps({"success": success}),
            },
        ])

        reply: Optional[str] = None
        try:
            result = self.generation_client.generate(follow_up)
            if isinstance(result, TextReply) and result.text.strip():
                reply = result.text
            else:
                logger.warning("⚠️ Follow-up call returned no text")
        except GenerationError as e:
            logger.error(f"❌ Follow-up call failed, using fixed confirmation: {e.detail}")

        if reply is None:
            reply = ALERT_SAVED_CONFIRMATION if success else ALERT_FAILED_CONFIRMATION

        self._enter(ToolState.done)
        return ToolOutcome(reply=reply, alert_saved=success, transitions=list(self._transitions))
