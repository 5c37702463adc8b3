# rental_chat/models/chat.py
"""
Pydantic models for one chat turn: inbound request, prior turns, outbound reply.
"""

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator
from typing import Optional, List, Set, Any, Dict
from enum import Enum

from .property import Property, PropertyRef


class MessageRole(str, Enum):
    """Role of a message author"""
    system = "system"
    user = "user"
    assistant = "assistant"
    tool = "tool"


class PriorTurn(BaseModel):
    """
    One earlier message of the conversation, supplied by the client.

    Clients have historically sent the shown properties under several keys
    (`selectedProperties`, `properties`, `listings`, or a single `property`);
    they are folded into `selected_properties` here.
    """
    role: MessageRole
    content: str = ""
    selected_properties: List[PropertyRef] = Field(default_factory=list)

    model_config = ConfigDict(populate_by_name=True)

    @model_validator(mode="before")
    @classmethod
    def normalize_property_keys(cls, data: Any) -> Any:
        if not isinstance(data, dict):
            return data
        data = dict(data)
        shown = None
        for key in ("selectedProperties", "selected_properties", "properties", "listings"):
            value = data.pop(key, None)
            if shown is None and value:
                shown = value
        single = data.pop("property", None)
        if shown is None and single:
            shown = [single]
        data["selected_properties"] = shown or []
        return data

    @field_validator("role", mode="before")
    @classmethod
    def only_conversation_roles(cls, v):
        if v not in ("user", "assistant", MessageRole.user, MessageRole.assistant):
            raise ValueError("role must be 'user' or 'assistant'")
        return v

    @field_validator("content", mode="before")
    @classmethod
    def none_to_empty(cls, v):
        return v or ""

    def to_message(self) -> Dict[str, str]:
        """Backend chat message (role + content only)"""
        return {"role": self.role.value, "content": self.content}


class ChatRequest(BaseModel):
    """Inbound body of POST /ai/chat"""
    message: str = Field(..., min_length=1, max_length=4000)
    context: List[PriorTurn] = Field(default_factory=list)

    @field_validator("message")
    @classmethod
    def not_blank(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("message must not be blank")
        return v.strip()

    @field_validator("context", mode="before")
    @classmethod
    def none_to_list(cls, v):
        return v or []


class ChatReply(BaseModel):
    """Outbound reply: text plus at most one property card"""
    reply: str
    properties: List[Property] = Field(default_factory=list, max_length=1)
    alert_saved: Optional[bool] = Field(None, serialization_alias="alertSaved")
    error: Optional[str] = None

    def to_response(self) -> Dict[str, Any]:
        body: Dict[str, Any] = {
            "reply": self.reply,
            "properties": [prop.to_card() for prop in self.properties],
        }
        if self.alert_saved is not None:
            body["alertSaved"] = self.alert_saved
        if self.error:
            body["error"] = self.error
        return body


def shown_property_ids(history: List[PriorTurn]) -> Set[str]:
    """Ids of every property already surfaced in this conversation"""
    return {
        prop.id
        for turn in history
        for prop in turn.selected_properties
    }
