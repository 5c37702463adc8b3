# rental_chat/models/__init__.py
"""
Pydantic models for the rental chat assistant

Modules:
- Property : available listings offered in chat
- Chat : inbound request, prior turns, outbound reply
- Alert : property alert subscriptions
- ModelSettings : generative backend configuration
"""

from .property import (
    PLACEHOLDER_IMAGE,
    Property,
    PropertyRef
)

from .chat import (
    MessageRole,
    PriorTurn,
    ChatRequest,
    ChatReply,
    shown_property_ids
)

from .alert import AlertRequest

from .ai_settings import ModelSettings

__all__ = [
    # Property
    "PLACEHOLDER_IMAGE",
    "Property",
    "PropertyRef",
    
    # Chat
    "MessageRole",
    "PriorTurn",
    "ChatRequest",
    "ChatReply",
    "shown_property_ids",
    
    # Alert
    "AlertRequest",
    
    # Settings
    "ModelSettings",
]
