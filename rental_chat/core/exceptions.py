"""
Error taxonomy for a chat turn.

Each error carries a machine-readable code, a user-safe reply and the HTTP
status the endpoint should answer with.
"""


class ChatError(Exception):
    """Base error for a chat turn."""

    code = "chat_error"
    status_code = 500
    user_message = (
        "I apologize, but I'm experiencing some technical difficulties. "
        "Please try again in a moment."
    )

    def __init__(self, detail: str = "", user_message: str = None):
        super().__init__(detail or self.code)
        self.detail = detail or self.code
        if user_message is not None:
            self.user_message = user_message


# ==========================================
# FATAL BEFORE ANY REPLY EXISTS
# ==========================================

class InputParseError(ChatError):
    """Inbound body is not valid JSON or does not match the request schema."""

    code = "invalid_request"
    status_code = 400
    user_message = "Sorry, I couldn't read that message. Please try sending it again."


class ConfigurationError(ChatError):
    """No usable backend credential after defaults were applied."""

    code = "configuration_error"
    user_message = (
        "I'm sorry, but the AI service is not properly configured. Please ask an "
        "administrator to configure the OpenAI API key in the AI Settings."
    )


class CandidateLoadError(ChatError):
    """Listing store failed during a property query."""

    code = "candidate_load_error"
    user_message = (
        "I'm having trouble loading our available properties right now. "
        "Please try again in a moment."
    )


class GenerationError(ChatError):
    """Generative backend returned an unusable answer."""

    code = "generation_error"
    user_message = "I'm experiencing technical difficulties. Please try again in a moment."


class GenerationAuthError(GenerationError):
    code = "generation_auth_error"
    user_message = (
        "The OpenAI API key configured in the AI Settings is invalid. Please ask an "
        "administrator to check the API key configuration."
    )


class GenerationRateLimitError(GenerationError):
    code = "generation_rate_limited"
    user_message = "I'm currently at capacity. Please wait a moment and try again shortly."


class GenerationServerError(GenerationError):
    code = "generation_unavailable"
    user_message = "The AI service is temporarily unavailable. Please try again shortly."


class GenerationTimeoutError(GenerationError):
    """Backend did not answer within the configured deadline."""

    code = "generation_deadline_exceeded"
    user_message = "The AI service is taking too long to respond. Please try again shortly."


# ==========================================
# TOOL PATH (never fatal to the turn)
# ==========================================

class ToolArgumentParseError(ChatError):
    """Function-call arguments from the backend are malformed."""

    code = "tool_arguments_invalid"


class AlertPersistenceError(ChatError):
    """Alert store rejected or failed the write."""

    code = "alert_persistence_error"
