# rental_chat/models/ai_settings.py

from pydantic import BaseModel, Field


class ModelSettings(BaseModel):
    """Generative backend configuration for one request (never persisted)"""
    api_credential: str = ""
    model_id: str
    temperature: float = Field(..., ge=0, le=2)
    max_tokens: int = Field(..., gt=0)
    system_instructions: str

    def __repr__(self) -> str:
        # the credential must not end up in logs
        return (
            f"ModelSettings(model_id={self.model_id!r}, temperature={self.temperature}, "
            f"max_tokens={self.max_tokens}, has_credential={bool(self.api_credential)})"
        )

    __str__ = __repr__
