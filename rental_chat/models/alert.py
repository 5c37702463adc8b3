# rental_chat/models/alert.py
"""
Property alert (notification subscription) requested through the
save_property_alert tool.
"""

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator
from typing import Optional, List, Dict, Any
import re

EMAIL_PATTERN = r'^[a-zA-Z0-9._%+-]+@[a-zA-Z0-9.-]+\.[a-zA-Z]{2,}$'


class AlertRequest(BaseModel):
    """Alert built from the tool arguments plus the raw user message"""
    name: str = Field(..., min_length=1, max_length=200)
    email: str = Field(..., max_length=255)
    phone: Optional[str] = Field(None, max_length=40)
    bedrooms: Optional[int] = Field(None, ge=0)
    bathrooms: Optional[float] = Field(None, ge=0)
    min_price: Optional[int] = Field(None, ge=0, alias="minPrice")
    max_price: Optional[int] = Field(None, ge=0, alias="maxPrice")
    location: Optional[str] = Field(None, max_length=255)
    amenities: List[str] = Field(default_factory=list)
    conversation_summary: str = Field(..., min_length=1, alias="conversationSummary")
    raw_message: str = Field("", alias="rawMessage")

    model_config = ConfigDict(populate_by_name=True)

    @field_validator('name', 'conversation_summary')
    @classmethod
    def strip_required(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("must not be blank")
        return v

    @field_validator('email')
    @classmethod
    def validate_email(cls, v: str) -> str:
        """Validate e-mail format"""
        v = v.strip()
        if not re.match(EMAIL_PATTERN, v):
            raise ValueError("Invalid e-mail format")
        return v.lower()

    @field_validator('amenities', mode='before')
    @classmethod
    def unique_amenities(cls, v):
        if not v:
            return []
        if isinstance(v, str):
            v = [part.strip() for part in v.split(",")]
        return list(dict.fromkeys(a for a in v if a))

    @model_validator(mode='after')
    def check_price_range(self):
        if self.min_price is not None and self.max_price is not None and self.min_price > self.max_price:
            raise ValueError("minPrice must not exceed maxPrice")
        return self

    def to_row(self) -> Dict[str, Any]:
        """Row for the property_alerts table"""
        row = self.model_dump(by_alias=False)
        row["status"] = "active"
        return row
