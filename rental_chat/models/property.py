# rental_chat/models/property.py

from pydantic import BaseModel, ConfigDict, Field, field_validator
from typing import Optional, List
from datetime import datetime

PLACEHOLDER_IMAGE = "/placeholder.svg"


class Property(BaseModel):
    """Available listing offered to the chat assistant (read-only)"""
    id: str
    title: str
    location: str = ""
    price: int = Field(..., ge=0)
    bedrooms: int = Field(0, ge=0)
    bathrooms: float = Field(0, ge=0)
    sqft: Optional[int] = Field(None, ge=0)
    amenities: List[str] = Field(default_factory=list)
    images: List[str] = Field(default_factory=list)
    description: str = ""
    featured: bool = False
    type: Optional[str] = None
    created_at: Optional[datetime] = None

    model_config = ConfigDict(from_attributes=True)

    @field_validator("id", mode="before")
    @classmethod
    def coerce_id(cls, v):
        return str(v)

    @field_validator("price", mode="before")
    @classmethod
    def round_price(cls, v):
        # numeric columns come back as floats or strings
        if isinstance(v, (float, str)):
            return int(round(float(v)))
        return v

    @field_validator("bedrooms", "bathrooms", "description", "location", mode="before")
    @classmethod
    def none_to_default(cls, v, info):
        if v is None:
            return "" if info.field_name in ("description", "location") else 0
        return v

    @field_validator("featured", mode="before")
    @classmethod
    def none_to_false(cls, v):
        return bool(v)

    @field_validator("amenities", mode="before")
    @classmethod
    def unique_amenities(cls, v):
        """Amenities behave as a set: drop empties and duplicates, keep order"""
        if not v:
            return []
        seen = []
        for amenity in v:
            if amenity and amenity not in seen:
                seen.append(amenity)
        return seen

    @field_validator("images", mode="before")
    @classmethod
    def ensure_image(cls, v):
        """A card always needs at least one image"""
        images = [img for img in (v or []) if img]
        return images or [PLACEHOLDER_IMAGE]

    def to_card(self) -> dict:
        """Outbound shape of a property card"""
        return self.model_dump(exclude={"type", "created_at"})


class PropertyRef(BaseModel):
    """
    Property as echoed back by the client inside a prior turn.
    Only the id matters; other card fields are kept as-is.
    """
    id: str

    model_config = ConfigDict(extra="allow")

    @field_validator("id", mode="before")
    @classmethod
    def coerce_id(cls, v):
        return str(v)
