# app/schemas/event.py
from typing import Optional

from pydantic import Field, field_validator

from app.schemas.pagination import INT_MAX, CamelModel

# ---------------------------
# Event Schemas
# ---------------------------


class EventBase(CamelModel):
    name: str = Field(min_length=1, max_length=200)
    location: str = Field(min_length=1, max_length=100)
    country: Optional[str] = Field(default=None, max_length=100)
    capacity: Optional[int] = Field(default=None, ge=1, le=INT_MAX)

    @field_validator("name", "location")
    @classmethod
    def _not_blank(cls, v: str, info) -> str:
        if not v.strip():
            raise ValueError(f"{info.field_name.capitalize()} is required.")
        return v


class EventCreate(EventBase):
    pass


class Event(EventBase):
    """Full event, used both as response and as the PUT body (full replace)."""

    event_id: int = Field(ge=1, le=INT_MAX)
