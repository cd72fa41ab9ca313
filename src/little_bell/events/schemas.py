"""Pydantic schemas for engagement events."""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, field_validator

from little_bell.common.models import as_utc


class EventResponse(BaseModel):
    id: int
    email_id: int
    event_type: str
    timestamp: datetime
    user_agent: Optional[str] = None
    ip_address: Optional[str] = None

    model_config = {"from_attributes": True}

    @field_validator("timestamp")
    @classmethod
    def _timestamp_utc(cls, value: datetime) -> datetime:
        return as_utc(value)
