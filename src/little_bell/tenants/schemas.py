"""Pydantic schemas for tenants."""

from datetime import datetime

from pydantic import BaseModel, field_validator

from little_bell.common.models import as_utc


class TenantResponse(BaseModel):
    id: str
    name: str
    created_at: datetime

    model_config = {"from_attributes": True}

    @field_validator("created_at")
    @classmethod
    def _created_at_utc(cls, value: datetime) -> datetime:
        return as_utc(value)
