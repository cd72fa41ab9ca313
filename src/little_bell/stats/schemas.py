"""Pydantic schemas for tenant statistics."""

from pydantic import BaseModel, Field

from little_bell.events.schemas import EventResponse
from little_bell.tenants.schemas import TenantResponse


class EventStats(BaseModel):
    """Read model computed from the event log on every request; never persisted."""

    total_opens: int = 0
    total_clicks: int = 0
    unique_opens: int = 0
    unique_clicks: int = 0
    recent_events: list[EventResponse] = Field(default_factory=list)


class TenantStatsResponse(BaseModel):
    tenant: TenantResponse
    stats: EventStats
