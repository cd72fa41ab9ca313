"""Aggregator: per-tenant engagement statistics from the event log."""

from sqlalchemy import case, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from little_bell.emails.models import EmailModel
from little_bell.events.models import EVENT_CLICK, EVENT_OPEN, EventModel
from little_bell.events.schemas import EventResponse
from little_bell.stats.schemas import EventStats

RECENT_EVENTS_LIMIT = 50


class StatsService:
    """Computes ``EventStats`` on demand. Nothing is cached."""

    def __init__(self, recent_limit: int = RECENT_EVENTS_LIMIT):
        self.recent_limit = max(0, min(recent_limit, RECENT_EVENTS_LIMIT))

    async def get_tenant_stats(
        self, session: AsyncSession, tenant_id: str,
    ) -> EventStats:
        """Counts plus the recent feed across all of the tenant's emails.

        A tenant with no emails or events yields zeros and an empty feed.
        """
        is_open = EventModel.event_type == EVENT_OPEN
        is_click = EventModel.event_type == EVENT_CLICK

        counts = await session.execute(
            select(
                func.count(case((is_open, 1))).label("total_opens"),
                func.count(case((is_click, 1))).label("total_clicks"),
                func.count(case((is_open, EventModel.email_id)).distinct()).label("unique_opens"),
                func.count(case((is_click, EventModel.email_id)).distinct()).label("unique_clicks"),
            )
            .select_from(EventModel)
            .join(EmailModel, EventModel.email_id == EmailModel.id)
            .where(EmailModel.tenant_id == tenant_id)
        )
        row = counts.one()

        recent = await session.execute(
            select(EventModel)
            .join(EmailModel, EventModel.email_id == EmailModel.id)
            .where(EmailModel.tenant_id == tenant_id)
            .order_by(EventModel.timestamp.desc(), EventModel.id.desc())
            .limit(self.recent_limit)
        )

        return EventStats(
            total_opens=row.total_opens or 0,
            total_clicks=row.total_clicks or 0,
            unique_opens=row.unique_opens or 0,
            unique_clicks=row.unique_clicks or 0,
            recent_events=[
                EventResponse.model_validate(event)
                for event in recent.scalars().all()
            ],
        )
