"""Event recorder: append immutable engagement events."""

import logging

from sqlalchemy.ext.asyncio import AsyncSession

from little_bell.common.models import utcnow
from little_bell.events.models import EventModel

logger = logging.getLogger(__name__)


class EventService:
    """Append-only engagement log. There is no update or delete path."""

    async def log_event(
        self,
        session: AsyncSession,
        email_id: int,
        event_type: str,
        user_agent: str | None = None,
        ip_address: str | None = None,
    ) -> EventModel:
        """Append one event stamped with the current time.

        The email is not re-checked here; callers perform the ownership check first.
        """
        event = EventModel(
            email_id=email_id,
            event_type=event_type,
            timestamp=utcnow(),
            user_agent=user_agent,
            ip_address=ip_address,
        )
        session.add(event)
        await session.flush()
        logger.debug("Recorded %s event %s for email %s", event_type, event.id, email_id)
        return event
