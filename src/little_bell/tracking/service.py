"""Open and click tracking built on the email registry and event recorder."""

import logging

from sqlalchemy.ext.asyncio import AsyncSession

from little_bell.common.exceptions import InvalidInputError
from little_bell.emails.service import EmailService, parse_email_id
from little_bell.events.models import EVENT_CLICK, EVENT_OPEN
from little_bell.events.service import EventService

logger = logging.getLogger(__name__)

RECORDED = "RECORDED"
NOT_FOUND = "NOT_FOUND"
INVALID_INPUT = "INVALID_INPUT"


class TrackingResult:
    """Outcome of a tracking call. Absence and bad input are results, not errors."""

    __slots__ = ("recorded", "code", "message", "email_id", "target_url")

    def __init__(
        self,
        recorded: bool,
        code: str = "",
        message: str = "",
        email_id: int | None = None,
        target_url: str | None = None,
    ):
        self.recorded = recorded
        self.code = code
        self.message = message
        self.email_id = email_id
        self.target_url = target_url

    def __repr__(self) -> str:
        return f"TrackingResult(code={self.code!r}, email_id={self.email_id!r})"


class TrackingService:
    """Ownership-checked engagement recording."""

    def __init__(self, emails: EmailService, events: EventService):
        self.emails = emails
        self.events = events

    async def track_open(
        self,
        session: AsyncSession,
        tenant_id: str,
        email_id: int | str,
        user_agent: str | None = None,
        ip_address: str | None = None,
    ) -> TrackingResult:
        return await self._track(
            session, tenant_id, email_id, EVENT_OPEN, user_agent, ip_address,
        )

    async def track_click(
        self,
        session: AsyncSession,
        tenant_id: str,
        email_id: int | str,
        target_url: str,
        user_agent: str | None = None,
        ip_address: str | None = None,
    ) -> TrackingResult:
        """Record a click; on success the result carries ``target_url`` unmodified."""
        result = await self._track(
            session, tenant_id, email_id, EVENT_CLICK, user_agent, ip_address,
        )
        if result.recorded:
            result.target_url = target_url
        return result

    async def _track(
        self,
        session: AsyncSession,
        tenant_id: str,
        email_id: int | str,
        event_type: str,
        user_agent: str | None,
        ip_address: str | None,
    ) -> TrackingResult:
        # Reject malformed ids before any query runs
        if isinstance(email_id, str):
            try:
                email_id = parse_email_id(email_id)
            except InvalidInputError as e:
                logger.warning("Rejected %s tracking for tenant %s: %s", event_type, tenant_id, e.message)
                return TrackingResult(False, INVALID_INPUT, e.message)

        email = await self.emails.get_email(session, email_id, tenant_id)
        if email is None:
            logger.info("No email %s for tenant %s", email_id, tenant_id)
            return TrackingResult(
                False, NOT_FOUND, "Email not found for tenant", email_id=email_id,
            )

        await self.events.log_event(
            session, email_id, event_type,
            user_agent=user_agent,
            ip_address=ip_address,
        )
        return TrackingResult(True, RECORDED, f"{event_type} recorded", email_id=email_id)
