"""Tests for the event recorder: append-only log."""

from datetime import datetime, timedelta, timezone

import pytest
from sqlalchemy import select

from little_bell.common.models import as_utc
from little_bell.emails.service import EmailService
from little_bell.events.models import EventModel
from little_bell.events.service import EventService


@pytest.fixture
def svc():
    return EventService()


async def _email(db) -> int:
    async with db.get_session() as session:
        return await EmailService().create_email(session, "acme")


async def _all_events(db) -> list[EventModel]:
    async with db.get_session() as session:
        result = await session.execute(select(EventModel).order_by(EventModel.id))
        return list(result.scalars().all())


class TestLogEvent:
    async def test_append_sets_fields(self, db, svc):
        email_id = await _email(db)
        before = datetime.now(timezone.utc) - timedelta(seconds=1)
        async with db.get_session() as session:
            await svc.log_event(
                session, email_id, "open",
                user_agent="Mozilla/5.0", ip_address="203.0.113.5",
            )
        events = await _all_events(db)
        assert len(events) == 1
        event = events[0]
        assert event.email_id == email_id
        assert event.event_type == "open"
        assert event.user_agent == "Mozilla/5.0"
        assert event.ip_address == "203.0.113.5"
        assert as_utc(event.timestamp) >= before

    async def test_optional_metadata(self, db, svc):
        email_id = await _email(db)
        async with db.get_session() as session:
            await svc.log_event(session, email_id, "click")
        event = (await _all_events(db))[0]
        assert event.user_agent is None
        assert event.ip_address is None

    async def test_repeated_events_append(self, db, svc):
        email_id = await _email(db)
        for _ in range(3):
            async with db.get_session() as session:
                await svc.log_event(session, email_id, "open")
        events = await _all_events(db)
        assert len(events) == 3
        assert [e.id for e in events] == sorted({e.id for e in events})

    async def test_other_event_types_accepted(self, db, svc):
        email_id = await _email(db)
        async with db.get_session() as session:
            await svc.log_event(session, email_id, "bounce")
        assert (await _all_events(db))[0].event_type == "bounce"

    def test_no_mutation_api(self, svc):
        assert not hasattr(svc, "update_event")
        assert not hasattr(svc, "delete_event")
