"""Dependency injection singletons for Little Bell."""

from little_bell.common.config import get_settings
from little_bell.common.database import DatabaseManager
from little_bell.emails.service import EmailService
from little_bell.events.service import EventService
from little_bell.stats.service import StatsService
from little_bell.tenants.service import TenantService
from little_bell.tracking.service import TrackingService

_db: DatabaseManager | None = None
_tenants: TenantService | None = None
_emails: EmailService | None = None
_events: EventService | None = None
_tracking: TrackingService | None = None
_stats: StatsService | None = None


def get_db() -> DatabaseManager:
    global _db
    if _db is None:
        _db = DatabaseManager(get_settings())
    return _db


def get_tenant_service() -> TenantService:
    global _tenants
    if _tenants is None:
        _tenants = TenantService()
    return _tenants


def get_email_service() -> EmailService:
    global _emails
    if _emails is None:
        _emails = EmailService()
    return _emails


def get_event_service() -> EventService:
    global _events
    if _events is None:
        _events = EventService()
    return _events


def get_tracking_service() -> TrackingService:
    global _tracking
    if _tracking is None:
        _tracking = TrackingService(get_email_service(), get_event_service())
    return _tracking


def get_stats_service() -> StatsService:
    global _stats
    if _stats is None:
        _stats = StatsService(get_settings().recent_events_limit)
    return _stats


def reset_singletons() -> None:
    """Reset all singletons (for testing)."""
    global _db, _tenants, _emails, _events, _tracking, _stats
    _db = None
    _tenants = None
    _emails = None
    _events = None
    _tracking = None
    _stats = None
