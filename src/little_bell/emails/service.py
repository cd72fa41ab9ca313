"""Email registry: creation, tenant-scoped lookup and tracking URLs."""

import re
from urllib.parse import quote

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from little_bell.common.exceptions import InvalidInputError
from little_bell.emails.models import EmailModel

PIXEL_SUFFIX = ".gif"
EMAIL_ID_PATTERN = re.compile(r"[0-9]+")
MAX_EMAIL_ID = 2**63 - 1


def parse_email_id(raw: str) -> int:
    """
    Parse an email id taken from a URL path segment.

    "12" → 12
    "12.gif" → 12
    "abc.gif" → InvalidInputError
    "99999999999999999999" → InvalidInputError (exceeds the storage integer range)
    """
    value = raw[: -len(PIXEL_SUFFIX)] if raw.endswith(PIXEL_SUFFIX) else raw
    if not EMAIL_ID_PATTERN.fullmatch(value):
        raise InvalidInputError(f"Invalid email ID: {raw!r}")
    email_id = int(value)
    if email_id > MAX_EMAIL_ID:
        raise InvalidInputError(f"Email ID out of range: {raw!r}")
    return email_id


def tracking_pixel_url(base_url: str, tenant_id: str, email_id: int) -> str:
    return f"{base_url.rstrip('/')}/{quote(tenant_id, safe='')}/pixel/{email_id}{PIXEL_SUFFIX}"


def click_tracking_url(
    base_url: str, tenant_id: str, email_id: int, target_url: str,
) -> str:
    """Wrap ``target_url`` in a click-tracking redirect through this service."""
    return (
        f"{base_url.rstrip('/')}/{quote(tenant_id, safe='')}/click/{email_id}"
        f"?url={quote(target_url, safe='')}"
    )


class EmailService:
    """Email registry operations."""

    async def create_email(
        self,
        session: AsyncSession,
        tenant_id: str,
        subject: str | None = None,
        recipient: str | None = None,
    ) -> int:
        """Insert a new email and return its engine-assigned id.

        Tenant existence is the caller's concern; see ``TenantService.ensure_tenant``.
        """
        email = EmailModel(
            tenant_id=tenant_id,
            subject=subject,
            recipient=recipient,
        )
        session.add(email)
        await session.flush()
        return email.id

    async def get_email(
        self, session: AsyncSession, email_id: int, tenant_id: str,
    ) -> EmailModel | None:
        """Ownership check: both the id and the owning tenant must match."""
        result = await session.execute(
            select(EmailModel).where(
                EmailModel.id == email_id,
                EmailModel.tenant_id == tenant_id,
            )
        )
        return result.scalar_one_or_none()
