"""Email registration API router."""

from typing import Optional

from fastapi import APIRouter, Query

from little_bell.common.exceptions import InvalidInputError, NotFoundError
from little_bell.emails.schemas import ClickUrlResponse, EmailCreate, EmailCreateResponse
from little_bell.emails.service import click_tracking_url, parse_email_id, tracking_pixel_url

router = APIRouter()


def _get_service():
    from little_bell.deps import get_email_service
    return get_email_service()


def _get_tenant_service():
    from little_bell.deps import get_tenant_service
    return get_tenant_service()


def _get_db():
    from little_bell.deps import get_db
    return get_db()


def _base_url() -> str:
    from little_bell.common.config import get_settings
    return get_settings().public_base_url


@router.post("/{tenant_id}/emails", response_model=EmailCreateResponse, status_code=201)
async def create_email(tenant_id: str, body: EmailCreate):
    svc = _get_service()
    tenants = _get_tenant_service()
    db = _get_db()
    async with db.get_session() as session:
        await tenants.ensure_tenant(session, tenant_id, tenant_id)
        email_id = await svc.create_email(
            session, tenant_id,
            subject=body.subject,
            recipient=body.recipient,
        )
    return EmailCreateResponse(
        email_id=email_id,
        tracking_pixel_url=tracking_pixel_url(_base_url(), tenant_id, email_id),
    )


@router.get("/{tenant_id}/click-url/{email_id}", response_model=ClickUrlResponse)
async def get_click_url(
    tenant_id: str,
    email_id: str,
    url: Optional[str] = Query(None),
):
    if not url:
        raise InvalidInputError("Missing 'url' parameter")
    parsed_id = parse_email_id(email_id)

    svc = _get_service()
    db = _get_db()
    async with db.get_session() as session:
        email = await svc.get_email(session, parsed_id, tenant_id)
    if email is None:
        raise NotFoundError("Email not found")

    return ClickUrlResponse(
        click_url=click_tracking_url(_base_url(), tenant_id, parsed_id, url),
        original_url=url,
    )
