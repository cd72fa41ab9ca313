"""Tenant dashboard: HTML view over the tenant's engagement statistics."""

import pathlib

from fastapi import APIRouter, Request
from fastapi.responses import HTMLResponse
from fastapi.templating import Jinja2Templates

from little_bell.emails.service import PIXEL_SUFFIX

_DIR = pathlib.Path(__file__).parent
_TEMPLATES_DIR = _DIR / "templates"

templates = Jinja2Templates(directory=str(_TEMPLATES_DIR))

router = APIRouter()


def _get_db():
    from little_bell.deps import get_db
    return get_db()


def _get_tenant_service():
    from little_bell.deps import get_tenant_service
    return get_tenant_service()


def _get_stats_service():
    from little_bell.deps import get_stats_service
    return get_stats_service()


@router.get("/{tenant_id}/dashboard", response_class=HTMLResponse)
async def show_dashboard(request: Request, tenant_id: str):
    from little_bell.common.config import get_settings

    tenants = _get_tenant_service()
    stats_svc = _get_stats_service()
    db = _get_db()
    async with db.get_session() as session:
        # First view of a tenant registers it
        await tenants.ensure_tenant(session, tenant_id, tenant_id)
        stats = await stats_svc.get_tenant_stats(session, tenant_id)

    return templates.TemplateResponse(
        request,
        "dashboard.html",
        {
            "tenant_id": tenant_id,
            "stats": stats,
            "base_url": get_settings().public_base_url,
            "pixel_suffix": PIXEL_SUFFIX,
        },
    )
