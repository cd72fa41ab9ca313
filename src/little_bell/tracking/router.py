"""Tracking endpoints: pixel opens and redirecting clicks."""

from typing import Optional

from fastapi import APIRouter, Query, Request
from fastapi.responses import JSONResponse, RedirectResponse, Response

from little_bell.tracking.network import client_ip, user_agent
from little_bell.tracking.pixel import NO_CACHE_HEADERS, PIXEL_MEDIA_TYPE, TRACKING_PIXEL
from little_bell.tracking.service import INVALID_INPUT, TrackingResult

router = APIRouter()


def _get_service():
    from little_bell.deps import get_tracking_service
    return get_tracking_service()


def _get_db():
    from little_bell.deps import get_db
    return get_db()


def _failure(result: TrackingResult) -> Response:
    status = 400 if result.code == INVALID_INPUT else 404
    return JSONResponse({"error": result.message, "code": result.code}, status_code=status)


def _redirect(target_url: str) -> Response:
    """Temporary redirect to exactly ``target_url``."""
    try:
        target_url.encode("latin-1")
    except UnicodeEncodeError:
        # Header values must be latin-1; let starlette percent-encode the rest
        return RedirectResponse(target_url, status_code=307)
    return Response(status_code=307, headers={"location": target_url})


@router.get("/{tenant_id}/pixel/{email_id}")
async def track_open(tenant_id: str, email_id: str, request: Request):
    svc = _get_service()
    db = _get_db()
    async with db.get_session() as session:
        result = await svc.track_open(
            session, tenant_id, email_id,
            user_agent=user_agent(request.headers),
            ip_address=client_ip(request.headers),
        )
    if not result.recorded:
        return _failure(result)
    return Response(
        content=TRACKING_PIXEL,
        media_type=PIXEL_MEDIA_TYPE,
        headers=NO_CACHE_HEADERS,
    )


@router.get("/{tenant_id}/click/{email_id}")
async def track_click(
    tenant_id: str,
    email_id: str,
    request: Request,
    url: Optional[str] = Query(None),
):
    if not url:
        return JSONResponse(
            {"error": "Missing 'url' parameter", "code": INVALID_INPUT}, status_code=400,
        )
    svc = _get_service()
    db = _get_db()
    async with db.get_session() as session:
        result = await svc.track_click(
            session, tenant_id, email_id, url,
            user_agent=user_agent(request.headers),
            ip_address=client_ip(request.headers),
        )
    if not result.recorded:
        return _failure(result)
    return _redirect(result.target_url)
