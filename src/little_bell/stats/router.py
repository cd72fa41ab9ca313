"""Statistics API router."""

from fastapi import APIRouter

from little_bell.stats.schemas import TenantStatsResponse
from little_bell.tenants.schemas import TenantResponse

router = APIRouter()


def _get_service():
    from little_bell.deps import get_stats_service
    return get_stats_service()


def _get_tenant_service():
    from little_bell.deps import get_tenant_service
    return get_tenant_service()


def _get_db():
    from little_bell.deps import get_db
    return get_db()


@router.get("/{tenant_id}/stats", response_model=TenantStatsResponse)
async def get_stats(tenant_id: str):
    svc = _get_service()
    tenants = _get_tenant_service()
    db = _get_db()
    async with db.get_session() as session:
        await tenants.ensure_tenant(session, tenant_id, tenant_id)
        tenant = await tenants.get_tenant(session, tenant_id)
        stats = await svc.get_tenant_stats(session, tenant_id)
        return TenantStatsResponse(
            tenant=TenantResponse.model_validate(tenant),
            stats=stats,
        )
