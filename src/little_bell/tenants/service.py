"""Tenant registry: idempotent creation and lookup."""

import logging

from sqlalchemy.dialects import postgresql, sqlite
from sqlalchemy.ext.asyncio import AsyncSession

from little_bell.common.models import utcnow
from little_bell.tenants.models import TenantModel

logger = logging.getLogger(__name__)

_INSERT_BY_DIALECT = {
    "sqlite": sqlite.insert,
    "postgresql": postgresql.insert,
}


class TenantService:
    """Tenant registry operations."""

    async def ensure_tenant(
        self, session: AsyncSession, tenant_id: str, name: str,
    ) -> bool:
        """Insert the tenant only if its id is unseen. Returns True if a row was created.

        An existing row is never overwritten, so ``name`` is ignored for known ids.
        """
        dialect = session.get_bind().dialect.name
        insert = _INSERT_BY_DIALECT.get(dialect, sqlite.insert)
        stmt = (
            insert(TenantModel)
            .values(id=tenant_id, name=name, created_at=utcnow())
            .on_conflict_do_nothing(index_elements=[TenantModel.id])
        )
        result = await session.execute(stmt)
        created = result.rowcount == 1
        if created:
            logger.info("Registered tenant %s", tenant_id)
        return created

    async def get_tenant(
        self, session: AsyncSession, tenant_id: str,
    ) -> TenantModel | None:
        return await session.get(TenantModel, tenant_id)
