"""SQLAlchemy model for tenants."""

from sqlalchemy import String
from sqlalchemy.orm import Mapped, mapped_column

from little_bell.common.models import Base, TimestampMixin


class TenantModel(Base, TimestampMixin):
    __tablename__ = "tenants"

    id: Mapped[str] = mapped_column(String(255), primary_key=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
