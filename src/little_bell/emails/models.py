"""SQLAlchemy model for tracked emails."""

from typing import Optional

from sqlalchemy import ForeignKey, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from little_bell.common.models import Base, TimestampMixin


class EmailModel(Base, TimestampMixin):
    __tablename__ = "emails"
    # AUTOINCREMENT keeps ids monotonic and never reused on SQLite
    __table_args__ = {"sqlite_autoincrement": True}

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    # Not enforced on SQLite; the registry accepts ids of unregistered tenants
    tenant_id: Mapped[str] = mapped_column(
        String(255), ForeignKey("tenants.id"), nullable=False, index=True
    )
    subject: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    recipient: Mapped[Optional[str]] = mapped_column(String(320), nullable=True)
