"""SQLAlchemy ORM model for the SubdomainRecord entity."""

from datetime import datetime, timezone

from sqlalchemy import DateTime, Index, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from subdomain_registry.infrastructure.database.base import Base


class SubdomainModel(Base):
    """ORM model mapped to the 'subdomains' table."""

    __tablename__ = "subdomains"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(63), nullable=False)
    type: Mapped[str] = mapped_column(String(10), nullable=False)
    target: Mapped[str] = mapped_column(Text, nullable=False)
    status: Mapped[str] = mapped_column(String(20), nullable=False, default="active")
    cf_record_id: Mapped[str | None] = mapped_column(Text, nullable=True)
    owner_identity: Mapped[str] = mapped_column(Text, nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=lambda: datetime.now(timezone.utc),
        nullable=False,
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=lambda: datetime.now(timezone.utc),
        nullable=False,
    )

    __table_args__ = (
        Index("ix_subdomains_name", "name", unique=True),
        Index("ix_subdomains_owner_identity", "owner_identity"),
        # Never hand out an id again after a delete.
        {"sqlite_autoincrement": True},
    )

    def __repr__(self) -> str:
        return f"<SubdomainModel(id={self.id}, name='{self.name}', type='{self.type}')>"
