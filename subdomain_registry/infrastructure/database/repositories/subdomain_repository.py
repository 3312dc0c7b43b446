"""Concrete repository implementation for SubdomainRecord backed by SQLAlchemy."""

from datetime import datetime, timezone

from sqlalchemy import delete, func, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from subdomain_registry.application.interfaces.subdomain_repository import (
    SubdomainRepository,
    check_mutable,
)
from subdomain_registry.domain.entities import RecordType, SubdomainRecord, SubdomainStatus
from subdomain_registry.domain.exceptions import DuplicateEntityError
from subdomain_registry.infrastructure.database.models import SubdomainModel


class SQLAlchemySubdomainRepository(SubdomainRepository):
    """Implements the SubdomainRepository port using SQLAlchemy async sessions.

    The repository outlives any single request, so every call opens its own
    session from the factory and commits before returning.
    """

    def __init__(self, session_factory: async_sessionmaker[AsyncSession]):
        self._session_factory = session_factory

    @property
    def backend_name(self) -> str:
        return "sql"

    @staticmethod
    def _as_utc(value: datetime) -> datetime:
        # SQLite hands back naive datetimes even for timezone-aware columns.
        return value if value.tzinfo else value.replace(tzinfo=timezone.utc)

    def _to_entity(self, model: SubdomainModel) -> SubdomainRecord:
        """Map ORM model → domain entity."""
        return SubdomainRecord(
            id=model.id,
            name=model.name,
            record_type=RecordType(model.type),
            target=model.target,
            status=SubdomainStatus(model.status),
            provider_record_id=model.cf_record_id,
            owner_identity=model.owner_identity,
            created_at=self._as_utc(model.created_at),
            updated_at=self._as_utc(model.updated_at),
        )

    async def find_by_owner(self, owner_identity: str) -> list[SubdomainRecord]:
        async with self._session_factory() as session:
            result = await session.execute(
                select(SubdomainModel)
                .where(SubdomainModel.owner_identity == owner_identity)
                .order_by(SubdomainModel.id.asc())
            )
            return [self._to_entity(row) for row in result.scalars().all()]

    async def find_by_name(self, name: str) -> SubdomainRecord | None:
        async with self._session_factory() as session:
            result = await session.execute(
                select(SubdomainModel).where(SubdomainModel.name == name).limit(1)
            )
            model = result.scalar_one_or_none()
            return self._to_entity(model) if model else None

    async def count_by_owner(self, owner_identity: str) -> int:
        async with self._session_factory() as session:
            result = await session.execute(
                select(func.count())
                .select_from(SubdomainModel)
                .where(SubdomainModel.owner_identity == owner_identity)
            )
            return int(result.scalar_one())

    async def create(self, record: SubdomainRecord) -> SubdomainRecord:
        now = datetime.now(timezone.utc)
        async with self._session_factory() as session:
            existing = await session.execute(
                select(SubdomainModel.id).where(SubdomainModel.name == record.name).limit(1)
            )
            if existing.scalar_one_or_none() is not None:
                raise DuplicateEntityError("Subdomain", "name", record.name)

            model = SubdomainModel(
                name=record.name,
                type=record.record_type.value,
                target=record.target,
                status=SubdomainStatus.ACTIVE.value,
                cf_record_id=None,
                owner_identity=record.owner_identity,
                created_at=now,
                updated_at=now,
            )
            session.add(model)
            try:
                await session.commit()
            except IntegrityError:
                # The unique index caught a concurrent insert of the same name.
                await session.rollback()
                raise DuplicateEntityError("Subdomain", "name", record.name)
            return self._to_entity(model)

    async def update(self, record_id: int, **changes) -> SubdomainRecord | None:
        check_mutable(changes)
        async with self._session_factory() as session:
            model = await session.get(SubdomainModel, record_id)
            if model is None:
                return None

            if changes.get("target") is not None:
                model.target = changes["target"]
            if changes.get("status") is not None:
                model.status = SubdomainStatus(changes["status"]).value
            if "provider_record_id" in changes:
                model.cf_record_id = changes["provider_record_id"]
            model.updated_at = datetime.now(timezone.utc)

            await session.commit()
            return self._to_entity(model)

    async def delete(self, record_id: int) -> bool:
        async with self._session_factory() as session:
            result = await session.execute(
                delete(SubdomainModel).where(SubdomainModel.id == record_id)
            )
            await session.commit()
            return result.rowcount > 0
