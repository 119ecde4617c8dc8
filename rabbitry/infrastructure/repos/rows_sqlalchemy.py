from __future__ import annotations

from uuid import UUID

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from rabbitry.application.errors import CollaboratorError, DuplicateNameError, NotFound
from rabbitry.domain.models.row import Row
from rabbitry.infrastructure.db.orm.row import RowORM


class RowsSQLAlchemyRepository:
    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    def _to_domain(self, orm: RowORM) -> Row:
        return Row(
            id=orm.id,
            farm_id=orm.farm_id,
            name=orm.name,
            capacity=orm.capacity,
            levels=list(orm.levels or []),
            description=orm.description,
            created_at=orm.created_at,
            updated_at=orm.updated_at,
            version=orm.version,
        )

    async def add(self, row: Row) -> Row:
        orm = RowORM(
            id=row.id,
            farm_id=row.farm_id,
            name=row.name,
            description=row.description,
            capacity=row.capacity,
            levels=list(row.levels),
            created_at=row.created_at,
            updated_at=row.updated_at,
            version=row.version,
        )
        self.session.add(orm)
        try:
            await self.session.flush()
        except IntegrityError as exc:
            raise DuplicateNameError(
                f'Row "{row.name}" already exists', details={"name": row.name}
            ) from exc
        except SQLAlchemyError as exc:
            raise CollaboratorError(
                "Failed to create row", details={"operation": "create_row", "entity_id": row.name}
            ) from exc
        return self._to_domain(orm)

    async def get(self, farm_id: UUID, row_id: UUID) -> Row | None:
        stmt = select(RowORM).where(RowORM.farm_id == farm_id, RowORM.id == row_id)
        result = await self.session.execute(stmt)
        orm = result.scalar_one_or_none()
        return self._to_domain(orm) if orm else None

    async def get_by_name(self, farm_id: UUID, name: str) -> Row | None:
        stmt = select(RowORM).where(RowORM.farm_id == farm_id, RowORM.name == name)
        result = await self.session.execute(stmt)
        orm = result.scalar_one_or_none()
        return self._to_domain(orm) if orm else None

    async def list(self, farm_id: UUID) -> list[Row]:
        stmt = select(RowORM).where(RowORM.farm_id == farm_id).order_by(RowORM.created_at)
        result = await self.session.execute(stmt)
        return [self._to_domain(orm) for orm in result.scalars().all()]

    async def update(self, row: Row) -> Row:
        orm = await self.session.get(RowORM, row.id)
        if not orm:
            raise NotFound(f"Row {row.id} not found")
        orm.description = row.description
        orm.capacity = row.capacity
        orm.levels = list(row.levels)
        orm.updated_at = row.updated_at
        orm.version = row.version
        try:
            await self.session.flush()
        except SQLAlchemyError as exc:
            raise CollaboratorError(
                "Failed to update row", details={"operation": "expand_row", "entity_id": str(row.id)}
            ) from exc
        return self._to_domain(orm)
