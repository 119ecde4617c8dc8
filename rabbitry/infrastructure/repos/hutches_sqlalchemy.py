from __future__ import annotations

from uuid import UUID

from sqlalchemy import func, select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from rabbitry.application.errors import CollaboratorError, DuplicateHutchError, NotFound
from rabbitry.domain.models.hutch import Hutch
from rabbitry.infrastructure.db.orm.hutch import HutchORM


class HutchesSQLAlchemyRepository:
    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    def _to_domain(self, orm: HutchORM) -> Hutch:
        return Hutch(
            id=orm.id,
            farm_id=orm.farm_id,
            row_id=orm.row_id,
            row_name=orm.row_name,
            level=orm.level,
            position=orm.position,
            name=orm.name,
            size=orm.size,
            material=orm.material,
            features=list(orm.features or []),
            last_cleaned=orm.last_cleaned,
            is_deleted=orm.is_deleted,
            deleted_at=orm.deleted_at,
            created_at=orm.created_at,
            updated_at=orm.updated_at,
            version=orm.version,
        )

    async def add(self, hutch: Hutch) -> Hutch:
        orm = HutchORM(
            id=hutch.id,
            farm_id=hutch.farm_id,
            row_id=hutch.row_id,
            row_name=hutch.row_name,
            level=hutch.level,
            position=hutch.position,
            name=hutch.name,
            size=hutch.size,
            material=hutch.material,
            features=list(hutch.features),
            last_cleaned=hutch.last_cleaned,
            is_deleted=hutch.is_deleted,
            created_at=hutch.created_at,
            updated_at=hutch.updated_at,
            version=hutch.version,
        )
        self.session.add(orm)
        try:
            await self.session.flush()
        except IntegrityError as exc:
            raise DuplicateHutchError(
                f"Hutch {hutch.name} already exists", details={"hutch": hutch.name}
            ) from exc
        except SQLAlchemyError as exc:
            raise CollaboratorError(
                "Failed to create hutch",
                details={"operation": "create_hutch", "entity_id": hutch.name},
            ) from exc
        return self._to_domain(orm)

    def _active(self, farm_id: UUID):
        return select(HutchORM).where(
            HutchORM.farm_id == farm_id,
            HutchORM.is_deleted.is_(False),
        )

    async def get_by_name(self, farm_id: UUID, name: str) -> Hutch | None:
        stmt = self._active(farm_id).where(HutchORM.name == name)
        result = await self.session.execute(stmt)
        orm = result.scalar_one_or_none()
        return self._to_domain(orm) if orm else None

    async def list_by_row(self, farm_id: UUID, row_id: UUID) -> list[Hutch]:
        stmt = (
            self._active(farm_id)
            .where(HutchORM.row_id == row_id)
            .order_by(HutchORM.level, HutchORM.position)
        )
        result = await self.session.execute(stmt)
        return [self._to_domain(orm) for orm in result.scalars().all()]

    async def count_by_row(self, farm_id: UUID, row_id: UUID) -> int:
        stmt = (
            select(func.count())
            .select_from(HutchORM)
            .where(HutchORM.farm_id == farm_id)
            .where(HutchORM.row_id == row_id)
            .where(HutchORM.is_deleted.is_(False))
        )
        result = await self.session.execute(stmt)
        return int(result.scalar_one() or 0)

    async def update(self, hutch: Hutch) -> Hutch:
        orm = await self.session.get(HutchORM, hutch.id)
        if not orm:
            raise NotFound(f"Hutch {hutch.name} not found")
        orm.size = hutch.size
        orm.material = hutch.material
        orm.features = list(hutch.features)
        orm.last_cleaned = hutch.last_cleaned
        orm.is_deleted = hutch.is_deleted
        orm.deleted_at = hutch.deleted_at
        orm.updated_at = hutch.updated_at
        orm.version = hutch.version
        try:
            await self.session.flush()
        except SQLAlchemyError as exc:
            raise CollaboratorError(
                "Failed to update hutch",
                details={"operation": "update_hutch", "entity_id": hutch.name},
            ) from exc
        return self._to_domain(orm)
