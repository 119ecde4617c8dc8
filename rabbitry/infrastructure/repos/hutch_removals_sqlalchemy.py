from __future__ import annotations

from uuid import UUID

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from rabbitry.application.errors import CollaboratorError
from rabbitry.domain.models.hutch_removal import HutchRemoval
from rabbitry.infrastructure.db.orm.hutch_removal import HutchRemovalORM


class HutchRemovalsSQLAlchemyRepository:
    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    def _to_domain(self, orm: HutchRemovalORM) -> HutchRemoval:
        return HutchRemoval(
            id=orm.id,
            farm_id=orm.farm_id,
            hutch_name=orm.hutch_name,
            rabbit_id=orm.rabbit_id,
            reason=orm.reason,
            notes=orm.notes,
            removed_at=orm.removed_at,
            created_at=orm.created_at,
        )

    async def add(self, entry: HutchRemoval) -> HutchRemoval:
        orm = HutchRemovalORM(
            id=entry.id,
            farm_id=entry.farm_id,
            hutch_name=entry.hutch_name,
            rabbit_id=entry.rabbit_id,
            reason=entry.reason,
            notes=entry.notes,
            removed_at=entry.removed_at,
            created_at=entry.created_at,
        )
        self.session.add(orm)
        try:
            await self.session.flush()
        except SQLAlchemyError as exc:
            raise CollaboratorError(
                "Failed to record removal",
                details={"operation": "create_hutch_removal", "entity_id": entry.hutch_name},
            ) from exc
        return self._to_domain(orm)

    async def list_for_hutch(self, farm_id: UUID, hutch_name: str) -> list[HutchRemoval]:
        stmt = (
            select(HutchRemovalORM)
            .where(HutchRemovalORM.farm_id == farm_id)
            .where(HutchRemovalORM.hutch_name == hutch_name)
            .where(HutchRemovalORM.removed_at.is_not(None))
            .order_by(HutchRemovalORM.removed_at.desc())
        )
        result = await self.session.execute(stmt)
        return [self._to_domain(orm) for orm in result.scalars().all()]
