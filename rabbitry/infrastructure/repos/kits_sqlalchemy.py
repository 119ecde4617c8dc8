from __future__ import annotations

from uuid import UUID

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from rabbitry.application.errors import CollaboratorError, ConflictError
from rabbitry.domain.models.kit import Kit
from rabbitry.infrastructure.db.orm.kit import KitORM


class KitsSQLAlchemyRepository:
    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    def _to_domain(self, orm: KitORM) -> Kit:
        return Kit(
            id=orm.id,
            farm_id=orm.farm_id,
            breeding_record_id=orm.breeding_record_id,
            kit_number=orm.kit_number,
            actual_birth_date=orm.actual_birth_date,
            parent_female_id=orm.parent_female_id,
            status=orm.status,
            parent_male_id=orm.parent_male_id,
            birth_weight=orm.birth_weight,
            gender=orm.gender,
            color=orm.color,
            notes=orm.notes,
            created_at=orm.created_at,
        )

    async def add_many(self, kits: list[Kit]) -> list[Kit]:
        orms = [
            KitORM(
                id=kit.id,
                farm_id=kit.farm_id,
                breeding_record_id=kit.breeding_record_id,
                kit_number=kit.kit_number,
                birth_weight=kit.birth_weight,
                gender=kit.gender,
                color=kit.color,
                status=kit.status,
                parent_male_id=kit.parent_male_id,
                parent_female_id=kit.parent_female_id,
                actual_birth_date=kit.actual_birth_date,
                notes=kit.notes,
                created_at=kit.created_at,
            )
            for kit in kits
        ]
        self.session.add_all(orms)
        try:
            await self.session.flush()
        except IntegrityError as exc:
            raise ConflictError(
                "Kit numbers must be unique within a litter",
                details={"kits": [kit.kit_number for kit in kits]},
            ) from exc
        except SQLAlchemyError as exc:
            raise CollaboratorError(
                "Failed to record kits",
                details={"operation": "create_kits"},
            ) from exc
        return [self._to_domain(orm) for orm in orms]

    async def list_by_record(self, farm_id: UUID, breeding_record_id: UUID) -> list[Kit]:
        stmt = (
            select(KitORM)
            .where(KitORM.farm_id == farm_id)
            .where(KitORM.breeding_record_id == breeding_record_id)
            .order_by(KitORM.kit_number)
        )
        result = await self.session.execute(stmt)
        return [self._to_domain(orm) for orm in result.scalars().all()]
