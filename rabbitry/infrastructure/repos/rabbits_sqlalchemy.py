from __future__ import annotations

from uuid import UUID

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from rabbitry.application.errors import CollaboratorError, DuplicateNameError, NotFound
from rabbitry.domain.models.rabbit import Rabbit
from rabbitry.domain.value_objects.rabbit_status import RabbitStatus
from rabbitry.infrastructure.db.orm.rabbit import RabbitORM


class RabbitsSQLAlchemyRepository:
    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    def _to_domain(self, orm: RabbitORM) -> Rabbit:
        return Rabbit(
            id=orm.id,
            farm_id=orm.farm_id,
            rabbit_id=orm.rabbit_id,
            gender=orm.gender,
            name=orm.name,
            breed=orm.breed,
            color=orm.color,
            birth_date=orm.birth_date,
            weight=orm.weight,
            hutch_name=orm.hutch_name,
            status=orm.status,
            parent_male_id=orm.parent_male_id,
            parent_female_id=orm.parent_female_id,
            is_pregnant=orm.is_pregnant,
            pregnancy_start_date=orm.pregnancy_start_date,
            expected_birth_date=orm.expected_birth_date,
            last_birth_date=orm.last_birth_date,
            total_litters=orm.total_litters,
            total_kits=orm.total_kits,
            notes=orm.notes,
            created_at=orm.created_at,
            updated_at=orm.updated_at,
            version=orm.version,
        )

    def _copy_mutable(self, orm: RabbitORM, rabbit: Rabbit) -> None:
        orm.name = rabbit.name
        orm.breed = rabbit.breed
        orm.color = rabbit.color
        orm.birth_date = rabbit.birth_date
        orm.weight = rabbit.weight
        orm.hutch_name = rabbit.hutch_name
        orm.status = rabbit.status
        orm.parent_male_id = rabbit.parent_male_id
        orm.parent_female_id = rabbit.parent_female_id
        orm.is_pregnant = rabbit.is_pregnant
        orm.pregnancy_start_date = rabbit.pregnancy_start_date
        orm.expected_birth_date = rabbit.expected_birth_date
        orm.last_birth_date = rabbit.last_birth_date
        orm.total_litters = rabbit.total_litters
        orm.total_kits = rabbit.total_kits
        orm.notes = rabbit.notes
        orm.updated_at = rabbit.updated_at
        orm.version = rabbit.version

    async def add(self, rabbit: Rabbit) -> Rabbit:
        orm = RabbitORM(
            id=rabbit.id,
            farm_id=rabbit.farm_id,
            rabbit_id=rabbit.rabbit_id,
            gender=rabbit.gender,
            created_at=rabbit.created_at,
        )
        self._copy_mutable(orm, rabbit)
        self.session.add(orm)
        try:
            await self.session.flush()
        except IntegrityError as exc:
            raise DuplicateNameError(
                f"Rabbit {rabbit.rabbit_id} already exists",
                details={"rabbit_id": rabbit.rabbit_id},
            ) from exc
        except SQLAlchemyError as exc:
            raise CollaboratorError(
                "Failed to create rabbit",
                details={"operation": "create_rabbit", "entity_id": rabbit.rabbit_id},
            ) from exc
        return self._to_domain(orm)

    async def _get_orm(self, farm_id: UUID, rabbit_id: str) -> RabbitORM | None:
        stmt = select(RabbitORM).where(
            RabbitORM.farm_id == farm_id, RabbitORM.rabbit_id == rabbit_id
        )
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def get_by_tag(self, farm_id: UUID, rabbit_id: str) -> Rabbit | None:
        orm = await self._get_orm(farm_id, rabbit_id)
        return self._to_domain(orm) if orm else None

    async def list(
        self,
        farm_id: UUID,
        *,
        gender: str | None = None,
        active_only: bool = True,
    ) -> list[Rabbit]:
        stmt = select(RabbitORM).where(RabbitORM.farm_id == farm_id)
        if gender:
            stmt = stmt.where(RabbitORM.gender == gender)
        if active_only:
            stmt = stmt.where(RabbitORM.status == RabbitStatus.ACTIVE.value)
        stmt = stmt.order_by(RabbitORM.rabbit_id)
        result = await self.session.execute(stmt)
        return [self._to_domain(orm) for orm in result.scalars().all()]

    async def list_by_hutch(self, farm_id: UUID, hutch_name: str) -> list[Rabbit]:
        stmt = (
            select(RabbitORM)
            .where(RabbitORM.farm_id == farm_id)
            .where(RabbitORM.hutch_name == hutch_name)
            .where(RabbitORM.status == RabbitStatus.ACTIVE.value)
            .order_by(RabbitORM.rabbit_id)
        )
        result = await self.session.execute(stmt)
        return [self._to_domain(orm) for orm in result.scalars().all()]

    async def max_tag_number(self, farm_id: UUID, prefix: str = "RB-") -> int:
        stmt = select(RabbitORM.rabbit_id).where(
            RabbitORM.farm_id == farm_id,
            RabbitORM.rabbit_id.startswith(prefix),
        )
        result = await self.session.execute(stmt)
        highest = 0
        for tag in result.scalars().all():
            suffix = tag[len(prefix):]
            if suffix.isdigit():
                highest = max(highest, int(suffix))
        return highest

    async def update(self, rabbit: Rabbit) -> Rabbit:
        orm = await self.session.get(RabbitORM, rabbit.id)
        if not orm:
            raise NotFound(f"Rabbit {rabbit.rabbit_id} not found")
        self._copy_mutable(orm, rabbit)
        try:
            await self.session.flush()
        except SQLAlchemyError as exc:
            raise CollaboratorError(
                "Failed to update rabbit",
                details={"operation": "update_rabbit", "entity_id": rabbit.rabbit_id},
            ) from exc
        return self._to_domain(orm)
