from __future__ import annotations

from uuid import UUID

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from rabbitry.application.errors import ActiveBreedingRecordError, CollaboratorError, NotFound
from rabbitry.domain.models.breeding_record import BreedingRecord
from rabbitry.infrastructure.db.orm.breeding_record import BreedingRecordORM


class BreedingRecordsSQLAlchemyRepository:
    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    def _to_domain(self, orm: BreedingRecordORM) -> BreedingRecord:
        return BreedingRecord(
            id=orm.id,
            farm_id=orm.farm_id,
            doe_id=orm.doe_id,
            buck_id=orm.buck_id,
            mating_date=orm.mating_date,
            expected_birth_date=orm.expected_birth_date,
            actual_birth_date=orm.actual_birth_date,
            number_of_kits=orm.number_of_kits,
            notes=orm.notes,
            created_at=orm.created_at,
            updated_at=orm.updated_at,
            version=orm.version,
        )

    async def add(self, record: BreedingRecord) -> BreedingRecord:
        orm = BreedingRecordORM(
            id=record.id,
            farm_id=record.farm_id,
            doe_id=record.doe_id,
            buck_id=record.buck_id,
            mating_date=record.mating_date,
            expected_birth_date=record.expected_birth_date,
            actual_birth_date=record.actual_birth_date,
            number_of_kits=record.number_of_kits,
            notes=record.notes,
            created_at=record.created_at,
            updated_at=record.updated_at,
            version=record.version,
        )
        self.session.add(orm)
        try:
            await self.session.flush()
        except IntegrityError as exc:
            raise ActiveBreedingRecordError(
                f"Doe {record.doe_id} already has an open breeding record",
                details={"doe_id": record.doe_id},
            ) from exc
        except SQLAlchemyError as exc:
            raise CollaboratorError(
                "Failed to create breeding record",
                details={"operation": "create_breeding_record", "entity_id": record.doe_id},
            ) from exc
        return self._to_domain(orm)

    async def get(self, farm_id: UUID, record_id: UUID) -> BreedingRecord | None:
        stmt = select(BreedingRecordORM).where(
            BreedingRecordORM.farm_id == farm_id, BreedingRecordORM.id == record_id
        )
        result = await self.session.execute(stmt)
        orm = result.scalar_one_or_none()
        return self._to_domain(orm) if orm else None

    async def get_open_for_doe(self, farm_id: UUID, doe_id: str) -> BreedingRecord | None:
        stmt = (
            select(BreedingRecordORM)
            .where(BreedingRecordORM.farm_id == farm_id)
            .where(BreedingRecordORM.doe_id == doe_id)
            .where(BreedingRecordORM.actual_birth_date.is_(None))
            .order_by(BreedingRecordORM.mating_date.desc())
            .limit(1)
        )
        result = await self.session.execute(stmt)
        orm = result.scalar_one_or_none()
        return self._to_domain(orm) if orm else None

    async def list_for_doe(self, farm_id: UUID, doe_id: str) -> list[BreedingRecord]:
        stmt = (
            select(BreedingRecordORM)
            .where(BreedingRecordORM.farm_id == farm_id)
            .where(BreedingRecordORM.doe_id == doe_id)
            .order_by(BreedingRecordORM.mating_date.desc())
        )
        result = await self.session.execute(stmt)
        return [self._to_domain(orm) for orm in result.scalars().all()]

    async def list_open(self, farm_id: UUID) -> list[BreedingRecord]:
        stmt = (
            select(BreedingRecordORM)
            .where(BreedingRecordORM.farm_id == farm_id)
            .where(BreedingRecordORM.actual_birth_date.is_(None))
            .order_by(BreedingRecordORM.doe_id)
        )
        result = await self.session.execute(stmt)
        return [self._to_domain(orm) for orm in result.scalars().all()]

    async def update(self, record: BreedingRecord) -> BreedingRecord:
        orm = await self.session.get(BreedingRecordORM, record.id)
        if not orm:
            raise NotFound(f"Breeding record {record.id} not found")
        orm.buck_id = record.buck_id
        orm.actual_birth_date = record.actual_birth_date
        orm.number_of_kits = record.number_of_kits
        orm.notes = record.notes
        orm.updated_at = record.updated_at
        orm.version = record.version
        try:
            await self.session.flush()
        except SQLAlchemyError as exc:
            raise CollaboratorError(
                "Failed to update breeding record",
                details={"operation": "update_breeding_record", "entity_id": str(record.id)},
            ) from exc
        return self._to_domain(orm)
