from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime, timedelta, timezone
from uuid import UUID, uuid4

GESTATION_DAYS = 31


def expected_birth_from(mating_date: date) -> date:
    return mating_date + timedelta(days=GESTATION_DAYS)


def mating_date_from(actual_birth_date: date) -> date:
    return actual_birth_date - timedelta(days=GESTATION_DAYS)


@dataclass(slots=True)
class BreedingRecord:
    id: UUID
    farm_id: UUID
    doe_id: str
    mating_date: date
    expected_birth_date: date

    buck_id: str | None = None
    actual_birth_date: date | None = None
    number_of_kits: int = 0
    notes: str | None = None

    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    updated_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    version: int = 1

    @classmethod
    def create(
        cls,
        farm_id: UUID,
        doe_id: str,
        mating_date: date,
        buck_id: str | None = None,
        notes: str | None = None,
    ) -> BreedingRecord:
        now = datetime.now(timezone.utc)
        return cls(
            id=uuid4(),
            farm_id=farm_id,
            doe_id=doe_id,
            buck_id=buck_id,
            mating_date=mating_date,
            expected_birth_date=expected_birth_from(mating_date),
            notes=notes,
            created_at=now,
            updated_at=now,
            version=1,
        )

    @classmethod
    def create_for_birth(
        cls,
        farm_id: UUID,
        doe_id: str,
        actual_birth_date: date,
        buck_id: str | None = None,
        notes: str | None = None,
    ) -> BreedingRecord:
        """Open a record for a birth that had no recorded mating, back-dating the mating."""
        record = cls.create(
            farm_id=farm_id,
            doe_id=doe_id,
            mating_date=mating_date_from(actual_birth_date),
            buck_id=buck_id,
            notes=notes,
        )
        record.expected_birth_date = actual_birth_date
        return record

    @property
    def is_open(self) -> bool:
        return self.actual_birth_date is None

    def close(self, actual_birth_date: date, number_of_kits: int) -> None:
        if not self.is_open:
            raise ValueError(f"Breeding record {self.id} is already closed")
        self.actual_birth_date = actual_birth_date
        self.number_of_kits = number_of_kits
        self.bump_version()

    def bump_version(self) -> None:
        self.version += 1
        self.updated_at = datetime.now(timezone.utc)
