from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime, timezone
from uuid import UUID, uuid4

from rabbitry.domain.value_objects.rabbit_status import KitStatus


@dataclass(slots=True)
class Kit:
    id: UUID
    farm_id: UUID
    breeding_record_id: UUID
    kit_number: str
    actual_birth_date: date
    parent_female_id: str
    status: str = KitStatus.ALIVE.value
    parent_male_id: str | None = None
    birth_weight: float | None = None
    gender: str | None = None
    color: str | None = None
    notes: str | None = None

    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    @classmethod
    def create(
        cls,
        farm_id: UUID,
        breeding_record_id: UUID,
        kit_number: str,
        actual_birth_date: date,
        parent_female_id: str,
        status: str = KitStatus.ALIVE.value,
        parent_male_id: str | None = None,
        birth_weight: float | None = None,
        gender: str | None = None,
        color: str | None = None,
        notes: str | None = None,
    ) -> Kit:
        return cls(
            id=uuid4(),
            farm_id=farm_id,
            breeding_record_id=breeding_record_id,
            kit_number=kit_number,
            actual_birth_date=actual_birth_date,
            parent_female_id=parent_female_id,
            status=status,
            parent_male_id=parent_male_id,
            birth_weight=birth_weight,
            gender=gender,
            color=color,
            notes=notes,
            created_at=datetime.now(timezone.utc),
        )
