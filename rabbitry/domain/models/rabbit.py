from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime, timezone
from uuid import UUID, uuid4

from rabbitry.domain.value_objects.breeding_state import (
    BreedingState,
    Delivered,
    pregnancy_fields,
    resolve_state,
)
from rabbitry.domain.value_objects.gender import Gender
from rabbitry.domain.value_objects.rabbit_status import RabbitStatus


@dataclass(slots=True)
class Rabbit:
    id: UUID
    farm_id: UUID
    rabbit_id: str
    gender: str
    name: str | None = None
    breed: str | None = None
    color: str | None = None
    birth_date: date | None = None
    weight: float | None = None
    hutch_name: str | None = None
    status: str = RabbitStatus.ACTIVE.value

    # Genealogy fields (rabbit tags)
    parent_male_id: str | None = None
    parent_female_id: str | None = None

    # Pregnancy fields, females only
    is_pregnant: bool = False
    pregnancy_start_date: date | None = None
    expected_birth_date: date | None = None
    last_birth_date: date | None = None
    total_litters: int = 0
    total_kits: int = 0
    notes: str | None = None

    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    updated_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    version: int = 1

    @classmethod
    def create(
        cls,
        farm_id: UUID,
        rabbit_id: str,
        gender: str,
        name: str | None = None,
        breed: str | None = None,
        color: str | None = None,
        birth_date: date | None = None,
        weight: float | None = None,
        hutch_name: str | None = None,
        parent_male_id: str | None = None,
        parent_female_id: str | None = None,
        notes: str | None = None,
    ) -> Rabbit:
        now = datetime.now(timezone.utc)
        return cls(
            id=uuid4(),
            farm_id=farm_id,
            rabbit_id=rabbit_id,
            gender=gender,
            # Large farms use the tag as the display name
            name=name or rabbit_id,
            breed=breed,
            color=color,
            birth_date=birth_date,
            weight=weight,
            hutch_name=hutch_name,
            parent_male_id=parent_male_id,
            parent_female_id=parent_female_id,
            notes=notes,
            created_at=now,
            updated_at=now,
            version=1,
        )

    @property
    def is_female(self) -> bool:
        return self.gender == Gender.FEMALE.value

    @property
    def is_active(self) -> bool:
        return self.status == RabbitStatus.ACTIVE.value

    def breeding_state(self, open_mating_date: date | None = None) -> BreedingState:
        return resolve_state(
            is_pregnant=self.is_pregnant,
            pregnancy_start_date=self.pregnancy_start_date,
            expected_birth_date=self.expected_birth_date,
            open_mating_date=open_mating_date,
        )

    def apply_breeding_state(self, state: BreedingState) -> None:
        if not self.is_female:
            raise ValueError("Only does carry a breeding state")
        for key, value in pregnancy_fields(state).items():
            setattr(self, key, value)
        self.bump_version()

    def record_delivery(self, state: Delivered, kit_count: int) -> None:
        """Close a delivery: the doe returns to available and her counters grow."""
        self.apply_breeding_state(state)
        self.last_birth_date = state.at
        self.total_litters += 1
        self.total_kits += kit_count

    def move_out(self, status: str) -> None:
        self.hutch_name = None
        self.status = status
        self.bump_version()

    def bump_version(self) -> None:
        self.version += 1
        self.updated_at = datetime.now(timezone.utc)
