from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from uuid import UUID

from rabbitry.application.errors import (
    DuplicateNameError,
    HutchFullError,
    NotFound,
    ValidationError,
)
from rabbitry.application.interfaces.cache import LayoutCache
from rabbitry.application.interfaces.unit_of_work import UnitOfWork
from rabbitry.domain.models.rabbit import Rabbit
from rabbitry.domain.services.occupancy import MAX_OCCUPANTS
from rabbitry.domain.value_objects.gender import Gender

TAG_PREFIX = "RB-"


@dataclass(slots=True)
class AddRabbitInput:
    gender: str
    rabbit_id: str | None = None
    hutch_name: str | None = None
    name: str | None = None
    breed: str | None = None
    color: str | None = None
    birth_date: date | None = None
    weight: float | None = None
    parent_male_id: str | None = None
    parent_female_id: str | None = None
    notes: str | None = None


def format_tag(number: int) -> str:
    return f"{TAG_PREFIX}{number:03d}"


async def _ensure_admissible(uow: UnitOfWork, farm_id: UUID, hutch_name: str, gender: str) -> None:
    hutch = await uow.hutches.get_by_name(farm_id, hutch_name)
    if not hutch:
        raise NotFound(f"Hutch {hutch_name} not found")

    occupants = await uow.rabbits.list_by_hutch(farm_id, hutch.name)
    if len(occupants) >= MAX_OCCUPANTS:
        raise HutchFullError(
            f"Hutch {hutch.name} already holds {len(occupants)} rabbits",
            details={"hutch": hutch.name},
        )
    if any(o.gender == gender for o in occupants):
        raise ValidationError(
            "A shared hutch must hold a breeding pair of opposite genders",
            details={"field": "gender", "hutch": hutch.name},
        )


async def execute(
    uow: UnitOfWork,
    farm_id: UUID,
    payload: AddRabbitInput,
    cache: LayoutCache | None = None,
) -> Rabbit:
    valid_genders = {g.value for g in Gender}
    if payload.gender not in valid_genders:
        raise ValidationError(
            f"Invalid gender. Must be one of: {', '.join(sorted(valid_genders))}",
            details={"field": "gender"},
        )
    if payload.weight is not None and payload.weight < 0:
        raise ValidationError("Weight cannot be negative", details={"field": "weight"})

    tag = (payload.rabbit_id or "").strip()
    if not tag:
        tag = format_tag(await uow.rabbits.max_tag_number(farm_id, TAG_PREFIX) + 1)
    elif await uow.rabbits.get_by_tag(farm_id, tag):
        raise DuplicateNameError(f"Rabbit {tag} already exists", details={"rabbit_id": tag})

    if payload.hutch_name:
        await _ensure_admissible(uow, farm_id, payload.hutch_name, payload.gender)

    rabbit = Rabbit.create(
        farm_id=farm_id,
        rabbit_id=tag,
        gender=payload.gender,
        name=payload.name,
        breed=payload.breed,
        color=payload.color,
        birth_date=payload.birth_date,
        weight=payload.weight,
        hutch_name=payload.hutch_name,
        parent_male_id=payload.parent_male_id or None,
        parent_female_id=payload.parent_female_id or None,
        notes=payload.notes,
    )
    created = await uow.rabbits.add(rabbit)
    await uow.commit()
    if cache is not None:
        await cache.invalidate(farm_id)
    return created
