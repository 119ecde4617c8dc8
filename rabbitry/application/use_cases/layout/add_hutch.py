from __future__ import annotations

from dataclasses import dataclass
from uuid import UUID

from rabbitry.application.errors import (
    CapacityExceededError,
    DuplicateHutchError,
    NotFound,
    ValidationError,
)
from rabbitry.application.interfaces.cache import LayoutCache
from rabbitry.application.interfaces.unit_of_work import UnitOfWork
from rabbitry.domain.models.hutch import DEFAULT_MATERIAL, DEFAULT_SIZE, Hutch, compose_hutch_name
from rabbitry.domain.services.occupancy import next_free_position


@dataclass(slots=True)
class AddHutchInput:
    row_id: UUID
    level: str
    position: int | None = None
    size: str = DEFAULT_SIZE
    material: str = DEFAULT_MATERIAL
    features: list[str] | None = None


def _clean_features(features: list[str] | None) -> list[str]:
    cleaned: list[str] = []
    for feature in features or []:
        value = feature.strip()
        if value and value not in cleaned:
            cleaned.append(value)
    return cleaned


async def execute(
    uow: UnitOfWork,
    farm_id: UUID,
    payload: AddHutchInput,
    cache: LayoutCache | None = None,
) -> Hutch:
    row = await uow.rows.get(farm_id, payload.row_id)
    if not row:
        raise NotFound(f"Row {payload.row_id} not found")

    level = (payload.level or "").strip().upper()
    if level not in row.levels:
        raise ValidationError(
            f"Level must be one of: {', '.join(row.levels)}",
            details={"field": "level", "row": row.name},
        )

    hutch_count = await uow.hutches.count_by_row(farm_id, row.id)
    if hutch_count >= row.capacity:
        raise CapacityExceededError(
            f'Row "{row.name}" is full ({hutch_count}/{row.capacity} hutches). '
            "Expand its capacity or add a new row first.",
            details={"row": row.name, "capacity": row.capacity, "hutches": hutch_count},
        )

    position = payload.position
    if position is None:
        existing = await uow.hutches.list_by_row(farm_id, row.id)
        position = next_free_position(h.position for h in existing if h.level == level)
    elif isinstance(position, bool) or not isinstance(position, int) or position < 1:
        raise ValidationError("Position must be a positive integer", details={"field": "position"})

    name = compose_hutch_name(row.name, level, position)
    if await uow.hutches.get_by_name(farm_id, name):
        raise DuplicateHutchError(f"Hutch {name} already exists", details={"hutch": name})

    hutch = Hutch.create(
        farm_id=farm_id,
        row_id=row.id,
        row_name=row.name,
        level=level,
        position=position,
        size=payload.size,
        material=payload.material,
        features=_clean_features(payload.features),
    )
    created = await uow.hutches.add(hutch)
    await uow.commit()
    if cache is not None:
        await cache.invalidate(farm_id)
    return created
