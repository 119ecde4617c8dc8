from __future__ import annotations

from dataclasses import dataclass
from uuid import UUID

from rabbitry.application.errors import DuplicateNameError, ValidationError
from rabbitry.application.interfaces.cache import LayoutCache
from rabbitry.application.interfaces.unit_of_work import UnitOfWork
from rabbitry.domain.models.row import Row
from rabbitry.domain.services.levels import MAX_LEVELS, generate_levels
from rabbitry.domain.services.row_names import next_row_name


@dataclass(slots=True)
class CreateRowInput:
    capacity: int
    level_count: int
    name: str | None = None
    description: str | None = None


def _validate(payload: CreateRowInput) -> None:
    if isinstance(payload.capacity, bool) or not isinstance(payload.capacity, int):
        raise ValidationError("Capacity must be an integer", details={"field": "capacity"})
    if payload.capacity <= 0:
        raise ValidationError("Capacity must be greater than zero", details={"field": "capacity"})
    if (
        isinstance(payload.level_count, bool)
        or not isinstance(payload.level_count, int)
        or not 1 <= payload.level_count <= MAX_LEVELS
    ):
        raise ValidationError(
            f"Level count must be an integer between 1 and {MAX_LEVELS}",
            details={"field": "level_count"},
        )


async def execute(
    uow: UnitOfWork,
    farm_id: UUID,
    payload: CreateRowInput,
    cache: LayoutCache | None = None,
) -> Row:
    _validate(payload)

    name = (payload.name or "").strip()
    if not name:
        existing = await uow.rows.list(farm_id)
        name = next_row_name(row.name for row in existing)

    if await uow.rows.get_by_name(farm_id, name):
        raise DuplicateNameError(
            f'Row "{name}" already exists. Please choose a different name.',
            details={"name": name},
        )

    description = payload.description or (
        f"{name} row with {payload.capacity} hutches across {payload.level_count} levels"
    )
    row = Row.create(
        farm_id=farm_id,
        name=name,
        capacity=payload.capacity,
        levels=generate_levels(payload.level_count),
        description=description,
    )
    created = await uow.rows.add(row)
    await uow.commit()
    if cache is not None:
        await cache.invalidate(farm_id)
    return created
