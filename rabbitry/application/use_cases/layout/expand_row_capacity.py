from __future__ import annotations

from dataclasses import dataclass
from uuid import UUID

from rabbitry.application.errors import InvalidExpansionError, NotFound
from rabbitry.application.interfaces.cache import LayoutCache
from rabbitry.application.interfaces.unit_of_work import UnitOfWork
from rabbitry.domain.models.row import MAX_EXPANSION_STEP, Row


@dataclass(slots=True)
class ExpandRowCapacityInput:
    row_id: UUID
    additional_capacity: int


def ensure_valid_step(additional_capacity: object) -> int:
    if isinstance(additional_capacity, bool) or not isinstance(additional_capacity, int):
        raise InvalidExpansionError(
            "Additional capacity must be a whole number",
            details={"additional_capacity": additional_capacity},
        )
    if not 1 <= additional_capacity <= MAX_EXPANSION_STEP:
        raise InvalidExpansionError(
            f"Additional capacity must be between 1 and {MAX_EXPANSION_STEP}",
            details={"additional_capacity": additional_capacity},
        )
    return additional_capacity


async def execute(
    uow: UnitOfWork,
    farm_id: UUID,
    payload: ExpandRowCapacityInput,
    cache: LayoutCache | None = None,
) -> Row:
    step = ensure_valid_step(payload.additional_capacity)

    row = await uow.rows.get(farm_id, payload.row_id)
    if not row:
        raise NotFound(f"Row {payload.row_id} not found")

    row.expand(step)
    updated = await uow.rows.update(row)
    await uow.commit()
    if cache is not None:
        await cache.invalidate(farm_id)
    return updated
