from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from uuid import UUID

from rabbitry.application.errors import NotFound, ValidationError
from rabbitry.application.interfaces.cache import LayoutCache
from rabbitry.application.interfaces.unit_of_work import UnitOfWork
from rabbitry.domain.models.hutch_removal import REMOVAL_REASONS, HutchRemoval
from rabbitry.domain.value_objects.rabbit_status import RabbitStatus


@dataclass(slots=True)
class RemoveRabbitInput:
    rabbit_id: str
    reason: str
    notes: str | None = None
    removed_at: datetime | None = None


def status_for_reason(reason: str) -> str:
    if reason == "Sale":
        return RabbitStatus.SOLD.value
    if reason.startswith("Death"):
        return RabbitStatus.DEAD.value
    return RabbitStatus.REMOVED.value


async def execute(
    uow: UnitOfWork,
    farm_id: UUID,
    payload: RemoveRabbitInput,
    cache: LayoutCache | None = None,
) -> HutchRemoval | None:
    """Take a rabbit out of the farm, appending to its hutch's removal history.

    Returns the history entry, or ``None`` when the rabbit had no hutch.
    """
    if payload.reason not in REMOVAL_REASONS:
        raise ValidationError(
            f"Invalid reason. Must be one of: {', '.join(REMOVAL_REASONS)}",
            details={"field": "reason"},
        )

    rabbit = await uow.rabbits.get_by_tag(farm_id, payload.rabbit_id)
    if not rabbit or not rabbit.is_active:
        raise NotFound(f"Rabbit {payload.rabbit_id} not found")

    entry = None
    if rabbit.hutch_name:
        entry = await uow.hutch_removals.add(
            HutchRemoval.create(
                farm_id=farm_id,
                hutch_name=rabbit.hutch_name,
                rabbit_id=rabbit.rabbit_id,
                reason=payload.reason,
                notes=payload.notes,
                removed_at=payload.removed_at,
            )
        )

    rabbit.move_out(status_for_reason(payload.reason))
    await uow.rabbits.update(rabbit)
    await uow.commit()
    if cache is not None:
        await cache.invalidate(farm_id)
    return entry
