from __future__ import annotations

from uuid import UUID

from rabbitry.application.errors import NotFound, OccupiedHutchError
from rabbitry.application.interfaces.cache import LayoutCache
from rabbitry.application.interfaces.unit_of_work import UnitOfWork


async def execute(
    uow: UnitOfWork,
    farm_id: UUID,
    hutch_name: str,
    cache: LayoutCache | None = None,
) -> None:
    """Soft-delete an empty hutch. Its removal history stays queryable by name."""
    hutch = await uow.hutches.get_by_name(farm_id, hutch_name)
    if not hutch:
        raise NotFound(f"Hutch {hutch_name} not found")

    occupants = await uow.rabbits.list_by_hutch(farm_id, hutch.name)
    if occupants:
        raise OccupiedHutchError(
            f"Hutch {hutch.name} still holds {len(occupants)} rabbit(s). Remove them first.",
            details={"hutch": hutch.name, "occupants": [r.rabbit_id for r in occupants]},
        )

    hutch.soft_delete()
    await uow.hutches.update(hutch)
    await uow.commit()
    if cache is not None:
        await cache.invalidate(farm_id)
