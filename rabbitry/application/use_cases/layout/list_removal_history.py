from __future__ import annotations

from uuid import UUID

from rabbitry.application.interfaces.unit_of_work import UnitOfWork
from rabbitry.domain.models.hutch_removal import HutchRemoval


async def execute(uow: UnitOfWork, farm_id: UUID, hutch_name: str) -> list[HutchRemoval]:
    entries = await uow.hutch_removals.list_for_hutch(farm_id, hutch_name)
    return [e for e in entries if e.hutch_name == hutch_name and e.removed_at is not None]
