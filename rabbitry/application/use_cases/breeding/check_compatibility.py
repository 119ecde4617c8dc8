from __future__ import annotations

from uuid import UUID

from rabbitry.application.interfaces.unit_of_work import UnitOfWork
from rabbitry.application.use_cases.breeding.guards import get_buck, get_doe
from rabbitry.domain.services.breeding_compatibility import CompatibilityResult, evaluate_pair


async def execute(uow: UnitOfWork, farm_id: UUID, doe_id: str, buck_id: str) -> CompatibilityResult:
    doe = await get_doe(uow, farm_id, doe_id)
    buck = await get_buck(uow, farm_id, buck_id)
    open_record = await uow.breeding_records.get_open_for_doe(farm_id, doe.rabbit_id)
    return evaluate_pair(doe, buck, open_record.mating_date if open_record else None)
