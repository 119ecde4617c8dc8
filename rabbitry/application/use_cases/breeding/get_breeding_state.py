from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from uuid import UUID

from rabbitry.application.interfaces.unit_of_work import UnitOfWork
from rabbitry.application.use_cases.breeding.guards import get_doe
from rabbitry.domain.models.breeding_record import BreedingRecord
from rabbitry.domain.value_objects.breeding_state import BreedingState, is_due
from rabbitry.utils.dates import today_utc


@dataclass(slots=True)
class BreedingStatus:
    doe_id: str
    state: BreedingState
    is_due: bool
    open_record: BreedingRecord | None = None


async def execute(
    uow: UnitOfWork,
    farm_id: UUID,
    doe_id: str,
    today: date | None = None,
) -> BreedingStatus:
    doe = await get_doe(uow, farm_id, doe_id)
    open_record = await uow.breeding_records.get_open_for_doe(farm_id, doe.rabbit_id)
    state = doe.breeding_state(open_record.mating_date if open_record else None)
    return BreedingStatus(
        doe_id=doe.rabbit_id,
        state=state,
        is_due=is_due(state, today or today_utc()),
        open_record=open_record,
    )
