from __future__ import annotations

from datetime import date
from uuid import UUID

from rabbitry.application.interfaces.unit_of_work import UnitOfWork
from rabbitry.domain.services.breeding_alerts import BreedingAlert, collect_alerts
from rabbitry.domain.value_objects.gender import Gender
from rabbitry.utils.dates import today_utc


async def execute(uow: UnitOfWork, farm_id: UUID, today: date | None = None) -> list[BreedingAlert]:
    does = await uow.rabbits.list(farm_id, gender=Gender.FEMALE.value)
    open_records = await uow.breeding_records.list_open(farm_id)
    open_matings = {record.doe_id: record.mating_date for record in open_records}
    return collect_alerts(does, today or today_utc(), open_matings)
