from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from uuid import UUID

from rabbitry.application.errors import ActiveBreedingRecordError, ValidationError
from rabbitry.application.interfaces.cache import LayoutCache
from rabbitry.application.interfaces.unit_of_work import UnitOfWork
from rabbitry.application.use_cases.breeding.guards import get_buck, get_doe
from rabbitry.domain.models.breeding_record import BreedingRecord
from rabbitry.domain.value_objects.breeding_state import InvalidTransition, conceive, mate
from rabbitry.utils.dates import parse_date, today_utc


@dataclass(slots=True)
class RecordMatingInput:
    doe_id: str
    buck_id: str
    mating_date: date | str
    notes: str | None = None
    # The farm treats a mating as a pregnancy until told otherwise
    confirm_pregnancy: bool = True


async def execute(
    uow: UnitOfWork,
    farm_id: UUID,
    payload: RecordMatingInput,
    cache: LayoutCache | None = None,
) -> BreedingRecord:
    mating_date = parse_date(payload.mating_date)
    if mating_date is None:
        raise ValidationError("Invalid mating date", details={"field": "mating_date"})
    if mating_date > today_utc():
        raise ValidationError("Mating date cannot be in the future", details={"field": "mating_date"})

    doe = await get_doe(uow, farm_id, payload.doe_id)
    buck = await get_buck(uow, farm_id, payload.buck_id)

    open_record = await uow.breeding_records.get_open_for_doe(farm_id, doe.rabbit_id)
    if open_record:
        raise ActiveBreedingRecordError(
            f"Doe {doe.rabbit_id} already has an open breeding record",
            details={"doe_id": doe.rabbit_id, "breeding_record_id": str(open_record.id)},
        )

    try:
        state = mate(doe.breeding_state(), mating_date)
        if payload.confirm_pregnancy:
            state = conceive(state)
    except InvalidTransition as exc:
        raise ValidationError(str(exc), details={"doe_id": doe.rabbit_id}) from exc

    record = BreedingRecord.create(
        farm_id=farm_id,
        doe_id=doe.rabbit_id,
        buck_id=buck.rabbit_id,
        mating_date=mating_date,
        notes=payload.notes,
    )
    created = await uow.breeding_records.add(record)

    if payload.confirm_pregnancy:
        doe.apply_breeding_state(state)
        await uow.rabbits.update(doe)

    await uow.commit()
    if cache is not None:
        await cache.invalidate(farm_id)
    return created
