from __future__ import annotations

from datetime import date
from uuid import UUID

from rabbitry.application.errors import ValidationError
from rabbitry.application.interfaces.cache import LayoutCache
from rabbitry.application.interfaces.unit_of_work import UnitOfWork
from rabbitry.application.use_cases.breeding.guards import get_doe
from rabbitry.domain.models.rabbit import Rabbit
from rabbitry.domain.value_objects.breeding_state import InvalidTransition, conceive


async def execute(
    uow: UnitOfWork,
    farm_id: UUID,
    doe_id: str,
    start_date: date | None = None,
    cache: LayoutCache | None = None,
) -> Rabbit:
    """Mated -> Pregnant. The pregnancy starts on the mating date unless given."""
    doe = await get_doe(uow, farm_id, doe_id)
    open_record = await uow.breeding_records.get_open_for_doe(farm_id, doe.rabbit_id)
    state = doe.breeding_state(open_record.mating_date if open_record else None)

    if start_date is not None and open_record and start_date < open_record.mating_date:
        raise ValidationError(
            "Pregnancy cannot start before the mating date", details={"field": "start_date"}
        )
    try:
        pregnant = conceive(state, start_date)
    except InvalidTransition as exc:
        raise ValidationError(str(exc), details={"doe_id": doe.rabbit_id}) from exc

    doe.apply_breeding_state(pregnant)
    updated = await uow.rabbits.update(doe)
    await uow.commit()
    if cache is not None:
        await cache.invalidate(farm_id)
    return updated
