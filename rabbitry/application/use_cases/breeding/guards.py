from __future__ import annotations

from uuid import UUID

from rabbitry.application.errors import NotFound, ValidationError
from rabbitry.application.interfaces.unit_of_work import UnitOfWork
from rabbitry.domain.models.rabbit import Rabbit
from rabbitry.domain.value_objects.gender import Gender


async def get_doe(uow: UnitOfWork, farm_id: UUID, doe_id: str) -> Rabbit:
    doe = await uow.rabbits.get_by_tag(farm_id, doe_id)
    if not doe:
        raise NotFound(f"Rabbit {doe_id} not found")
    if doe.gender != Gender.FEMALE.value:
        raise ValidationError(f"Rabbit {doe_id} is not a doe", details={"field": "doe_id"})
    if not doe.is_active:
        raise ValidationError(f"Rabbit {doe_id} is no longer active", details={"field": "doe_id"})
    return doe


async def get_buck(uow: UnitOfWork, farm_id: UUID, buck_id: str) -> Rabbit:
    buck = await uow.rabbits.get_by_tag(farm_id, buck_id)
    if not buck:
        raise NotFound(f"Rabbit {buck_id} not found")
    if buck.gender != Gender.MALE.value:
        raise ValidationError(f"Rabbit {buck_id} is not a buck", details={"field": "buck_id"})
    return buck
