from __future__ import annotations

import math
from dataclasses import dataclass, field
from datetime import date
from uuid import UUID

from rabbitry.application.errors import ValidationError
from rabbitry.application.interfaces.cache import LayoutCache
from rabbitry.application.interfaces.unit_of_work import UnitOfWork
from rabbitry.application.use_cases.breeding.guards import get_buck, get_doe
from rabbitry.domain.models.breeding_record import BreedingRecord
from rabbitry.domain.models.kit import Kit
from rabbitry.domain.value_objects.breeding_state import InvalidTransition, deliver
from rabbitry.domain.value_objects.gender import Gender
from rabbitry.domain.value_objects.rabbit_status import KitStatus
from rabbitry.utils.dates import parse_date, today_utc


@dataclass(slots=True)
class KitInput:
    kit_number: str
    status: str
    birth_weight: float | str | None = None
    gender: str | None = None
    color: str | None = None
    notes: str | None = None


@dataclass(slots=True)
class RecordLitterInput:
    doe_id: str
    actual_birth_date: date | str
    kits: list[KitInput] = field(default_factory=list)
    buck_id: str | None = None
    notes: str | None = None


@dataclass(slots=True)
class RecordLitterOutput:
    breeding_record_id: UUID
    created_kits: list[Kit]


@dataclass(slots=True)
class _CleanKit:
    kit_number: str
    status: str
    birth_weight: float | None
    gender: str | None
    color: str | None
    notes: str | None


def _kit_error(message: str, field_name: str, index: int, kit_number: str | None) -> ValidationError:
    return ValidationError(
        message,
        details={"field": field_name, "kit": kit_number or f"#{index + 1}", "index": index},
    )


def _parse_weight(value: float | str | None) -> float | None:
    if value is None:
        return None
    if isinstance(value, str):
        if not value.strip():
            return None
        value = value.strip()
    if isinstance(value, bool):
        raise ValueError("not a number")
    weight = float(value)
    if not math.isfinite(weight) or weight <= 0:
        raise ValueError("must be positive")
    return weight


def validate_litter(payload: RecordLitterInput) -> tuple[date, list[_CleanKit]]:
    """Validate the whole submission before anything is written."""
    birth_date = parse_date(payload.actual_birth_date)
    if birth_date is None:
        raise ValidationError("Invalid actual birth date", details={"field": "actual_birth_date"})
    if birth_date > today_utc():
        raise ValidationError(
            "Birth date cannot be in the future", details={"field": "actual_birth_date"}
        )

    if not payload.kits:
        raise ValidationError("A litter needs at least one kit", details={"field": "kits"})

    valid_statuses = {s.value for s in KitStatus}
    valid_genders = {g.value for g in Gender}
    seen: set[str] = set()
    cleaned: list[_CleanKit] = []
    for index, kit in enumerate(payload.kits):
        number = str(kit.kit_number).strip() if kit.kit_number is not None else ""
        if not number:
            raise _kit_error("Kit number is required", "kit_number", index, None)

        status = (kit.status or "").strip().lower()
        if not status:
            raise _kit_error("Kit status is required", "status", index, number)
        if status not in valid_statuses:
            raise _kit_error(
                f"Invalid status. Must be one of: {', '.join(sorted(valid_statuses))}",
                "status",
                index,
                number,
            )

        try:
            weight = _parse_weight(kit.birth_weight)
        except (TypeError, ValueError):
            raise _kit_error(
                "Birth weight must be a number greater than zero", "birth_weight", index, number
            ) from None

        gender = (kit.gender or "").strip().lower() or None
        if gender is not None and gender not in valid_genders:
            raise _kit_error("Invalid kit gender", "gender", index, number)

        if number in seen:
            raise _kit_error(f"Duplicate kit number {number}", "kit_number", index, number)
        seen.add(number)

        cleaned.append(
            _CleanKit(
                kit_number=number,
                status=status,
                birth_weight=weight,
                gender=gender,
                color=(kit.color or "").strip() or None,
                notes=kit.notes or None,
            )
        )
    return birth_date, cleaned


async def execute(
    uow: UnitOfWork,
    farm_id: UUID,
    payload: RecordLitterInput,
    cache: LayoutCache | None = None,
) -> RecordLitterOutput:
    birth_date, kits = validate_litter(payload)

    doe = await get_doe(uow, farm_id, payload.doe_id)
    buck = await get_buck(uow, farm_id, payload.buck_id) if payload.buck_id else None

    open_record = await uow.breeding_records.get_open_for_doe(farm_id, doe.rabbit_id)
    if open_record and birth_date < open_record.mating_date:
        raise ValidationError(
            "Birth date cannot be earlier than the mating date",
            details={"field": "actual_birth_date", "mating_date": open_record.mating_date.isoformat()},
        )

    state = doe.breeding_state(open_record.mating_date if open_record else None)
    try:
        delivered = deliver(state, birth_date)
    except InvalidTransition as exc:
        raise ValidationError(str(exc), details={"doe_id": doe.rabbit_id}) from exc

    if open_record is None:
        record = BreedingRecord.create_for_birth(
            farm_id=farm_id,
            doe_id=doe.rabbit_id,
            actual_birth_date=birth_date,
            buck_id=buck.rabbit_id if buck else None,
            notes=payload.notes,
        )
        record.close(birth_date, len(kits))
        record = await uow.breeding_records.add(record)
    else:
        record = open_record
        if buck and record.buck_id and buck.rabbit_id != record.buck_id:
            raise ValidationError(
                f"Doe {doe.rabbit_id} was mated with {record.buck_id}, not {buck.rabbit_id}",
                details={"field": "buck_id", "breeding_record_id": str(record.id)},
            )
        if buck and not record.buck_id:
            record.buck_id = buck.rabbit_id
        record.close(birth_date, len(kits))
        record = await uow.breeding_records.update(record)

    doe.record_delivery(delivered, len(kits))
    await uow.rabbits.update(doe)

    father = buck.rabbit_id if buck else record.buck_id
    created = await uow.kits.add_many(
        [
            Kit.create(
                farm_id=farm_id,
                breeding_record_id=record.id,
                kit_number=kit.kit_number,
                actual_birth_date=birth_date,
                parent_female_id=doe.rabbit_id,
                parent_male_id=father,
                status=kit.status,
                birth_weight=kit.birth_weight,
                gender=kit.gender,
                color=kit.color,
                notes=kit.notes,
            )
            for kit in kits
        ]
    )
    await uow.commit()
    if cache is not None:
        await cache.invalidate(farm_id)
    return RecordLitterOutput(breeding_record_id=record.id, created_kits=created)
