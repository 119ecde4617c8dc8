from __future__ import annotations

from datetime import date, timedelta
from uuid import uuid4

import pytest

from rabbitry.application.errors import ActiveBreedingRecordError, NotFound, ValidationError
from rabbitry.application.use_cases.breeding import (
    check_compatibility,
    confirm_pregnancy,
    get_breeding_state,
    list_breeding_alerts,
    record_litter,
    record_mating,
)
from rabbitry.application.use_cases.layout import add_hutch, create_row, get_hutch_layout
from rabbitry.application.use_cases.rabbits import add_rabbit
from rabbitry.domain.services.breeding_alerts import AlertType
from rabbitry.domain.value_objects.breeding_state import Available, Mated, Pregnant
from rabbitry.infrastructure.cache.memory_layout_cache import InMemoryLayoutCache
from rabbitry.utils.dates import today_utc


async def _pair(uow, farm_id, doe="RB-010", buck="RB-020", **doe_fields):
    await add_rabbit.execute(
        uow, farm_id, add_rabbit.AddRabbitInput(gender="female", rabbit_id=doe, **doe_fields)
    )
    await add_rabbit.execute(uow, farm_id, add_rabbit.AddRabbitInput(gender="male", rabbit_id=buck))


def _kits(*numbers, status="alive"):
    return [record_litter.KitInput(kit_number=n, status=status) for n in numbers]


async def test_mars_end_to_end(uow):
    farm_id = uuid4()
    row = await create_row.execute(
        uow, farm_id, create_row.CreateRowInput(capacity=9, level_count=3, name="Mars")
    )
    layout = await get_hutch_layout.execute(uow, farm_id)
    assert layout.rows[0].distribution == {"A": 3, "B": 3, "C": 3}

    hutch = await add_hutch.execute(uow, farm_id, add_hutch.AddHutchInput(row.id, "A"))
    assert hutch.name == "Mars-A1"
    await _pair(uow, farm_id, hutch_name="Mars-A1")

    record = await record_mating.execute(
        uow,
        farm_id,
        record_mating.RecordMatingInput("RB-010", "RB-020", mating_date="2025-01-01"),
    )
    assert record.expected_birth_date == date(2025, 2, 1)
    doe = await uow.rabbits.get_by_tag(farm_id, "RB-010")
    assert doe.is_pregnant is True
    assert doe.expected_birth_date == date(2025, 2, 1)

    result = await record_litter.execute(
        uow,
        farm_id,
        record_litter.RecordLitterInput(
            doe_id="RB-010",
            actual_birth_date=date(2025, 2, 1),
            kits=_kits("K-1", "K-2", "K-3", "K-4"),
        ),
    )
    assert result.breeding_record_id == record.id
    assert len(result.created_kits) == 4
    assert {k.parent_female_id for k in result.created_kits} == {"RB-010"}
    assert {k.parent_male_id for k in result.created_kits} == {"RB-020"}

    closed = await uow.breeding_records.get(farm_id, record.id)
    assert closed.number_of_kits == 4
    assert closed.actual_birth_date == date(2025, 2, 1)

    doe = await uow.rabbits.get_by_tag(farm_id, "RB-010")
    assert doe.is_pregnant is False
    assert doe.pregnancy_start_date is None
    assert doe.last_birth_date == date(2025, 2, 1)
    assert (doe.total_litters, doe.total_kits) == (1, 4)
    assert len(await uow.kits.list_by_record(farm_id, record.id)) == 4


async def test_second_mating_blocked_while_record_open(uow):
    farm_id = uuid4()
    await _pair(uow, farm_id)
    payload = record_mating.RecordMatingInput("RB-010", "RB-020", date(2025, 1, 1))
    await record_mating.execute(uow, farm_id, payload)
    with pytest.raises(ActiveBreedingRecordError):
        await record_mating.execute(uow, farm_id, payload)
    assert len(uow.breeding_records.items) == 1


@pytest.mark.parametrize("mating_date", ["not-a-date", today_utc() + timedelta(days=1)])
async def test_mating_date_is_validated(uow, mating_date):
    farm_id = uuid4()
    await _pair(uow, farm_id)
    with pytest.raises(ValidationError):
        await record_mating.execute(
            uow, farm_id, record_mating.RecordMatingInput("RB-010", "RB-020", mating_date)
        )


async def test_mating_checks_genders(uow):
    farm_id = uuid4()
    await _pair(uow, farm_id)
    with pytest.raises(ValidationError):
        await record_mating.execute(
            uow, farm_id, record_mating.RecordMatingInput("RB-020", "RB-010", date(2025, 1, 1))
        )
    with pytest.raises(NotFound):
        await record_mating.execute(
            uow, farm_id, record_mating.RecordMatingInput("RB-010", "RB-099", date(2025, 1, 1))
        )


async def test_unconfirmed_mating_then_confirm(uow):
    farm_id = uuid4()
    await _pair(uow, farm_id)
    await record_mating.execute(
        uow,
        farm_id,
        record_mating.RecordMatingInput(
            "RB-010", "RB-020", date(2025, 1, 1), confirm_pregnancy=False
        ),
    )
    status = await get_breeding_state.execute(uow, farm_id, "RB-010", today=date(2025, 1, 5))
    assert status.state == Mated(since=date(2025, 1, 1))
    assert status.is_due is False

    with pytest.raises(ValidationError):
        await confirm_pregnancy.execute(uow, farm_id, "RB-010", start_date=date(2024, 12, 30))

    doe = await confirm_pregnancy.execute(uow, farm_id, "RB-010", start_date=date(2025, 1, 2))
    assert doe.is_pregnant is True
    assert doe.expected_birth_date == date(2025, 2, 2)

    status = await get_breeding_state.execute(uow, farm_id, "RB-010", today=date(2025, 1, 28))
    assert status.state == Pregnant(since=date(2025, 1, 2), due=date(2025, 2, 2))
    assert status.is_due is True

    with pytest.raises(ValidationError):
        await confirm_pregnancy.execute(uow, farm_id, "RB-010")


async def test_confirm_requires_mating(uow):
    farm_id = uuid4()
    await _pair(uow, farm_id)
    with pytest.raises(ValidationError):
        await confirm_pregnancy.execute(uow, farm_id, "RB-010")
    status = await get_breeding_state.execute(uow, farm_id, "RB-010")
    assert status.state == Available()
    assert status.open_record is None


async def test_duplicate_kit_numbers_create_nothing(uow):
    farm_id = uuid4()
    await _pair(uow, farm_id)
    commits = uow.commits
    with pytest.raises(ValidationError) as excinfo:
        await record_litter.execute(
            uow,
            farm_id,
            record_litter.RecordLitterInput(
                doe_id="RB-010", actual_birth_date="2025-02-01", kits=_kits("RB-001", "RB-001")
            ),
        )
    assert excinfo.value.details["kit"] == "RB-001"
    assert excinfo.value.details["index"] == 1
    assert uow.kits.items == []
    assert uow.breeding_records.items == {}
    assert uow.commits == commits


@pytest.mark.parametrize(
    "kits,field_name",
    [
        ([], "kits"),
        ([record_litter.KitInput(kit_number="", status="alive")], "kit_number"),
        ([record_litter.KitInput(kit_number="K-1", status="")], "status"),
        ([record_litter.KitInput(kit_number="K-1", status="sleeping")], "status"),
        ([record_litter.KitInput("K-1", "alive", birth_weight=0)], "birth_weight"),
        ([record_litter.KitInput("K-1", "alive", birth_weight="abc")], "birth_weight"),
        ([record_litter.KitInput(kit_number="K-1", status="alive", gender="other")], "gender"),
    ],
)
async def test_litter_validation(uow, kits, field_name):
    farm_id = uuid4()
    await _pair(uow, farm_id)
    with pytest.raises(ValidationError) as excinfo:
        await record_litter.execute(
            uow,
            farm_id,
            record_litter.RecordLitterInput("RB-010", "2025-02-01", kits=kits),
        )
    assert excinfo.value.details["field"] == field_name
    assert uow.kits.items == []


async def test_litter_date_is_validated(uow):
    farm_id = uuid4()
    await _pair(uow, farm_id)
    future = record_litter.RecordLitterInput(
        doe_id="RB-010", actual_birth_date=today_utc() + timedelta(days=1), kits=_kits("K-1")
    )
    with pytest.raises(ValidationError):
        await record_litter.execute(uow, farm_id, future)

    await record_mating.execute(
        uow, farm_id, record_mating.RecordMatingInput("RB-010", "RB-020", date(2025, 1, 10))
    )
    early = record_litter.RecordLitterInput(
        doe_id="RB-010", actual_birth_date=date(2025, 1, 5), kits=_kits("K-1")
    )
    with pytest.raises(ValidationError):
        await record_litter.execute(uow, farm_id, early)


async def test_litter_normalises_kit_fields(uow):
    farm_id = uuid4()
    await _pair(uow, farm_id)
    result = await record_litter.execute(
        uow,
        farm_id,
        record_litter.RecordLitterInput(
            doe_id="RB-010",
            actual_birth_date="2025-02-01",
            kits=[
                record_litter.KitInput(
                    kit_number=" K-1 ", status="Alive", birth_weight="55.5", gender="Female"
                ),
                record_litter.KitInput(kit_number="K-2", status="dead", birth_weight=""),
            ],
        ),
    )
    first, second = result.created_kits
    assert (first.kit_number, first.status, first.birth_weight, first.gender) == (
        "K-1",
        "alive",
        55.5,
        "female",
    )
    assert second.birth_weight is None
    assert second.status == "dead"


async def test_litter_without_mating_opens_back_dated_record(uow):
    farm_id = uuid4()
    await _pair(uow, farm_id)
    result = await record_litter.execute(
        uow,
        farm_id,
        record_litter.RecordLitterInput(
            doe_id="RB-010",
            actual_birth_date=date(2025, 3, 10),
            buck_id="RB-020",
            kits=_kits("K-1", "K-2"),
        ),
    )
    record = await uow.breeding_records.get(farm_id, result.breeding_record_id)
    assert record.mating_date == date(2025, 2, 7)
    assert record.expected_birth_date == date(2025, 3, 10)
    assert record.actual_birth_date == date(2025, 3, 10)
    assert record.buck_id == "RB-020"
    assert record.number_of_kits == 2
    assert {k.parent_male_id for k in result.created_kits} == {"RB-020"}


async def test_second_litter_uses_new_record(uow):
    farm_id = uuid4()
    await _pair(uow, farm_id)
    await record_mating.execute(
        uow, farm_id, record_mating.RecordMatingInput("RB-010", "RB-020", date(2025, 1, 1))
    )
    first = await record_litter.execute(
        uow,
        farm_id,
        record_litter.RecordLitterInput(
            doe_id="RB-010", actual_birth_date=date(2025, 2, 1), kits=_kits("K-1")
        ),
    )
    await record_mating.execute(
        uow, farm_id, record_mating.RecordMatingInput("RB-010", "RB-020", date(2025, 4, 1))
    )
    second = await record_litter.execute(
        uow,
        farm_id,
        record_litter.RecordLitterInput(
            doe_id="RB-010", actual_birth_date=date(2025, 5, 2), kits=_kits("K-1", "K-2")
        ),
    )
    assert second.breeding_record_id != first.breeding_record_id
    records = await uow.breeding_records.list_for_doe(farm_id, "RB-010")
    assert [r.number_of_kits for r in records] == [2, 1]

    doe = await uow.rabbits.get_by_tag(farm_id, "RB-010")
    assert (doe.total_litters, doe.total_kits) == (2, 3)
    assert doe.last_birth_date == date(2025, 5, 2)


async def test_repeat_litter_without_mating_opens_new_record(uow):
    farm_id = uuid4()
    await _pair(uow, farm_id)
    await record_mating.execute(
        uow, farm_id, record_mating.RecordMatingInput("RB-010", "RB-020", date(2025, 1, 1))
    )
    payload = record_litter.RecordLitterInput("RB-010", date(2025, 2, 1), kits=_kits("K-1"))
    first = await record_litter.execute(uow, farm_id, payload)
    second = await record_litter.execute(uow, farm_id, payload)

    assert second.breeding_record_id != first.breeding_record_id
    closed = await uow.breeding_records.get(farm_id, first.breeding_record_id)
    assert closed.number_of_kits == 1
    reopened = await uow.breeding_records.get(farm_id, second.breeding_record_id)
    assert reopened.actual_birth_date == date(2025, 2, 1)
    assert reopened.buck_id is None
    doe = await uow.rabbits.get_by_tag(farm_id, "RB-010")
    assert doe.is_pregnant is False
    assert doe.total_litters == 2


async def test_check_compatibility(uow):
    farm_id = uuid4()
    await _pair(uow, farm_id, parent_male_id="RB-020")
    result = await check_compatibility.execute(uow, farm_id, "RB-010", "RB-020")
    assert result.compatible is False

    await add_rabbit.execute(
        uow, farm_id, add_rabbit.AddRabbitInput(gender="male", rabbit_id="RB-030")
    )
    result = await check_compatibility.execute(uow, farm_id, "RB-010", "RB-030")
    assert result.compatible is True


async def test_list_breeding_alerts(uow):
    farm_id = uuid4()
    await _pair(uow, farm_id)
    today = today_utc()
    await record_mating.execute(
        uow,
        farm_id,
        record_mating.RecordMatingInput("RB-010", "RB-020", today - timedelta(days=28)),
    )
    await add_rabbit.execute(
        uow, farm_id, add_rabbit.AddRabbitInput(gender="female", rabbit_id="RB-011")
    )

    alerts = await list_breeding_alerts.execute(uow, farm_id, today=today)
    by_doe = {(a.rabbit_id, a.type) for a in alerts}
    assert ("RB-010", AlertType.NESTING_BOX_NEEDED) in by_doe
    assert ("RB-010", AlertType.BIRTH_EXPECTED) in by_doe
    assert ("RB-011", AlertType.READY_FOR_SERVICING) in by_doe
    assert all(a.rabbit_id != "RB-020" for a in alerts)


async def test_litter_rejects_a_buck_other_than_the_mated_one(uow):
    farm_id = uuid4()
    await _pair(uow, farm_id)
    await add_rabbit.execute(
        uow, farm_id, add_rabbit.AddRabbitInput(gender="male", rabbit_id="RB-030")
    )
    record = await record_mating.execute(
        uow, farm_id, record_mating.RecordMatingInput("RB-010", "RB-020", date(2025, 1, 1))
    )
    commits = uow.commits

    with pytest.raises(ValidationError) as exc_info:
        await record_litter.execute(
            uow,
            farm_id,
            record_litter.RecordLitterInput(
                doe_id="RB-010",
                actual_birth_date=date(2025, 2, 1),
                kits=_kits("K-1"),
                buck_id="RB-030",
            ),
        )
    assert exc_info.value.details["field"] == "buck_id"
    assert uow.commits == commits
    assert uow.kits.items == []
    still_open = await uow.breeding_records.get(farm_id, record.id)
    assert still_open.is_open
    assert still_open.buck_id == "RB-020"


async def test_litter_accepts_the_mated_buck_explicitly(uow):
    farm_id = uuid4()
    await _pair(uow, farm_id)
    record = await record_mating.execute(
        uow, farm_id, record_mating.RecordMatingInput("RB-010", "RB-020", date(2025, 1, 1))
    )
    result = await record_litter.execute(
        uow,
        farm_id,
        record_litter.RecordLitterInput(
            doe_id="RB-010",
            actual_birth_date=date(2025, 2, 1),
            kits=_kits("K-1"),
            buck_id="RB-020",
        ),
    )
    assert result.breeding_record_id == record.id
    closed = await uow.breeding_records.get(farm_id, record.id)
    assert closed.buck_id == "RB-020"
    assert {k.parent_male_id for k in result.created_kits} == {"RB-020"}


async def test_mated_doe_is_neither_compatible_nor_ready_for_servicing(uow):
    farm_id = uuid4()
    await _pair(uow, farm_id)
    await add_rabbit.execute(
        uow, farm_id, add_rabbit.AddRabbitInput(gender="male", rabbit_id="RB-030")
    )
    today = today_utc()
    await record_mating.execute(
        uow,
        farm_id,
        record_mating.RecordMatingInput(
            "RB-010", "RB-020", today - timedelta(days=3), confirm_pregnancy=False
        ),
    )

    result = await check_compatibility.execute(uow, farm_id, "RB-010", "RB-030")
    assert result.compatible is False
    assert result.reason == "Doe already has an open breeding record"

    alerts = await list_breeding_alerts.execute(uow, farm_id, today=today)
    assert all(a.rabbit_id != "RB-010" for a in alerts)

    with pytest.raises(ActiveBreedingRecordError):
        await record_mating.execute(
            uow, farm_id, record_mating.RecordMatingInput("RB-010", "RB-030", today)
        )


async def test_mating_and_confirmation_refresh_cached_layout(uow):
    farm_id = uuid4()
    row = await create_row.execute(
        uow, farm_id, create_row.CreateRowInput(capacity=2, level_count=1, name="Mars")
    )
    await add_hutch.execute(uow, farm_id, add_hutch.AddHutchInput(row.id, "A"))
    await _pair(uow, farm_id, hutch_name="Mars-A1")
    cache = InMemoryLayoutCache(ttl_seconds=60)

    first = await get_hutch_layout.execute(uow, farm_id, cache=cache)
    await record_mating.execute(
        uow,
        farm_id,
        record_mating.RecordMatingInput(
            "RB-010", "RB-020", date(2025, 1, 1), confirm_pregnancy=False
        ),
        cache=cache,
    )
    assert await cache.get(farm_id) is None

    await get_hutch_layout.execute(uow, farm_id, cache=cache)
    await confirm_pregnancy.execute(uow, farm_id, "RB-010", cache=cache)
    assert await cache.get(farm_id) is None

    refreshed = await get_hutch_layout.execute(uow, farm_id, cache=cache)
    assert refreshed is not first
    doe = next(
        r for h in refreshed.rows[0].hutches for r in h.occupants if r.rabbit_id == "RB-010"
    )
    assert doe.is_pregnant is True
