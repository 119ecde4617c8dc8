from __future__ import annotations

from dataclasses import replace
from types import SimpleNamespace

import pytest

from rabbitry.application.errors import (
    ActiveBreedingRecordError,
    ConflictError,
    DuplicateHutchError,
    DuplicateNameError,
)


class InMemoryRowsRepo:
    def __init__(self) -> None:
        self.items = {}

    async def add(self, row):
        if any(r.farm_id == row.farm_id and r.name == row.name for r in self.items.values()):
            raise DuplicateNameError(f'Row "{row.name}" already exists')
        self.items[row.id] = replace(row)
        return replace(row)

    async def get(self, farm_id, row_id):
        row = self.items.get(row_id)
        return replace(row) if row and row.farm_id == farm_id else None

    async def get_by_name(self, farm_id, name):
        for row in self.items.values():
            if row.farm_id == farm_id and row.name == name:
                return replace(row)
        return None

    async def list(self, farm_id):
        return [replace(r) for r in self.items.values() if r.farm_id == farm_id]

    async def update(self, row):
        self.items[row.id] = replace(row)
        return replace(row)


class InMemoryHutchesRepo:
    def __init__(self) -> None:
        self.items = {}

    def _active(self, farm_id):
        return [h for h in self.items.values() if h.farm_id == farm_id and not h.is_deleted]

    async def add(self, hutch):
        if any(h.name == hutch.name for h in self._active(hutch.farm_id)):
            raise DuplicateHutchError(f"Hutch {hutch.name} already exists")
        self.items[hutch.id] = replace(hutch)
        return replace(hutch)

    async def get_by_name(self, farm_id, name):
        for hutch in self._active(farm_id):
            if hutch.name == name:
                return replace(hutch)
        return None

    async def list_by_row(self, farm_id, row_id):
        hutches = [h for h in self._active(farm_id) if h.row_id == row_id]
        return [replace(h) for h in sorted(hutches, key=lambda h: (h.level, h.position))]

    async def count_by_row(self, farm_id, row_id):
        return len([h for h in self._active(farm_id) if h.row_id == row_id])

    async def update(self, hutch):
        self.items[hutch.id] = replace(hutch)
        return replace(hutch)


class InMemoryHutchRemovalsRepo:
    def __init__(self) -> None:
        self.items = []

    async def add(self, entry):
        self.items.append(entry)
        return entry

    async def list_for_hutch(self, farm_id, hutch_name):
        entries = [
            e
            for e in self.items
            if e.farm_id == farm_id and e.hutch_name == hutch_name and e.removed_at is not None
        ]
        return sorted(entries, key=lambda e: e.removed_at, reverse=True)


class InMemoryRabbitsRepo:
    def __init__(self) -> None:
        self.items = {}

    async def add(self, rabbit):
        key = (rabbit.farm_id, rabbit.rabbit_id)
        if key in self.items:
            raise DuplicateNameError(f"Rabbit {rabbit.rabbit_id} already exists")
        self.items[key] = replace(rabbit)
        return replace(rabbit)

    async def get_by_tag(self, farm_id, rabbit_id):
        rabbit = self.items.get((farm_id, rabbit_id))
        return replace(rabbit) if rabbit else None

    async def list(self, farm_id, *, gender=None, active_only=True):
        result = []
        for rabbit in self.items.values():
            if rabbit.farm_id != farm_id:
                continue
            if gender and rabbit.gender != gender:
                continue
            if active_only and not rabbit.is_active:
                continue
            result.append(replace(rabbit))
        return sorted(result, key=lambda r: r.rabbit_id)

    async def list_by_hutch(self, farm_id, hutch_name):
        return [r for r in await self.list(farm_id) if r.hutch_name == hutch_name]

    async def max_tag_number(self, farm_id, prefix="RB-"):
        numbers = [
            int(tag[len(prefix):])
            for (fid, tag) in self.items
            if fid == farm_id and tag.startswith(prefix) and tag[len(prefix):].isdigit()
        ]
        return max(numbers, default=0)

    async def update(self, rabbit):
        self.items[(rabbit.farm_id, rabbit.rabbit_id)] = replace(rabbit)
        return replace(rabbit)


class InMemoryBreedingRecordsRepo:
    def __init__(self) -> None:
        self.items = {}

    async def add(self, record):
        if record.is_open and await self.get_open_for_doe(record.farm_id, record.doe_id):
            raise ActiveBreedingRecordError(f"Doe {record.doe_id} already has an open record")
        self.items[record.id] = replace(record)
        return replace(record)

    async def get(self, farm_id, record_id):
        record = self.items.get(record_id)
        return replace(record) if record and record.farm_id == farm_id else None

    async def get_open_for_doe(self, farm_id, doe_id):
        for record in self.items.values():
            if record.farm_id == farm_id and record.doe_id == doe_id and record.is_open:
                return replace(record)
        return None

    async def list_for_doe(self, farm_id, doe_id):
        records = [r for r in self.items.values() if r.farm_id == farm_id and r.doe_id == doe_id]
        return [replace(r) for r in sorted(records, key=lambda r: r.mating_date, reverse=True)]

    async def list_open(self, farm_id):
        records = [r for r in self.items.values() if r.farm_id == farm_id and r.is_open]
        return [replace(r) for r in sorted(records, key=lambda r: r.doe_id)]

    async def update(self, record):
        self.items[record.id] = replace(record)
        return replace(record)


class InMemoryKitsRepo:
    def __init__(self) -> None:
        self.items = []

    async def add_many(self, kits):
        numbers = [(k.breeding_record_id, k.kit_number) for k in kits]
        existing = {(k.breeding_record_id, k.kit_number) for k in self.items}
        if len(set(numbers)) != len(numbers) or existing.intersection(numbers):
            raise ConflictError("Kit numbers must be unique within a litter")
        self.items.extend(kits)
        return list(kits)

    async def list_by_record(self, farm_id, breeding_record_id):
        return [
            k for k in self.items if k.farm_id == farm_id and k.breeding_record_id == breeding_record_id
        ]


def make_uow():
    uow = SimpleNamespace(
        rows=InMemoryRowsRepo(),
        hutches=InMemoryHutchesRepo(),
        hutch_removals=InMemoryHutchRemovalsRepo(),
        rabbits=InMemoryRabbitsRepo(),
        breeding_records=InMemoryBreedingRecordsRepo(),
        kits=InMemoryKitsRepo(),
        commits=0,
        rollbacks=0,
    )

    async def commit():
        uow.commits += 1

    async def rollback():
        uow.rollbacks += 1

    uow.commit = commit
    uow.rollback = rollback
    return uow


@pytest.fixture()
def uow():
    return make_uow()
