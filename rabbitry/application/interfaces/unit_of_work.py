from __future__ import annotations

from typing import Protocol

from rabbitry.application.interfaces.repositories.breeding_records import (
    BreedingRecordsRepository,
)
from rabbitry.application.interfaces.repositories.hutch_removals import HutchRemovalsRepository
from rabbitry.application.interfaces.repositories.hutches import HutchesRepository
from rabbitry.application.interfaces.repositories.kits import KitsRepository
from rabbitry.application.interfaces.repositories.rabbits import RabbitsRepository
from rabbitry.application.interfaces.repositories.rows import RowsRepository


class UnitOfWork(Protocol):
    rows: RowsRepository
    hutches: HutchesRepository
    hutch_removals: HutchRemovalsRepository
    rabbits: RabbitsRepository
    breeding_records: BreedingRecordsRepository
    kits: KitsRepository

    async def __aenter__(self) -> UnitOfWork: ...

    async def __aexit__(self, exc_type, exc, tb) -> None: ...

    async def commit(self) -> None: ...

    async def rollback(self) -> None: ...
