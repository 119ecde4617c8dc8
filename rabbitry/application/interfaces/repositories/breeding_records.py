from __future__ import annotations

from typing import Protocol
from uuid import UUID

from rabbitry.domain.models.breeding_record import BreedingRecord


class BreedingRecordsRepository(Protocol):
    async def add(self, record: BreedingRecord) -> BreedingRecord: ...

    async def get(self, farm_id: UUID, record_id: UUID) -> BreedingRecord | None: ...

    async def get_open_for_doe(self, farm_id: UUID, doe_id: str) -> BreedingRecord | None:
        """The doe's record without an actual birth date, if any."""
        ...

    async def list_for_doe(self, farm_id: UUID, doe_id: str) -> list[BreedingRecord]: ...

    async def list_open(self, farm_id: UUID) -> list[BreedingRecord]: ...

    async def update(self, record: BreedingRecord) -> BreedingRecord: ...
