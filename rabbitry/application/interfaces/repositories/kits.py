from __future__ import annotations

from typing import Protocol
from uuid import UUID

from rabbitry.domain.models.kit import Kit


class KitsRepository(Protocol):
    async def add_many(self, kits: list[Kit]) -> list[Kit]: ...

    async def list_by_record(self, farm_id: UUID, breeding_record_id: UUID) -> list[Kit]: ...
