from __future__ import annotations

from typing import Protocol
from uuid import UUID

from rabbitry.domain.models.hutch_removal import HutchRemoval


class HutchRemovalsRepository(Protocol):
    async def add(self, entry: HutchRemoval) -> HutchRemoval: ...

    async def list_for_hutch(self, farm_id: UUID, hutch_name: str) -> list[HutchRemoval]:
        """Entries with a removal timestamp, newest first."""
        ...
