from __future__ import annotations

from typing import Protocol
from uuid import UUID

from rabbitry.domain.models.hutch import Hutch


class HutchesRepository(Protocol):
    async def add(self, hutch: Hutch) -> Hutch: ...

    async def get_by_name(self, farm_id: UUID, name: str) -> Hutch | None:
        """Non-deleted hutch with the given composed name."""
        ...

    async def list_by_row(self, farm_id: UUID, row_id: UUID) -> list[Hutch]:
        """Non-deleted hutches of a row, ordered by level then position."""
        ...

    async def count_by_row(self, farm_id: UUID, row_id: UUID) -> int: ...

    async def update(self, hutch: Hutch) -> Hutch: ...
