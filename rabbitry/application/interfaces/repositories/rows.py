from __future__ import annotations

from typing import Protocol
from uuid import UUID

from rabbitry.domain.models.row import Row


class RowsRepository(Protocol):
    async def add(self, row: Row) -> Row: ...

    async def get(self, farm_id: UUID, row_id: UUID) -> Row | None: ...

    async def get_by_name(self, farm_id: UUID, name: str) -> Row | None: ...

    async def list(self, farm_id: UUID) -> list[Row]: ...

    async def update(self, row: Row) -> Row: ...
