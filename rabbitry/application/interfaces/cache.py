from __future__ import annotations

from typing import Protocol
from uuid import UUID

from rabbitry.application.read_models.layout import FarmLayout


class LayoutCache(Protocol):
    """Read-through cache of farm layouts.

    A cached layout may be stale. Use cases only read from it and invalidate
    the farm's entry after a successful commit; authoritative conflicts are
    still raised by the store.
    """

    async def get(self, farm_id: UUID) -> FarmLayout | None: ...

    async def set(self, farm_id: UUID, layout: FarmLayout) -> None: ...

    async def invalidate(self, farm_id: UUID) -> None: ...
