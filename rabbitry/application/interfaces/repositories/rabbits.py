from __future__ import annotations

from typing import Protocol
from uuid import UUID

from rabbitry.domain.models.rabbit import Rabbit


class RabbitsRepository(Protocol):
    async def add(self, rabbit: Rabbit) -> Rabbit: ...

    async def get_by_tag(self, farm_id: UUID, rabbit_id: str) -> Rabbit | None: ...

    async def list(
        self,
        farm_id: UUID,
        *,
        gender: str | None = None,
        active_only: bool = True,
    ) -> list[Rabbit]: ...

    async def list_by_hutch(self, farm_id: UUID, hutch_name: str) -> list[Rabbit]:
        """Active rabbits currently housed in the hutch."""
        ...

    async def max_tag_number(self, farm_id: UUID, prefix: str = "RB-") -> int: ...

    async def update(self, rabbit: Rabbit) -> Rabbit: ...
