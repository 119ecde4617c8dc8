from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from uuid import UUID

from rabbitry.domain.models.hutch import Hutch
from rabbitry.domain.models.rabbit import Rabbit
from rabbitry.domain.models.row import Row


@dataclass(frozen=True)
class HutchView:
    hutch: Hutch
    occupants: list[Rabbit]
    summary: str

    @property
    def is_occupied(self) -> bool:
        return bool(self.occupants)


@dataclass(frozen=True)
class RowView:
    row: Row
    hutches: list[HutchView]
    distribution: dict[str, int]

    @property
    def hutch_count(self) -> int:
        return len(self.hutches)

    @property
    def occupied_count(self) -> int:
        return sum(1 for h in self.hutches if h.is_occupied)

    @property
    def free_capacity(self) -> int:
        return self.row.capacity - self.hutch_count


@dataclass(frozen=True)
class FarmLayout:
    """Snapshot of a farm's rows, hutches and occupants at ``fetched_at``."""

    farm_id: UUID
    rows: list[RowView]
    fetched_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    def find_hutch(self, name: str) -> HutchView | None:
        for row in self.rows:
            for view in row.hutches:
                if view.hutch.name == name:
                    return view
        return None
