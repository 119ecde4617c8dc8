from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from uuid import UUID, uuid4

# Largest capacity increase accepted by a single expansion
MAX_EXPANSION_STEP = 20


@dataclass(slots=True)
class Row:
    id: UUID
    farm_id: UUID
    name: str
    capacity: int
    levels: list[str] = field(default_factory=list)
    description: str | None = None

    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    updated_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    version: int = 1

    @classmethod
    def create(
        cls,
        farm_id: UUID,
        name: str,
        capacity: int,
        levels: list[str],
        description: str | None = None,
    ) -> Row:
        now = datetime.now(timezone.utc)
        return cls(
            id=uuid4(),
            farm_id=farm_id,
            name=name,
            capacity=capacity,
            levels=list(levels),
            description=description,
            created_at=now,
            updated_at=now,
            version=1,
        )

    def expand(self, additional_capacity: int) -> None:
        self.capacity += additional_capacity
        self.bump_version()

    def bump_version(self) -> None:
        self.version += 1
        self.updated_at = datetime.now(timezone.utc)
