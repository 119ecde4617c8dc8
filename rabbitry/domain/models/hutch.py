from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from uuid import UUID, uuid4

DEFAULT_SIZE = "medium"
DEFAULT_MATERIAL = "wire"


def compose_hutch_name(row_name: str, level: str, position: int) -> str:
    """Hutch names are reconstructible from their coordinates, e.g. ``Mars-A1``."""
    return f"{row_name}-{level}{position}"


@dataclass(slots=True)
class Hutch:
    id: UUID
    farm_id: UUID
    row_id: UUID
    row_name: str
    level: str
    position: int
    name: str
    size: str = DEFAULT_SIZE
    material: str = DEFAULT_MATERIAL
    features: list[str] = field(default_factory=list)
    last_cleaned: datetime | None = None

    is_deleted: bool = False
    deleted_at: datetime | None = None
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    updated_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    version: int = 1

    @classmethod
    def create(
        cls,
        farm_id: UUID,
        row_id: UUID,
        row_name: str,
        level: str,
        position: int,
        size: str = DEFAULT_SIZE,
        material: str = DEFAULT_MATERIAL,
        features: list[str] | None = None,
    ) -> Hutch:
        now = datetime.now(timezone.utc)
        return cls(
            id=uuid4(),
            farm_id=farm_id,
            row_id=row_id,
            row_name=row_name,
            level=level,
            position=position,
            name=compose_hutch_name(row_name, level, position),
            size=size,
            material=material,
            features=list(features or []),
            created_at=now,
            updated_at=now,
            version=1,
        )

    def soft_delete(self) -> None:
        self.is_deleted = True
        self.deleted_at = datetime.now(timezone.utc)
        self.bump_version()

    def bump_version(self) -> None:
        self.version += 1
        self.updated_at = datetime.now(timezone.utc)
