from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from uuid import UUID, uuid4

REMOVAL_REASONS = (
    "Sale",
    "Death - Natural",
    "Death - Disease",
    "Death - Accident",
    "Transfer to another farm",
    "Breeding loan",
    "Retirement",
    "Health issues",
    "Other",
)


@dataclass(slots=True)
class HutchRemoval:
    """One entry of a hutch's removal history. Entries are never updated."""

    id: UUID
    farm_id: UUID
    hutch_name: str
    rabbit_id: str
    reason: str
    notes: str | None = None
    removed_at: datetime | None = None
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    @classmethod
    def create(
        cls,
        farm_id: UUID,
        hutch_name: str,
        rabbit_id: str,
        reason: str,
        notes: str | None = None,
        removed_at: datetime | None = None,
    ) -> HutchRemoval:
        now = datetime.now(timezone.utc)
        if removed_at is None:
            removed_at = now
        elif removed_at.tzinfo is None:
            removed_at = removed_at.replace(tzinfo=timezone.utc)
        return cls(
            id=uuid4(),
            farm_id=farm_id,
            hutch_name=hutch_name,
            rabbit_id=rabbit_id,
            reason=reason,
            notes=notes,
            removed_at=removed_at,
            created_at=now,
        )
