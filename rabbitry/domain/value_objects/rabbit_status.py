from __future__ import annotations

from enum import Enum


class RabbitStatus(str, Enum):
    ACTIVE = "active"
    INACTIVE = "inactive"
    SOLD = "sold"
    DEAD = "dead"
    REMOVED = "removed"


class KitStatus(str, Enum):
    ALIVE = "alive"
    DEAD = "dead"
