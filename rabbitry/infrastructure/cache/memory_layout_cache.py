from __future__ import annotations

import asyncio
import logging
import time
from collections import OrderedDict
from uuid import UUID

from rabbitry.application.read_models.layout import FarmLayout
from rabbitry.config.settings import Settings

logger = logging.getLogger(__name__)


class InMemoryLayoutCache:
    """Per-process layout cache with a TTL and a bounded number of farms.

    Entries older than ``ttl_seconds`` are treated as missing. A TTL of 0
    disables caching entirely.
    """

    def __init__(self, ttl_seconds: int = 30, max_farms: int = 256, clock=time.monotonic) -> None:
        self.ttl_seconds = ttl_seconds
        self.max_farms = max_farms
        self._clock = clock
        self._entries: OrderedDict[UUID, tuple[float, FarmLayout]] = OrderedDict()
        self._lock = asyncio.Lock()

    @classmethod
    def from_settings(cls, settings: Settings) -> InMemoryLayoutCache:
        return cls(
            ttl_seconds=settings.layout_cache_ttl_seconds,
            max_farms=settings.layout_cache_max_farms,
        )

    async def get(self, farm_id: UUID) -> FarmLayout | None:
        if self.ttl_seconds <= 0:
            return None
        async with self._lock:
            entry = self._entries.get(farm_id)
            if entry is None:
                return None
            stored_at, layout = entry
            if self._clock() - stored_at > self.ttl_seconds:
                del self._entries[farm_id]
                logger.debug("Layout cache expired for farm %s", farm_id)
                return None
            self._entries.move_to_end(farm_id)
            return layout

    async def set(self, farm_id: UUID, layout: FarmLayout) -> None:
        if self.ttl_seconds <= 0:
            return
        async with self._lock:
            self._entries[farm_id] = (self._clock(), layout)
            self._entries.move_to_end(farm_id)
            while len(self._entries) > self.max_farms:
                evicted, _ = self._entries.popitem(last=False)
                logger.debug("Layout cache evicted farm %s", evicted)

    async def invalidate(self, farm_id: UUID) -> None:
        async with self._lock:
            if self._entries.pop(farm_id, None) is not None:
                logger.debug("Layout cache invalidated for farm %s", farm_id)
