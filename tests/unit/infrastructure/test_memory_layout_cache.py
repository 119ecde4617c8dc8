from __future__ import annotations

from uuid import uuid4

from rabbitry.application.read_models.layout import FarmLayout
from rabbitry.infrastructure.cache.memory_layout_cache import InMemoryLayoutCache


class FakeClock:
    def __init__(self) -> None:
        self.now = 1000.0

    def __call__(self) -> float:
        return self.now


async def test_entries_expire_after_ttl():
    clock = FakeClock()
    cache = InMemoryLayoutCache(ttl_seconds=30, clock=clock)
    farm_id = uuid4()
    layout = FarmLayout(farm_id=farm_id, rows=[])

    await cache.set(farm_id, layout)
    clock.now += 29
    assert await cache.get(farm_id) is layout
    clock.now += 2
    assert await cache.get(farm_id) is None


async def test_invalidate_drops_only_that_farm():
    cache = InMemoryLayoutCache()
    first, second = uuid4(), uuid4()
    await cache.set(first, FarmLayout(farm_id=first, rows=[]))
    await cache.set(second, FarmLayout(farm_id=second, rows=[]))

    await cache.invalidate(first)
    await cache.invalidate(uuid4())
    assert await cache.get(first) is None
    assert await cache.get(second) is not None


async def test_least_recently_used_farm_is_evicted():
    cache = InMemoryLayoutCache(max_farms=2)
    a, b, c = uuid4(), uuid4(), uuid4()
    for farm_id in (a, b):
        await cache.set(farm_id, FarmLayout(farm_id=farm_id, rows=[]))
    await cache.get(a)
    await cache.set(c, FarmLayout(farm_id=c, rows=[]))

    assert await cache.get(b) is None
    assert await cache.get(a) is not None
    assert await cache.get(c) is not None


async def test_zero_ttl_disables_caching(test_settings):
    settings = test_settings.model_copy(update={"layout_cache_ttl_seconds": 0})
    cache = InMemoryLayoutCache.from_settings(settings)
    farm_id = uuid4()
    await cache.set(farm_id, FarmLayout(farm_id=farm_id, rows=[]))
    assert await cache.get(farm_id) is None
