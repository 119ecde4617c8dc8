from __future__ import annotations

from uuid import UUID

from rabbitry.application.interfaces.cache import LayoutCache
from rabbitry.application.interfaces.unit_of_work import UnitOfWork
from rabbitry.application.read_models.layout import FarmLayout, HutchView, RowView
from rabbitry.domain.services.levels import distribute_hutches
from rabbitry.domain.services.occupancy import format_occupancy


async def execute(
    uow: UnitOfWork,
    farm_id: UUID,
    cache: LayoutCache | None = None,
) -> FarmLayout:
    """Rows with their hutches and occupants, served from the cache when present."""
    if cache is not None:
        cached = await cache.get(farm_id)
        if cached is not None:
            return cached

    rabbits = await uow.rabbits.list(farm_id)
    by_hutch: dict[str, list] = {}
    for rabbit in rabbits:
        if rabbit.hutch_name:
            by_hutch.setdefault(rabbit.hutch_name, []).append(rabbit)

    row_views: list[RowView] = []
    for row in await uow.rows.list(farm_id):
        hutches = await uow.hutches.list_by_row(farm_id, row.id)
        views = [
            HutchView(
                hutch=hutch,
                occupants=by_hutch.get(hutch.name, []),
                summary=format_occupancy(by_hutch.get(hutch.name, [])),
            )
            for hutch in hutches
        ]
        row_views.append(
            RowView(
                row=row,
                hutches=views,
                distribution=distribute_hutches(row.capacity, len(row.levels)),
            )
        )

    layout = FarmLayout(farm_id=farm_id, rows=row_views)
    if cache is not None:
        await cache.set(farm_id, layout)
    return layout
