from __future__ import annotations

import logging
from datetime import timedelta
from uuid import UUID

from sqlalchemy import select

from rabbitry.domain.value_objects.gender import Gender
from rabbitry.domain.value_objects.rabbit_status import RabbitStatus
from rabbitry.infrastructure.db.orm.rabbit import RabbitORM
from rabbitry.utils.dates import today_utc

logger = logging.getLogger(__name__)


async def check_expected_births(session_factory, days_ahead: int = 7) -> dict[UUID, int]:
    """Find pregnant does with expected_birth_date within N days and log a per-farm summary.

    Overdue does (expected date already passed) are counted too until a litter
    is recorded for them.
    """
    cutoff = today_utc() + timedelta(days=days_ahead)
    farm_counts: dict[UUID, int] = {}

    try:
        async with session_factory() as session:
            stmt = (
                select(RabbitORM.farm_id, RabbitORM.rabbit_id, RabbitORM.expected_birth_date)
                .where(RabbitORM.gender == Gender.FEMALE.value)
                .where(RabbitORM.status == RabbitStatus.ACTIVE.value)
                .where(RabbitORM.is_pregnant.is_(True))
                .where(RabbitORM.expected_birth_date.isnot(None))
                .where(RabbitORM.expected_birth_date <= cutoff)
            )
            result = await session.execute(stmt)
            rows = result.all()

        if not rows:
            return farm_counts

        # Group by farm
        for farm_id, rabbit_id, expected in rows:
            farm_counts[farm_id] = farm_counts.get(farm_id, 0) + 1
            logger.debug("Doe %s on farm %s due %s", rabbit_id, farm_id, expected)

        for farm_id, count in farm_counts.items():
            logger.info(
                "Farm %s: %d doe(s) expected to kindle within %d days",
                farm_id,
                count,
                days_ahead,
            )
        logger.info("Births expected soon: %d farms", len(farm_counts))
    except Exception as exc:
        logger.error("check_expected_births failed: %s", exc, exc_info=True)
    return farm_counts
