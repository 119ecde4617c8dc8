#!/usr/bin/env python3
"""
Log the does expected to kindle soon, per farm.

Usage:
  python scripts/check_expected_births.py [--days 7]

Meant to run once a day from cron. Defaults to BIRTH_ALERT_DAYS_AHEAD.
"""

import asyncio
import sys
from pathlib import Path

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from rabbitry.config.logging import configure_logging
from rabbitry.config.settings import get_settings
from rabbitry.infrastructure.db.session import create_engine, create_session_factory
from rabbitry.infrastructure.scheduler.breeding_tasks import check_expected_births


async def run(days_ahead: int) -> None:
    settings = get_settings()
    engine = create_engine(settings.database_url, echo=settings.database_echo)
    try:
        await check_expected_births(create_session_factory(engine), days_ahead=days_ahead)
    finally:
        await engine.dispose()


if __name__ == "__main__":
    import argparse

    settings = get_settings()
    parser = argparse.ArgumentParser(description="Log does expected to give birth soon")
    parser.add_argument(
        "--days",
        type=int,
        default=settings.birth_alert_days_ahead,
        help=f"Look-ahead window in days (default {settings.birth_alert_days_ahead})",
    )
    args = parser.parse_args()

    configure_logging(settings.log_level)
    asyncio.run(run(args.days))
