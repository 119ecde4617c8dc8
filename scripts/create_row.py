#!/usr/bin/env python3
"""
Script to create a row of hutches for a farm.

Usage:
  python scripts/create_row.py --farm-id UUID --capacity 12 --levels 3 [--name Mars]

When --name is omitted the next unused planet name is picked.
"""

import asyncio
import logging
import sys
from pathlib import Path

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from rabbitry.application.errors import AppError
from rabbitry.application.use_cases.layout import create_row
from rabbitry.config.logging import configure_logging
from rabbitry.config.settings import get_settings
from rabbitry.domain.value_objects.farm_id import parse_farm_id
from rabbitry.infrastructure.db.session import (
    SQLAlchemyUnitOfWork,
    create_engine,
    create_session_factory,
)

logger = logging.getLogger("scripts.create_row")


async def run(farm_id, payload: create_row.CreateRowInput) -> int:
    settings = get_settings()
    engine = create_engine(settings.database_url, echo=settings.database_echo)
    session_factory = create_session_factory(engine)

    try:
        uow = SQLAlchemyUnitOfWork(session_factory)
        async with uow:
            row = await create_row.execute(uow, farm_id, payload)
        print(f"Row {row.name} created")
        print(f"   Row ID: {row.id}")
        print(f"   Capacity: {row.capacity}")
        print(f"   Levels: {', '.join(row.levels)}")
        return 0
    except AppError as exc:
        logger.error("Could not create row: %s (%s)", exc.message, exc.code)
        return 1
    finally:
        await engine.dispose()


if __name__ == "__main__":
    import argparse

    parser = argparse.ArgumentParser(
        description="Create a row of hutches",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Auto-named row with 12 hutches over 3 levels
  python scripts/create_row.py --farm-id 12345678-1234-5678-1234-567812345678 --capacity 12 --levels 3

  # Named row
  python scripts/create_row.py --farm-id 12345678-1234-5678-1234-567812345678 --capacity 8 --levels 2 --name Mars
        """,
    )
    parser.add_argument("--farm-id", required=True, help="Farm ID")
    parser.add_argument("--capacity", required=True, type=int, help="Number of hutches")
    parser.add_argument("--levels", required=True, type=int, help="Number of levels (1-26)")
    parser.add_argument("--name", help="Row name (optional, auto-assigned)")
    parser.add_argument("--description", help="Row description (optional)")

    args = parser.parse_args()
    configure_logging(get_settings().log_level)

    try:
        farm_uuid = parse_farm_id(args.farm_id)
    except ValueError:
        print(f"Error: '{args.farm_id}' is not a valid UUID")
        sys.exit(1)

    payload = create_row.CreateRowInput(
        capacity=args.capacity,
        level_count=args.levels,
        name=args.name,
        description=args.description,
    )
    sys.exit(asyncio.run(run(farm_uuid, payload)))
