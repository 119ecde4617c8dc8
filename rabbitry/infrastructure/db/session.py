from __future__ import annotations

import logging
from collections.abc import Callable

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from rabbitry.application.errors import CollaboratorError
from rabbitry.application.interfaces.unit_of_work import UnitOfWork

logger = logging.getLogger(__name__)


def create_engine(database_url: str, *, echo: bool = False) -> AsyncEngine:
    return create_async_engine(database_url, echo=echo, future=True)


def create_session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    return async_sessionmaker(engine, expire_on_commit=False)


class SQLAlchemyUnitOfWork(UnitOfWork):
    def __init__(self, session_factory: Callable[[], AsyncSession]) -> None:
        self._session_factory = session_factory
        self.session: AsyncSession | None = None
        self.rows = None
        self.hutches = None
        self.hutch_removals = None
        self.rabbits = None
        self.breeding_records = None
        self.kits = None

    async def __aenter__(self) -> UnitOfWork:
        self.session = self._session_factory()
        from rabbitry.infrastructure.repos.breeding_records_sqlalchemy import (
            BreedingRecordsSQLAlchemyRepository,
        )
        from rabbitry.infrastructure.repos.hutch_removals_sqlalchemy import (
            HutchRemovalsSQLAlchemyRepository,
        )
        from rabbitry.infrastructure.repos.hutches_sqlalchemy import HutchesSQLAlchemyRepository
        from rabbitry.infrastructure.repos.kits_sqlalchemy import KitsSQLAlchemyRepository
        from rabbitry.infrastructure.repos.rabbits_sqlalchemy import RabbitsSQLAlchemyRepository
        from rabbitry.infrastructure.repos.rows_sqlalchemy import RowsSQLAlchemyRepository

        self.rows = RowsSQLAlchemyRepository(self.session)
        self.hutches = HutchesSQLAlchemyRepository(self.session)
        self.hutch_removals = HutchRemovalsSQLAlchemyRepository(self.session)
        self.rabbits = RabbitsSQLAlchemyRepository(self.session)
        self.breeding_records = BreedingRecordsSQLAlchemyRepository(self.session)
        self.kits = KitsSQLAlchemyRepository(self.session)
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        if not self.session:
            return
        try:
            if exc:
                await self.session.rollback()
        finally:
            await self.session.close()
            self.session = None
            self.rows = None
            self.hutches = None
            self.hutch_removals = None
            self.rabbits = None
            self.breeding_records = None
            self.kits = None

    async def commit(self) -> None:
        if not self.session:
            return
        try:
            await self.session.commit()
        except SQLAlchemyError as exc:
            logger.error("Commit failed: %s", exc, exc_info=True)
            raise CollaboratorError(
                "Failed to commit changes", details={"operation": "commit"}
            ) from exc

    async def rollback(self) -> None:
        if not self.session:
            return
        await self.session.rollback()
