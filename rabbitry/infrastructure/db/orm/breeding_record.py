from __future__ import annotations

from datetime import date, datetime
from uuid import UUID

from sqlalchemy import Date, DateTime, Index, Integer, String, Text, Uuid, func, text
from sqlalchemy.orm import Mapped, mapped_column

from rabbitry.infrastructure.db.base import Base


class BreedingRecordORM(Base):
    __tablename__ = "breeding_records"
    __table_args__ = (
        # One open record per doe; also guards concurrent litter submissions
        Index(
            "ux_breeding_records_open_doe",
            "farm_id",
            "doe_id",
            unique=True,
            postgresql_where=text("actual_birth_date IS NULL"),
            sqlite_where=text("actual_birth_date IS NULL"),
        ),
        Index("ix_breeding_records_farm_doe_date", "farm_id", "doe_id", "mating_date"),
    )

    id: Mapped[UUID] = mapped_column(Uuid(as_uuid=True), primary_key=True)
    farm_id: Mapped[UUID] = mapped_column(Uuid(as_uuid=True), nullable=False)
    doe_id: Mapped[str] = mapped_column(String(64), nullable=False)
    buck_id: Mapped[str | None] = mapped_column(String(64), nullable=True)
    mating_date: Mapped[date] = mapped_column(Date, nullable=False)
    expected_birth_date: Mapped[date] = mapped_column(Date, nullable=False)
    actual_birth_date: Mapped[date | None] = mapped_column(Date, nullable=True)
    number_of_kits: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    notes: Mapped[str | None] = mapped_column(Text, nullable=True)

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), nullable=False
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False
    )
    version: Mapped[int] = mapped_column(Integer, nullable=False, default=1)
