from __future__ import annotations

from datetime import date, datetime
from uuid import UUID

from sqlalchemy import Date, DateTime, Float, ForeignKey, String, Text, UniqueConstraint, Uuid, func
from sqlalchemy.orm import Mapped, mapped_column

from rabbitry.infrastructure.db.base import Base


class KitORM(Base):
    __tablename__ = "kits"
    __table_args__ = (
        UniqueConstraint("breeding_record_id", "kit_number", name="ux_kits_record_number"),
    )

    id: Mapped[UUID] = mapped_column(Uuid(as_uuid=True), primary_key=True)
    farm_id: Mapped[UUID] = mapped_column(Uuid(as_uuid=True), nullable=False, index=True)
    breeding_record_id: Mapped[UUID] = mapped_column(
        Uuid(as_uuid=True),
        ForeignKey("breeding_records.id"),
        nullable=False,
    )
    kit_number: Mapped[str] = mapped_column(String(64), nullable=False)
    birth_weight: Mapped[float | None] = mapped_column(Float, nullable=True)
    gender: Mapped[str | None] = mapped_column(String(8), nullable=True)
    color: Mapped[str | None] = mapped_column(String(128), nullable=True)
    status: Mapped[str] = mapped_column(String(8), nullable=False)
    parent_male_id: Mapped[str | None] = mapped_column(String(64), nullable=True)
    parent_female_id: Mapped[str] = mapped_column(String(64), nullable=False)
    actual_birth_date: Mapped[date] = mapped_column(Date, nullable=False)
    notes: Mapped[str | None] = mapped_column(Text, nullable=True)

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), nullable=False
    )
