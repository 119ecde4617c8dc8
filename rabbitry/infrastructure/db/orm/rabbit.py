from __future__ import annotations

from datetime import date, datetime
from uuid import UUID

from sqlalchemy import (
    Boolean,
    Date,
    DateTime,
    Float,
    Index,
    Integer,
    String,
    Text,
    UniqueConstraint,
    Uuid,
    func,
)
from sqlalchemy.orm import Mapped, mapped_column

from rabbitry.infrastructure.db.base import Base


class RabbitORM(Base):
    __tablename__ = "rabbits"
    __table_args__ = (
        UniqueConstraint("farm_id", "rabbit_id", name="ux_rabbits_farm_tag"),
        Index("ix_rabbits_farm_hutch", "farm_id", "hutch_name"),
    )

    id: Mapped[UUID] = mapped_column(Uuid(as_uuid=True), primary_key=True)
    farm_id: Mapped[UUID] = mapped_column(Uuid(as_uuid=True), nullable=False)
    rabbit_id: Mapped[str] = mapped_column(String(64), nullable=False)
    name: Mapped[str | None] = mapped_column(String(255), nullable=True)
    gender: Mapped[str] = mapped_column(String(8), nullable=False)
    breed: Mapped[str | None] = mapped_column(String(128), nullable=True)
    color: Mapped[str | None] = mapped_column(String(128), nullable=True)
    birth_date: Mapped[date | None] = mapped_column(Date, nullable=True)
    weight: Mapped[float | None] = mapped_column(Float, nullable=True)
    hutch_name: Mapped[str | None] = mapped_column(String(96), nullable=True)
    status: Mapped[str] = mapped_column(String(16), nullable=False, server_default="active")

    parent_male_id: Mapped[str | None] = mapped_column(String(64), nullable=True)
    parent_female_id: Mapped[str | None] = mapped_column(String(64), nullable=True)

    is_pregnant: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    pregnancy_start_date: Mapped[date | None] = mapped_column(Date, nullable=True)
    expected_birth_date: Mapped[date | None] = mapped_column(Date, nullable=True)
    last_birth_date: Mapped[date | None] = mapped_column(Date, nullable=True)
    total_litters: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    total_kits: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    notes: Mapped[str | None] = mapped_column(Text, nullable=True)

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), nullable=False
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False
    )
    version: Mapped[int] = mapped_column(Integer, nullable=False, default=1)
