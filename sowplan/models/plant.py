from datetime import datetime, timezone
from typing import Optional

from sqlalchemy import Boolean, DateTime, Float, ForeignKey, Integer, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from sowplan.db.base import Base


class PlantType(Base):
    __tablename__ = "plant_types"

    id: Mapped[int] = mapped_column(primary_key=True)
    common_name: Mapped[str] = mapped_column(String(200), index=True)
    color_hex: Mapped[Optional[str]] = mapped_column(String(9))

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=lambda: datetime.now(timezone.utc)
    )


class TimingColumns:
    """Frost-relative timing fields shared by Variety and PlantProfile."""

    # Weeks before last frost to start seeds indoors
    start_indoors_weeks: Mapped[Optional[float]] = mapped_column(Float)
    start_indoors_weeks_min: Mapped[Optional[float]] = mapped_column(Float)
    start_indoors_weeks_max: Mapped[Optional[float]] = mapped_column(Float)

    # Weeks after last frost to set out transplants
    transplant_weeks_after_last_frost: Mapped[Optional[float]] = mapped_column(Float)
    transplant_weeks_after_last_frost_min: Mapped[Optional[float]] = mapped_column(Float)
    transplant_weeks_after_last_frost_max: Mapped[Optional[float]] = mapped_column(Float)

    # Signed weeks relative to last frost for direct sowing (negative = before)
    direct_sow_weeks: Mapped[Optional[float]] = mapped_column(Float)
    direct_sow_weeks_min: Mapped[Optional[float]] = mapped_column(Float)
    direct_sow_weeks_max: Mapped[Optional[float]] = mapped_column(Float)

    days_to_maturity: Mapped[Optional[int]] = mapped_column(Integer)
    days_to_maturity_min: Mapped[Optional[int]] = mapped_column(Integer)
    days_to_maturity_max: Mapped[Optional[int]] = mapped_column(Integer)

    trellis_required: Mapped[Optional[bool]] = mapped_column(Boolean)


class Variety(TimingColumns, Base):
    __tablename__ = "varieties"

    id: Mapped[int] = mapped_column(primary_key=True)
    plant_type_id: Mapped[Optional[int]] = mapped_column(ForeignKey("plant_types.id"), index=True)
    variety_name: Mapped[str] = mapped_column(String(200), index=True)

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=lambda: datetime.now(timezone.utc)
    )

    plant_type: Mapped[Optional["PlantType"]] = relationship()


class PlantProfile(TimingColumns, Base):
    __tablename__ = "plant_profiles"

    id: Mapped[int] = mapped_column(primary_key=True)
    plant_type_id: Mapped[Optional[int]] = mapped_column(ForeignKey("plant_types.id"), index=True)
    variety_name: Mapped[Optional[str]] = mapped_column(String(200))

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=lambda: datetime.now(timezone.utc)
    )

    plant_type: Mapped[Optional["PlantType"]] = relationship()
