from datetime import date, datetime, timezone
from typing import Optional

from sqlalchemy import Boolean, CheckConstraint, Date, DateTime, Enum, ForeignKey, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from sowplan.db.base import Base

PLANTING_METHODS = ("transplant", "direct_seed", "both")
TASK_TYPES = ("seed", "transplant", "direct_seed", "harvest", "bed_prep", "cultivate")


class CropPlan(Base):
    __tablename__ = "crop_plans"

    id: Mapped[int] = mapped_column(primary_key=True)
    user_id: Mapped[int] = mapped_column(ForeignKey("users.id", ondelete="CASCADE"), index=True)
    garden_season_id: Mapped[int] = mapped_column(
        ForeignKey("garden_seasons.id", ondelete="CASCADE"), index=True
    )
    plant_type_id: Mapped[Optional[int]] = mapped_column(ForeignKey("plant_types.id"), index=True)
    variety_id: Mapped[Optional[int]] = mapped_column(ForeignKey("varieties.id"), index=True)
    plant_profile_id: Mapped[Optional[int]] = mapped_column(ForeignKey("plant_profiles.id"), index=True)

    label: Mapped[Optional[str]] = mapped_column(String(200))
    color_hex: Mapped[Optional[str]] = mapped_column(String(9))
    planting_method: Mapped[str] = mapped_column(
        Enum(*PLANTING_METHODS, name="planting_method_enum"), default="transplant"
    )

    # Explicit signed day offsets from last frost (negative = before)
    seed_offset_days: Mapped[Optional[int]] = mapped_column(Integer)
    transplant_offset_days: Mapped[Optional[int]] = mapped_column(Integer)
    direct_seed_offset_days: Mapped[Optional[int]] = mapped_column(Integer)

    dtm_days: Mapped[Optional[int]] = mapped_column(Integer)
    harvest_window_days: Mapped[Optional[int]] = mapped_column(Integer)

    quantity_planned: Mapped[int] = mapped_column(Integer, default=1)
    quantity_scheduled: Mapped[int] = mapped_column(Integer, default=0)
    quantity_planted: Mapped[int] = mapped_column(Integer, default=0)

    status: Mapped[str] = mapped_column(
        Enum("planned", "scheduled", "planted", "harvested", name="crop_plan_status_enum"),
        default="planned",
    )
    notes: Mapped[Optional[str]] = mapped_column(Text)

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=lambda: datetime.now(timezone.utc)
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=lambda: datetime.now(timezone.utc),
        onupdate=lambda: datetime.now(timezone.utc),
    )

    # Relationships
    user: Mapped["User"] = relationship(back_populates="crop_plans")
    season: Mapped["Season"] = relationship(back_populates="crop_plans")
    plant_type: Mapped[Optional["PlantType"]] = relationship()
    variety: Mapped[Optional["Variety"]] = relationship()
    plant_profile: Mapped[Optional["PlantProfile"]] = relationship()
    tasks: Mapped[list["CropTask"]] = relationship(
        back_populates="crop_plan", cascade="all, delete-orphan", passive_deletes=True
    )


class CropTask(Base):
    __tablename__ = "crop_tasks"
    __table_args__ = (
        CheckConstraint("start_date <= end_date", name="ck_crop_tasks_window_order"),
    )

    id: Mapped[int] = mapped_column(primary_key=True)
    crop_plan_id: Mapped[int] = mapped_column(ForeignKey("crop_plans.id", ondelete="CASCADE"), index=True)
    garden_season_id: Mapped[int] = mapped_column(
        ForeignKey("garden_seasons.id", ondelete="CASCADE"), index=True
    )

    task_type: Mapped[str] = mapped_column(Enum(*TASK_TYPES, name="crop_task_type_enum"))
    subtype: Mapped[str] = mapped_column(String(30))
    title: Mapped[str] = mapped_column(String(255))
    start_date: Mapped[date] = mapped_column(Date, index=True)
    end_date: Mapped[date] = mapped_column(Date)

    quantity_target: Mapped[int] = mapped_column(Integer, default=1)
    quantity_completed: Mapped[int] = mapped_column(Integer, default=0)
    color_hex: Mapped[Optional[str]] = mapped_column(String(9))
    notes: Mapped[Optional[str]] = mapped_column(Text)
    how_to_content: Mapped[Optional[str]] = mapped_column(Text)
    is_completed: Mapped[bool] = mapped_column(Boolean, default=False)

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=lambda: datetime.now(timezone.utc)
    )

    # Relationships
    crop_plan: Mapped["CropPlan"] = relationship(back_populates="tasks")
