from datetime import date, datetime
from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field, field_validator


class PlantingMethod(str, Enum):
    transplant = "transplant"
    direct_seed = "direct_seed"
    both = "both"


class CropPlanCreate(BaseModel):
    garden_season_id: int
    plant_type_id: Optional[int] = None
    variety_id: Optional[int] = None
    plant_profile_id: Optional[int] = None
    label: Optional[str] = None
    color_hex: Optional[str] = Field(None, pattern=r"^#[0-9a-fA-F]{6}$")
    planting_method: PlantingMethod = PlantingMethod.transplant
    seed_offset_days: Optional[int] = None
    transplant_offset_days: Optional[int] = None
    direct_seed_offset_days: Optional[int] = None
    dtm_days: Optional[int] = Field(None, ge=0)
    harvest_window_days: Optional[int] = Field(None, ge=0)
    quantity_planned: int = Field(1, ge=0)
    notes: Optional[str] = None


class CropPlanUpdate(BaseModel):
    plant_type_id: Optional[int] = None
    variety_id: Optional[int] = None
    plant_profile_id: Optional[int] = None
    label: Optional[str] = None
    color_hex: Optional[str] = Field(None, pattern=r"^#[0-9a-fA-F]{6}$")
    planting_method: Optional[PlantingMethod] = None
    seed_offset_days: Optional[int] = None
    transplant_offset_days: Optional[int] = None
    direct_seed_offset_days: Optional[int] = None
    dtm_days: Optional[int] = Field(None, ge=0)
    harvest_window_days: Optional[int] = Field(None, ge=0)
    quantity_planned: Optional[int] = Field(None, ge=0)
    notes: Optional[str] = None

    @field_validator("planting_method", "quantity_planned")
    @classmethod
    def not_null(cls, value):
        # Omit the field to leave it unchanged; the columns are NOT NULL
        if value is None:
            raise ValueError("may be omitted but not null")
        return value


class CropPlanRead(BaseModel):
    id: int
    garden_season_id: int
    plant_type_id: Optional[int]
    variety_id: Optional[int]
    plant_profile_id: Optional[int]
    label: Optional[str]
    color_hex: Optional[str]
    planting_method: str
    seed_offset_days: Optional[int]
    transplant_offset_days: Optional[int]
    direct_seed_offset_days: Optional[int]
    dtm_days: Optional[int]
    harvest_window_days: Optional[int]
    quantity_planned: int
    quantity_scheduled: int
    quantity_planted: int
    status: str
    notes: Optional[str]
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}


class CropTaskRead(BaseModel):
    id: int
    crop_plan_id: int
    garden_season_id: int
    task_type: str
    subtype: str
    title: str
    start_date: date
    end_date: date
    quantity_target: int
    quantity_completed: int
    color_hex: Optional[str]
    notes: Optional[str]
    how_to_content: Optional[str]
    is_completed: bool

    model_config = {"from_attributes": True}


class TaskGenerationResponse(BaseModel):
    success: bool = True
    crop_plan_id: int
    tasks_created: int
    error: Optional[str] = None


class CropPlanWithTasks(BaseModel):
    plan: CropPlanRead
    generation: TaskGenerationResponse


class SeasonGenerationResponse(BaseModel):
    season_id: int
    results: list[TaskGenerationResponse]
    tasks_created: int
