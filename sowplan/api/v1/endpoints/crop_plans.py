from datetime import date
from typing import NoReturn, Optional

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from sowplan.core.deps import CurrentUser, get_db
from sowplan.core.errors import TaskGenerationError
from sowplan.models.crop import CropPlan, CropTask
from sowplan.models.plant import PlantProfile, PlantType, Variety
from sowplan.models.season import Season
from sowplan.schemas.crop import (
    CropPlanCreate,
    CropPlanRead,
    CropPlanUpdate,
    CropPlanWithTasks,
    CropTaskRead,
    TaskGenerationResponse,
)
from sowplan.services.task_generation import regenerate_crop_tasks

router = APIRouter(prefix="/crop-plans", tags=["crop-plans"])


# ── Crop plans ────────────────────────────────────────────────────────────────


@router.post("", response_model=CropPlanWithTasks, status_code=status.HTTP_201_CREATED)
async def create_crop_plan(
    data: CropPlanCreate, current_user: CurrentUser, db: AsyncSession = Depends(get_db)
):
    await _get_owned_season(db, data.garden_season_id, current_user.id)
    await _check_links(db, data.plant_type_id, data.variety_id, data.plant_profile_id)

    plan = CropPlan(**data.model_dump(), user_id=current_user.id)
    db.add(plan)
    await db.commit()
    plan_id = plan.id

    # Plan creation triggers generation; a generation error doesn't undo the plan
    generation = await _regenerate_reporting_errors(db, plan_id, current_user)
    plan = await _get_owned_plan(db, plan_id, current_user.id)
    return CropPlanWithTasks(plan=CropPlanRead.model_validate(plan), generation=generation)


@router.get("/{crop_plan_id}", response_model=CropPlanRead)
async def get_crop_plan(
    crop_plan_id: int, current_user: CurrentUser, db: AsyncSession = Depends(get_db)
):
    return await _get_owned_plan(db, crop_plan_id, current_user.id)


@router.patch("/{crop_plan_id}", response_model=CropPlanWithTasks)
async def update_crop_plan(
    crop_plan_id: int,
    data: CropPlanUpdate,
    current_user: CurrentUser,
    db: AsyncSession = Depends(get_db),
):
    plan = await _get_owned_plan(db, crop_plan_id, current_user.id)
    changes = data.model_dump(exclude_unset=True)
    await _check_links(
        db, changes.get("plant_type_id"), changes.get("variety_id"), changes.get("plant_profile_id")
    )
    for field, value in changes.items():
        setattr(plan, field, value)
    await db.commit()

    generation = await _regenerate_reporting_errors(db, crop_plan_id, current_user)
    plan = await _get_owned_plan(db, crop_plan_id, current_user.id)
    return CropPlanWithTasks(plan=CropPlanRead.model_validate(plan), generation=generation)


# ── Tasks ─────────────────────────────────────────────────────────────────────


@router.post("/{crop_plan_id}/generate-tasks", response_model=TaskGenerationResponse)
async def generate_tasks(
    crop_plan_id: int, current_user: CurrentUser, db: AsyncSession = Depends(get_db)
):
    try:
        result = await regenerate_crop_tasks(db, crop_plan_id, current_user, today=date.today())
    except TaskGenerationError as exc:
        _raise_http(exc)
    return TaskGenerationResponse(crop_plan_id=result.crop_plan_id, tasks_created=result.tasks_created)


@router.get("/{crop_plan_id}/tasks", response_model=list[CropTaskRead])
async def list_crop_tasks(
    crop_plan_id: int, current_user: CurrentUser, db: AsyncSession = Depends(get_db)
):
    await _get_owned_plan(db, crop_plan_id, current_user.id)
    result = await db.execute(
        select(CropTask)
        .where(CropTask.crop_plan_id == crop_plan_id)
        .order_by(CropTask.start_date, CropTask.id)
    )
    return result.scalars().all()


# ── Helpers ───────────────────────────────────────────────────────────────────


def _raise_http(exc: TaskGenerationError) -> NoReturn:
    raise HTTPException(status_code=exc.status_code, detail=exc.message)


async def _regenerate_reporting_errors(
    db: AsyncSession, crop_plan_id: int, user
) -> TaskGenerationResponse:
    try:
        result = await regenerate_crop_tasks(db, crop_plan_id, user, today=date.today())
    except TaskGenerationError as exc:
        return TaskGenerationResponse(
            success=False, crop_plan_id=crop_plan_id, tasks_created=0, error=exc.message
        )
    return TaskGenerationResponse(crop_plan_id=crop_plan_id, tasks_created=result.tasks_created)


async def _get_owned_season(db: AsyncSession, season_id: int, user_id: int) -> Season:
    season = await db.scalar(
        select(Season).where(Season.id == season_id, Season.user_id == user_id)
    )
    if not season:
        raise HTTPException(status_code=404, detail="Season not found")
    return season


async def _get_owned_plan(db: AsyncSession, crop_plan_id: int, user_id: int) -> CropPlan:
    result = await db.execute(
        select(CropPlan)
        .where(CropPlan.id == crop_plan_id, CropPlan.user_id == user_id)
        .execution_options(populate_existing=True)
    )
    plan = result.scalar_one_or_none()
    if not plan:
        raise HTTPException(status_code=404, detail="Crop plan not found")
    return plan


async def _check_links(
    db: AsyncSession,
    plant_type_id: Optional[int],
    variety_id: Optional[int],
    plant_profile_id: Optional[int],
) -> None:
    for model, record_id, name in (
        (PlantType, plant_type_id, "Plant type"),
        (Variety, variety_id, "Variety"),
        (PlantProfile, plant_profile_id, "Plant profile"),
    ):
        if record_id is not None and await db.get(model, record_id) is None:
            raise HTTPException(status_code=404, detail=f"{name} not found")
