"""
Crop task regeneration.

Regenerating a crop plan validates its inputs, purges every task previously
generated for it, plans a fresh batch and stores it, then marks the plan
scheduled. Purge, insert and the plan update share one transaction, so a
failed run leaves the previous batch in place. Re-running is the only update
path; there is no incremental patching of generated tasks.
"""
import logging
from dataclasses import dataclass
from datetime import date
from typing import Optional

from sqlalchemy import delete, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from sowplan.core.config import settings
from sowplan.core.errors import NotFound, TaskGenerationError, Unauthenticated, UnexpectedFailure
from sowplan.models.crop import CropPlan, CropTask
from sowplan.models.plant import PlantProfile, PlantType, Variety
from sowplan.models.season import Season
from sowplan.models.user import User
from sowplan.services.frost import resolve_anchor_date
from sowplan.services.lifecycle import plan_lifecycle
from sowplan.services.maintenance import plan_maintenance
from sowplan.services.planned_task import PlanInputs, PlannedTask
from sowplan.services.recurring import plan_recurring
from sowplan.services.timing import TimingData, resolve_timing

logger = logging.getLogger(__name__)

DEFAULT_COLOR = "#10b981"
DEFAULT_LABEL = "Crop"


@dataclass(frozen=True)
class GenerationResult:
    crop_plan_id: int
    tasks_created: int
    tasks_deleted: int
    anchor_date: date


@dataclass(frozen=True)
class SeasonPlanResult:
    crop_plan_id: int
    tasks_created: int = 0
    error: Optional[str] = None


# ── Pure planning ─────────────────────────────────────────────────────────────


def compose_label(
    label: Optional[str],
    variety: Optional[Variety],
    profile: Optional[PlantProfile],
    plant_type: Optional[PlantType],
) -> str:
    """Display name for task titles: explicit label, else variety + plant type."""
    if label and label.strip():
        return label.strip()
    variety_name = None
    for record in (variety, profile):
        if record is not None and record.variety_name:
            variety_name = record.variety_name
            break
    type_name = plant_type.common_name if plant_type is not None else None
    if variety_name and type_name:
        if type_name.lower() in variety_name.lower():
            return variety_name
        return f"{variety_name} {type_name}"
    return variety_name or type_name or DEFAULT_LABEL


def plan_crop_tasks(plan: PlanInputs, timing: TimingData, anchor: date) -> list[PlannedTask]:
    """Full task batch for one crop plan, in lifecycle/maintenance/recurring order."""
    lifecycle_tasks, dates = plan_lifecycle(plan, timing, anchor)
    return [
        *lifecycle_tasks,
        *plan_maintenance(plan, timing, dates),
        *plan_recurring(plan, dates),
    ]


# ── Coordinator ───────────────────────────────────────────────────────────────


async def _get(db: AsyncSession, model, record_id: Optional[int]):
    if record_id is None:
        return None
    return await db.get(model, record_id)


async def regenerate_crop_tasks(
    db: AsyncSession,
    crop_plan_id: int,
    user: Optional[User],
    today: date,
) -> GenerationResult:
    """
    Replace all generated tasks for a crop plan.

    today comes from the caller and is only used as the season year when
    the season has none.
    Raises Unauthenticated, NotFound, MissingFrostDate or InvalidFrostDate
    before anything is written, and UnexpectedFailure (after rolling back)
    for anything else.
    """
    if user is None:
        raise Unauthenticated()

    # ── Validate ──────────────────────────────────────────────────────────────
    try:
        plan = await db.scalar(
            select(CropPlan).where(CropPlan.id == crop_plan_id, CropPlan.user_id == user.id)
        )
        season = None
        if plan is not None:
            season = await db.scalar(
                select(Season).where(Season.id == plan.garden_season_id, Season.user_id == user.id)
            )
    except SQLAlchemyError as exc:
        await db.rollback()
        logger.exception("regenerate_crop_tasks: loading crop plan %d failed", crop_plan_id)
        raise UnexpectedFailure() from exc

    if plan is None:
        raise NotFound("Crop plan not found")
    if season is None:
        raise NotFound("Season not found")

    season_year = season.year or today.year
    anchor = resolve_anchor_date(season.last_frost_date, user.last_frost_date, season_year)
    logger.info("regenerate_crop_tasks: crop plan %d anchored on %s", plan.id, anchor)

    try:
        variety = await _get(db, Variety, plan.variety_id)
        profile = await _get(db, PlantProfile, plan.plant_profile_id)
        plant_type = await _get(db, PlantType, plan.plant_type_id)

        # PlantProfile overrides Variety field by field
        timing = resolve_timing(variety, profile)
        label = compose_label(plan.label, variety, profile, plant_type)
        planned = plan_crop_tasks(PlanInputs.from_plan(plan, label), timing, anchor)
        if len(planned) > settings.MAX_TASKS_PER_CROP:
            logger.warning(
                "regenerate_crop_tasks: crop plan %d produced %d tasks (limit %d)",
                plan.id, len(planned), settings.MAX_TASKS_PER_CROP,
            )

        # ── Purge ─────────────────────────────────────────────────────────────
        purged = await db.execute(delete(CropTask).where(CropTask.crop_plan_id == plan.id))
        deleted = purged.rowcount or 0

        # ── Generate & persist ────────────────────────────────────────────────
        color = plan.color_hex or (plant_type.color_hex if plant_type else None) or DEFAULT_COLOR
        rows = [
            CropTask(
                crop_plan_id=plan.id,
                garden_season_id=plan.garden_season_id,
                task_type=task.task_type,
                subtype=task.subtype,
                title=task.title,
                start_date=task.start_date,
                end_date=task.end_date,
                quantity_target=task.quantity_target,
                quantity_completed=0,
                color_hex=color,
                notes=task.notes,
                how_to_content=task.how_to_content,
                is_completed=False,
            )
            for task in planned
        ]
        for task in planned:
            logger.debug("  %s %s..%s %s", task.subtype, task.start_date, task.end_date, task.title)
        db.add_all(rows)

        plan.status = "scheduled"
        plan.quantity_scheduled = plan.quantity_planned
        plan_id = plan.id
        await db.commit()
    except Exception as exc:
        await db.rollback()
        logger.exception("regenerate_crop_tasks: crop plan %d failed", crop_plan_id)
        raise UnexpectedFailure() from exc

    logger.info(
        "regenerate_crop_tasks: crop plan %d: deleted %d, created %d tasks",
        plan_id, deleted, len(rows),
    )
    return GenerationResult(
        crop_plan_id=plan_id,
        tasks_created=len(rows),
        tasks_deleted=deleted,
        anchor_date=anchor,
    )


async def regenerate_season_tasks(
    db: AsyncSession,
    season_id: int,
    user: Optional[User],
    today: date,
) -> list[SeasonPlanResult]:
    """Regenerate every crop plan in a season. One plan failing does not stop the rest."""
    if user is None:
        raise Unauthenticated()

    season_owned = await db.scalar(
        select(Season.id).where(Season.id == season_id, Season.user_id == user.id)
    )
    if season_owned is None:
        raise NotFound("Season not found")

    result = await db.execute(
        select(CropPlan.id)
        .where(CropPlan.garden_season_id == season_id, CropPlan.user_id == user.id)
        .order_by(CropPlan.id)
    )
    plan_ids = list(result.scalars().all())

    results: list[SeasonPlanResult] = []
    for plan_id in plan_ids:
        try:
            outcome = await regenerate_crop_tasks(db, plan_id, user, today=today)
            results.append(SeasonPlanResult(crop_plan_id=plan_id, tasks_created=outcome.tasks_created))
        except UnexpectedFailure as exc:
            results.append(SeasonPlanResult(crop_plan_id=plan_id, error=exc.message))
            # The rollback expired the caller's user along with everything else
            await db.refresh(user)
        except TaskGenerationError as exc:
            logger.warning("regenerate_season_tasks: crop plan %d: %s", plan_id, exc.message)
            results.append(SeasonPlanResult(crop_plan_id=plan_id, error=exc.message))
    return results
