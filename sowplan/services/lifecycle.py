"""
Lifecycle tasks: seed start, transplant, direct sow, harvest.

Which of these a crop gets depends on its planting method. Every crop gets exactly
one harvest task.
"""
import logging
from dataclasses import dataclass
from datetime import date, timedelta
from typing import Optional

from sowplan.services.planned_task import PlanInputs, PlannedTask
from sowplan.services.timing import TimingData
from sowplan.services.windows import (
    DIRECT_SOW,
    SEED_START,
    TRANSPLANT,
    Window,
    build_harvest_window,
    build_window,
)

logger = logging.getLogger(__name__)

DEFAULT_DAYS_TO_MATURITY = 80

TRANSPLANT_METHODS = {"transplant", "both"}
DIRECT_SEED_METHODS = {"direct_seed", "both"}


@dataclass(frozen=True)
class LifecycleDates:
    """Dates the lifecycle planner actually produced; None when not scheduled."""

    anchor: date
    harvest: Window
    seed: Optional[Window] = None
    transplant: Optional[Window] = None
    direct_sow: Optional[Window] = None

    @property
    def planting_date(self) -> date:
        """Day the crop goes into the ground: transplant, else direct sow, else anchor."""
        if self.transplant is not None:
            return self.transplant.start
        if self.direct_sow is not None:
            return self.direct_sow.start
        return self.anchor


def harvest_base(anchor: date, transplant: Optional[Window], direct_sow: Optional[Window]) -> date:
    # Direct sow takes priority over transplant when both are scheduled
    if direct_sow is not None:
        return direct_sow.start
    if transplant is not None:
        return transplant.start
    return anchor


def days_to_maturity(plan: PlanInputs, timing: TimingData) -> int:
    if plan.dtm_days is not None:
        return plan.dtm_days
    if timing.maturity_days is not None:
        return timing.maturity_days
    return DEFAULT_DAYS_TO_MATURITY


def plan_lifecycle(
    plan: PlanInputs, timing: TimingData, anchor: date
) -> tuple[list[PlannedTask], LifecycleDates]:
    tasks: list[PlannedTask] = []
    seed = transplant = direct_sow = None
    qty = plan.quantity_planned

    if plan.planting_method in TRANSPLANT_METHODS:
        seed = build_window(
            anchor,
            plan.seed_offset_days,
            timing.seed_weeks,
            timing.start_indoors_weeks_min,
            timing.start_indoors_weeks_max,
            SEED_START,
        )
        tasks.append(PlannedTask.from_window("seed", "seed_start", f"Start {plan.label} Seeds", seed, qty))

        transplant = build_window(
            anchor,
            plan.transplant_offset_days,
            timing.transplant_weeks,
            timing.transplant_weeks_after_last_frost_min,
            timing.transplant_weeks_after_last_frost_max,
            TRANSPLANT,
        )
        tasks.append(
            PlannedTask.from_window("transplant", "transplant", f"Transplant {plan.label}", transplant, qty)
        )

    if plan.planting_method in DIRECT_SEED_METHODS:
        direct_sow = build_window(
            anchor,
            plan.direct_seed_offset_days,
            timing.sow_weeks,
            timing.direct_sow_weeks_min,
            timing.direct_sow_weeks_max,
            DIRECT_SOW,
        )
        tasks.append(
            PlannedTask.from_window("direct_seed", "direct_sow", f"Direct Sow {plan.label}", direct_sow, qty)
        )

    base = harvest_base(anchor, transplant, direct_sow)
    dtm = days_to_maturity(plan, timing)
    harvest = build_harvest_window(
        base + timedelta(days=dtm),
        timing.days_to_maturity_min,
        timing.days_to_maturity_max,
        plan.harvest_window_days,
    )
    logger.debug(
        "harvest for %s: base %s + %d days -> %s..%s",
        plan.label, base, dtm, harvest.start, harvest.end,
    )
    tasks.append(PlannedTask.from_window("harvest", "harvest", f"Harvest {plan.label}", harvest, qty))

    return tasks, LifecycleDates(
        anchor=anchor,
        harvest=harvest,
        seed=seed,
        transplant=transplant,
        direct_sow=direct_sow,
    )
