"""
One-off maintenance tasks derived from lifecycle dates.

Each task is guarded independently; a missing trigger (no transplant, no
trellis flag, short-season crop) just skips that task.
"""
from datetime import date

from sowplan.services.lifecycle import LifecycleDates
from sowplan.services.planned_task import PlanInputs, PlannedTask
from sowplan.services.timing import TimingData
from sowplan.services.windows import SHORT_WINDOW_DAYS, offset_window

# Long-season crops spend long enough indoors to outgrow their first cells
POT_UP_MIN_WEEKS = 6
POT_UP_MAX_OFFSET_DAYS = -42


def needs_pot_up(plan: PlanInputs, timing: TimingData) -> bool:
    if timing.seed_weeks is not None and timing.seed_weeks >= POT_UP_MIN_WEEKS:
        return True
    return plan.seed_offset_days is not None and plan.seed_offset_days <= POT_UP_MAX_OFFSET_DAYS


def plan_maintenance(
    plan: PlanInputs, timing: TimingData, dates: LifecycleDates
) -> list[PlannedTask]:
    planting: date = dates.planting_date
    label = plan.label
    tasks = [
        PlannedTask.from_window(
            "bed_prep", "bed_prep", f"Prepare Bed for {label}", offset_window(planting, -14, -7)
        )
    ]

    if dates.seed is not None and dates.transplant is not None:
        tasks.append(PlannedTask.from_window(
            "cultivate", "harden_off", f"Harden Off {label}",
            offset_window(dates.transplant.start, -10, -1),
            notes="Gradually expose seedlings to outdoor conditions",
        ))

    if dates.seed is not None and needs_pot_up(plan, timing):
        tasks.append(PlannedTask.from_window(
            "cultivate", "pot_up", f"Pot Up {label} Seedlings",
            offset_window(dates.seed.start, 24, 24 + SHORT_WINDOW_DAYS),
        ))

    if timing.trellis_required:
        tasks.append(PlannedTask.from_window(
            "cultivate", "trellis", f"Install Trellis for {label}",
            offset_window(planting, 0, SHORT_WINDOW_DAYS),
        ))

    tasks.append(PlannedTask.from_window(
        "cultivate", "mulch", f"Mulch {label}", offset_window(planting, 7, 7 + SHORT_WINDOW_DAYS)
    ))
    return tasks
