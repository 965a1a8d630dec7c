"""
Bounded recurring maintenance series (fertilize, water, weed, pest scouting).

Every category is the same loop, parameterized by start, interval, width, an
occurrence cap and a termination date. The cap keeps per-crop volume small
regardless of how long the season runs.
"""
from dataclasses import dataclass
from datetime import date, timedelta
from typing import Optional

from sowplan.services.lifecycle import LifecycleDates
from sowplan.services.planned_task import PlanInputs, PlannedTask
from sowplan.services.windows import Window


def bounded_series(
    start: date,
    interval_days: int,
    width_days: int,
    cap: int,
    until: date,
    clamp_end: Optional[date] = None,
) -> list[Window]:
    """
    Windows starting at start and every interval_days after it.

    Stops at whichever comes first: cap occurrences, or an occurrence that would
    start after until. With clamp_end, no occurrence ends after that date.
    """
    if interval_days <= 0:
        raise ValueError("interval_days must be positive")

    windows: list[Window] = []
    current = start
    while len(windows) < cap and current <= until:
        end = current + timedelta(days=width_days)
        if clamp_end is not None and end > clamp_end:
            end = max(current, clamp_end)
        windows.append(Window(current, end))
        current += timedelta(days=interval_days)
    return windows


@dataclass(frozen=True)
class SeriesRule:
    subtype: str
    title: str               # formatted with the crop label
    start_offset_days: int   # from planting date
    interval_days: int
    width_days: int
    cap: int
    until: str               # "harvest_start" or "harvest_end"
    clamp_to_harvest_end: bool = False
    notes: Optional[str] = None


SERIES_RULES: tuple[SeriesRule, ...] = (
    SeriesRule("fertilize", "Fertilize {label}", 14, 21, 0, 6, "harvest_start"),
    SeriesRule(
        "water", "Water {label}", 3, 7, 7, 15, "harvest_end",
        clamp_to_harvest_end=True,
        notes="Check soil moisture regularly and water as needed",
    ),
    SeriesRule("weed", "Weed around {label}", 14, 7, 1, 10, "harvest_start"),
    SeriesRule(
        "pest_scout", "Check {label} for Pests", 21, 7, 1, 8, "harvest_start",
        notes="Inspect leaves for pests or disease",
    ),
)


def plan_recurring(plan: PlanInputs, dates: LifecycleDates) -> list[PlannedTask]:
    planting = dates.planting_date
    tasks: list[PlannedTask] = []
    for rule in SERIES_RULES:
        until = dates.harvest.start if rule.until == "harvest_start" else dates.harvest.end
        windows = bounded_series(
            planting + timedelta(days=rule.start_offset_days),
            rule.interval_days,
            rule.width_days,
            rule.cap,
            until,
            clamp_end=dates.harvest.end if rule.clamp_to_harvest_end else None,
        )
        title = rule.title.format(label=plan.label)
        tasks.extend(
            PlannedTask.from_window("cultivate", rule.subtype, title, window, notes=rule.notes)
            for window in windows
        )
    return tasks
