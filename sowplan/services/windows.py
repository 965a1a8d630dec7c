"""
Frost-relative date windows.

A window is a [start, end] pair of dates. Lifecycle windows start at an explicit
day offset from the anchor when the plan has one, otherwise at a week count
from timing data (or a per-rule fallback). The end comes from a valid
min/max week range when there is one, otherwise start + a fixed width.
"""
from dataclasses import dataclass
from datetime import date, timedelta
from typing import Literal, Optional

# Default window widths in days
SEED_WINDOW_DAYS = 5
TRANSPLANT_WINDOW_DAYS = 5
DIRECT_SOW_WINDOW_DAYS = 7
HARVEST_WINDOW_DAYS = 14
SHORT_WINDOW_DAYS = 3


@dataclass(frozen=True)
class Window:
    start: date
    end: date

    def __post_init__(self) -> None:
        if self.end < self.start:
            raise ValueError(f"window end {self.end} is before start {self.start}")

    @property
    def days(self) -> int:
        return (self.end - self.start).days


@dataclass(frozen=True)
class WindowRule:
    """Per-task constants for building a frost-relative window."""

    direction: int            # -1: weeks count back from frost, +1: forward
    fallback_weeks: float     # used when timing data has no week count
    default_window_days: int  # width when there is no usable min/max range
    range_edge: Literal["min", "max"]  # which range bound marks the late edge


# Seed starting counts weeks *before* frost, so the latest acceptable start is
# the smaller week figure. Transplant and direct sow count forward and end at
# the larger one.
SEED_START = WindowRule(direction=-1, fallback_weeks=6, default_window_days=SEED_WINDOW_DAYS, range_edge="min")
TRANSPLANT = WindowRule(direction=1, fallback_weeks=2, default_window_days=TRANSPLANT_WINDOW_DAYS, range_edge="max")
DIRECT_SOW = WindowRule(direction=1, fallback_weeks=0, default_window_days=DIRECT_SOW_WINDOW_DAYS, range_edge="max")


def weeks_to_days(weeks: float) -> int:
    return int(round(weeks * 7))


def is_valid_range(low: Optional[float], high: Optional[float]) -> bool:
    """A min/max pair is usable only when both are set and strictly ordered."""
    return low is not None and high is not None and low < high


def start_offset_days(
    explicit_offset_days: Optional[int],
    weeks_default: Optional[float],
    rule: WindowRule,
) -> int:
    """Signed day offset from the anchor to the window start."""
    if explicit_offset_days is not None:
        return explicit_offset_days
    weeks = weeks_default if weeks_default is not None else rule.fallback_weeks
    return rule.direction * weeks_to_days(weeks)


def build_window(
    anchor: date,
    explicit_offset_days: Optional[int],
    weeks_default: Optional[float],
    weeks_min: Optional[float],
    weeks_max: Optional[float],
    rule: WindowRule,
) -> Window:
    start = anchor + timedelta(days=start_offset_days(explicit_offset_days, weeks_default, rule))
    default_end = start + timedelta(days=rule.default_window_days)

    if not is_valid_range(weeks_min, weeks_max):
        return Window(start, default_end)

    edge_weeks = weeks_min if rule.range_edge == "min" else weeks_max
    end = anchor + timedelta(days=rule.direction * weeks_to_days(edge_weeks))
    if end < start:
        # Start sits outside the range (explicit offset or point value)
        return Window(start, default_end)
    return Window(start, end)


def build_harvest_window(
    start: date,
    dtm_min: Optional[int],
    dtm_max: Optional[int],
    override_days: Optional[int] = None,
) -> Window:
    if override_days is not None and override_days >= 0:
        width = override_days
    elif is_valid_range(dtm_min, dtm_max):
        width = max(HARVEST_WINDOW_DAYS, dtm_max - dtm_min)
    else:
        width = HARVEST_WINDOW_DAYS
    return Window(start, start + timedelta(days=width))


def offset_window(base: date, start_days: int, end_days: int) -> Window:
    """Fixed window relative to a base date, e.g. [-14, -7] for bed prep."""
    return Window(base + timedelta(days=start_days), base + timedelta(days=end_days))
