"""
Effective timing data for a crop plan.

Timing fields can come from a linked Variety and a linked PlantProfile. They are
folded left-to-right into one immutable TimingData: a later layer overwrites a
field only when its value is not None. Crop-plan offsets are not merged here;
the planners read them at each use site.
"""
from dataclasses import dataclass, fields, replace
from typing import Any, Mapping, Optional


@dataclass(frozen=True)
class TimingData:
    start_indoors_weeks: Optional[float] = None
    start_indoors_weeks_min: Optional[float] = None
    start_indoors_weeks_max: Optional[float] = None

    transplant_weeks_after_last_frost: Optional[float] = None
    transplant_weeks_after_last_frost_min: Optional[float] = None
    transplant_weeks_after_last_frost_max: Optional[float] = None

    direct_sow_weeks: Optional[float] = None
    direct_sow_weeks_min: Optional[float] = None
    direct_sow_weeks_max: Optional[float] = None

    days_to_maturity: Optional[int] = None
    days_to_maturity_min: Optional[int] = None
    days_to_maturity_max: Optional[int] = None

    trellis_required: Optional[bool] = None

    @property
    def seed_weeks(self) -> Optional[float]:
        # Counted back from frost, so the earliest start is the larger figure
        if self.start_indoors_weeks is not None:
            return self.start_indoors_weeks
        return self.start_indoors_weeks_max

    @property
    def transplant_weeks(self) -> Optional[float]:
        if self.transplant_weeks_after_last_frost is not None:
            return self.transplant_weeks_after_last_frost
        return self.transplant_weeks_after_last_frost_min

    @property
    def sow_weeks(self) -> Optional[float]:
        if self.direct_sow_weeks is not None:
            return self.direct_sow_weeks
        return self.direct_sow_weeks_min

    @property
    def maturity_days(self) -> Optional[int]:
        if self.days_to_maturity is not None:
            return self.days_to_maturity
        return self.days_to_maturity_min


TIMING_FIELDS: tuple[str, ...] = tuple(f.name for f in fields(TimingData))


def _layer_values(layer: Any) -> dict[str, Any]:
    """Pull the defined timing fields out of a mapping or an ORM record."""
    if isinstance(layer, Mapping):
        source = layer.get
    else:
        source = lambda name: getattr(layer, name, None)  # noqa: E731
    values = {}
    for name in TIMING_FIELDS:
        value = source(name)
        if value is not None:
            values[name] = value
    return values


def resolve_timing(*layers: Any) -> TimingData:
    """
    Fold timing layers in precedence order (lowest first).

    None layers are skipped, so a crop plan with neither a variety nor a
    profile resolves to an empty TimingData and every planner falls back to
    its hard-coded defaults.
    """
    timing = TimingData()
    for layer in layers:
        if layer is None:
            continue
        values = _layer_values(layer)
        if values:
            timing = replace(timing, **values)
    return timing
