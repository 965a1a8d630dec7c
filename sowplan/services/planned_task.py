"""
In-memory task values produced by the planners, before they become CropTask rows.
"""
from dataclasses import dataclass
from datetime import date
from typing import Any, Optional

from sowplan.services.windows import Window

HOW_TO: dict[str, str] = {
    "seed_start": (
        "# Indoor Seeding\n\nStart seeds indoors:\n- Use seed starting mix\n"
        "- Keep warm and moist\n- Provide light once germinated"
    ),
    "transplant": (
        "# Transplanting\n\nTransplant seedlings:\n- Plant on an overcast day\n"
        "- Set at the same depth as in the pot\n- Water well after planting"
    ),
    "direct_sow": (
        "# Direct Seeding\n\nSow seeds directly:\n- Check soil temperature\n"
        "- Follow spacing guidelines\n- Water gently"
    ),
    "harvest": (
        "# Harvesting\n\nHarvest when ready:\n- Check maturity indicators\n"
        "- Harvest in the morning\n- Handle gently"
    ),
    "bed_prep": (
        "# Bed Preparation\n\nPrepare the bed by:\n- Removing weeds\n"
        "- Adding compost\n- Loosening soil"
    ),
    "harden_off": (
        "# Hardening Off\n\nAcclimate seedlings outdoors:\n- Start with 1-2 hours of shade\n"
        "- Increase sun and time daily\n- Bring in on cold nights"
    ),
    "pot_up": (
        "# Potting Up\n\nMove seedlings to larger pots:\n- Use pots 2-3x the current size\n"
        "- Handle by the leaves, not the stem\n- Water in well"
    ),
    "trellis": (
        "# Trellis & Support\n\nInstall support at planting:\n- Set stakes or trellis before roots spread\n"
        "- Anchor firmly\n- Tie stems loosely as they grow"
    ),
    "mulch": (
        "# Mulching\n\n- Apply 2-3 inches of mulch\n- Keep mulch off the stems\n"
        "- Water before mulching"
    ),
    "fertilize": (
        "# Fertilizing\n\n- Side-dress or feed at the drip line\n- Water in after feeding\n"
        "- Ease off nitrogen once fruiting"
    ),
    "water": (
        "# Watering\n\n- Water deeply in the morning\n- Check soil moisture first\n"
        "- Focus on roots, not leaves"
    ),
    "weed": (
        "# Weeding\n\n- Pull weeds when young\n- Remove the entire root system\n"
        "- Mulch to prevent regrowth"
    ),
    "pest_scout": (
        "# Pest Monitoring\n\n- Inspect leaves (top & bottom)\n- Check for damage patterns\n"
        "- Look for eggs or larvae\n- Take action early"
    ),
}


@dataclass(frozen=True)
class PlanInputs:
    """The crop-plan fields the planners read."""

    label: str
    planting_method: str
    quantity_planned: int = 1
    seed_offset_days: Optional[int] = None
    transplant_offset_days: Optional[int] = None
    direct_seed_offset_days: Optional[int] = None
    dtm_days: Optional[int] = None
    harvest_window_days: Optional[int] = None

    @classmethod
    def from_plan(cls, plan: Any, label: str) -> "PlanInputs":
        return cls(
            label=label,
            planting_method=plan.planting_method,
            quantity_planned=plan.quantity_planned or 0,
            seed_offset_days=plan.seed_offset_days,
            transplant_offset_days=plan.transplant_offset_days,
            direct_seed_offset_days=plan.direct_seed_offset_days,
            dtm_days=plan.dtm_days,
            harvest_window_days=plan.harvest_window_days,
        )


@dataclass(frozen=True)
class PlannedTask:
    task_type: str
    subtype: str
    title: str
    start_date: date
    end_date: date
    quantity_target: int = 1
    notes: Optional[str] = None
    how_to_content: Optional[str] = None

    def __post_init__(self) -> None:
        if self.end_date < self.start_date:
            raise ValueError(f"{self.title}: end {self.end_date} before start {self.start_date}")

    @classmethod
    def from_window(
        cls,
        task_type: str,
        subtype: str,
        title: str,
        window: Window,
        quantity_target: int = 1,
        notes: Optional[str] = None,
    ) -> "PlannedTask":
        return cls(
            task_type=task_type,
            subtype=subtype,
            title=title,
            start_date=window.start,
            end_date=window.end,
            quantity_target=quantity_target,
            notes=notes,
            how_to_content=HOW_TO.get(subtype),
        )
