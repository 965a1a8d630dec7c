from collections import Counter
from datetime import date, timedelta

import pytest

from sowplan.services.lifecycle import plan_lifecycle
from sowplan.services.planned_task import PlanInputs
from sowplan.services.recurring import bounded_series, plan_recurring
from sowplan.services.timing import TimingData

ANCHOR = date(2025, 5, 10)


def test_series_stops_at_cap():
    windows = bounded_series(date(2025, 6, 1), 7, 1, 3, date(2025, 12, 31))
    assert [w.start for w in windows] == [date(2025, 6, 1), date(2025, 6, 8), date(2025, 6, 15)]
    assert all(w.days == 1 for w in windows)


def test_series_stops_at_termination_date():
    windows = bounded_series(date(2025, 6, 1), 7, 0, 10, date(2025, 6, 15))
    assert len(windows) == 3
    assert windows[-1].start == date(2025, 6, 15)


def test_series_empty_when_start_after_termination():
    assert bounded_series(date(2025, 9, 1), 7, 1, 10, date(2025, 8, 1)) == []


def test_series_end_is_clamped():
    windows = bounded_series(date(2025, 6, 1), 7, 7, 10, date(2025, 6, 10), clamp_end=date(2025, 6, 10))
    assert [(w.start, w.end) for w in windows] == [
        (date(2025, 6, 1), date(2025, 6, 8)),
        (date(2025, 6, 8), date(2025, 6, 10)),
    ]


def test_series_rejects_non_positive_interval():
    with pytest.raises(ValueError):
        bounded_series(date(2025, 6, 1), 0, 1, 10, date(2025, 7, 1))


def _recurring(plan, timing):
    _, dates = plan_lifecycle(plan, timing, ANCHOR)
    return plan_recurring(plan, dates)


def test_transplant_crop_series():
    plan = PlanInputs(label="Tomato", planting_method="transplant", quantity_planned=4)
    timing = TimingData(start_indoors_weeks=6, transplant_weeks_after_last_frost_min=2, days_to_maturity=75)

    tasks = _recurring(plan, timing)
    counts = Counter(t.subtype for t in tasks)

    assert counts == {"fertilize": 3, "water": 13, "weed": 9, "pest_scout": 8}
    assert all(t.task_type == "cultivate" and t.quantity_target == 1 for t in tasks)

    fertilize = [t.start_date for t in tasks if t.subtype == "fertilize"]
    assert fertilize == [date(2025, 6, 7), date(2025, 6, 28), date(2025, 7, 19)]

    water = [t for t in tasks if t.subtype == "water"]
    assert water[0].start_date == date(2025, 5, 27)
    assert water[-1].start_date == date(2025, 8, 19)
    assert water[-1].end_date == date(2025, 8, 21)

    weed = [t for t in tasks if t.subtype == "weed"]
    assert weed[0].title == "Weed around Tomato"
    assert weed[-1].start_date == date(2025, 8, 2)

    scout = [t for t in tasks if t.subtype == "pest_scout"]
    assert scout[0].start_date == date(2025, 6, 14)
    assert scout[0].title == "Check Tomato for Pests"


def test_long_season_hits_every_cap():
    plan = PlanInputs(label="Parsnip", planting_method="direct_seed", dtm_days=200)
    counts = Counter(t.subtype for t in _recurring(plan, TimingData()))
    assert counts == {"fertilize": 6, "water": 15, "weed": 10, "pest_scout": 8}


def test_no_task_runs_past_harvest():
    plan = PlanInputs(label="Radish", planting_method="direct_seed", dtm_days=25)
    _, dates = plan_lifecycle(plan, TimingData(), ANCHOR)
    tasks = plan_recurring(plan, dates)
    assert all(t.end_date <= dates.harvest.end for t in tasks)
    assert all(t.start_date <= dates.harvest.start for t in tasks if t.subtype != "water")
    assert all(t.end_date - t.start_date >= timedelta(0) for t in tasks)
