from datetime import date, timedelta

import pytest

from sowplan.services.windows import (
    DIRECT_SOW,
    SEED_START,
    TRANSPLANT,
    Window,
    build_harvest_window,
    build_window,
    is_valid_range,
    offset_window,
)

ANCHOR = date(2025, 5, 10)


def days(n: int) -> timedelta:
    return timedelta(days=n)


def test_explicit_zero_offset_is_not_treated_as_missing():
    window = build_window(ANCHOR, 0, 3, None, None, TRANSPLANT)
    assert window.start == ANCHOR
    assert window.end == ANCHOR + days(5)


def test_explicit_offset_overrides_weeks():
    window = build_window(ANCHOR, -35, 8, None, None, SEED_START)
    assert window.start == ANCHOR - days(35)


def test_fallback_weeks_per_rule():
    assert build_window(ANCHOR, None, None, None, None, SEED_START).start == ANCHOR - days(42)
    assert build_window(ANCHOR, None, None, None, None, TRANSPLANT).start == ANCHOR + days(14)
    sow = build_window(ANCHOR, None, None, None, None, DIRECT_SOW)
    assert sow.start == ANCHOR
    assert sow.end == ANCHOR + days(7)


def test_seed_window_ends_at_minimum_weeks_before_frost():
    window = build_window(ANCHOR, None, 8, 6, 10, SEED_START)
    assert window.start == ANCHOR - days(56)
    assert window.end == ANCHOR - days(42)


def test_transplant_window_ends_at_maximum_weeks_after_frost():
    window = build_window(ANCHOR, None, 1, 1, 3, TRANSPLANT)
    assert window.start == ANCHOR + days(7)
    assert window.end == ANCHOR + days(21)


def test_direct_sow_range_before_frost():
    window = build_window(ANCHOR, None, -4, -4, -2, DIRECT_SOW)
    assert window.start == ANCHOR - days(28)
    assert window.end == ANCHOR - days(14)


@pytest.mark.parametrize("low, high", [(3, 1), (2, 2), (None, 3), (1, None)])
def test_unusable_range_falls_back_to_default_width(low, high):
    window = build_window(ANCHOR, None, 2, low, high, TRANSPLANT)
    assert window.end == window.start + days(5)


def test_start_outside_range_uses_default_width():
    # 40 days after frost is past the 3-week maximum
    window = build_window(ANCHOR, 40, None, 1, 3, TRANSPLANT)
    assert window.start == ANCHOR + days(40)
    assert window.end == ANCHOR + days(45)


def test_is_valid_range():
    assert is_valid_range(0, 1)
    assert is_valid_range(-3, -1)
    assert not is_valid_range(1, 1)
    assert not is_valid_range(None, None)


def test_harvest_window_widths():
    start = date(2025, 8, 1)
    assert build_harvest_window(start, None, None).end == start + days(14)
    assert build_harvest_window(start, 70, 75).end == start + days(14)
    assert build_harvest_window(start, 60, 90).end == start + days(30)
    assert build_harvest_window(start, 90, 60).end == start + days(14)
    assert build_harvest_window(start, 60, 90, override_days=10).end == start + days(10)
    assert build_harvest_window(start, None, None, override_days=0).end == start


def test_window_rejects_inverted_dates():
    with pytest.raises(ValueError):
        Window(date(2025, 5, 2), date(2025, 5, 1))


def test_offset_window():
    window = offset_window(ANCHOR, -14, -7)
    assert (window.start, window.end) == (ANCHOR - days(14), ANCHOR - days(7))
    assert window.days == 7
