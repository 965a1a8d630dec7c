"""
Anchor date resolution.

All offset math is relative to one anchor: the season's last frost date. When the
season has none, the user's personal last frost date is re-projected onto the
season's year (month and day only, since the stored year is arbitrary).
"""
import logging
from datetime import date, datetime
from typing import Optional, Union

from sowplan.core.errors import InvalidFrostDate, MissingFrostDate

logger = logging.getLogger(__name__)

FrostValue = Union[date, datetime, str, None]


def parse_frost_date(value: FrostValue) -> Optional[date]:
    """Coerce a stored frost date to a date. Raises InvalidFrostDate if it cannot be parsed."""
    if value is None:
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str):
        text = value.strip()
        if not text:
            return None
        try:
            # Accept full ISO timestamps as well as plain dates
            return date.fromisoformat(text[:10])
        except ValueError:
            raise InvalidFrostDate(f"Last frost date {value!r} is not a valid calendar date")
    raise InvalidFrostDate(f"Last frost date {value!r} is not a valid calendar date")


def reproject_to_year(frost: date, year: int) -> date:
    """Move a frost date onto another year, keeping month and day."""
    try:
        return date(year, frost.month, frost.day)
    except ValueError:
        # Feb 29 captured in a leap year has no counterpart in most years
        raise InvalidFrostDate(
            f"Last frost date {frost.month:02d}-{frost.day:02d} does not exist in {year}"
        )


def resolve_anchor_date(
    season_frost: FrostValue,
    user_frost: FrostValue,
    season_year: int,
) -> date:
    """
    Return the anchor date for a season.

    Season frost date wins. Otherwise the user's frost date is re-projected onto
    season_year. Raises MissingFrostDate when neither source has a value and
    InvalidFrostDate when a value is not a real calendar date.
    """
    season_date = parse_frost_date(season_frost)
    if season_date is not None:
        logger.debug("anchor date from season: %s", season_date)
        return season_date

    user_date = parse_frost_date(user_frost)
    if user_date is not None:
        anchor = reproject_to_year(user_date, season_year)
        logger.debug("anchor date from user profile: %s -> %s", user_date, anchor)
        return anchor

    raise MissingFrostDate()
