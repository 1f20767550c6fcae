"""
REGIME SIGNALS - Calendar / Time Grid Generation

Produces the common time axis for one computation run.
Business days are Mon-Fri only (no holiday calendar).
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime, timedelta
from enum import Enum
from typing import Iterator, Union

FRIDAY = 4  # date.weekday()


class Granularity(Enum):
    DAILY = "daily"
    BUSINESS_DAY = "business_day"
    WEEKLY = "weekly"


def parse_date(value: Union[str, datetime, date]) -> date:
    """Accept an ISO date string (YYYY-MM-DD), a datetime or a date."""
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    return date.fromisoformat(value[:10])


def days_between(start: date, end: date) -> int:
    """Signed number of calendar days from start to end."""
    return (end - start).days


def is_weekday(d: date) -> bool:
    return d.weekday() < 5


@dataclass(frozen=True)
class CalendarGrid:
    """
    Lazy, finite, restartable sequence of grid dates.

    Every call to iter() starts again from `start`, so a grid can be
    walked any number of times without being materialized.
    """

    start: date
    end: date
    granularity: Granularity

    def __iter__(self) -> Iterator[date]:
        if self.end < self.start:
            return

        if self.granularity == Granularity.WEEKLY:
            current = self.start + timedelta(days=(FRIDAY - self.start.weekday()) % 7)
            while current <= self.end:
                yield current
                current += timedelta(days=7)
            return

        current = self.start
        one_day = timedelta(days=1)
        while current <= self.end:
            if self.granularity == Granularity.DAILY or is_weekday(current):
                yield current
            current += one_day


def generate_grid(
    start: Union[str, date],
    end: Union[str, date],
    granularity: Granularity = Granularity.BUSINESS_DAY,
) -> CalendarGrid:
    """
    Build a time grid between start and end (inclusive).

    Args:
        start: First candidate date.
        end: Last candidate date. end < start gives an empty grid.
        granularity: DAILY, BUSINESS_DAY (Mon-Fri) or WEEKLY (Fridays).

    Returns:
        CalendarGrid; wrap in list() to materialize.
    """
    return CalendarGrid(parse_date(start), parse_date(end), granularity)
