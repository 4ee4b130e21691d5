"""
Time windows for analytics.

Windows are half-open intervals [start, end). A record with timestamp t
belongs to a window when start <= t < end, so a record stamped exactly at
a boundary belongs to the later window only.

Weeks always start Monday 00:00, regardless of locale.
"""

from dataclasses import dataclass
from datetime import date, datetime, timedelta
from typing import Iterable, Iterator, List, TypeVar, Union

from adhd_planner.core.errors import InvalidWindow
from adhd_planner.core.models import start_of_day

T = TypeVar("T")

DateLike = Union[date, datetime]


@dataclass(frozen=True)
class TimeWindow:
    """Half-open [start, end) interval."""
    start: datetime
    end: datetime

    def __post_init__(self):
        if self.end <= self.start:
            raise InvalidWindow(
                f"Window end {self.end.isoformat()} must be after start {self.start.isoformat()}"
            )

    @property
    def span(self) -> timedelta:
        return self.end - self.start

    def contains(self, moment: datetime) -> bool:
        return self.start <= moment < self.end

    def shift(self, delta: timedelta) -> 'TimeWindow':
        return TimeWindow(self.start + delta, self.end + delta)

    def to_dict(self) -> dict:
        return {"start": self.start.isoformat(), "end": self.end.isoformat()}


def day_window(moment: DateLike) -> TimeWindow:
    """Calendar day containing ``moment``."""
    start = start_of_day(moment)
    return TimeWindow(start, start + timedelta(days=1))


def week_window(moment: DateLike) -> TimeWindow:
    """Monday 00:00 through the following Monday 00:00."""
    day = start_of_day(moment)
    start = day - timedelta(days=day.weekday())
    return TimeWindow(start, start + timedelta(days=7))


def previous_week(window: TimeWindow) -> TimeWindow:
    """Same span shifted back exactly 7 days."""
    return window.shift(timedelta(days=-7))


def previous_period(window: TimeWindow) -> TimeWindow:
    """Window of the same length immediately before this one."""
    return window.shift(-window.span)


def days(window: TimeWindow) -> Iterator[TimeWindow]:
    """Yield the calendar-day windows covering ``window``."""
    current = start_of_day(window.start)
    while current < window.end:
        yield day_window(current)
        current += timedelta(days=1)


def select(records: Iterable[T], window: TimeWindow) -> List[T]:
    """
    Keep the records whose timestamp falls inside the window.

    Each record kind declares its own timestamp field (created_at,
    timestamp, started_at or week_of); records without one are skipped.
    """
    selected = []
    for record in records:
        moment = record.recorded_at()
        if moment is not None and window.contains(moment):
            selected.append(record)
    return selected
