"""Schedule value types.

Professionals store their schedule as strings (``"1,2,3,4,5"``, ``"08:00"``).
These are parsed once into ``WorkSchedule`` so slot generation only compares
integers.
"""

import re
from dataclasses import dataclass
from datetime import date, datetime, timedelta
from enum import IntEnum
from typing import Iterable, Optional

_TIME_RE = re.compile(r"^([01]\d|2[0-3]):([0-5]\d)$")

MINUTES_PER_DAY = 24 * 60


class Weekday(IntEnum):
    """Weekday numbering used by the API: 0=Sunday..6=Saturday."""

    SUNDAY = 0
    MONDAY = 1
    TUESDAY = 2
    WEDNESDAY = 3
    THURSDAY = 4
    FRIDAY = 5
    SATURDAY = 6

    @classmethod
    def of(cls, day: date) -> "Weekday":
        # date.weekday() is 0=Monday
        return cls((day.weekday() + 1) % 7)


@dataclass(frozen=True, order=True)
class TimeOfDay:
    minutes: int

    def __post_init__(self):
        if not 0 <= self.minutes <= MINUTES_PER_DAY:
            raise ValueError(f"Time of day out of range: {self.minutes} minutes")

    @classmethod
    def parse(cls, value: str) -> "TimeOfDay":
        match = _TIME_RE.match(value.strip()) if value else None
        if not match:
            raise ValueError(f"Invalid time '{value}'. Expected HH:MM")
        return cls(int(match.group(1)) * 60 + int(match.group(2)))

    def on(self, day: date) -> datetime:
        return datetime.combine(day, datetime.min.time()) + timedelta(minutes=self.minutes)

    def __str__(self) -> str:
        return f"{self.minutes // 60:02d}:{self.minutes % 60:02d}"


def parse_work_days(value) -> frozenset:
    """Parse ``"1,2,3"`` or an iterable of ints into a set of Weekday."""
    if value is None:
        return frozenset()
    if isinstance(value, str):
        parts = [p.strip() for p in value.split(",") if p.strip()]
    else:
        parts = list(value)
    try:
        return frozenset(Weekday(int(p)) for p in parts)
    except ValueError:
        raise ValueError(f"Invalid work days '{value}'. Expected weekday numbers 0-6") from None


def format_work_days(days: Iterable[int]) -> str:
    return ",".join(str(int(d)) for d in sorted(set(days)))


@dataclass(frozen=True)
class WorkSchedule:
    """A professional's weekly availability."""

    professional_id: Optional[int]
    work_days: frozenset
    start: TimeOfDay
    end: TimeOfDay
    lunch_start: Optional[TimeOfDay] = None
    lunch_end: Optional[TimeOfDay] = None

    def __post_init__(self):
        if not self.start < self.end:
            raise ValueError("Work start time must be before work end time")
        if (self.lunch_start is None) != (self.lunch_end is None):
            raise ValueError("Lunch start and end must be given together")
        if self.lunch_start is not None:
            if not (self.start <= self.lunch_start < self.lunch_end <= self.end):
                raise ValueError("Lunch break must fall inside working hours")

    @classmethod
    def parse(
        cls,
        professional_id: Optional[int],
        work_days,
        work_start_time: str,
        work_end_time: str,
        lunch_start_time: Optional[str] = None,
        lunch_end_time: Optional[str] = None,
    ) -> "WorkSchedule":
        return cls(
            professional_id=professional_id,
            work_days=parse_work_days(work_days),
            start=TimeOfDay.parse(work_start_time),
            end=TimeOfDay.parse(work_end_time),
            lunch_start=TimeOfDay.parse(lunch_start_time) if lunch_start_time else None,
            lunch_end=TimeOfDay.parse(lunch_end_time) if lunch_end_time else None,
        )

    @classmethod
    def from_professional(cls, professional) -> "WorkSchedule":
        return cls.parse(
            professional.id,
            professional.work_days,
            professional.work_start_time,
            professional.work_end_time,
            professional.lunch_start_time,
            professional.lunch_end_time,
        )

    @property
    def has_lunch(self) -> bool:
        return self.lunch_start is not None

    def works_on(self, day: date) -> bool:
        return Weekday.of(day) in self.work_days

    def fits(self, start_minute: int, end_minute: int) -> bool:
        """Whether ``[start_minute, end_minute)`` is bookable within the working window."""
        if start_minute < self.start.minutes or end_minute > self.end.minutes:
            return False
        if self.has_lunch:
            if start_minute < self.lunch_end.minutes and self.lunch_start.minutes < end_minute:
                return False
        return True
