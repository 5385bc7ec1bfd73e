"""
Slot Generation

Builds the public booking grid for one day: a canonical set of time marks
spaced ``granularity`` minutes apart, each with the number of on-duty
professionals who could take a service of the requested duration starting
at that mark.
"""

from dataclasses import dataclass
from datetime import date, datetime, timedelta
from typing import Iterable, Optional, Sequence

from .overlap import BookedInterval, has_conflict
from .timevalues import TimeOfDay, WorkSchedule


@dataclass(frozen=True)
class TimeSlot:
    time: TimeOfDay
    available_professional_count: int


def on_duty(schedules: Iterable[WorkSchedule], day: date) -> list[WorkSchedule]:
    return [s for s in schedules if s.works_on(day)]


def working_days(schedules: Iterable[WorkSchedule]) -> list[int]:
    """Weekdays (0=Sunday) on which at least one professional works."""
    days = set()
    for schedule in schedules:
        days.update(schedule.work_days)
    return sorted(int(d) for d in days)


def is_professional_free(
    schedule: WorkSchedule,
    day: date,
    start_minute: int,
    duration_minutes: int,
    booked: Sequence[BookedInterval],
) -> bool:
    end_minute = start_minute + duration_minutes
    if not schedule.works_on(day) or not schedule.fits(start_minute, end_minute):
        return False
    start = TimeOfDay(start_minute).on(day)
    end = start + timedelta(minutes=duration_minutes)
    return not has_conflict(schedule.professional_id, start, end, booked)


def count_available_professionals(
    day: date,
    start_minute: int,
    duration_minutes: int,
    schedules: Iterable[WorkSchedule],
    booked: Sequence[BookedInterval],
) -> int:
    return sum(
        1
        for schedule in schedules
        if is_professional_free(schedule, day, start_minute, duration_minutes, booked)
    )


def generate_slots(
    day: date,
    duration_minutes: int,
    schedules: Iterable[WorkSchedule],
    booked: Iterable[BookedInterval],
    granularity: int = 30,
    not_before: Optional[datetime] = None,
) -> list[TimeSlot]:
    """
    Generate the ordered time marks for ``day``.

    Marks run from the earliest on-duty start (floored to the granularity) up
    to, but excluding, the latest on-duty end. Every mark is reported; a count
    of 0 means nobody can take the service then. Marks earlier than
    ``not_before`` report 0.

    Raises:
        ValueError: non-positive duration or granularity
    """
    if duration_minutes <= 0:
        raise ValueError("Service duration must be positive")
    if granularity <= 0:
        raise ValueError("Slot granularity must be positive")

    working = on_duty(schedules, day)
    if not working:
        return []

    booked = [b for b in booked if b.is_active and b.professional_id is not None]

    first_mark = min(s.start.minutes for s in working) // granularity * granularity
    last_end = max(s.end.minutes for s in working)

    slots = []
    mark = first_mark
    while mark < last_end:
        count = count_available_professionals(day, mark, duration_minutes, working, booked)
        if not_before is not None and TimeOfDay(mark).on(day) < not_before:
            count = 0
        slots.append(TimeSlot(time=TimeOfDay(mark), available_professional_count=count))
        mark += granularity
    return slots
