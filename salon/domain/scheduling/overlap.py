"""
Overlap Detection

Appointments occupy half-open intervals ``[start, end)``. Two appointments
conflict when their intervals overlap; back-to-back appointments
(``a.end == b.start``) do not.
"""

from dataclasses import dataclass
from datetime import datetime
from typing import Iterable, Optional

CANCELLED = "cancelled"


@dataclass(frozen=True)
class BookedInterval:
    """The part of an appointment the availability logic cares about."""

    appointment_id: Optional[int]
    professional_id: Optional[int]
    start: datetime
    end: datetime
    status: str = "confirmed"

    @classmethod
    def from_appointment(cls, appointment) -> "BookedInterval":
        return cls(
            appointment_id=appointment.id,
            professional_id=appointment.professional_id,
            start=appointment.date,
            end=appointment.end_date,
            status=appointment.status,
        )

    @property
    def is_active(self) -> bool:
        return self.status != CANCELLED


def intervals_overlap(a_start, a_end, b_start, b_end) -> bool:
    return a_start < b_end and b_start < a_end


def find_conflict(
    professional_id: Optional[int],
    start: datetime,
    end: datetime,
    booked: Iterable[BookedInterval],
    exclude_appointment_id: Optional[int] = None,
) -> Optional[BookedInterval]:
    """
    Return the first booked interval that conflicts with ``[start, end)``.

    Unassigned candidates (``professional_id`` is None) claim no professional
    and never conflict. Cancelled bookings, bookings of other professionals
    and the excluded appointment are ignored.
    """
    if professional_id is None:
        return None

    for interval in booked:
        if interval.professional_id != professional_id:
            continue
        if not interval.is_active:
            continue
        if exclude_appointment_id is not None and interval.appointment_id == exclude_appointment_id:
            continue
        if intervals_overlap(start, end, interval.start, interval.end):
            return interval
    return None


def has_conflict(
    professional_id: Optional[int],
    start: datetime,
    end: datetime,
    booked: Iterable[BookedInterval],
    exclude_appointment_id: Optional[int] = None,
) -> bool:
    return find_conflict(professional_id, start, end, booked, exclude_appointment_id) is not None
