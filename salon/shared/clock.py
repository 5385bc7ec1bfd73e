"""Salon-local time helpers.

Datetimes are stored naive in the salon's timezone. Aware values coming in
through the API are converted once, here.
"""

from datetime import datetime
from typing import Optional
from zoneinfo import ZoneInfo

from ..config import SALON_TIMEZONE

SALON_TZ = ZoneInfo(SALON_TIMEZONE)


def local_now() -> datetime:
    """Current salon-local time, naive"""
    return datetime.now(SALON_TZ).replace(tzinfo=None)


def to_local_naive(value: Optional[datetime]) -> Optional[datetime]:
    if value is None or value.tzinfo is None:
        return value
    return value.astimezone(SALON_TZ).replace(tzinfo=None)
