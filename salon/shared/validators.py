"""Shared validation utilities"""

import re
from typing import Optional

from ..domain.scheduling.timevalues import TimeOfDay

_EMAIL_RE = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")


def validate_phone(phone: Optional[str]) -> Optional[str]:
    """
    Validate and normalize a phone number.

    Keeps the digits (and a leading ``+``) so that ``(11) 98765-4321`` and
    ``11987654321`` are stored identically.

    Raises:
        ValueError: If the number has fewer than 8 or more than 15 digits
    """
    if not phone:
        return phone

    digits = re.sub(r"\D", "", phone)
    if not 8 <= len(digits) <= 15:
        raise ValueError("Phone number must have between 8 and 15 digits")

    prefix = "+" if phone.strip().startswith("+") else ""
    return f"{prefix}{digits}"


def validate_email(email: Optional[str]) -> Optional[str]:
    """
    Validate email format.

    Returns:
        Lowercase email address

    Raises:
        ValueError: If email format is invalid
    """
    if not email:
        return None

    email = email.strip().lower()
    if not _EMAIL_RE.match(email):
        raise ValueError("Invalid email format")
    return email


def validate_time_of_day(value: Optional[str]) -> Optional[str]:
    """Validate a 24h ``HH:MM`` string"""
    if value is None:
        return value
    return str(TimeOfDay.parse(value))
