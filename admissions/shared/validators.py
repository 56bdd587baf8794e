"""Shared validation utilities"""

import re
from typing import Optional

SLOT_TIME_PATTERN = re.compile(r"^([01]\d|2[0-3]):([0-5]\d)$")


def validate_email(email: Optional[str]) -> Optional[str]:
    """
    Validate email format.

    Args:
        email: Email address string

    Returns:
        Lowercase email address

    Raises:
        ValueError: If email format is invalid
    """
    if not email:
        raise ValueError("Email address is required")

    email = email.strip().lower()

    # Basic email validation pattern
    email_pattern = r"^[a-zA-Z0-9._%+-]+@[a-zA-Z0-9.-]+\.[a-zA-Z]{2,}$"

    if not re.match(email_pattern, email):
        raise ValueError("Invalid email format")

    return email


def validate_slot_time(value: Optional[str]) -> str:
    """
    Validate a 24-hour wall-clock time such as "09:30".

    Raises:
        ValueError: If the value is not HH:MM with hour 00-23 and minute 00-59
    """
    if value is None:
        raise ValueError("Slot time is required")

    value = value.strip()
    if not SLOT_TIME_PATTERN.match(value):
        raise ValueError(f"Slot time must be in HH:MM 24-hour format, got {value!r}")

    return value


def validate_required_text(value: Optional[str], field_name: str) -> str:
    """Strip a required free-text field, rejecting blanks"""
    if value is None or not value.strip():
        raise ValueError(f"{field_name} is required")
    return value.strip()
