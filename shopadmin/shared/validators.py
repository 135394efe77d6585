"""Shared validation utilities"""

import re
from datetime import date
from typing import Optional

HHMM_PATTERN = re.compile(r"^([01]\d|2[0-3]):[0-5]\d$")


def validate_phone(phone: Optional[str]) -> Optional[str]:
    """
    Validate and normalize a phone number.

    Args:
        phone: Phone number string in various formats ("+92 300 1234567", "0300-1234567")

    Returns:
        Digits only, with a leading "+" kept when the input had one

    Raises:
        ValueError: If phone number is invalid
    """
    if not phone:
        return phone

    phone = phone.strip()
    has_plus = phone.startswith("+")

    # Remove all non-digit characters
    digits = re.sub(r"\D", "", phone)

    if not 7 <= len(digits) <= 15:
        raise ValueError("Phone number must have between 7 and 15 digits")

    return f"+{digits}" if has_plus else digits


def validate_hhmm(value: Optional[str]) -> Optional[str]:
    """
    Validate a zero-padded 24-hour "HH:MM" time string.

    Raises:
        ValueError: If the value is not in HH:MM format
    """
    if value is None:
        return value
    if not isinstance(value, str) or not HHMM_PATTERN.match(value):
        raise ValueError("Time must be in HH:MM 24-hour format (e.g. 09:00)")
    return value


def validate_iso_date(value: Optional[str]) -> Optional[str]:
    """Validate a YYYY-MM-DD date string"""
    if not value:
        return None
    try:
        date.fromisoformat(value)
    except ValueError as e:
        raise ValueError("Date must be in YYYY-MM-DD format") from e
    return value


def validate_url(url: Optional[str]) -> Optional[str]:
    """Validate an http(s) URL"""
    if not url:
        return url
    url = url.strip()
    if not re.match(r"^https?://[^\s/$.?#].[^\s]*$", url, re.IGNORECASE):
        raise ValueError("URL must start with http:// or https://")
    return url
