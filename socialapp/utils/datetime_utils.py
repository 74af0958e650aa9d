"""
Centralized DateTime Utilities
==============================

Provides consistent datetime handling for document timestamps.
All datetime operations use the timezone configured in socialapp.core.config.

Functions:
- now(): Returns timezone-aware datetime object
- to_iso(): Convert datetime object to ISO 8601 string
"""
import logging
import zoneinfo
from datetime import datetime, timezone as dt_timezone, tzinfo
from typing import Optional

from socialapp.core.config import get_settings

logger = logging.getLogger(__name__)


def _get_app_timezone() -> tzinfo:
    """
    Get the application timezone from config.
    Returns timezone object (defaults to UTC if invalid).
    """
    tz_str = get_settings().timezone

    if tz_str.upper() == "UTC":
        return dt_timezone.utc

    try:
        return zoneinfo.ZoneInfo(tz_str)
    except (zoneinfo.ZoneInfoNotFoundError, ValueError):
        logger.warning("Invalid timezone '%s', falling back to UTC", tz_str)
        return dt_timezone.utc


def now() -> datetime:
    """
    Get current datetime with application-configured timezone.

    Returns:
        timezone-aware datetime object
    """
    return datetime.now(_get_app_timezone())


def to_iso(dt: Optional[datetime]) -> Optional[str]:
    """
    Convert datetime object to ISO 8601 string.
    If datetime is naive, assumes application timezone.

    Args:
        dt: datetime object (timezone-aware or naive)

    Returns:
        ISO 8601 formatted string, or None if dt is None
    """
    if dt is None:
        return None

    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=_get_app_timezone())

    # Format with timezone offset, or 'Z' if UTC
    if dt.utcoffset() == dt_timezone.utc.utcoffset(None):
        return dt.replace(microsecond=0).astimezone(dt_timezone.utc).isoformat().replace("+00:00", "Z")
    return dt.replace(microsecond=0).isoformat()
