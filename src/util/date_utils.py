"""
Date formatting helpers for Salesforce date and datetime fields.
"""

from datetime import date, datetime, timezone
from typing import Optional, Union

DATE_FORMAT = "%Y-%m-%d"


def format_date(value: Optional[Union[date, datetime]]) -> Optional[str]:
    """
    Format a date for a Salesforce Date field.

    Args:
        value: date or datetime, may be None

    Returns:
        str: YYYY-MM-DD, or None when value is None
    """
    if value is None:
        return None
    return value.strftime(DATE_FORMAT)


def format_timestamp(value: Optional[datetime]) -> Optional[str]:
    """
    Format a datetime for a Salesforce DateTime field (ISO-8601).

    Naive datetimes are treated as UTC.

    Args:
        value: datetime, may be None

    Returns:
        str: ISO-8601 timestamp, or None when value is None
    """
    if value is None:
        return None
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return value.isoformat(timespec="seconds")
