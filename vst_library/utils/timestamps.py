"""Timestamp helpers for rows read through raw SQL or Core statements."""
from datetime import datetime
from typing import Optional, Union


def utcnow() -> datetime:
    """Naive UTC timestamp, the form stored in the database."""
    return datetime.utcnow()


def parse_timestamp(value: Union[datetime, str, None]) -> Optional[datetime]:
    """Accept either a datetime (typed Core query) or SQLite's text form."""
    if value is None or isinstance(value, datetime):
        return value
    return datetime.fromisoformat(str(value))


def isoformat(value: Optional[datetime]) -> Optional[str]:
    """ISO string or None."""
    return value.isoformat() if value else None
