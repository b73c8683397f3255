from __future__ import annotations

from datetime import date, datetime
from typing import Union

from ..core.constants import DATE_FORMAT


def parse_iso_date(value: str) -> date:
    """Parse YYYY-MM-DD string into date."""
    return datetime.strptime(value, DATE_FORMAT).date()


def as_calendar_date(value: Union[date, datetime]) -> date:
    """Strip the time-of-day part, if any."""
    if isinstance(value, datetime):
        return value.date()
    return value


def format_date(value: date) -> str:
    return value.strftime(DATE_FORMAT)
