"""Utility helpers."""

from datetime import date, datetime, timedelta
import re
from typing import List, Optional

ISO_DATE_RE = re.compile(r"^\d{4}-\d{2}-\d{2}$")


def parse_iso_date(value: str) -> Optional[date]:
    if not value or not ISO_DATE_RE.match(value):
        return None
    try:
        return datetime.strptime(value, "%Y-%m-%d").date()
    except ValueError:
        return None


def trip_length_days(start: date, end: date) -> int:
    """Inclusive number of days between two dates."""

    return (end - start).days + 1


def make_date_list(start_date_str: str, end_date_str: str) -> List[str]:
    start = datetime.strptime(start_date_str, "%Y-%m-%d").date()
    end = datetime.strptime(end_date_str, "%Y-%m-%d").date()
    dates: List[str] = []
    current = start
    while current <= end:
        dates.append(current.isoformat())
        current += timedelta(days=1)
    return dates


def truncate_text(text: str, max_chars: int) -> str:
    if max_chars <= 0 or len(text) <= max_chars:
        return text
    return text[:max_chars]
