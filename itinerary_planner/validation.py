"""Trip parameter validation, run before any completion call."""

from __future__ import annotations

from typing import Optional

from .errors import InvalidTripRequest
from .models import TripRequest
from .utils import parse_iso_date, trip_length_days

MIN_DESTINATION_CHARS = 2
MAX_DESTINATION_CHARS = 60
MAX_TRIP_DAYS = 14


def validate_trip(destination: Optional[str], start_date: Optional[str], end_date: Optional[str]) -> Optional[str]:
    """Return a human-readable error, or ``None`` when the trip is acceptable."""

    dest = (destination or "").strip()
    if len(dest) < MIN_DESTINATION_CHARS or len(dest) > MAX_DESTINATION_CHARS:
        return f"Destination must be {MIN_DESTINATION_CHARS}–{MAX_DESTINATION_CHARS} characters."
    if not start_date or not end_date:
        return "Provide both start and end dates."
    start = parse_iso_date(start_date)
    end = parse_iso_date(end_date)
    if start is None or end is None:
        return "Dates must use the YYYY-MM-DD format."
    if end < start:
        return "End date must be after start date."
    if trip_length_days(start, end) > MAX_TRIP_DAYS:
        return f"Trip length must be {MAX_TRIP_DAYS} days or less."
    return None


def build_trip_request(destination: str, start_date: str, end_date: str, model: str) -> TripRequest:
    error = validate_trip(destination, start_date, end_date)
    if error:
        raise InvalidTripRequest(error)
    return TripRequest(
        destination=destination.strip(),
        start_date=parse_iso_date(start_date),
        end_date=parse_iso_date(end_date),
        model=model,
    )
