"""Unit tests for itinerary_planner.utils."""

from datetime import date

from itinerary_planner.utils import make_date_list, parse_iso_date, trip_length_days, truncate_text


def test_make_date_list_inclusive():
    dates = make_date_list("2025-01-01", "2025-01-03")
    assert dates == ["2025-01-01", "2025-01-02", "2025-01-03"]


def test_parse_iso_date_rejects_non_iso():
    assert parse_iso_date("2025-05-01") == date(2025, 5, 1)
    assert parse_iso_date("2025-5-1") is None
    assert parse_iso_date("2025-13-01") is None
    assert parse_iso_date("") is None


def test_trip_length_days_counts_both_ends():
    assert trip_length_days(date(2025, 5, 1), date(2025, 5, 1)) == 1
    assert trip_length_days(date(2025, 2, 27), date(2025, 3, 2)) == 4


def test_truncate_text_caps_length():
    assert truncate_text("abcdef", 3) == "abc"
    assert truncate_text("abc", 10) == "abc"
