"""Tests for transaction date parsing."""

import pytest
from datetime import date, datetime, timedelta, timezone
from txrules.domain.entities import FieldType
from txrules.domain.matcher import compare_values
from txrules.utils.date_parser import parse_date, to_naive_utc


def midnight(day):
    return datetime.combine(day, datetime.min.time())


def test_parse_iso_date():
    """Test parsing ISO dates."""
    assert parse_date("2024-01-15") == datetime(2024, 1, 15)


def test_parse_iso_datetime():
    assert parse_date("2024-01-15T09:30") == datetime(2024, 1, 15, 9, 30)


def test_parse_slash_date_is_day_first():
    """Test that DD/MM/YYYY dates are read day-first."""
    assert parse_date("05/01/2024") == datetime(2024, 1, 5)
    assert parse_date("31/01/2024") == datetime(2024, 1, 31)


def test_parse_slash_date_month_first():
    assert parse_date("05/01/2024", dayfirst=False) == datetime(2024, 5, 1)


def test_parse_named_month():
    assert parse_date("January 15, 2024") == datetime(2024, 1, 15)


def test_parse_relative_dates():
    """Test parsing 'today', 'yesterday' and 'tomorrow'."""
    today = date.today()
    assert parse_date("today") == midnight(today)
    assert parse_date("Yesterday") == midnight(today - timedelta(days=1))
    assert parse_date("tomorrow") == midnight(today + timedelta(days=1))


def test_offset_is_converted_to_utc():
    """Test that dates with an offset are stored as naive UTC."""
    assert parse_date("2024-01-15T09:30:00+05:30") == datetime(2024, 1, 15, 4, 0)
    assert parse_date("2024-01-15T23:30-05:00") == datetime(2024, 1, 16, 4, 30)


def test_parsed_date_agrees_with_date_filter():
    """A stored date and the same text used as a date filter are the same instant."""
    stored = parse_date("2024-01-15T23:30-05:00")
    assert compare_values(stored, "2024-01-15T23:30-05:00", "equals", FieldType.DATE) is True
    assert compare_values(stored, "2024-01-16", "equals", FieldType.DATE) is True


def test_to_naive_utc():
    naive = datetime(2024, 1, 15, 9, 30)
    assert to_naive_utc(naive) is naive
    aware = datetime(2024, 1, 15, 9, 30, tzinfo=timezone(timedelta(hours=2)))
    assert to_naive_utc(aware) == datetime(2024, 1, 15, 7, 30)


@pytest.mark.parametrize("text", ["", "   ", "garbage", "2024-13-45"])
def test_parse_invalid(text):
    """Test that unparsable dates raise ValueError."""
    with pytest.raises(ValueError):
        parse_date(text)
