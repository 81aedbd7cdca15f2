"""Date parsing utilities."""

import re
from datetime import date, datetime, timedelta, timezone
from dateutil import parser as date_parser

_SLASH_DATE = re.compile(r"^\d{1,2}/\d{1,2}/\d{4}$")


def to_naive_utc(value: datetime) -> datetime:
    """Convert an aware datetime to naive UTC; naive values are returned as-is."""
    if value.tzinfo is not None:
        return value.astimezone(timezone.utc).replace(tzinfo=None)
    return value


def parse_date(date_str: str, dayfirst: bool = True) -> datetime:
    """Parse a transaction date string into a datetime.

    Supports:
    - Relative dates: "today", "yesterday", "tomorrow" (midnight)
    - Slash dates: "15/01/2024" is read day-first unless dayfirst is False,
      which is how most bank statements write them
    - Anything else dateutil understands: "2024-01-15", "2024-01-15T09:30",
      "January 15, 2024", ...

    Args:
        date_str: Date string in various formats
        dayfirst: Read ambiguous slash dates as DD/MM/YYYY

    Returns:
        Naive datetime (UTC when the string carries an offset)

    Raises:
        ValueError: If date string cannot be parsed
    """
    text = date_str.strip().lower()
    if not text:
        raise ValueError("Empty date string")

    today = datetime.combine(date.today(), datetime.min.time())
    relative_dates = {
        "today": today,
        "yesterday": today - timedelta(days=1),
        "tomorrow": today + timedelta(days=1),
    }
    if text in relative_dates:
        return relative_dates[text]

    try:
        parsed = date_parser.parse(text, dayfirst=dayfirst and bool(_SLASH_DATE.match(text)))
    except (ValueError, OverflowError) as e:
        raise ValueError(f"Could not parse date '{date_str}': {e}")

    # Stored dates are naive UTC
    return to_naive_utc(parsed)
