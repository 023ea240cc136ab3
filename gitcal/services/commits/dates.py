"""Calendar-day normalization shared by daily summary reads and writes."""

import re
from datetime import UTC, date, datetime, time, timedelta

from gitcal.core.exceptions import ValidationError

DATE_PATTERN = re.compile(r"^\d{4}-\d{2}-\d{2}$")


def parse_calendar_date(value: str) -> date:
    """
    Parse a "YYYY-MM-DD" string.

    Raises:
        ValidationError: If the string is not in that format or is not a real date
    """
    if not DATE_PATTERN.match(value or ""):
        raise ValidationError("Date must be in YYYY-MM-DD format")
    try:
        return date.fromisoformat(value)
    except ValueError as e:
        raise ValidationError(f"Invalid date {value!r}: {e}") from e


def utc_day_bounds(day: date) -> tuple[datetime, datetime]:
    """
    Return the first and last instant of a calendar day in UTC.

    Both bounds are inclusive: 00:00:00.000000 and 23:59:59.999999.
    """
    start = datetime.combine(day, time.min, tzinfo=UTC)
    end = start + timedelta(days=1) - timedelta(microseconds=1)
    return start, end
