"""Calendar-month helpers for period-scoped queries."""
import calendar
import re
from datetime import datetime
from typing import Optional, Tuple

_MONTH_RE = re.compile(r"(\d{4})-(\d{2})")


def current_month(now: Optional[datetime] = None) -> str:
    return (now or datetime.now()).strftime("%Y-%m")


def validate_month(month: str) -> str:
    """Return ``month`` unchanged if it is a valid YYYY-MM string."""
    match = _MONTH_RE.fullmatch(month or "")
    if not match or not 1 <= int(match.group(2)) <= 12:
        raise ValueError(f"Month must follow YYYY-MM format, got {month!r}")
    return month


def month_bounds(month: str) -> Tuple[str, str]:
    """First and last ISO dates of ``month``, both inclusive."""
    validate_month(month)
    year, mon = (int(part) for part in month.split("-"))
    last_day = calendar.monthrange(year, mon)[1]
    return f"{month}-01", f"{month}-{last_day:02d}"
