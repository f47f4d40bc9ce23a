from datetime import date, datetime, timedelta, timezone
import calendar
from utils.constants import TIMESTAMP_FORMAT


_STRFTIME_MAP = {
    "MMM D, YYYY": "%b {day}, %Y",
    "MM/DD/YYYY": "%m/%d/%Y",
    "DD/MM/YYYY": "%d/%m/%Y",
    "YYYY-MM-DD": "%Y-%m-%d",
    "DD.MM.YYYY": "%d.%m.%Y",
}


def utc_now() -> datetime:
    """Current instant as a naive UTC datetime, the engine's time base."""
    return datetime.now(timezone.utc).replace(tzinfo=None)


def to_naive_utc(moment: datetime) -> datetime:
    if moment.tzinfo is None:
        return moment
    return moment.astimezone(timezone.utc).replace(tzinfo=None)


def parse_timestamp(value) -> datetime | None:
    """Parse a stored timestamp into a naive UTC datetime, returning None on failure.

    Accepts datetime/date objects and ISO 8601 strings using either 'T' or a
    space as separator, with an optional 'Z' or numeric offset.
    """
    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        return to_naive_utc(value)
    if isinstance(value, date):
        return datetime(value.year, value.month, value.day)
    text = str(value).strip()
    if text.endswith("Z"):
        text = text[:-1] + "+00:00"
    try:
        return to_naive_utc(datetime.fromisoformat(text))
    except ValueError:
        return None


def format_timestamp(moment: datetime) -> str:
    return to_naive_utc(moment).strftime(TIMESTAMP_FORMAT)


def clamp_day_to_month(year: int, month: int, day: int) -> int:
    """Clamp day to valid range for the given year/month."""
    max_day = calendar.monthrange(year, month)[1]
    return min(day, max_day)


def add_months(d: date, n: int) -> date:
    """Add n months to date d, clamping day to month end. Works for datetimes too."""
    month = d.month - 1 + n
    year = d.year + month // 12
    month = month % 12 + 1
    day = clamp_day_to_month(year, month, d.day)
    return d.replace(year=year, month=month, day=day)


def add_years(d: date, n: int) -> date:
    """Add n years to date d; Feb 29 lands on Feb 28 in non-leap years."""
    year = d.year + n
    return d.replace(year=year, day=clamp_day_to_month(year, d.month, d.day))


def add_days(d: date, n: int) -> date:
    return d + timedelta(days=n)


def format_display_date(moment: datetime | date | None, fmt_key: str = "MMM D, YYYY") -> str:
    """Render a date for the user-facing tables, e.g. 'Jun 15, 2024'."""
    if moment is None:
        return ""
    pattern = _STRFTIME_MAP.get(fmt_key, _STRFTIME_MAP["MMM D, YYYY"])
    return moment.strftime(pattern.replace("{day}", str(moment.day)))
