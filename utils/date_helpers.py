"""Calendar-date helpers.

Every value handled here is a naive ``datetime.date`` or an ISO ``YYYY-MM-DD``
string. Nothing is ever converted through a timezone, so week and month
boundaries never drift by a day.
"""
from datetime import date, datetime, timedelta
import calendar
from utils.constants import DATE_FORMAT, MONTH_FORMAT
from utils.exceptions import ValidationError

# Display format keys as stored in the date_format setting
_STRFTIME_MAP = {
    "MM/DD/YYYY": "%m/%d/%Y",
    "DD/MM/YYYY": "%d/%m/%Y",
    "YYYY-MM-DD": "%Y-%m-%d",
    "DD.MM.YYYY": "%d.%m.%Y",
}


def today() -> date:
    return date.today()


def today_str() -> str:
    return date.today().strftime(DATE_FORMAT)


def current_month_str() -> str:
    return date.today().strftime(MONTH_FORMAT)


def parse_date(date_str: str) -> date | None:
    """Parse a date string in YYYY-MM-DD format, returning None on failure."""
    if not date_str:
        return None
    for fmt in ("%Y-%m-%d", "%Y/%m/%d", "%Y.%m.%d"):
        try:
            return datetime.strptime(date_str, fmt).date()
        except ValueError:
            continue
    return None


def to_date(value: date | str) -> date:
    """Coerce a date or ISO string to a date, raising ValidationError on garbage."""
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    d = parse_date(value) if isinstance(value, str) else None
    if d is None:
        raise ValidationError(f"Invalid date: {value!r}. Use YYYY-MM-DD.")
    return d


def format_date(d: date) -> str:
    return d.strftime(DATE_FORMAT)


def format_month(d: date) -> str:
    return d.strftime(MONTH_FORMAT)


def parse_month(month_str: str) -> date | None:
    """Return the first day of the given YYYY-MM month string."""
    if not month_str:
        return None
    try:
        return datetime.strptime(month_str, MONTH_FORMAT).date()
    except ValueError:
        return None


def month_start(value: date | str) -> date:
    """Normalise a date, 'YYYY-MM' or 'YYYY-MM-DD' to the first of its month."""
    if isinstance(value, str) and len(value.strip()) == 7:
        d = parse_month(value.strip())
        if d is None:
            raise ValidationError(f"Invalid month: {value!r}")
        return d
    return to_date(value).replace(day=1)


def month_key(value: date | str) -> str:
    """First-of-month ISO string used as the budget period key."""
    return format_date(month_start(value))


def next_month_start(value: date | str) -> date:
    return add_months(month_start(value), 1)


def month_range(month_str: str) -> tuple[str, str]:
    """Return (first_day_str, last_day_str) for a month."""
    d = month_start(month_str)
    last_day = calendar.monthrange(d.year, d.month)[1]
    return (
        format_date(d),
        format_date(d.replace(day=last_day)),
    )


def week_start(d: date) -> date:
    """Sunday on or before d."""
    # date.weekday() is Monday=0; shift so Sunday=0
    return d - timedelta(days=(d.weekday() + 1) % 7)


def clamp_day_to_month(year: int, month: int, day: int) -> int:
    """Clamp day to valid range for the given year/month."""
    max_day = calendar.monthrange(year, month)[1]
    return min(day, max_day)


def add_months(d: date, n: int) -> date:
    """Add n months to date d, clamping day to month end."""
    month = d.month - 1 + n
    year = d.year + month // 12
    month = month % 12 + 1
    day = clamp_day_to_month(year, month, d.day)
    return d.replace(year=year, month=month, day=day)


def friendly_month(month_str: str) -> str:
    """Convert YYYY-MM (or a first-of-month date) to e.g. 'June 2024'."""
    try:
        d = month_start(month_str)
    except ValidationError:
        return month_str
    return d.strftime("%B %Y")


def relative_day_label(date_str: str, ref: date | None = None) -> str:
    """'Today', 'Yesterday', otherwise e.g. 'Wed, Jun 12'."""
    d = parse_date(date_str)
    if d is None:
        return date_str
    ref = ref or today()
    if d == ref:
        return "Today"
    if d == ref - timedelta(days=1):
        return "Yesterday"
    return d.strftime("%a, %b %d")


def format_display_date(date_str: str, fmt_key: str = "YYYY-MM-DD") -> str:
    """Convert a YYYY-MM-DD storage string to the user-facing display format."""
    if not date_str:
        return date_str
    d = parse_date(date_str)
    if d is None:
        return date_str
    return d.strftime(_STRFTIME_MAP.get(fmt_key, "%Y-%m-%d"))


def parse_display_date(display_str: str, fmt_key: str) -> date | None:
    """Parse a date in the given display format. Returns None on failure.

    Falls back to ISO 8601 parse if the display format doesn't match.
    """
    if not display_str:
        return None
    fmt = _STRFTIME_MAP.get(fmt_key, "%Y-%m-%d")
    try:
        return datetime.strptime(display_str.strip(), fmt).date()
    except ValueError:
        return parse_date(display_str)
