"""Reporting windows over calendar dates.

A window is a day, a Sunday-to-Saturday week, or a calendar month around a
reference date. Transaction dates are compared as naive calendar dates; no
timezone is ever applied.
"""
from datetime import date, timedelta
from typing import Iterable

from models.transaction import Transaction
from utils.constants import GRANULARITIES
from utils.date_helpers import (
    add_months, format_date, format_month, month_range, month_start, parse_date, to_date,
    week_start,
)
from utils.exceptions import ValidationError


def _check_granularity(granularity: str) -> str:
    if granularity not in GRANULARITIES:
        raise ValidationError(
            f"Invalid granularity: {granularity!r}. Use one of {', '.join(GRANULARITIES)}."
        )
    return granularity


def period_range(reference_date: date | str, granularity: str) -> tuple[date, date]:
    """Inclusive (start, end) calendar dates of the window containing reference_date."""
    ref = to_date(reference_date)
    _check_granularity(granularity)
    if granularity == "day":
        return ref, ref
    if granularity == "week":
        start = week_start(ref)
        return start, start + timedelta(days=6)
    first, last = month_range(format_month(ref))
    return to_date(first), to_date(last)


def filter_by_period(
    transactions: Iterable[Transaction],
    reference_date: date | str,
    granularity: str,
) -> list[Transaction]:
    """Keep the transactions dated inside the window. Input order is preserved."""
    ref = to_date(reference_date)
    _check_granularity(granularity)

    if granularity == "day":
        key = format_date(ref)
        return [t for t in transactions if t.date == key]

    if granularity == "month":
        prefix = format_month(ref)
        return [t for t in transactions if t.date.startswith(prefix)]

    start, end = period_range(ref, "week")
    kept = []
    for t in transactions:
        d = parse_date(t.date)
        if d is not None and start <= d <= end:
            kept.append(t)
    return kept


def shift_period(reference_date: date | str, granularity: str, steps: int = 1) -> date:
    """Move the reference date by whole windows. Month steps land on the 1st."""
    ref = to_date(reference_date)
    _check_granularity(granularity)
    if granularity == "day":
        return ref + timedelta(days=steps)
    if granularity == "week":
        return ref + timedelta(days=7 * steps)
    return add_months(month_start(ref), steps)


def period_label(reference_date: date | str, granularity: str) -> str:
    ref = to_date(reference_date)
    _check_granularity(granularity)
    if granularity == "day":
        return f"{ref.strftime('%A, %B')} {ref.day}, {ref.year}"
    if granularity == "week":
        start, end = period_range(ref, "week")
        return f"{start.strftime('%b %d')} - {end.strftime('%b %d')}"
    return ref.strftime("%B %Y")
