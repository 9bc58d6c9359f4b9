"""Pure reductions over an already-filtered transaction list.

Accumulators are local to each call and results come back as frozen
dataclasses and tuples; nothing here touches the store or keeps state.
"""
from decimal import Decimal
from typing import Iterable

from models.summary import CategoryExpenseBucket, DateGroup, PeriodTotals
from models.transaction import Transaction
from utils.constants import FALLBACK_CATEGORY_NAME, FALLBACK_COLOR, FALLBACK_ICON

_ZERO = Decimal(0)


def aggregate(transactions: Iterable[Transaction]) -> PeriodTotals:
    """Income, expense and net totals. No rounding is applied."""
    income = _ZERO
    expenses = _ZERO
    for t in transactions:
        if t.type == "income":
            income += t.amount
        elif t.type == "expense":
            expenses += t.amount
    return PeriodTotals(income=income, expenses=expenses, net=income - expenses)


def group_expenses_by_category(
    transactions: Iterable[Transaction],
) -> tuple[CategoryExpenseBucket, ...]:
    """Sum expense amounts per joined category name, in order of first appearance.

    Transactions without a joined category land in "Other". The first color and
    icon seen for a name are kept.
    """
    amounts: dict[str, Decimal] = {}
    looks: dict[str, tuple[str, str]] = {}
    for t in transactions:
        if t.type != "expense":
            continue
        name = t.category_name or FALLBACK_CATEGORY_NAME
        if name not in amounts:
            amounts[name] = _ZERO
            looks[name] = (t.category_color or FALLBACK_COLOR, t.category_icon or FALLBACK_ICON)
        amounts[name] += t.amount
    return tuple(
        CategoryExpenseBucket(
            category_name=name, amount=amount, color=looks[name][0], icon=looks[name][1],
        )
        for name, amount in amounts.items()
    )


def sort_buckets_by_amount(
    buckets: Iterable[CategoryExpenseBucket],
) -> tuple[CategoryExpenseBucket, ...]:
    """Largest first; ties keep their original order."""
    return tuple(sorted(buckets, key=lambda b: b.amount, reverse=True))


def total_of(buckets: Iterable[CategoryExpenseBucket]) -> Decimal:
    return sum((b.amount for b in buckets), _ZERO)


def bucket_shares(
    buckets: Iterable[CategoryExpenseBucket],
) -> tuple[tuple[CategoryExpenseBucket, Decimal], ...]:
    """Pair each bucket with its percentage of the total (0 when the total is 0)."""
    buckets = tuple(buckets)
    total = total_of(buckets)
    if total == 0:
        return tuple((b, _ZERO) for b in buckets)
    return tuple((b, b.amount / total * 100) for b in buckets)


def group_by_date(transactions: Iterable[Transaction]) -> tuple[DateGroup, ...]:
    """Group by transaction date, keeping first-appearance order of dates and rows."""
    grouped: dict[str, list[Transaction]] = {}
    for t in transactions:
        grouped.setdefault(t.date, []).append(t)
    return tuple(DateGroup(date=d, transactions=tuple(rows)) for d, rows in grouped.items())
