"""Derived, read-only results of the aggregation passes."""
from dataclasses import dataclass
from decimal import Decimal

from models.transaction import Transaction


@dataclass(frozen=True)
class PeriodTotals:
    income: Decimal
    expenses: Decimal
    net: Decimal


@dataclass(frozen=True)
class CategoryExpenseBucket:
    category_name: str
    amount: Decimal
    color: str
    icon: str


@dataclass(frozen=True)
class DateGroup:
    date: str
    transactions: tuple[Transaction, ...]
