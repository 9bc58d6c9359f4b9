from decimal import Decimal

from conftest import make_tx
from services.aggregator import (
    aggregate, bucket_shares, group_by_date, group_expenses_by_category,
    sort_buckets_by_amount, total_of,
)
from utils.constants import FALLBACK_COLOR, FALLBACK_ICON


def test_totals_for_income_and_expense():
    totals = aggregate([
        make_tx(1, "income", 1000, "2024-06-12"),
        make_tx(2, "expense", 50, "2024-06-12"),
    ])
    assert totals.income == Decimal("1000")
    assert totals.expenses == Decimal("50")
    assert totals.net == Decimal("950")


def test_empty_input_totals_zero():
    totals = aggregate([])
    assert totals.income == totals.expenses == totals.net == 0


def test_decimal_amounts_are_exact():
    totals = aggregate([
        make_tx(1, "expense", "0.10", "2024-06-01"),
        make_tx(2, "expense", "0.20", "2024-06-01"),
    ])
    assert totals.expenses == Decimal("0.30")
    assert totals.net == totals.income - totals.expenses


def test_expenses_grouped_by_category_in_first_seen_order():
    buckets = group_expenses_by_category([
        make_tx(1, "expense", 20, "2024-06-01", "Food", "#F87171", "Utensils"),
        make_tx(2, "expense", 5, "2024-06-01", "Transport", "#FB923C", "Car"),
        make_tx(3, "expense", 30, "2024-06-02", "Food", "#000000", "Car"),
        make_tx(4, "income", 999, "2024-06-02", "Salary", "#10B981", "Briefcase"),
    ])
    assert [b.category_name for b in buckets] == ["Food", "Transport"]
    food = buckets[0]
    assert food.amount == Decimal("50")
    assert food.color == "#F87171"
    assert food.icon == "Utensils"


def test_bucket_sum_matches_expense_total():
    rows = [
        make_tx(1, "expense", "12.50", "2024-06-01", "Food"),
        make_tx(2, "expense", "7.25", "2024-06-01", None),
        make_tx(3, "income", 100, "2024-06-01", "Salary"),
        make_tx(4, "expense", "0.25", "2024-06-03", "Shopping"),
    ]
    assert total_of(group_expenses_by_category(rows)) == aggregate(rows).expenses


def test_missing_category_falls_back_to_other():
    (bucket,) = group_expenses_by_category([make_tx(1, "expense", 8, "2024-06-01")])
    assert bucket.category_name == "Other"
    assert bucket.color == FALLBACK_COLOR
    assert bucket.icon == FALLBACK_ICON


def test_sort_and_shares():
    buckets = group_expenses_by_category([
        make_tx(1, "expense", 25, "2024-06-01", "A"),
        make_tx(2, "expense", 75, "2024-06-01", "B"),
    ])
    ordered = sort_buckets_by_amount(buckets)
    assert [b.category_name for b in ordered] == ["B", "A"]
    shares = dict((b.category_name, pct) for b, pct in bucket_shares(ordered))
    assert shares == {"B": Decimal("75"), "A": Decimal("25")}


def test_shares_are_zero_without_spending():
    assert bucket_shares([]) == ()


def test_group_by_date_keeps_order():
    groups = group_by_date([
        make_tx(3, "expense", 1, "2024-06-12"),
        make_tx(2, "income", 1, "2024-06-12"),
        make_tx(1, "expense", 1, "2024-06-10"),
    ])
    assert [g.date for g in groups] == ["2024-06-12", "2024-06-10"]
    assert [t.id for t in groups[0].transactions] == [3, 2]
