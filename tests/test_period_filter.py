from datetime import date

import pytest

from conftest import make_tx
from services.period_filter import filter_by_period, period_label, period_range, shift_period
from utils.exceptions import ValidationError


def _sample():
    return [
        make_tx(1, "expense", 10, "2024-06-15"),
        make_tx(2, "income", 500, "2024-06-12"),
        make_tx(3, "expense", 7, "2024-06-09"),
        make_tx(4, "expense", 3, "2024-06-08"),
        make_tx(5, "expense", 4, "2024-06-16"),
        make_tx(6, "expense", 9, "2024-05-31"),
        make_tx(7, "expense", 2, "2024-07-01"),
    ]


def test_week_runs_sunday_to_saturday():
    kept = filter_by_period(_sample(), date(2024, 6, 12), "week")
    assert [t.id for t in kept] == [1, 2, 3]


def test_week_range_for_a_sunday_starts_that_day():
    assert period_range("2024-06-09", "week") == (date(2024, 6, 9), date(2024, 6, 15))
    assert period_range("2024-06-15", "week") == (date(2024, 6, 9), date(2024, 6, 15))


def test_month_keeps_only_that_calendar_month():
    kept = filter_by_period(_sample(), "2024-06-20", "month")
    assert [t.id for t in kept] == [1, 2, 3, 4, 5]


def test_day_keeps_exact_date():
    kept = filter_by_period(_sample(), "2024-06-12", "day")
    assert [t.id for t in kept] == [2]


def test_empty_window_returns_empty_list():
    assert filter_by_period(_sample(), "2023-01-01", "month") == []


def test_input_order_is_preserved():
    rows = list(reversed(_sample()))
    kept = filter_by_period(rows, "2024-06-12", "week")
    assert [t.id for t in kept] == [3, 2, 1]


def test_unknown_granularity_is_rejected():
    with pytest.raises(ValidationError):
        filter_by_period(_sample(), "2024-06-12", "year")
    with pytest.raises(ValidationError):
        period_range("2024-06-12", "fortnight")


def test_month_range_handles_leap_february():
    assert period_range("2024-02-10", "month") == (date(2024, 2, 1), date(2024, 2, 29))


def test_shift_period():
    assert shift_period("2024-06-12", "day", -1) == date(2024, 6, 11)
    assert shift_period("2024-06-12", "week") == date(2024, 6, 19)
    assert shift_period("2024-01-15", "month", -1) == date(2023, 12, 1)


def test_month_navigation_does_not_drift():
    feb = shift_period("2024-01-31", "month")
    assert feb == date(2024, 2, 1)
    assert shift_period(feb, "month") == date(2024, 3, 1)
    assert shift_period("2024-03-31", "month", -1) == date(2024, 2, 1)


def test_period_labels():
    assert period_label("2024-06-12", "day") == "Wednesday, June 12, 2024"
    assert period_label("2024-06-12", "week") == "Jun 09 - Jun 15"
    assert period_label("2024-06-12", "month") == "June 2024"


def test_week_crossing_month_and_year_boundaries():
    assert period_range("2024-07-02", "week") == (date(2024, 6, 30), date(2024, 7, 6))
    assert period_range("2025-01-01", "week") == (date(2024, 12, 29), date(2025, 1, 4))
    rows = [
        make_tx(1, "expense", 1, "2024-12-29"),
        make_tx(2, "expense", 1, "2024-12-28"),
        make_tx(3, "expense", 1, "2025-01-04"),
    ]
    assert [t.id for t in filter_by_period(rows, "2025-01-01", "week")] == [1, 3]
