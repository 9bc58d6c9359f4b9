from datetime import date, datetime

import pytest

from utils.date_helpers import (
    add_months, format_display_date, friendly_month, month_key, month_range,
    month_start, next_month_start, parse_display_date,
    relative_day_label, to_date, week_start,
)
from utils.exceptions import ValidationError


def test_to_date():
    assert to_date("2024-06-12") == date(2024, 6, 12)
    assert to_date(datetime(2024, 6, 12, 23, 59)) == date(2024, 6, 12)
    with pytest.raises(ValidationError):
        to_date("12th June")
    with pytest.raises(ValidationError):
        to_date(None)


def test_month_keys():
    assert month_start("2024-06") == date(2024, 6, 1)
    assert month_key("2024-06-17") == "2024-06-01"
    assert month_key(date(2024, 12, 31)) == "2024-12-01"
    assert next_month_start("2024-12") == date(2025, 1, 1)
    with pytest.raises(ValidationError):
        month_start("2024-13")


def test_month_range_and_navigation():
    assert month_range("2023-02") == ("2023-02-01", "2023-02-28")
    assert add_months(date(2024, 3, 31), -1) == date(2024, 2, 29)


def test_week_start_is_sunday():
    assert week_start(date(2024, 6, 12)) == date(2024, 6, 9)
    assert week_start(date(2024, 6, 9)) == date(2024, 6, 9)
    assert week_start(date(2024, 6, 15)) == date(2024, 6, 9)


def test_relative_day_label():
    ref = date(2024, 6, 12)
    assert relative_day_label("2024-06-12", ref) == "Today"
    assert relative_day_label("2024-06-11", ref) == "Yesterday"
    assert relative_day_label("2024-06-05", ref) == "Wed, Jun 05"


def test_friendly_month():
    assert friendly_month("2024-06") == "June 2024"
    assert friendly_month("garbage") == "garbage"


def test_display_formats():
    assert format_display_date("2024-06-12", "DD/MM/YYYY") == "12/06/2024"
    assert parse_display_date("12.06.2024", "DD.MM.YYYY") == date(2024, 6, 12)
    assert parse_display_date("2024-06-12", "MM/DD/YYYY") == date(2024, 6, 12)
