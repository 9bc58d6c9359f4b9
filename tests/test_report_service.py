from datetime import date
from decimal import Decimal


def _seed(tx_service, categories):
    salary = categories["Salary"].id
    food = categories["Food & Dining"].id
    shopping = categories["Shopping"].id
    tx_service.add_transaction("income", 1000, salary, "2024-06-12")
    tx_service.add_transaction("expense", 50, food, "2024-06-12")
    tx_service.add_transaction("expense", 30, shopping, "2024-06-10")
    tx_service.add_transaction("expense", 20, food, "2024-06-20")
    tx_service.add_transaction("expense", 999, food, "2024-07-01")


def test_summary_by_granularity(report_service, tx_service, categories):
    _seed(tx_service, categories)
    day = report_service.get_summary(date(2024, 6, 12), "day")
    assert (day.income, day.expenses, day.net) == (Decimal("1000"), Decimal("50"), Decimal("950"))

    week = report_service.get_summary("2024-06-12", "week")
    assert week.expenses == Decimal("80")

    month = report_service.get_summary("2024-06-01", "month")
    assert month.expenses == Decimal("100")
    assert month.net == Decimal("900")


def test_category_breakdown(report_service, tx_service, categories):
    _seed(tx_service, categories)
    buckets = report_service.get_category_breakdown("2024-06-15", "month")
    amounts = {b.category_name: b.amount for b in buckets}
    assert amounts == {"Food & Dining": Decimal("70"), "Shopping": Decimal("30")}
    food = next(b for b in buckets if b.category_name == "Food & Dining")
    assert food.color == categories["Food & Dining"].color


def test_date_groups(report_service, tx_service, categories):
    _seed(tx_service, categories)
    groups = report_service.get_date_groups("2024-06-12", "week")
    assert [g.date for g in groups] == ["2024-06-12", "2024-06-10"]
    assert len(groups[0].transactions) == 2
    assert len(report_service.get_date_groups()) == 4


def test_empty_period(report_service):
    totals = report_service.get_summary("2024-06-12", "month")
    assert totals.net == 0
    assert report_service.get_category_breakdown("2024-06-12") == ()


def test_month_totals_from_store(report_service, tx_service, categories):
    tx_service.add_transaction("expense", 50, categories["Food & Dining"].id, "2024-06-01")
    tx_service.add_transaction("income", 1000, categories["Salary"].id, "2024-06-02")
    totals = report_service.get_summary("2024-06-15", "month")
    assert totals.income == Decimal("1000")
    assert totals.expenses == Decimal("50")
    assert totals.net == Decimal("950")
