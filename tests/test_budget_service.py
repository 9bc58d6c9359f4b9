from decimal import Decimal

import pytest

from models.budget import Budget, classify_percentage
from services.budget_service import BudgetService, classify
from utils.exceptions import NotFoundError, StoreError, ValidationError


def _spend(tx_service, category, amount, date):
    return tx_service.add_transaction("expense", amount, category.id, date)


@pytest.mark.parametrize("pct, status", [
    (Decimal("0"), "normal"),
    (Decimal("79.999"), "normal"),
    (Decimal("80"), "warning"),
    (Decimal("100"), "warning"),
    (Decimal("100.01"), "over"),
])
def test_classification_boundaries(pct, status):
    assert classify_percentage(pct) == status


def test_classify_reports_over_amount():
    assert classify(Decimal("85"), Decimal("100")) == (Decimal("85"), "warning", Decimal("0"))
    pct, status, over = classify(Decimal("120"), Decimal("100"))
    assert (pct, status, over) == (Decimal("120"), "over", Decimal("20"))


def test_spending_against_budget(budget_service, tx_service, categories):
    food = categories["Food & Dining"]
    budget_service.set_budget(food.id, "100", "2024-06")
    _spend(tx_service, food, "60", "2024-06-03")
    _spend(tx_service, food, "25", "2024-06-30")

    (b,) = budget_service.list_budgets_with_spending("2024-06")
    assert b.spent == Decimal("85")
    assert b.status == "warning"
    assert b.remaining == Decimal("15")
    assert b.category_name == "Food & Dining"
    assert b.month == "2024-06-01"


def test_spending_window_excludes_other_months_and_income(budget_service, tx_service, categories):
    food = categories["Food & Dining"]
    budget_service.set_budget(food.id, 50, "2024-06-01")
    _spend(tx_service, food, 10, "2024-06-01")
    _spend(tx_service, food, 500, "2024-07-01")
    _spend(tx_service, food, 500, "2024-05-31")
    tx_service.add_transaction("income", 900, food.id, "2024-06-15")

    (b,) = budget_service.list_budgets_with_spending("2024-06")
    assert b.spent == Decimal("10")


def test_set_budget_is_an_upsert(budget_service, budget_dao, categories):
    food = categories["Food & Dining"]
    first = budget_service.set_budget(food.id, 100, "2024-06")
    second = budget_service.set_budget(food.id, "250.50", "2024-06-15")
    assert first.id == second.id
    assert second.limit_amount == Decimal("250.50")
    assert len(budget_dao.get_by_month("2024-06-01")) == 1


@pytest.mark.parametrize("limit", [0, -5, "", None, "abc"])
def test_set_budget_rejects_bad_limits(budget_service, categories, limit):
    with pytest.raises(ValidationError):
        budget_service.set_budget(categories["Shopping"].id, limit, "2024-06")


def test_set_budget_requires_existing_category(budget_service):
    with pytest.raises(NotFoundError):
        budget_service.set_budget(9999, 100, "2024-06")


def test_delete_budget(budget_service, categories):
    b = budget_service.set_budget(categories["Shopping"].id, 100, "2024-06")
    budget_service.delete_budget(b.id)
    assert budget_service.list_budgets_with_spending("2024-06") == []
    with pytest.raises(NotFoundError):
        budget_service.delete_budget(b.id)


def test_alerts_only_for_warning_and_over(budget_service, tx_service, categories):
    food = categories["Food & Dining"]
    shopping = categories["Shopping"]
    transport = categories["Transportation"]
    for cat in (food, shopping, transport):
        budget_service.set_budget(cat.id, 100, "2024-06")
    _spend(tx_service, food, 120, "2024-06-05")
    _spend(tx_service, shopping, 80, "2024-06-05")
    _spend(tx_service, transport, 10, "2024-06-05")

    alerts = budget_service.compute_alerts("2024-06")
    assert [(a.category_name, a.status) for a in alerts] == [
        ("Food & Dining", "over"),
        ("Shopping", "warning"),
    ]
    assert alerts[0].over_amount == Decimal("20")
    assert alerts[0].is_over
    assert alerts[1].over_amount == 0


def test_no_budgets_means_no_alerts(budget_service):
    assert budget_service.compute_alerts("2024-06") == []


def test_unknown_category_falls_back():
    budget = Budget(id=1, category_id=42, limit_amount=Decimal("10"), month="2024-06-01")
    b = BudgetService._with_spending(budget, Decimal("5"), None)
    assert b.category_name == "Unknown"
    assert b.category_icon == "Package"
    assert b.percentage == Decimal("50")


def test_copy_from_previous_month(budget_service, categories):
    budget_service.set_budget(categories["Shopping"].id, 100, "2024-05")
    budget_service.set_budget(categories["Healthcare"].id, 40, "2024-05")
    assert budget_service.copy_from_previous_month("2024-06") == 2
    copied = budget_service.list_budgets_with_spending("2024-06")
    assert {b.category_name: b.limit_amount for b in copied} == {
        "Healthcare": Decimal("40"),
        "Shopping": Decimal("100"),
    }
    assert budget_service.copy_from_previous_month("2024-01") == 0


def test_available_categories_skip_budgeted_and_income(budget_service, categories):
    budget_service.set_budget(categories["Shopping"].id, 100, "2024-06")
    names = {c.name for c in budget_service.available_categories("2024-06")}
    assert "Shopping" not in names
    assert "Salary" not in names
    assert "Food & Dining" in names
    assert len(budget_service.get_expense_categories()) == 8


def test_failed_spend_lookup_fails_whole_listing(budget_service, tx_dao, categories, monkeypatch):
    budget_service.set_budget(categories["Food & Dining"].id, 100, "2024-06")
    budget_service.set_budget(categories["Shopping"].id, 100, "2024-06")

    real_sum = tx_dao.sum_expense_amount
    calls = []

    def flaky_sum(category_id, month):
        calls.append(category_id)
        if len(calls) == 2:
            raise StoreError("Could not read category spending: database is locked")
        return real_sum(category_id, month)

    monkeypatch.setattr(tx_dao, "sum_expense_amount", flaky_sum)

    with pytest.raises(StoreError):
        budget_service.list_budgets_with_spending("2024-06")
    calls.clear()
    with pytest.raises(StoreError):
        budget_service.compute_alerts("2024-06")
