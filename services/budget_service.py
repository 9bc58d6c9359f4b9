import logging
from datetime import date
from decimal import Decimal

from models.budget import (
    Budget, BudgetAlert, BudgetWithSpending, budget_percentage, classify_percentage,
)
from models.category import Category
from database.budget_dao import BudgetDAO
from database.transaction_dao import TransactionDAO
from database.category_dao import CategoryDAO
from utils.constants import (
    FALLBACK_COLOR, FALLBACK_ICON, STATUS_NORMAL, STATUS_OVER, UNKNOWN_CATEGORY_NAME,
)
from utils.currency import parse_positive_amount
from utils.date_helpers import add_months, format_date, month_key, month_start, today
from utils.exceptions import NotFoundError

logger = logging.getLogger(__name__)


def classify(spent: Decimal, limit_amount: Decimal) -> tuple[Decimal, str, Decimal]:
    """Return (percentage, status, over_amount) for a spend against a limit."""
    pct = budget_percentage(spent, limit_amount)
    status = classify_percentage(pct)
    over = spent - limit_amount if status == STATUS_OVER else Decimal(0)
    return pct, status, over


class BudgetService:
    """Evaluates monthly budgets against expense spending.

    Holds no state of its own: every call reads budgets, categories and
    spending from the store again.
    """

    def __init__(
        self,
        budget_dao: BudgetDAO,
        tx_dao: TransactionDAO,
        category_dao: CategoryDAO,
    ):
        self._budget_dao = budget_dao
        self._tx_dao = tx_dao
        self._category_dao = category_dao

    def list_budgets_with_spending(
        self, month: date | str | None = None
    ) -> list[BudgetWithSpending]:
        """All budgets for the month with spent amounts filled in.

        A failure fetching any budget's spending fails the whole call.
        """
        key = month_key(month or today())
        budgets = self._budget_dao.get_by_month(key)
        categories = {c.id: c for c in self._category_dao.get_all()}
        result = []
        for b in budgets:
            spent = self._tx_dao.sum_expense_amount(b.category_id, key)
            result.append(self._with_spending(b, spent, categories.get(b.category_id)))
        logger.debug("Evaluated %d budgets for %s", len(result), key)
        return result

    def compute_alerts(self, month: date | str | None = None) -> list[BudgetAlert]:
        """Budgets at or above the warning threshold, in budget list order."""
        alerts = []
        for b in self.list_budgets_with_spending(month):
            pct, status, over = classify(b.spent, b.limit_amount)
            if status == STATUS_NORMAL:
                continue
            alerts.append(BudgetAlert(
                budget_id=b.id,
                category_id=b.category_id,
                category_name=b.category_name,
                spent=b.spent,
                limit_amount=b.limit_amount,
                percentage=pct,
                status=status,
                over_amount=over,
            ))
        return alerts

    def set_budget(
        self, category_id: int, limit_amount, month: date | str | None = None
    ) -> Budget:
        """Upsert the limit for (category, month)."""
        limit = parse_positive_amount(limit_amount, "Budget limit")
        if self._category_dao.get_by_id(category_id) is None:
            raise NotFoundError(f"Category {category_id} does not exist.")
        key = month_key(month or today())
        budget = self._budget_dao.upsert(category_id, key, limit)
        logger.info("Budget set: category=%s month=%s limit=%s", category_id, key, limit)
        return budget

    def delete_budget(self, budget_id: int):
        if not self._budget_dao.delete(budget_id):
            raise NotFoundError(f"Budget {budget_id} does not exist.")
        logger.info("Budget %s deleted", budget_id)

    def copy_from_previous_month(self, to_month: date | str) -> int:
        target = month_start(to_month)
        source = add_months(target, -1)
        count = self._budget_dao.copy_month(format_date(source), format_date(target))
        logger.info("Copied %d budgets from %s to %s", count, format_date(source), format_date(target))
        return count

    def get_expense_categories(self) -> list[Category]:
        """Categories valid for budgeting."""
        return self._category_dao.get_by_type("expense")

    def available_categories(self, month: date | str | None = None) -> list[Category]:
        """Expense categories without a budget in the month yet."""
        key = month_key(month or today())
        used = {b.category_id for b in self._budget_dao.get_by_month(key)}
        return [c for c in self.get_expense_categories() if c.id not in used]

    @staticmethod
    def _with_spending(
        budget: Budget, spent: Decimal, category: Category | None
    ) -> BudgetWithSpending:
        return BudgetWithSpending(
            id=budget.id,
            category_id=budget.category_id,
            limit_amount=budget.limit_amount,
            month=budget.month,
            spent=spent,
            category_name=category.name if category else UNKNOWN_CATEGORY_NAME,
            category_color=category.color if category else FALLBACK_COLOR,
            category_icon=category.icon if category else FALLBACK_ICON,
            created_at=budget.created_at,
            updated_at=budget.updated_at,
        )
