from dataclasses import dataclass
from decimal import Decimal

from utils.constants import (
    BUDGET_LIMIT_PCT, BUDGET_WARNING_PCT,
    STATUS_NORMAL, STATUS_WARNING, STATUS_OVER,
)


@dataclass
class Budget:
    id: int
    category_id: int
    limit_amount: Decimal
    month: str          # first of month, 'YYYY-MM-01'
    created_at: str = ""
    updated_at: str = ""


def budget_percentage(spent: Decimal, limit_amount: Decimal) -> Decimal:
    """spent / limit * 100, exact in Decimal."""
    if limit_amount <= 0:
        return Decimal(0)
    return spent / limit_amount * 100


def classify_percentage(pct: Decimal) -> str:
    """< 80 normal, 80..100 inclusive warning, > 100 over."""
    if pct > BUDGET_LIMIT_PCT:
        return STATUS_OVER
    if pct >= BUDGET_WARNING_PCT:
        return STATUS_WARNING
    return STATUS_NORMAL


@dataclass(frozen=True)
class BudgetWithSpending:
    id: int
    category_id: int
    limit_amount: Decimal
    month: str
    spent: Decimal
    category_name: str
    category_color: str
    category_icon: str
    created_at: str = ""
    updated_at: str = ""

    @property
    def percentage(self) -> Decimal:
        return budget_percentage(self.spent, self.limit_amount)

    @property
    def status(self) -> str:
        return classify_percentage(self.percentage)

    @property
    def over_amount(self) -> Decimal:
        if self.status == STATUS_OVER:
            return self.spent - self.limit_amount
        return Decimal(0)

    @property
    def remaining(self) -> Decimal:
        return max(Decimal(0), self.limit_amount - self.spent)


@dataclass(frozen=True)
class BudgetAlert:
    budget_id: int
    category_id: int
    category_name: str
    spent: Decimal
    limit_amount: Decimal
    percentage: Decimal
    status: str         # 'warning' | 'over'
    over_amount: Decimal = Decimal(0)

    @property
    def is_over(self) -> bool:
        return self.status == STATUS_OVER
