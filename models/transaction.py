from dataclasses import dataclass
from decimal import Decimal
from typing import Optional


@dataclass
class Transaction:
    id: int
    type: str               # 'income' | 'expense'
    amount: Decimal
    category_id: int
    date: str               # 'YYYY-MM-DD'
    description: Optional[str] = None
    is_recurring: bool = False
    recurring_frequency: Optional[str] = None   # 'daily' | 'weekly' | 'monthly' | 'yearly'
    recurring_end_date: Optional[str] = None
    created_at: str = ""
    # Joined from categories; None when the join is missing
    category_name: Optional[str] = None
    category_color: Optional[str] = None
    category_icon: Optional[str] = None

    @property
    def has_category(self) -> bool:
        return self.category_name is not None
