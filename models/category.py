from dataclasses import dataclass


@dataclass
class Category:
    id: int
    name: str
    type: str           # 'income' | 'expense'
    icon: str = "Package"
    color: str = "#6B7280"
    is_custom: bool = False
    created_at: str = ""
