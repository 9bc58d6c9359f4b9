from decimal import Decimal
from typing import Optional
from database.db_manager import DatabaseManager, store_errors
from models.budget import Budget


class BudgetDAO:
    def __init__(self, db: DatabaseManager):
        self._db = db

    def _row_to_model(self, row) -> Budget:
        return Budget(
            id=row["id"],
            category_id=row["category_id"],
            limit_amount=Decimal(row["limit_amount"]),
            month=row["month"],
            created_at=row["created_at"],
            updated_at=row["updated_at"],
        )

    def get_by_month(self, month: str) -> list[Budget]:
        """month is the first-of-month key, 'YYYY-MM-01'."""
        conn = self._db.get_connection()
        with store_errors("list budgets"):
            rows = conn.execute(
                """SELECT b.*
                   FROM budgets b
                   LEFT JOIN categories c ON b.category_id = c.id
                   WHERE b.month = ?
                   ORDER BY c.name, b.id""",
                (month,),
            ).fetchall()
        return [self._row_to_model(r) for r in rows]

    def get_by_category_month(self, category_id: int, month: str) -> Optional[Budget]:
        conn = self._db.get_connection()
        with store_errors("read budget"):
            row = conn.execute(
                "SELECT * FROM budgets WHERE category_id = ? AND month = ?",
                (category_id, month),
            ).fetchone()
        return self._row_to_model(row) if row else None

    def upsert(self, category_id: int, month: str, limit_amount: Decimal) -> Budget:
        """Update the (category, month) row if it exists, else insert it."""
        conn = self._db.get_connection()
        with store_errors("save budget"):
            conn.execute(
                """INSERT INTO budgets(category_id, month, limit_amount)
                   VALUES (?, ?, ?)
                   ON CONFLICT(category_id, month)
                   DO UPDATE SET limit_amount = excluded.limit_amount,
                                 updated_at   = datetime('now')""",
                (category_id, month, limit_amount),
            )
            conn.commit()
        return self.get_by_category_month(category_id, month)

    def delete(self, budget_id: int) -> bool:
        """Returns False when no row matched."""
        conn = self._db.get_connection()
        with store_errors("delete budget"):
            cursor = conn.execute("DELETE FROM budgets WHERE id = ?", (budget_id,))
            conn.commit()
        return cursor.rowcount > 0

    def copy_month(self, from_month: str, to_month: str) -> int:
        """Copy all budget limits from one month to another. Returns count copied."""
        conn = self._db.get_connection()
        with store_errors("copy budgets"):
            rows = conn.execute(
                "SELECT category_id, limit_amount FROM budgets WHERE month = ?",
                (from_month,),
            ).fetchall()
            for row in rows:
                conn.execute(
                    """INSERT INTO budgets(category_id, month, limit_amount)
                       VALUES (?, ?, ?)
                       ON CONFLICT(category_id, month)
                       DO UPDATE SET limit_amount = excluded.limit_amount,
                                     updated_at   = datetime('now')""",
                    (row["category_id"], to_month, row["limit_amount"]),
                )
            conn.commit()
        return len(rows)
