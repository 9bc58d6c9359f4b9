from decimal import Decimal
from typing import Optional
from database.db_manager import DatabaseManager, store_errors
from models.transaction import Transaction
from utils.date_helpers import format_date, month_start, next_month_start

# Columns a partial update may touch
_UPDATABLE = (
    "type", "amount", "category_id", "date", "description",
    "is_recurring", "recurring_frequency", "recurring_end_date",
)


class TransactionDAO:
    def __init__(self, db: DatabaseManager):
        self._db = db

    def _row_to_model(self, row) -> Transaction:
        return Transaction(
            id=row["id"],
            type=row["type"],
            amount=Decimal(row["amount"]),
            category_id=row["category_id"],
            date=row["date"],
            description=row["description"],
            is_recurring=bool(row["is_recurring"]),
            recurring_frequency=row["recurring_frequency"],
            recurring_end_date=row["recurring_end_date"],
            created_at=row["created_at"],
            category_name=row["category_name"],
            category_color=row["category_color"],
            category_icon=row["category_icon"],
        )

    def _select(self) -> str:
        return """
            SELECT t.*,
                   c.name  AS category_name,
                   c.color AS category_color,
                   c.icon  AS category_icon
            FROM transactions t
            LEFT JOIN categories c ON t.category_id = c.id
        """

    def get_all(
        self,
        start_date: str | None = None,
        end_date: str | None = None,
    ) -> list[Transaction]:
        """Newest first. Both bounds are inclusive ISO dates and optional."""
        conn = self._db.get_connection()
        sql = self._select() + " WHERE 1=1"
        params: list = []
        if start_date:
            sql += " AND t.date >= ?"
            params.append(start_date)
        if end_date:
            sql += " AND t.date <= ?"
            params.append(end_date)
        sql += " ORDER BY t.date DESC, t.id DESC"
        with store_errors("list transactions"):
            rows = conn.execute(sql, params).fetchall()
        return [self._row_to_model(r) for r in rows]

    def get_by_id(self, tx_id: int) -> Optional[Transaction]:
        conn = self._db.get_connection()
        with store_errors("read transaction"):
            row = conn.execute(
                self._select() + " WHERE t.id = ?", (tx_id,)
            ).fetchone()
        return self._row_to_model(row) if row else None

    def count_for_category(self, category_id: int) -> int:
        conn = self._db.get_connection()
        with store_errors("count transactions"):
            row = conn.execute(
                "SELECT COUNT(*) AS n FROM transactions WHERE category_id = ?",
                (category_id,),
            ).fetchone()
        return row["n"]

    def get_expense_amounts(self, category_id: int, month: str) -> list[Decimal]:
        """Amounts of expense rows for the category dated in [month-01, next-month-01)."""
        start = month_start(month)
        end = next_month_start(start)
        conn = self._db.get_connection()
        with store_errors("read category spending"):
            rows = conn.execute(
                """SELECT amount FROM transactions
                   WHERE category_id = ?
                     AND type = 'expense'
                     AND date >= ?
                     AND date < ?""",
                (category_id, format_date(start), format_date(end)),
            ).fetchall()
        return [Decimal(r["amount"]) for r in rows]

    def sum_expense_amount(self, category_id: int, month: str) -> Decimal:
        # Summed here rather than with SQL SUM(), which would go through REAL
        return sum(self.get_expense_amounts(category_id, month), Decimal(0))

    def create(
        self,
        type_: str,
        amount: Decimal,
        category_id: int,
        date: str,
        description: str | None = None,
        is_recurring: bool = False,
        recurring_frequency: str | None = None,
        recurring_end_date: str | None = None,
    ) -> Transaction:
        conn = self._db.get_connection()
        with store_errors("insert transaction"):
            cursor = conn.execute(
                """INSERT INTO transactions
                   (type, amount, category_id, date, description,
                    is_recurring, recurring_frequency, recurring_end_date)
                   VALUES (?, ?, ?, ?, ?, ?, ?, ?)""",
                (
                    type_, amount, category_id, date, description,
                    1 if is_recurring else 0, recurring_frequency, recurring_end_date,
                ),
            )
            conn.commit()
        return self.get_by_id(cursor.lastrowid)

    def update(self, tx_id: int, changes: dict) -> Optional[Transaction]:
        """Apply a partial update. Returns None when the row does not exist."""
        unknown = set(changes) - set(_UPDATABLE)
        if unknown:
            raise ValueError(f"Cannot update columns: {', '.join(sorted(unknown))}")
        if not changes:
            return self.get_by_id(tx_id)

        values = dict(changes)
        if "is_recurring" in values:
            values["is_recurring"] = 1 if values["is_recurring"] else 0
        assignments = ", ".join(f"{col}=?" for col in values)

        conn = self._db.get_connection()
        with store_errors("update transaction"):
            cursor = conn.execute(
                f"UPDATE transactions SET {assignments} WHERE id=?",
                (*values.values(), tx_id),
            )
            conn.commit()
        if cursor.rowcount == 0:
            return None
        return self.get_by_id(tx_id)

    def delete(self, tx_id: int) -> bool:
        """Returns False when no row matched."""
        conn = self._db.get_connection()
        with store_errors("delete transaction"):
            cursor = conn.execute("DELETE FROM transactions WHERE id = ?", (tx_id,))
            conn.commit()
        return cursor.rowcount > 0
