from typing import Optional
from database.db_manager import DatabaseManager, store_errors
from models.category import Category


class CategoryDAO:
    def __init__(self, db: DatabaseManager):
        self._db = db

    def _row_to_model(self, row) -> Category:
        return Category(
            id=row["id"],
            name=row["name"],
            type=row["type"],
            icon=row["icon"],
            color=row["color"],
            is_custom=bool(row["is_custom"]),
            created_at=row["created_at"],
        )

    def get_all(self) -> list[Category]:
        conn = self._db.get_connection()
        with store_errors("list categories"):
            rows = conn.execute(
                "SELECT * FROM categories ORDER BY type, name"
            ).fetchall()
        return [self._row_to_model(r) for r in rows]

    def get_by_id(self, category_id: int) -> Optional[Category]:
        conn = self._db.get_connection()
        with store_errors("read category"):
            row = conn.execute(
                "SELECT * FROM categories WHERE id = ?", (category_id,)
            ).fetchone()
        return self._row_to_model(row) if row else None

    def get_by_type(self, type_filter: str) -> list[Category]:
        """type_filter: 'income' or 'expense'."""
        conn = self._db.get_connection()
        with store_errors("list categories"):
            rows = conn.execute(
                "SELECT * FROM categories WHERE type = ? ORDER BY name",
                (type_filter,),
            ).fetchall()
        return [self._row_to_model(r) for r in rows]

    def create(
        self,
        name: str,
        type_: str,
        icon: str,
        color: str,
        is_custom: bool = True,
    ) -> Category:
        conn = self._db.get_connection()
        with store_errors("insert category"):
            cursor = conn.execute(
                """INSERT INTO categories(name, type, icon, color, is_custom)
                   VALUES (?, ?, ?, ?, ?)""",
                (name, type_, icon, color, 1 if is_custom else 0),
            )
            conn.commit()
        return self.get_by_id(cursor.lastrowid)

    def delete(self, category_id: int) -> bool:
        """Returns False when no row matched."""
        conn = self._db.get_connection()
        with store_errors("delete category"):
            cursor = conn.execute("DELETE FROM categories WHERE id = ?", (category_id,))
            conn.commit()
        return cursor.rowcount > 0
