import logging
import sqlite3
from contextlib import contextmanager
from decimal import Decimal
from utils.constants import DB_FILE, DEFAULT_CATEGORIES
from utils.exceptions import StoreError

logger = logging.getLogger(__name__)

# Money is kept as TEXT so Decimal precision survives the round trip
sqlite3.register_adapter(Decimal, str)


@contextmanager
def store_errors(action: str):
    """Re-raise any sqlite3 failure inside the block as StoreError."""
    try:
        yield
    except sqlite3.Error as e:
        logger.error("Store operation failed (%s): %s", action, e)
        raise StoreError(f"Could not {action}: {e}") from e


class DatabaseManager:
    def __init__(self, db_path: str | None = None):
        self.db_path = db_path or DB_FILE
        self._conn: sqlite3.Connection | None = None

    def get_connection(self) -> sqlite3.Connection:
        if self._conn is None:
            with store_errors("open database"):
                self._conn = sqlite3.connect(self.db_path, check_same_thread=False)
                self._conn.row_factory = sqlite3.Row
                self._conn.execute("PRAGMA foreign_keys = ON")
            logger.debug("Opened database %s", self.db_path)
        return self._conn

    def initialize(self):
        """Create schema and seed defaults."""
        conn = self.get_connection()
        with store_errors("initialize database"):
            self._create_schema(conn)
            self._seed_defaults(conn)
            conn.commit()
        logger.info("Database ready at %s", self.db_path)

    def _create_schema(self, conn: sqlite3.Connection):
        conn.executescript("""
            CREATE TABLE IF NOT EXISTS categories (
                id         INTEGER PRIMARY KEY AUTOINCREMENT,
                name       TEXT    NOT NULL UNIQUE,
                type       TEXT    NOT NULL CHECK(type IN ('income','expense')),
                icon       TEXT    NOT NULL DEFAULT 'Package',
                color      TEXT    NOT NULL DEFAULT '#3B82F6',
                is_custom  INTEGER NOT NULL DEFAULT 0,
                created_at TEXT    NOT NULL DEFAULT (datetime('now'))
            );

            CREATE TABLE IF NOT EXISTS transactions (
                id                  INTEGER PRIMARY KEY AUTOINCREMENT,
                type                TEXT NOT NULL CHECK(type IN ('income','expense')),
                amount              TEXT NOT NULL CHECK(CAST(amount AS REAL) > 0),
                category_id         INTEGER NOT NULL REFERENCES categories(id) ON DELETE RESTRICT,
                description         TEXT,
                date                TEXT NOT NULL DEFAULT (date('now')),
                created_at          TEXT NOT NULL DEFAULT (datetime('now')),
                is_recurring        INTEGER NOT NULL DEFAULT 0,
                recurring_frequency TEXT CHECK(recurring_frequency IN ('daily','weekly','monthly','yearly')),
                recurring_end_date  TEXT
            );

            CREATE TABLE IF NOT EXISTS budgets (
                id           INTEGER PRIMARY KEY AUTOINCREMENT,
                category_id  INTEGER NOT NULL REFERENCES categories(id) ON DELETE CASCADE,
                limit_amount TEXT NOT NULL CHECK(CAST(limit_amount AS REAL) > 0),
                month        TEXT NOT NULL,
                created_at   TEXT NOT NULL DEFAULT (datetime('now')),
                updated_at   TEXT NOT NULL DEFAULT (datetime('now')),
                UNIQUE(category_id, month)
            );

            CREATE INDEX IF NOT EXISTS idx_transactions_date        ON transactions(date);
            CREATE INDEX IF NOT EXISTS idx_transactions_category_id ON transactions(category_id);
            CREATE INDEX IF NOT EXISTS idx_transactions_type        ON transactions(type);
            CREATE INDEX IF NOT EXISTS idx_budgets_month            ON budgets(month);
            CREATE INDEX IF NOT EXISTS idx_budgets_category_id      ON budgets(category_id);

            CREATE TABLE IF NOT EXISTS app_settings (
                key   TEXT PRIMARY KEY,
                value TEXT NOT NULL
            );
        """)

    def _seed_defaults(self, conn: sqlite3.Connection):
        # Default settings
        defaults = [
            ("appearance_mode", "system"),
            ("currency_symbol", "₹"),
            ("date_format", "YYYY-MM-DD"),
        ]
        for key, value in defaults:
            conn.execute(
                "INSERT OR IGNORE INTO app_settings(key, value) VALUES (?, ?)",
                (key, value),
            )

        # Built-in categories
        for cat in DEFAULT_CATEGORIES:
            conn.execute(
                """INSERT OR IGNORE INTO categories(name, type, icon, color, is_custom)
                   VALUES (?, ?, ?, ?, 0)""",
                (cat["name"], cat["type"], cat["icon"], cat["color"]),
            )

    def get_setting(self, key: str, default: str = "") -> str:
        conn = self.get_connection()
        with store_errors("read setting"):
            row = conn.execute(
                "SELECT value FROM app_settings WHERE key = ?", (key,)
            ).fetchone()
        return row["value"] if row else default

    def set_setting(self, key: str, value: str):
        conn = self.get_connection()
        with store_errors("save setting"):
            conn.execute(
                "INSERT OR REPLACE INTO app_settings(key, value) VALUES (?, ?)",
                (key, value),
            )
            conn.commit()

    @staticmethod
    def open(db_path: str | None = None) -> "DatabaseManager":
        """Startup factory: open (creating if needed) and initialize the DB."""
        db = DatabaseManager(db_path)
        db.initialize()
        return db

    def close(self):
        if self._conn:
            self._conn.close()
            self._conn = None
