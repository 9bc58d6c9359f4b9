import sqlite3
from decimal import Decimal

import pytest

from database.db_manager import store_errors
from utils.exceptions import LedgerError, StoreError


def test_settings_are_seeded_and_updatable(db):
    assert db.get_setting("currency_symbol") == "₹"
    assert db.get_setting("missing", "fallback") == "fallback"
    db.set_setting("appearance_mode", "dark")
    assert db.get_setting("appearance_mode") == "dark"


def test_store_errors_wraps_sqlite_failures():
    with pytest.raises(StoreError) as info:
        with store_errors("do something"):
            raise sqlite3.OperationalError("disk I/O error")
    assert isinstance(info.value.__cause__, sqlite3.OperationalError)
    assert isinstance(info.value, LedgerError)


def test_constraint_violations_surface_as_store_error(tx_dao, categories):
    with pytest.raises(StoreError):
        tx_dao.create("expense", Decimal("-1"), categories["Shopping"].id, "2024-06-12")
    with pytest.raises(StoreError):
        tx_dao.create("expense", Decimal("1"), 9999, "2024-06-12")


def test_amounts_keep_decimal_precision(tx_dao, categories):
    tx = tx_dao.create("expense", Decimal("0.10"), categories["Shopping"].id, "2024-06-12")
    assert tx_dao.get_by_id(tx.id).amount == Decimal("0.10")
    assert tx_dao.sum_expense_amount(categories["Shopping"].id, "2024-06-01") == Decimal("0.10")


def test_update_rejects_unknown_columns(tx_dao, categories):
    tx = tx_dao.create("expense", Decimal("1"), categories["Shopping"].id, "2024-06-12")
    with pytest.raises(ValueError):
        tx_dao.update(tx.id, {"created_at": "2000-01-01"})
    assert tx_dao.update(9999, {"description": "x"}) is None
