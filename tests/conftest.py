from decimal import Decimal

import pytest

from database.db_manager import DatabaseManager
from database.budget_dao import BudgetDAO
from database.category_dao import CategoryDAO
from database.transaction_dao import TransactionDAO
from models.transaction import Transaction
from services.budget_service import BudgetService
from services.category_service import CategoryService
from services.report_service import ReportService
from services.transaction_service import TransactionService


@pytest.fixture
def db(tmp_path):
    manager = DatabaseManager.open(str(tmp_path / "ledger.db"))
    yield manager
    manager.close()


@pytest.fixture
def category_dao(db):
    return CategoryDAO(db)


@pytest.fixture
def tx_dao(db):
    return TransactionDAO(db)


@pytest.fixture
def budget_dao(db):
    return BudgetDAO(db)


@pytest.fixture
def tx_service(tx_dao, category_dao):
    return TransactionService(tx_dao, category_dao)


@pytest.fixture
def budget_service(budget_dao, tx_dao, category_dao):
    return BudgetService(budget_dao, tx_dao, category_dao)


@pytest.fixture
def category_service(category_dao, tx_dao):
    return CategoryService(category_dao, tx_dao)


@pytest.fixture
def report_service(tx_dao):
    return ReportService(tx_dao)


@pytest.fixture
def categories(category_dao):
    """Seeded categories keyed by name."""
    return {c.name: c for c in category_dao.get_all()}


def make_tx(id_, type_, amount, date, category_name=None, color=None, icon=None, category_id=1):
    return Transaction(
        id=id_,
        type=type_,
        amount=Decimal(str(amount)),
        category_id=category_id,
        date=date,
        category_name=category_name,
        category_color=color,
        category_icon=icon,
    )
