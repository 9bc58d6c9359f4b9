import tkinter
from datetime import date
from decimal import Decimal

import pytest

ctk = pytest.importorskip("customtkinter")

from conftest import make_tx
from models.summary import DateGroup, PeriodTotals
from ui.tabs.budgets_tab import BudgetsTab
from ui.tabs.dashboard_tab import DashboardTab
from ui.tabs.transactions_tab import TransactionsTab
from utils.exceptions import StoreError

_PERIOD = (date(2024, 6, 12), "month")


@pytest.fixture
def tk_root():
    try:
        root = ctk.CTk()
    except tkinter.TclError:
        pytest.skip("no display available")
    root.withdraw()
    yield root
    root.destroy()


class _BrokenStore:
    """Stands in for any service: every call fails like a locked database."""

    def __getattr__(self, name):
        def fail(*args, **kwargs):
            raise StoreError("Could not list transactions: database is locked")
        return fail


class _EmptyReports:
    def get_summary(self, ref, granularity):
        return PeriodTotals(Decimal(0), Decimal(0), Decimal(0))

    def get_category_breakdown(self, ref, granularity):
        return ()


class _NoAlerts:
    def compute_alerts(self, month):
        return []


class _ManyDays:
    def __init__(self, days):
        self.groups = tuple(
            DateGroup(date=f"2023-{1 + i // 28:02d}-{1 + i % 28:02d}",
                      transactions=(make_tx(i, "expense", 1, "2023-01-01"),))
            for i in range(days)
        )

    def get_date_groups(self, ref=None, granularity=None):
        return self.groups


def test_dashboard_shows_store_failure_then_recovers(tk_root):
    tab = DashboardTab(tk_root, _BrokenStore(), _NoAlerts(), get_period=lambda: _PERIOD)
    assert "database is locked" in tab._error_var.get()

    tab._report_svc = _EmptyReports()
    tab.refresh()
    assert tab._error_var.get() == ""


def test_budgets_tab_shows_store_failures(tk_root):
    tab = BudgetsTab(tk_root, _BrokenStore(), get_period=lambda: _PERIOD,
                     notify_refresh=lambda scope: None)
    assert "database is locked" in tab._error_var.get()

    tab._error_var.set("")
    tab._copy_prev()
    assert "database is locked" in tab._error_var.get()


def test_transactions_tab_shows_store_failure(tk_root):
    tab = TransactionsTab(tk_root, None, None, _BrokenStore(),
                          get_period=lambda: _PERIOD, notify_refresh=lambda scope: None)
    assert "database is locked" in tab._error_var.get()


def test_transactions_tab_renders_every_day(tk_root):
    reports = _ManyDays(75)
    tab = TransactionsTab(tk_root, None, None, reports,
                          get_period=lambda: _PERIOD, notify_refresh=lambda scope: None)
    # one header plus one row per day
    assert len(tab._scroll.winfo_children()) == 150
