import logging
from datetime import date

import customtkinter as ctk
from services.transaction_service import TransactionService
from services.budget_service import BudgetService
from services.report_service import ReportService
from services.category_service import CategoryService
from services.session_service import SessionService
from services.period_filter import period_label, shift_period
from database.db_manager import DatabaseManager
from ui.tabs.dashboard_tab import DashboardTab
from ui.tabs.transactions_tab import TransactionsTab
from ui.tabs.budgets_tab import BudgetsTab
from ui.tabs.categories_tab import CategoriesTab
from utils.constants import APP_NAME, APP_WIDTH, APP_HEIGHT, GRANULARITIES
from utils.date_helpers import today

logger = logging.getLogger(__name__)


_REFRESH_SCOPES: dict[str, set[str]] = {
    "transaction": {"dashboard", "transactions", "budgets"},
    "budget":      {"dashboard", "budgets"},
    "category":    {"dashboard", "transactions", "budgets", "categories"},
    "period":      {"dashboard", "transactions", "budgets"},
    "full":        {"dashboard", "transactions", "budgets", "categories"},
}

_APPEARANCE_MODES = ["system", "light", "dark"]


class AppWindow(ctk.CTk):
    def __init__(
        self,
        tx_service: TransactionService,
        budget_service: BudgetService,
        report_service: ReportService,
        category_service: CategoryService,
        session_service: SessionService,
        db: DatabaseManager | None = None,
        date_format: str = "YYYY-MM-DD",
        currency_symbol: str = "₹",
        **kwargs,
    ):
        super().__init__(**kwargs)
        self._tx_svc = tx_service
        self._budget_svc = budget_service
        self._report_svc = report_service
        self._cat_svc = category_service
        self._session_svc = session_service
        self._db = db
        self._date_format = date_format
        self._symbol = currency_symbol

        self._current_date: date = today()
        self._granularity_var = ctk.StringVar(value="month")
        self.logged_out = False

        self.title(APP_NAME)
        self.minsize(APP_WIDTH, APP_HEIGHT)
        self.geometry(f"{APP_WIDTH}x{APP_HEIGHT}")

        self.grid_columnconfigure(0, weight=1)
        self.grid_rowconfigure(1, weight=1)

        self._build_period_bar()
        self._build_tabs()

    # ── Period bar ──────────────────────────────────────────────────────────
    def _build_period_bar(self):
        bar = ctk.CTkFrame(self, fg_color=("gray85", "gray15"), corner_radius=0, height=44)
        bar.grid(row=0, column=0, sticky="ew")
        bar.grid_propagate(False)

        ctk.CTkButton(bar, text="◀", width=32, command=lambda: self._shift(-1)).pack(
            side="left", padx=(12, 2), pady=8
        )
        self._period_label = ctk.CTkLabel(
            bar, text="", width=220, font=ctk.CTkFont(size=13, weight="bold"),
        )
        self._period_label.pack(side="left", padx=4)
        ctk.CTkButton(bar, text="▶", width=32, command=lambda: self._shift(1)).pack(
            side="left", padx=2
        )
        ctk.CTkButton(
            bar, text="Today", width=60,
            fg_color="transparent", border_width=1,
            text_color=("gray10", "gray90"),
            command=self._go_today,
        ).pack(side="left", padx=(8, 4))

        ctk.CTkSegmentedButton(
            bar, values=list(GRANULARITIES), variable=self._granularity_var,
            command=lambda _: self._on_period_changed(),
        ).pack(side="left", padx=12)

        ctk.CTkButton(
            bar, text="Logout", width=80,
            fg_color="transparent", border_width=1,
            text_color=("gray10", "gray90"),
            command=self._logout,
        ).pack(side="right", padx=12)

        if self._db:
            self._appearance_var = ctk.StringVar(
                value=self._db.get_setting("appearance_mode", "system")
            )
            ctk.CTkOptionMenu(
                bar, values=_APPEARANCE_MODES, variable=self._appearance_var,
                width=100, command=self._on_appearance_changed,
            ).pack(side="right", padx=4)

        self._update_period_label()

    def _build_tabs(self):
        self._tabview = ctk.CTkTabview(self)
        self._tabview.grid(row=1, column=0, sticky="nsew", padx=8, pady=(0, 8))

        for tab_name in ("Dashboard", "Transactions", "Budgets", "Categories"):
            self._tabview.add(tab_name)
            self._tabview.tab(tab_name).grid_columnconfigure(0, weight=1)
            self._tabview.tab(tab_name).grid_rowconfigure(0, weight=1)

        self._dashboard_tab = DashboardTab(
            self._tabview.tab("Dashboard"),
            report_service=self._report_svc,
            budget_service=self._budget_svc,
            get_period=self.get_period,
            currency_symbol=self._symbol,
        )
        self._dashboard_tab.grid(row=0, column=0, sticky="nsew")

        self._transactions_tab = TransactionsTab(
            self._tabview.tab("Transactions"),
            tx_service=self._tx_svc,
            category_service=self._cat_svc,
            report_service=self._report_svc,
            get_period=self.get_period,
            notify_refresh=self.notify_tabs_refresh,
            date_format=self._date_format,
            currency_symbol=self._symbol,
        )
        self._transactions_tab.grid(row=0, column=0, sticky="nsew")

        self._budgets_tab = BudgetsTab(
            self._tabview.tab("Budgets"),
            budget_service=self._budget_svc,
            get_period=self.get_period,
            notify_refresh=self.notify_tabs_refresh,
            currency_symbol=self._symbol,
        )
        self._budgets_tab.grid(row=0, column=0, sticky="nsew")

        self._categories_tab = CategoriesTab(
            self._tabview.tab("Categories"),
            category_service=self._cat_svc,
            notify_refresh=self.notify_tabs_refresh,
        )
        self._categories_tab.grid(row=0, column=0, sticky="nsew")

    # ── Period navigation ───────────────────────────────────────────────────
    def get_period(self) -> tuple[date, str]:
        return self._current_date, self._granularity_var.get()

    def _shift(self, steps: int):
        self._current_date = shift_period(
            self._current_date, self._granularity_var.get(), steps
        )
        self._on_period_changed()

    def _go_today(self):
        self._current_date = today()
        self._on_period_changed()

    def _on_period_changed(self):
        self._update_period_label()
        self.notify_tabs_refresh("period")

    def _update_period_label(self):
        self._period_label.configure(
            text=period_label(self._current_date, self._granularity_var.get())
        )

    # ── Settings & session ──────────────────────────────────────────────────
    def _on_appearance_changed(self, mode: str):
        ctk.set_appearance_mode(mode)
        self._db.set_setting("appearance_mode", mode)

    def _logout(self):
        self._session_svc.logout()
        logger.info("Session ended by user")
        self.logged_out = True
        self.destroy()

    # ── Refresh ──────────────────────────────────────────────────────────────
    def notify_tabs_refresh(self, scope: str = "full"):
        tabs = _REFRESH_SCOPES.get(scope, _REFRESH_SCOPES["full"])
        if "dashboard"    in tabs: self._dashboard_tab.refresh()
        if "transactions" in tabs: self._transactions_tab.refresh()
        if "budgets"      in tabs: self._budgets_tab.refresh()
        if "categories"   in tabs: self._categories_tab.refresh()
