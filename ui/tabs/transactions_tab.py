import customtkinter as ctk
from services.report_service import ReportService
from services.transaction_service import TransactionService
from services.category_service import CategoryService
from services.period_filter import period_label
from ui.components.transaction_form import TransactionForm
from ui.components.confirm_dialog import ConfirmDialog
from utils.constants import FALLBACK_CATEGORY_NAME, TYPE_COLORS
from utils.currency import format_currency, format_signed
from utils.date_helpers import relative_day_label
from utils.exceptions import LedgerError
from utils.icons import resolve_icon


class TransactionsTab(ctk.CTkFrame):
    def __init__(
        self,
        master,
        tx_service: TransactionService,
        category_service: CategoryService,
        report_service: ReportService,
        get_period,         # callable → (date, granularity)
        notify_refresh,
        date_format: str = "YYYY-MM-DD",
        currency_symbol: str = "₹",
        **kwargs,
    ):
        super().__init__(master, fg_color="transparent", **kwargs)
        self._tx_svc = tx_service
        self._cat_svc = category_service
        self._report_svc = report_service
        self._get_period = get_period
        self._notify_refresh = notify_refresh
        self._date_format = date_format
        self._symbol = currency_symbol
        self._scope_var = ctk.StringVar(value="Period")

        self.grid_columnconfigure(0, weight=1)
        self.grid_rowconfigure(1, weight=1)

        self._build_toolbar()
        self._build_list()
        self._load()

    def refresh(self):
        self._load()

    def _build_toolbar(self):
        bar = ctk.CTkFrame(self, fg_color=("gray88", "gray18"), corner_radius=8)
        bar.grid(row=0, column=0, sticky="ew", padx=8, pady=(8, 0))

        ctk.CTkSegmentedButton(
            bar, values=["Period", "All"], variable=self._scope_var,
            command=lambda _: self._load(),
        ).pack(side="left", padx=8, pady=6)
        self._range_label = ctk.CTkLabel(bar, text="", text_color="gray60")
        self._range_label.pack(side="left", padx=8)
        self._error_var = ctk.StringVar()
        ctk.CTkLabel(bar, textvariable=self._error_var, text_color="#F44336").pack(
            side="left", padx=8
        )
        ctk.CTkButton(bar, text="+ Add Transaction", command=self._open_add).pack(
            side="right", padx=8
        )

    def _build_list(self):
        self._scroll = ctk.CTkScrollableFrame(self)
        self._scroll.grid(row=1, column=0, sticky="nsew", padx=8, pady=8)
        self._scroll.grid_columnconfigure(0, weight=1)

    def _load(self):
        for w in self._scroll.winfo_children():
            w.destroy()

        ref, granularity = self._get_period()
        try:
            if self._scope_var.get() == "All":
                groups = self._report_svc.get_date_groups()
                self._range_label.configure(text="All transactions")
            else:
                groups = self._report_svc.get_date_groups(ref, granularity)
                self._range_label.configure(text=period_label(ref, granularity))
        except LedgerError as e:
            self._error_var.set(str(e))
            return
        self._error_var.set("")

        if not groups:
            ctk.CTkLabel(
                self._scroll,
                text="No transactions yet. Add your first transaction to get started.",
                text_color="gray60",
            ).grid(row=0, column=0, pady=40)
            return

        r = 0
        for group in groups:
            ctk.CTkLabel(
                self._scroll, text=relative_day_label(group.date).upper(),
                font=ctk.CTkFont(size=11, weight="bold"), text_color="gray60", anchor="w",
            ).grid(row=r, column=0, sticky="ew", padx=6, pady=(10, 2))
            r += 1
            for tx in group.transactions:
                self._add_row(r, tx)
                r += 1

    def _add_row(self, r, tx):
        row = ctk.CTkFrame(self._scroll, fg_color=("gray90", "gray20"), corner_radius=6)
        row.grid(row=r, column=0, sticky="ew", padx=4, pady=1)
        row.grid_columnconfigure(1, weight=1)

        ctk.CTkLabel(
            row, text=resolve_icon(tx.category_icon), width=30, height=26, corner_radius=4,
            fg_color=tx.category_color or "gray50",
        ).grid(row=0, column=0, rowspan=2, padx=(8, 4), pady=4)

        title = tx.category_name if tx.has_category else FALLBACK_CATEGORY_NAME
        if tx.is_recurring:
            title += f"  ↻ {tx.recurring_frequency}"
        ctk.CTkLabel(row, text=title, anchor="w", font=ctk.CTkFont(weight="bold")).grid(
            row=0, column=1, sticky="w", padx=4
        )
        if tx.description:
            ctk.CTkLabel(row, text=tx.description, anchor="w", text_color="gray60").grid(
                row=1, column=1, sticky="w", padx=4
            )

        signed = tx.amount if tx.type == "income" else -tx.amount
        ctk.CTkLabel(
            row, text=format_signed(signed, self._symbol),
            text_color=TYPE_COLORS[tx.type], width=110, anchor="e",
        ).grid(row=0, column=2, rowspan=2, padx=6)
        ctk.CTkButton(
            row, text="🗑", width=30, height=26,
            fg_color="transparent", hover_color=("gray80", "gray30"),
            text_color=("gray10", "gray90"),
            command=lambda t=tx: self._on_delete(t),
        ).grid(row=0, column=3, rowspan=2, padx=(0, 8))

    def _open_add(self):
        form = TransactionForm(
            self.winfo_toplevel(), self._tx_svc, self._cat_svc,
            date_format=self._date_format,
        )
        self.wait_window(form)
        if form.saved:
            self._notify_refresh("transaction")

    def _on_delete(self, tx):
        if not ConfirmDialog.ask(
            self.winfo_toplevel(), "Delete Transaction",
            f"Delete this {tx.type} of {format_currency(tx.amount, self._symbol)}?",
        ):
            return
        try:
            self._tx_svc.delete_transaction(tx.id)
        except LedgerError as e:
            self._error_var.set(str(e))
            return
        self._error_var.set("")
        self._notify_refresh("transaction")
