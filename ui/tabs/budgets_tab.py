import customtkinter as ctk
from services.budget_service import BudgetService
from ui.components.budget_form import BudgetForm
from utils.constants import STATUS_COLORS, STATUS_OVER
from utils.currency import format_currency
from utils.exceptions import LedgerError
from utils.date_helpers import current_month_str, friendly_month, format_month, month_start
from utils.icons import resolve_icon


class BudgetsTab(ctk.CTkFrame):
    def __init__(
        self,
        master,
        budget_service: BudgetService,
        get_period,         # callable → (date, granularity)
        notify_refresh,
        currency_symbol: str = "₹",
        **kwargs,
    ):
        super().__init__(master, fg_color="transparent", **kwargs)
        self._svc = budget_service
        self._get_period = get_period
        self._notify_refresh = notify_refresh
        self._symbol = currency_symbol
        self._month_var = ctk.StringVar(value=current_month_str())

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

        self._mlabel = ctk.CTkLabel(
            bar, text="", width=150, anchor="w",
            font=ctk.CTkFont(size=13, weight="bold"),
        )
        self._mlabel.pack(side="left", padx=12, pady=6)
        ctk.CTkButton(bar, text="+ Add Budget", command=self._open_add).pack(side="left", padx=4)
        ctk.CTkButton(
            bar, text="Copy from Previous Month",
            command=self._copy_prev,
            fg_color="transparent", border_width=1,
            text_color=("gray10", "gray90"),
        ).pack(side="left", padx=4)
        self._error_var = ctk.StringVar()
        ctk.CTkLabel(bar, textvariable=self._error_var, text_color="#F44336").pack(
            side="left", padx=8
        )

    def _build_list(self):
        self._scroll = ctk.CTkScrollableFrame(self)
        self._scroll.grid(row=1, column=0, sticky="nsew", padx=8, pady=8)
        self._scroll.grid_columnconfigure(0, weight=1)

    def _load(self, notice: str | None = None):
        for w in self._scroll.winfo_children():
            w.destroy()

        ref, _ = self._get_period()
        month = format_month(month_start(ref))
        self._month_var.set(month)
        self._mlabel.configure(text=friendly_month(month))

        try:
            budgets = self._svc.list_budgets_with_spending(month)
        except LedgerError as e:
            self._error_var.set(str(e))
            return
        self._error_var.set("")
        if notice:
            ctk.CTkLabel(self._scroll, text=notice, text_color="gray60").grid(
                row=0, column=0, pady=(8, 0)
            )
        if not budgets:
            ctk.CTkLabel(
                self._scroll,
                text="No budgets set for this month. Click '+ Add Budget' to create one.",
                text_color="gray60",
            ).grid(row=1, column=0, pady=40)
            return

        for idx, b in enumerate(budgets):
            self._add_budget_card(idx + 1, b)

    def _add_budget_card(self, idx, b):
        card = ctk.CTkFrame(
            self._scroll, fg_color=("gray90", "gray20"), corner_radius=8
        )
        card.grid(row=idx, column=0, sticky="ew", padx=4, pady=4)
        card.grid_columnconfigure(0, weight=1)

        hdr = ctk.CTkFrame(card, fg_color="transparent")
        hdr.grid(row=0, column=0, sticky="ew", padx=12, pady=(10, 4))
        hdr.grid_columnconfigure(0, weight=1)

        ctk.CTkLabel(
            hdr, text=f"{resolve_icon(b.category_icon)} {b.category_name}",
            font=ctk.CTkFont(size=13, weight="bold"), anchor="w",
        ).grid(row=0, column=0, sticky="w")

        color = STATUS_COLORS[b.status]
        ctk.CTkLabel(hdr, text=f"{b.percentage:.1f}%", text_color=color).grid(
            row=0, column=1, padx=(8, 0)
        )
        ctk.CTkButton(
            hdr, text="Edit", width=50, height=24,
            fg_color="transparent", border_width=1,
            text_color=("gray10", "gray90"),
            command=lambda budget=b: self._open_edit(budget),
        ).grid(row=0, column=2, padx=(8, 0))

        detail = (
            f"Spent: {format_currency(b.spent, self._symbol)}  /  "
            f"Limit: {format_currency(b.limit_amount, self._symbol)}  |  "
        )
        if b.status == STATUS_OVER:
            detail += f"Over by: {format_currency(b.over_amount, self._symbol)}"
        else:
            detail += f"Remaining: {format_currency(b.remaining, self._symbol)}"
        ctk.CTkLabel(card, text=detail, text_color="gray60", anchor="w").grid(
            row=1, column=0, padx=12, sticky="ew"
        )

        bar = ctk.CTkProgressBar(card, progress_color=color)
        bar.grid(row=2, column=0, padx=12, pady=(4, 10), sticky="ew")
        bar.set(min(float(b.percentage) / 100, 1.0))

    def _open_add(self):
        form = BudgetForm(self.winfo_toplevel(), self._svc, month=self._month_var.get())
        self.wait_window(form)
        if form.saved:
            self._notify_refresh("budget")

    def _open_edit(self, budget):
        form = BudgetForm(
            self.winfo_toplevel(), self._svc,
            month=self._month_var.get(), budget=budget,
        )
        self.wait_window(form)
        if form.saved:
            self._notify_refresh("budget")

    def _copy_prev(self):
        try:
            count = self._svc.copy_from_previous_month(self._month_var.get())
        except LedgerError as e:
            self._error_var.set(str(e))
            return
        if count == 0:
            self._load(notice="No budgets in previous month to copy.")
        else:
            self._notify_refresh("budget")
