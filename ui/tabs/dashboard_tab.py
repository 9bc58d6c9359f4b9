import customtkinter as ctk
from matplotlib.figure import Figure
from matplotlib.backends.backend_tkagg import FigureCanvasTkAgg
from services.report_service import ReportService
from services.budget_service import BudgetService
from services.aggregator import bucket_shares, sort_buckets_by_amount
from ui.components.alert_banner import AlertBanner
from utils.constants import STATUS_COLORS, STATUS_OVER
from utils.currency import format_currency
from utils.exceptions import LedgerError
from utils.icons import resolve_icon


class DashboardTab(ctk.CTkFrame):
    def __init__(
        self,
        master,
        report_service: ReportService,
        budget_service: BudgetService,
        get_period,         # callable → (date, granularity)
        currency_symbol: str = "₹",
        **kwargs,
    ):
        super().__init__(master, fg_color="transparent", **kwargs)
        self._report_svc = report_service
        self._budget_svc = budget_service
        self._get_period = get_period
        self._symbol = currency_symbol
        self._chart_var = ctk.StringVar(value="Pie")
        self._error_var = ctk.StringVar()

        self.grid_columnconfigure(0, weight=1)
        self.grid_rowconfigure(2, weight=1)

        self._build_summary_cards()
        self._build_alert_area()
        self._build_bottom_section()
        self._load()

    def refresh(self):
        self._load()

    def _build_summary_cards(self):
        self._card_frame = ctk.CTkFrame(self, fg_color="transparent")
        self._card_frame.grid(row=0, column=0, sticky="ew", padx=16, pady=12)
        self._card_frame.grid_columnconfigure((0, 1, 2), weight=1)

    def _build_alert_area(self):
        area = ctk.CTkFrame(self, fg_color="transparent")
        area.grid(row=1, column=0, sticky="ew", padx=16)
        area.grid_columnconfigure(0, weight=1)
        ctk.CTkLabel(
            area, textvariable=self._error_var, text_color="#F44336", anchor="w",
        ).grid(row=0, column=0, sticky="ew")
        self._alert_frame = ctk.CTkFrame(area, fg_color="transparent")
        self._alert_frame.grid(row=1, column=0, sticky="ew")

    def _build_bottom_section(self):
        bottom = ctk.CTkFrame(self, fg_color="transparent")
        bottom.grid(row=2, column=0, sticky="nsew", padx=16, pady=(8, 12))
        bottom.grid_columnconfigure(0, weight=3)
        bottom.grid_columnconfigure(1, weight=2)
        bottom.grid_rowconfigure(1, weight=1)

        hdr = ctk.CTkFrame(bottom, fg_color="transparent")
        hdr.grid(row=0, column=0, columnspan=2, sticky="ew")
        ctk.CTkLabel(
            hdr, text="Expenses by Category",
            font=ctk.CTkFont(size=14, weight="bold"),
        ).pack(side="left")
        ctk.CTkSegmentedButton(
            hdr, values=["Pie", "Bar"], variable=self._chart_var,
            command=lambda _: self._load(),
        ).pack(side="right")

        self._fig = Figure(figsize=(5, 3.2), dpi=96)
        self._canvas = FigureCanvasTkAgg(self._fig, master=bottom)
        self._canvas.get_tk_widget().grid(row=1, column=0, sticky="nsew", padx=(0, 8), pady=6)

        self._legend_frame = ctk.CTkScrollableFrame(bottom, label_text="Breakdown")
        self._legend_frame.grid(row=1, column=1, sticky="nsew", pady=6)

    def _load(self):
        ref, granularity = self._get_period()
        try:
            totals = self._report_svc.get_summary(ref, granularity)
            # Budget alerts only make sense for a whole month
            alerts = self._budget_svc.compute_alerts(ref) if granularity == "month" else []
            buckets = self._report_svc.get_category_breakdown(ref, granularity)
        except LedgerError as e:
            self._error_var.set(str(e))
            return
        self._error_var.set("")

        # Summary cards
        for w in self._card_frame.winfo_children():
            w.destroy()
        card_data = [
            ("Income",   totals.income,   "#4CAF50"),
            ("Expenses", totals.expenses, "#F44336"),
            ("Net",      totals.net,      "#2196F3" if totals.net >= 0 else "#FF9800"),
        ]
        for i, (label, value, color) in enumerate(card_data):
            self._make_card(self._card_frame, i, label, value, color)

        for w in self._alert_frame.winfo_children():
            w.destroy()
        for alert in alerts:
            msg = (
                f"{alert.category_name}: {format_currency(alert.spent, self._symbol)} of "
                f"{format_currency(alert.limit_amount, self._symbol)} "
                f"({alert.percentage:.0f}%)"
            )
            if alert.status == STATUS_OVER:
                msg += f" · over by {format_currency(alert.over_amount, self._symbol)}"
            AlertBanner(
                self._alert_frame, message=msg, color=STATUS_COLORS[alert.status],
            ).pack(fill="x", pady=2)

        self._draw_chart(buckets)

    def _draw_chart(self, buckets):
        self._fig.clear()
        ax = self._fig.add_subplot(111)
        for w in self._legend_frame.winfo_children():
            w.destroy()

        if not buckets:
            ax.text(0.5, 0.5, "No expenses for this period",
                    ha="center", va="center", color="gray")
            ax.set_axis_off()
            self._canvas.draw()
            return

        if self._chart_var.get() == "Bar":
            ordered = sort_buckets_by_amount(buckets)
            names = [b.category_name for b in ordered]
            ax.barh(names, [float(b.amount) for b in ordered],
                    color=[b.color for b in ordered])
            ax.invert_yaxis()
            ax.tick_params(labelsize=8)
        else:
            ordered = buckets
            ax.pie([float(b.amount) for b in ordered],
                   colors=[b.color for b in ordered], startangle=90)
            ax.axis("equal")
        self._fig.tight_layout()
        self._canvas.draw()

        for bucket, share in bucket_shares(ordered):
            row = ctk.CTkFrame(self._legend_frame, fg_color="transparent")
            row.pack(fill="x", pady=1)
            ctk.CTkLabel(row, text="■", text_color=bucket.color, width=16).pack(side="left")
            ctk.CTkLabel(
                row, text=f"{resolve_icon(bucket.icon)} {bucket.category_name}", anchor="w",
            ).pack(side="left", padx=4)
            ctk.CTkLabel(
                row, text=f"{format_currency(bucket.amount, self._symbol)}  {share:.1f}%",
                text_color="gray60", anchor="e",
            ).pack(side="right")

    def _make_card(self, parent, col, label, value, color):
        card = ctk.CTkFrame(parent, fg_color=("gray90", "gray20"), corner_radius=10)
        card.grid(row=0, column=col, padx=6, sticky="ew")
        card.grid_columnconfigure(0, weight=1)
        ctk.CTkLabel(
            card, text=label, font=ctk.CTkFont(size=12),
            text_color="gray60",
        ).grid(row=0, column=0, pady=(12, 0), padx=16)

        sign = "-" if value < 0 else ""
        ctk.CTkLabel(
            card,
            text=f"{sign}{format_currency(abs(value), self._symbol)}",
            font=ctk.CTkFont(size=20, weight="bold"),
            text_color=color,
        ).grid(row=1, column=0, pady=(4, 12), padx=16)
