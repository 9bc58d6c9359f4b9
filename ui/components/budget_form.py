import customtkinter as ctk
from services.budget_service import BudgetService
from models.budget import BudgetWithSpending
from utils.date_helpers import friendly_month
from utils.exceptions import LedgerError


class BudgetForm(ctk.CTkToplevel):
    """Add or edit a budget limit for a category/month."""

    def __init__(
        self,
        master,
        budget_service: BudgetService,
        month: str,
        budget: BudgetWithSpending | None = None,
        **kwargs,
    ):
        super().__init__(master, **kwargs)
        self._svc = budget_service
        self._month = month
        self._budget = budget
        self.saved = False

        self.title("Edit Budget" if budget else "New Budget")
        self.resizable(False, False)
        self.grid_columnconfigure(1, weight=1)

        # Editing keeps the category fixed; adding offers only unbudgeted ones
        if budget:
            self._categories = []
            cat_names = [budget.category_name]
        else:
            self._categories = budget_service.available_categories(month)
            cat_names = [c.name for c in self._categories]

        r = 0
        ctk.CTkLabel(self, text="Category:").grid(
            row=r, column=0, padx=(16, 8), pady=(16, 4), sticky="e"
        )
        self._cat_var = ctk.StringVar(value=cat_names[0] if cat_names else "")
        ctk.CTkComboBox(
            self, values=cat_names, variable=self._cat_var,
            width=200, state="disabled" if budget else "readonly",
        ).grid(row=r, column=1, padx=(0, 16), pady=(16, 4), sticky="ew")
        r += 1

        ctk.CTkLabel(self, text="Month:").grid(
            row=r, column=0, padx=(16, 8), pady=4, sticky="e"
        )
        ctk.CTkLabel(self, text=friendly_month(month), anchor="w").grid(
            row=r, column=1, padx=(0, 16), pady=4, sticky="ew"
        )
        r += 1

        ctk.CTkLabel(self, text="Limit:").grid(
            row=r, column=0, padx=(16, 8), pady=4, sticky="e"
        )
        self._limit_var = ctk.StringVar(
            value=f"{budget.limit_amount:.2f}" if budget else ""
        )
        ctk.CTkEntry(self, textvariable=self._limit_var, width=200).grid(
            row=r, column=1, padx=(0, 16), pady=4, sticky="ew"
        )
        r += 1

        self._error_var = ctk.StringVar()
        ctk.CTkLabel(
            self, textvariable=self._error_var,
            text_color="#F44336", wraplength=280, anchor="w"
        ).grid(row=r, column=0, columnspan=2, padx=16, pady=(0, 4), sticky="ew")
        r += 1

        btn_frame = ctk.CTkFrame(self, fg_color="transparent")
        btn_frame.grid(row=r, column=0, columnspan=2, padx=16, pady=(4, 16), sticky="ew")
        ctk.CTkButton(
            btn_frame, text="Cancel", width=90,
            fg_color="transparent", border_width=1,
            text_color=("gray10", "gray90"),
            command=self.destroy,
        ).pack(side="left")
        if budget:
            ctk.CTkButton(
                btn_frame, text="Delete", width=80,
                fg_color="#F44336", hover_color="#D32F2F",
                command=self._on_delete,
            ).pack(side="left", padx=8)
        ctk.CTkButton(btn_frame, text="Save", width=90, command=self._on_save).pack(side="right")

        self.transient(master)
        self.grab_set()

    def _on_save(self):
        if self._budget:
            category_id = self._budget.category_id
        else:
            cat = next((c for c in self._categories if c.name == self._cat_var.get()), None)
            if not cat:
                self._error_var.set("Please select a category.")
                return
            category_id = cat.id
        if not self._limit_var.get().strip():
            self._error_var.set("Please fill in all fields.")
            return
        try:
            self._svc.set_budget(category_id, self._limit_var.get(), self._month)
        except LedgerError as e:
            self._error_var.set(str(e))
            return
        self.saved = True
        self.destroy()

    def _on_delete(self):
        try:
            self._svc.delete_budget(self._budget.id)
        except LedgerError as e:
            self._error_var.set(str(e))
            return
        self.saved = True
        self.destroy()
