import customtkinter as ctk
from services.category_service import CategoryService
from ui.components.category_form import CategoryForm
from ui.components.confirm_dialog import ConfirmDialog
from utils.constants import TYPE_COLORS
from utils.exceptions import LedgerError
from utils.icons import resolve_icon


class CategoriesTab(ctk.CTkFrame):
    def __init__(
        self,
        master,
        category_service: CategoryService,
        notify_refresh,
        **kwargs,
    ):
        super().__init__(master, fg_color="transparent", **kwargs)
        self._svc = category_service
        self._notify_refresh = notify_refresh

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
        ctk.CTkButton(
            bar, text="+ Add Category", command=self._open_add,
        ).pack(side="left", padx=8, pady=6)
        self._error_var = ctk.StringVar()
        ctk.CTkLabel(bar, textvariable=self._error_var, text_color="#F44336").pack(
            side="left", padx=8
        )

    def _build_list(self):
        self._scroll = ctk.CTkScrollableFrame(self)
        self._scroll.grid(row=1, column=0, sticky="nsew", padx=8, pady=8)
        self._scroll.grid_columnconfigure(0, weight=1)

    def _load(self):
        for w in self._scroll.winfo_children():
            w.destroy()
        try:
            cats = self._svc.get_all()
        except LedgerError as e:
            self._error_var.set(str(e))
            return
        self._error_var.set("")
        for idx, cat in enumerate(cats):
            self._add_row(idx, cat)

    def _add_row(self, idx, cat):
        row = ctk.CTkFrame(self._scroll, fg_color=("gray90", "gray20"), corner_radius=8)
        row.grid(row=idx, column=0, sticky="ew", padx=4, pady=3)
        row.grid_columnconfigure(1, weight=1)

        ctk.CTkLabel(
            row, text=resolve_icon(cat.icon), width=32, height=28, corner_radius=4,
            fg_color=cat.color,
        ).grid(row=0, column=0, padx=(10, 0), pady=6)

        name_frame = ctk.CTkFrame(row, fg_color="transparent")
        name_frame.grid(row=0, column=1, padx=8, sticky="w")
        ctk.CTkLabel(
            name_frame, text=cat.name,
            font=ctk.CTkFont(size=13, weight="bold"), anchor="w",
        ).pack(side="left")
        if cat.is_custom:
            ctk.CTkLabel(
                name_frame, text="custom",
                text_color="gray60", font=ctk.CTkFont(size=10),
            ).pack(side="left", padx=(6, 0))

        ctk.CTkLabel(
            row, text=cat.type, width=70, anchor="center",
            text_color=TYPE_COLORS.get(cat.type, "gray60"),
            font=ctk.CTkFont(size=11, weight="bold"),
        ).grid(row=0, column=2, padx=4)

        del_btn = ctk.CTkButton(
            row, text="Delete", width=65, height=26,
            fg_color="#F44336", hover_color="#D32F2F",
            command=lambda c=cat: self._on_delete(c),
        )
        if not cat.is_custom:
            del_btn.configure(state="disabled", fg_color="gray50")
        del_btn.grid(row=0, column=3, padx=(4, 10))

    def _open_add(self):
        form = CategoryForm(self.winfo_toplevel(), self._svc)
        self.wait_window(form)
        if form.saved:
            self._notify_refresh("category")

    def _on_delete(self, cat):
        if not ConfirmDialog.ask(
            self.winfo_toplevel(), "Delete Category", f"Delete the category '{cat.name}'?"
        ):
            return
        try:
            self._svc.delete(cat.id)
        except LedgerError as e:
            self._error_var.set(str(e))
            return
        self._error_var.set("")
        self._notify_refresh("category")
