import customtkinter as ctk
from tkinter import colorchooser
from services.category_service import CategoryService
from utils.constants import CATEGORY_TYPES, DEFAULT_CUSTOM_COLOR, DEFAULT_CUSTOM_ICON
from utils.exceptions import LedgerError
from utils.icons import ICON_NAMES, resolve_icon


class CategoryForm(ctk.CTkToplevel):
    """Create a custom category. Existing categories are not editable."""

    def __init__(
        self,
        master,
        category_service: CategoryService,
        initial_type: str = "expense",
        **kwargs,
    ):
        super().__init__(master, **kwargs)
        self._svc = category_service
        self.saved = False

        self.title("New Category")
        self.resizable(False, False)
        self.grid_columnconfigure(1, weight=1)

        r = 0
        ctk.CTkLabel(self, text="Name:").grid(
            row=r, column=0, padx=(16, 8), pady=(16, 4), sticky="e"
        )
        self._name_var = ctk.StringVar()
        ctk.CTkEntry(self, textvariable=self._name_var, width=220).grid(
            row=r, column=1, padx=(0, 16), pady=(16, 4), sticky="ew"
        )
        r += 1

        ctk.CTkLabel(self, text="Type:").grid(
            row=r, column=0, padx=(16, 8), pady=4, sticky="e"
        )
        self._type_var = ctk.StringVar(value=initial_type)
        ctk.CTkSegmentedButton(
            self, values=list(CATEGORY_TYPES), variable=self._type_var,
        ).grid(row=r, column=1, padx=(0, 16), pady=4, sticky="w")
        r += 1

        ctk.CTkLabel(self, text="Icon:").grid(
            row=r, column=0, padx=(16, 8), pady=4, sticky="e"
        )
        self._icon_choices = {f"{resolve_icon(n)} {n}": n for n in ICON_NAMES}
        default_label = next(k for k, v in self._icon_choices.items() if v == DEFAULT_CUSTOM_ICON)
        self._icon_var = ctk.StringVar(value=default_label)
        ctk.CTkComboBox(
            self, values=list(self._icon_choices), variable=self._icon_var,
            width=220, state="readonly",
        ).grid(row=r, column=1, padx=(0, 16), pady=4, sticky="ew")
        r += 1

        ctk.CTkLabel(self, text="Color:").grid(
            row=r, column=0, padx=(16, 8), pady=4, sticky="e"
        )
        color_row = ctk.CTkFrame(self, fg_color="transparent")
        color_row.grid(row=r, column=1, padx=(0, 16), pady=4, sticky="ew")
        self._color_var = ctk.StringVar(value=DEFAULT_CUSTOM_COLOR)
        ctk.CTkEntry(color_row, textvariable=self._color_var, width=100).pack(side="left")
        self._swatch = ctk.CTkLabel(
            color_row, text="", width=32, height=24, corner_radius=4,
            fg_color=DEFAULT_CUSTOM_COLOR,
        )
        self._swatch.pack(side="left", padx=(8, 0))
        ctk.CTkButton(
            color_row, text="Pick", width=60,
            fg_color="transparent", border_width=1,
            text_color=("gray10", "gray90"),
            command=self._pick_color,
        ).pack(side="left", padx=(8, 0))
        r += 1

        self._error_var = ctk.StringVar()
        ctk.CTkLabel(
            self, textvariable=self._error_var,
            text_color="#F44336", wraplength=300, anchor="w",
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
        ctk.CTkButton(btn_frame, text="Create", width=90, command=self._on_save).pack(side="right")

        self.transient(master)
        self.grab_set()

    def _pick_color(self):
        result = colorchooser.askcolor(
            color=self._color_var.get(), parent=self, title="Pick Category Color"
        )
        if result and result[1]:
            self._color_var.set(result[1])
            self._swatch.configure(fg_color=result[1])

    def _on_save(self):
        color = self._color_var.get().strip()
        if color and not color.startswith("#"):
            color = "#" + color
        try:
            self._svc.create_custom(
                self._name_var.get(),
                self._type_var.get(),
                self._icon_choices.get(self._icon_var.get()),
                color,
            )
        except LedgerError as e:
            self._error_var.set(str(e))
            return
        self.saved = True
        self.destroy()
