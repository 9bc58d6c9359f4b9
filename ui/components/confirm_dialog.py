import customtkinter as ctk


class ConfirmDialog(ctk.CTkToplevel):
    """Modal yes/no prompt. Use ConfirmDialog.ask(); the answer is also on .result."""

    def __init__(self, master, title: str, message: str,
                 confirm_text: str = "Delete", **kwargs):
        super().__init__(master, **kwargs)
        self.title(title)
        self.result = False
        self.resizable(False, False)
        self.grid_columnconfigure(0, weight=1)

        ctk.CTkLabel(
            self, text=message, wraplength=340, justify="left", padx=20, pady=16
        ).grid(row=0, column=0, sticky="ew")

        btn_frame = ctk.CTkFrame(self, fg_color="transparent")
        btn_frame.grid(row=1, column=0, pady=(0, 16), padx=20, sticky="e")
        ctk.CTkButton(
            btn_frame, text="Cancel", width=90,
            fg_color="transparent", border_width=1,
            text_color=("gray10", "gray90"),
            command=self.destroy,
        ).pack(side="left", padx=(0, 8))
        ctk.CTkButton(
            btn_frame, text=confirm_text, width=90,
            fg_color="#F44336", hover_color="#D32F2F",
            command=self._on_confirm,
        ).pack(side="left")

        self.transient(master)
        self.grab_set()

    def _on_confirm(self):
        self.result = True
        self.destroy()

    @classmethod
    def ask(cls, master, title: str, message: str, confirm_text: str = "Delete") -> bool:
        dialog = cls(master, title, message, confirm_text=confirm_text)
        master.wait_window(dialog)
        return dialog.result
