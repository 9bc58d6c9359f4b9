import customtkinter as ctk


class AlertBanner(ctk.CTkFrame):
    """Colored one-line banner; budget alerts on the dashboard, notices in the window."""

    def __init__(self, master, message: str, color: str = "#FF9800",
                 dismissible: bool = True, **kwargs):
        super().__init__(master, fg_color=color, corner_radius=6, **kwargs)
        self.grid_columnconfigure(0, weight=1)

        ctk.CTkLabel(
            self, text=f"⚠  {message}", text_color="white",
            anchor="w", padx=10, pady=6
        ).grid(row=0, column=0, sticky="ew")

        if dismissible:
            ctk.CTkButton(
                self, text="✕", width=28, height=24,
                fg_color="transparent", hover_color=color,
                text_color="white",
                command=self.destroy,
            ).grid(row=0, column=1, padx=(0, 4))
