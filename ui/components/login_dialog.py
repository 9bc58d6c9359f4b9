import customtkinter as ctk
from services.session_service import SessionService
from utils.constants import APP_NAME


class LoginDialog(ctk.CTk):
    """Passcode prompt shown before the main window while the local flag is unset."""

    def __init__(self, session_service: SessionService, **kwargs):
        super().__init__(**kwargs)
        self._svc = session_service
        self.unlocked = False

        self.title(APP_NAME)
        self.resizable(False, False)
        self.grid_columnconfigure(0, weight=1)

        ctk.CTkLabel(
            self, text=APP_NAME, font=ctk.CTkFont(size=18, weight="bold"),
        ).grid(row=0, column=0, padx=24, pady=(20, 4))
        ctk.CTkLabel(self, text="Enter passcode to continue", text_color="gray60").grid(
            row=1, column=0, padx=24
        )

        self._code_var = ctk.StringVar()
        entry = ctk.CTkEntry(self, textvariable=self._code_var, show="•", width=220)
        entry.grid(row=2, column=0, padx=24, pady=12)
        entry.bind("<Return>", lambda _: self._on_unlock())
        entry.focus_set()

        self._error_var = ctk.StringVar()
        ctk.CTkLabel(self, textvariable=self._error_var, text_color="#F44336").grid(
            row=3, column=0, padx=24
        )
        ctk.CTkButton(self, text="Unlock", width=220, command=self._on_unlock).grid(
            row=4, column=0, padx=24, pady=(4, 20)
        )

    def _on_unlock(self):
        if self._svc.login(self._code_var.get()):
            self.unlocked = True
            self.destroy()
        else:
            self._error_var.set("Incorrect passcode.")
