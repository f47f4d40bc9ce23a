import customtkinter as ctk
from models.account import ACCOUNT_TYPE_LABELS
from services.account_service import AccountService
from services.errors import CollaboratorError, ValidationError
from ui.components.confirm_dialog import center_on_master
from utils.constants import DEFAULT_ACCOUNT_TYPE


class AccountForm(ctk.CTkToplevel):
    """Open a new account with an opening balance. Sets self.created on success."""

    # Maps display label → internal key
    _TYPE_OPTIONS = list(ACCOUNT_TYPE_LABELS.values())
    _LABEL_TO_KEY = {v: k for k, v in ACCOUNT_TYPE_LABELS.items()}

    def __init__(self, master, account_service: AccountService, user_id: str, **kwargs):
        super().__init__(master, **kwargs)
        self._svc = account_service
        self._user_id = user_id
        self.created = None

        self.title("Open a new account")
        self.resizable(False, False)
        self.grid_columnconfigure(1, weight=1)

        ctk.CTkLabel(self, text="Name:").grid(
            row=0, column=0, padx=(16, 8), pady=(16, 4), sticky="e"
        )
        self._name_var = ctk.StringVar()
        self._name_entry = ctk.CTkEntry(self, textvariable=self._name_var, width=240)
        self._name_entry.grid(row=0, column=1, padx=(0, 16), pady=(16, 4), sticky="ew")

        ctk.CTkLabel(self, text="Account Type:").grid(
            row=1, column=0, padx=(16, 8), pady=4, sticky="e"
        )
        self._type_var = ctk.StringVar(value=ACCOUNT_TYPE_LABELS[DEFAULT_ACCOUNT_TYPE])
        ctk.CTkComboBox(
            self, values=self._TYPE_OPTIONS, variable=self._type_var,
            width=240, state="readonly",
        ).grid(row=1, column=1, padx=(0, 16), pady=4, sticky="ew")

        ctk.CTkLabel(self, text="Starting Balance (€):").grid(
            row=2, column=0, padx=(16, 8), pady=4, sticky="e"
        )
        self._balance_var = ctk.StringVar()
        ctk.CTkEntry(self, textvariable=self._balance_var, width=240).grid(
            row=2, column=1, padx=(0, 16), pady=4, sticky="ew"
        )

        self._error_var = ctk.StringVar()
        ctk.CTkLabel(
            self, textvariable=self._error_var, text_color="#F44336",
            wraplength=320, anchor="w", justify="left",
        ).grid(row=3, column=0, columnspan=2, padx=16, pady=(0, 4), sticky="ew")

        btn_frame = ctk.CTkFrame(self, fg_color="transparent")
        btn_frame.grid(row=4, column=0, columnspan=2, padx=16, pady=(4, 16), sticky="ew")

        ctk.CTkButton(
            btn_frame, text="Cancel", width=90,
            fg_color="transparent", border_width=1,
            text_color=("gray10", "gray90"),
            command=self.destroy,
        ).pack(side="left")

        self._save_btn = ctk.CTkButton(btn_frame, text="Create", width=90, command=self._on_save)
        self._save_btn.pack(side="right")

        self.transient(master)
        self.grab_set()
        center_on_master(self)
        self._name_entry.focus_set()

    def _on_save(self):
        account_type = self._LABEL_TO_KEY.get(self._type_var.get(), DEFAULT_ACCOUNT_TYPE)
        self._save_btn.configure(state="disabled")
        try:
            self.created = self._svc.create(
                self._user_id, self._name_var.get(), account_type, self._balance_var.get()
            )
        except (ValidationError, CollaboratorError) as e:
            self._error_var.set(str(e))
            self._save_btn.configure(state="normal")
            return
        self.destroy()
