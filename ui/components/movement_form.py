import customtkinter as ctk
from models.account import Account
from models.cadence import CADENCE_LABELS, STORED_CADENCES
from services.errors import CollaboratorError, ValidationError
from services.movement_service import MovementService
from ui.components.confirm_dialog import center_on_master


class MovementForm(ctk.CTkToplevel):
    """Record a one-off or recurring movement on an account. Sets self.saved = True on success."""

    _CADENCE_OPTIONS = [CADENCE_LABELS[c] for c in STORED_CADENCES]
    _LABEL_TO_CADENCE = {CADENCE_LABELS[c]: c for c in STORED_CADENCES}

    def __init__(self, master, movement_service: MovementService, account: Account, user_id: str, **kwargs):
        super().__init__(master, **kwargs)
        self._svc = movement_service
        self._account = account
        self._user_id = user_id
        self.saved = False

        self.title(f"New movement · {account.name}")
        self.resizable(False, False)
        self.grid_columnconfigure(1, weight=1)

        ctk.CTkLabel(self, text="Amount (€):").grid(
            row=0, column=0, padx=(16, 8), pady=(16, 4), sticky="e"
        )
        self._amount_var = ctk.StringVar()
        self._amount_entry = ctk.CTkEntry(self, textvariable=self._amount_var, width=200)
        self._amount_entry.grid(row=0, column=1, padx=(0, 16), pady=(16, 4), sticky="ew")
        ctk.CTkLabel(
            self, text="Use a negative amount for outflows",
            text_color="gray60", font=ctk.CTkFont(size=11),
        ).grid(row=1, column=1, padx=(0, 16), pady=(0, 4), sticky="w")

        ctk.CTkLabel(self, text="Repeats:").grid(
            row=2, column=0, padx=(16, 8), pady=4, sticky="e"
        )
        self._cadence_var = ctk.StringVar(value=self._CADENCE_OPTIONS[0])
        ctk.CTkComboBox(
            self, values=self._CADENCE_OPTIONS, variable=self._cadence_var,
            width=200, state="readonly",
        ).grid(row=2, column=1, padx=(0, 16), pady=4, sticky="ew")

        self._error_var = ctk.StringVar()
        ctk.CTkLabel(
            self, textvariable=self._error_var, text_color="#F44336",
            wraplength=300, anchor="w", justify="left",
        ).grid(row=3, column=0, columnspan=2, padx=16, pady=(0, 4), sticky="ew")

        btn_frame = ctk.CTkFrame(self, fg_color="transparent")
        btn_frame.grid(row=4, column=0, columnspan=2, padx=16, pady=(4, 16), sticky="ew")
        ctk.CTkButton(
            btn_frame, text="Cancel", width=90,
            fg_color="transparent", border_width=1,
            text_color=("gray10", "gray90"),
            command=self.destroy,
        ).pack(side="left")
        ctk.CTkButton(btn_frame, text="Save", width=90, command=self._on_save).pack(side="right")

        self.transient(master)
        self.grab_set()
        center_on_master(self)
        self._amount_entry.focus_set()

    def _on_save(self):
        cadence = self._LABEL_TO_CADENCE.get(self._cadence_var.get(), STORED_CADENCES[0])
        try:
            self._svc.create(self._user_id, self._account.id, self._amount_var.get(), cadence)
        except (ValidationError, CollaboratorError) as e:
            self._error_var.set(str(e))
            return
        self.saved = True
        self.destroy()
