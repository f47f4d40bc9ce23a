import logging
import threading
import customtkinter as ctk
from models.account import Account
from services.account_service import AccountService
from services.cashflow_service import CashflowService
from services.errors import CollaboratorError
from services.movement_service import MovementService
from services.portfolio_service import PortfolioService
from ui.components.account_form import AccountForm
from ui.components.alert_banner import AlertBanner
from ui.components.confirm_dialog import ConfirmDialog
from ui.components.movement_form import MovementForm
from ui.tabs.cashflow_tab import CashflowTab
from ui.tabs.portfolio_tab import PortfolioTab
from utils.constants import APP_NAME, APP_WIDTH, APP_HEIGHT

logger = logging.getLogger(__name__)


class AppWindow(ctk.CTk):
    def __init__(
        self,
        account_service: AccountService,
        movement_service: MovementService,
        cashflow_service: CashflowService,
        portfolio_service: PortfolioService,
        user_id: str,
        initial_account_id: int | None = None,
        date_format: str = "MMM D, YYYY",
        **kwargs,
    ):
        super().__init__(**kwargs)
        self._acct_svc = account_service
        self._movement_svc = movement_service
        self._cashflow_svc = cashflow_service
        self._portfolio_svc = portfolio_service
        self._user_id = user_id
        self._date_format = date_format
        self._selected_id = initial_account_id
        self._accounts: list[Account] = []
        self._label_to_id: dict[str, int] = {}
        self._load_gen = 0

        self.title(APP_NAME)
        self.minsize(APP_WIDTH, APP_HEIGHT)
        self.geometry(f"{APP_WIDTH}x{APP_HEIGHT}")

        self.grid_columnconfigure(0, weight=1)
        self.grid_rowconfigure(2, weight=1)

        self._build_account_bar()
        self._build_banner_area()
        self._build_tabs()
        self.after(100, self.reload)

    @property
    def current_account(self) -> Account | None:
        if not self._accounts:
            return None
        match = next((a for a in self._accounts if a.id == self._selected_id), None)
        return match or self._accounts[0]

    # ── Account bar ─────────────────────────────────────────────────────────
    def _build_account_bar(self):
        bar = ctk.CTkFrame(self, fg_color=("gray85", "gray15"), corner_radius=0, height=44)
        bar.grid(row=0, column=0, sticky="ew")
        bar.grid_propagate(False)

        ctk.CTkLabel(bar, text="Account:", anchor="e").pack(side="left", padx=(12, 4), pady=8)
        self._acct_combo_var = ctk.StringVar(value="")
        self._acct_combo = ctk.CTkComboBox(
            bar, values=[], variable=self._acct_combo_var,
            width=200, state="readonly",
            command=self.on_account_changed,
        )
        self._acct_combo.pack(side="left", padx=4)

        ctk.CTkButton(
            bar, text="+ New Account", width=110, command=self._open_new_account,
        ).pack(side="left", padx=4)
        ctk.CTkButton(
            bar, text="+ Movement", width=100, command=self._open_new_movement,
        ).pack(side="left", padx=4)
        ctk.CTkButton(
            bar, text="Delete Account", width=110,
            fg_color="transparent", border_width=1,
            text_color=("gray10", "gray90"),
            command=self._delete_current_account,
        ).pack(side="left", padx=4)

        self._acct_type_label = ctk.CTkLabel(bar, text="", text_color="gray60", width=90)
        self._acct_type_label.pack(side="left", padx=(4, 8))

    def _build_banner_area(self):
        self._banner_frame = ctk.CTkFrame(self, fg_color="transparent", height=0)
        self._banner_frame.grid(row=1, column=0, sticky="ew", padx=8)

    def _build_tabs(self):
        self._tabview = ctk.CTkTabview(self)
        self._tabview.grid(row=2, column=0, sticky="nsew", padx=8, pady=(0, 8))
        for tab_name in ("Portfolio", "Cash Flow"):
            self._tabview.add(tab_name)
            self._tabview.tab(tab_name).grid_columnconfigure(0, weight=1)
            self._tabview.tab(tab_name).grid_rowconfigure(0, weight=1)

        self._portfolio_tab = PortfolioTab(
            self._tabview.tab("Portfolio"),
            portfolio_service=self._portfolio_svc,
            get_accounts=lambda: self._accounts,
        )
        self._portfolio_tab.grid(row=0, column=0, sticky="nsew")

        self._cashflow_tab = CashflowTab(
            self._tabview.tab("Cash Flow"),
            cashflow_service=self._cashflow_svc,
            movement_service=self._movement_svc,
            get_account=lambda: self.current_account,
            user_id=self._user_id,
            notify_refresh=self.reload,
            on_error=self.show_error,
            date_format=self._date_format,
        )
        self._cashflow_tab.grid(row=0, column=0, sticky="nsew")

    # ── Loading ──────────────────────────────────────────────────────────────
    def reload(self):
        """Fetch accounts off the UI thread, then recompute every view."""
        self._load_gen += 1
        gen = self._load_gen

        def fetch():
            try:
                accounts, error = self._acct_svc.load_accounts(self._user_id), None
            except CollaboratorError as e:
                accounts, error = [], str(e)
            self.after(0, lambda: self._on_accounts_loaded(gen, accounts, error))

        threading.Thread(target=fetch, daemon=True).start()

    def _on_accounts_loaded(self, gen: int, accounts: list[Account], error: str | None):
        if gen != self._load_gen:
            return  # superseded by a newer load
        if not self.winfo_exists():
            return
        if error:
            self.show_error(error)
        self._accounts = accounts
        self._refresh_account_bar()
        self._portfolio_tab.refresh()
        self._cashflow_tab.refresh()

    # ── Account management ───────────────────────────────────────────────────
    def on_account_changed(self, value=None):
        self._selected_id = self._label_to_id.get(self._acct_combo_var.get())
        self._update_acct_type_label()
        self._cashflow_tab.refresh()

    def _refresh_account_bar(self):
        self._label_to_id = {a.picker_label: a.id for a in self._accounts}
        self._acct_combo.configure(values=list(self._label_to_id))
        current = self.current_account
        self._selected_id = current.id if current else None
        label = current.picker_label if current else ""
        self._acct_combo_var.set(label)
        self._acct_combo.set(label)
        self._update_acct_type_label()

    def _update_acct_type_label(self):
        current = self.current_account
        self._acct_type_label.configure(text=f"[{current.type_label}]" if current else "")

    def _open_new_account(self):
        form = AccountForm(self, self._acct_svc, self._user_id)
        self.wait_window(form)
        if form.created:
            self._selected_id = form.created.id
            self.reload()

    def _open_new_movement(self):
        account = self.current_account
        if account is None:
            self.show_error("Create an account before adding movements.", severity="info")
            return
        form = MovementForm(self, self._movement_svc, account, self._user_id)
        self.wait_window(form)
        if form.saved:
            self.reload()

    def _delete_current_account(self):
        account = self.current_account
        if account is None:
            return
        dlg = ConfirmDialog(
            self, "Delete Account",
            f'Delete "{account.name}"? This will remove all related movements.',
        )
        if not dlg.result:
            return
        try:
            self._acct_svc.delete(self._user_id, account.id)
        except CollaboratorError as e:
            self.show_error(str(e))
            return
        self._selected_id = None
        self.reload()

    # ── Banners ──────────────────────────────────────────────────────────────
    def show_error(self, message: str, severity: str = "error"):
        logger.debug("Showing %s banner: %s", severity, message)
        for w in self._banner_frame.winfo_children():
            w.destroy()
        AlertBanner(self._banner_frame, message=message, severity=severity).pack(fill="x", pady=2)
