import logging
import os
import sys
import customtkinter as ctk

# Ensure project root is on sys.path when run directly
sys.path.insert(0, os.path.dirname(os.path.abspath(__file__)))

from database.db_manager import DatabaseManager
from database.account_dao import AccountDAO
from database.movement_dao import MovementDAO

from services.account_service import AccountService
from services.movement_service import MovementService
from services.cashflow_service import CashflowService
from services.portfolio_service import PortfolioService

from ui.app_window import AppWindow
from utils.app_config import get_db_folder, get_log_level, get_user_id, load_engine_settings


def main():
    # ── Bootstrap: logging and pre-DB config ─────────────────────────────────
    logging.basicConfig(
        level=getattr(logging, get_log_level(), logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    db_folder = get_db_folder()
    user_id = get_user_id()
    settings = load_engine_settings()

    # ── Database ─────────────────────────────────────────────────────────────
    db = DatabaseManager.open(db_folder=db_folder)

    # ── DAOs ─────────────────────────────────────────────────────────────────
    account_dao = AccountDAO(db)
    movement_dao = MovementDAO(db)

    # ── Services ─────────────────────────────────────────────────────────────
    account_svc = AccountService(account_dao, movement_dao)
    movement_svc = MovementService(movement_dao)
    cashflow_svc = CashflowService(settings)
    portfolio_svc = PortfolioService()

    # ── Restore last-selected account ─────────────────────────────────────────
    last_account_id_str = db.get_setting("last_account_id", "")
    initial_account_id = int(last_account_id_str) if last_account_id_str.isdigit() else None

    # ── Appearance ───────────────────────────────────────────────────────────
    ctk.set_appearance_mode(db.get_setting("appearance_mode", "system"))
    ctk.set_default_color_theme("blue")

    # ── Launch UI ────────────────────────────────────────────────────────────
    app = AppWindow(
        account_service=account_svc,
        movement_service=movement_svc,
        cashflow_service=cashflow_svc,
        portfolio_service=portfolio_svc,
        user_id=user_id,
        initial_account_id=initial_account_id,
        date_format=db.get_setting("date_format", "MMM D, YYYY"),
    )

    # Save last-selected account on close
    def on_close():
        current = app.current_account
        db.set_setting("last_account_id", str(current.id) if current else "")
        db.close()
        app.destroy()

    app.protocol("WM_DELETE_WINDOW", on_close)
    app.mainloop()


if __name__ == "__main__":
    main()
