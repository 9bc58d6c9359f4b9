import os
import sys
import logging
import customtkinter as ctk

# Ensure project root is on sys.path when run directly
sys.path.insert(0, os.path.dirname(os.path.abspath(__file__)))

from database.db_manager import DatabaseManager
from database.transaction_dao import TransactionDAO
from database.category_dao import CategoryDAO
from database.budget_dao import BudgetDAO

from services.transaction_service import TransactionService
from services.budget_service import BudgetService
from services.report_service import ReportService
from services.category_service import CategoryService
from services.session_service import SessionService

from ui.app_window import AppWindow
from ui.components.login_dialog import LoginDialog
from utils import app_config
from utils.log_setup import configure_logging

logger = logging.getLogger(__name__)


def main():
    configure_logging(app_config.get_log_level())

    # ── Database ─────────────────────────────────────────────────────────────
    db = DatabaseManager.open(app_config.get_db_path())

    # ── DAOs ─────────────────────────────────────────────────────────────────
    tx_dao = TransactionDAO(db)
    category_dao = CategoryDAO(db)
    budget_dao = BudgetDAO(db)

    # ── Services ─────────────────────────────────────────────────────────────
    tx_svc = TransactionService(tx_dao, category_dao)
    budget_svc = BudgetService(budget_dao, tx_dao, category_dao)
    report_svc = ReportService(tx_dao)
    category_svc = CategoryService(category_dao, tx_dao)
    session_svc = SessionService()

    # ── Appearance ───────────────────────────────────────────────────────────
    appearance = db.get_setting("appearance_mode", "system")
    date_format = db.get_setting("date_format", "YYYY-MM-DD")
    currency_symbol = db.get_setting("currency_symbol", "₹")
    ctk.set_appearance_mode(appearance)
    ctk.set_default_color_theme("blue")

    try:
        while True:
            # ── Access gate ──────────────────────────────────────────────────
            if not session_svc.is_authenticated():
                login = LoginDialog(session_svc)
                login.mainloop()
                if not login.unlocked:
                    logger.info("Login cancelled, exiting")
                    break

            # ── Launch UI ────────────────────────────────────────────────────
            app = AppWindow(
                tx_service=tx_svc,
                budget_service=budget_svc,
                report_service=report_svc,
                category_service=category_svc,
                session_service=session_svc,
                db=db,
                date_format=date_format,
                currency_symbol=currency_symbol,
            )
            app.protocol("WM_DELETE_WINDOW", app.destroy)
            app.mainloop()
            if not app.logged_out:
                break
    finally:
        db.close()


if __name__ == "__main__":
    main()
