import logging
import sqlite3

from database.account_dao import AccountDAO
from database.movement_dao import MovementDAO
from models.account import Account, ACCOUNT_TYPES
from models.cadence import Cadence
from services.errors import (
    CollaboratorError, CompensationError, ValidationError, describe_store_error,
)
from services.saga import Saga, SagaCompensationFailed
from utils.constants import DEFAULT_ACCOUNT_TYPE
from utils.currency import parse_amount

logger = logging.getLogger(__name__)


class AccountService:
    def __init__(self, account_dao: AccountDAO, movement_dao: MovementDAO):
        self._dao = account_dao
        self._movement_dao = movement_dao

    def load_accounts(self, user_id: str) -> list[Account]:
        """All accounts of a user in creation order, each with its movements attached."""
        try:
            accounts = self._dao.get_all(user_id)
            movements = self._movement_dao.get_by_accounts([a.id for a in accounts], user_id)
        except sqlite3.Error as exc:
            raise CollaboratorError(describe_store_error(exc)) from exc
        for account in accounts:
            account.movements = movements.get(account.id, [])
        return accounts

    def create(
        self,
        user_id: str,
        name: str,
        account_type: str = DEFAULT_ACCOUNT_TYPE,
        starting_balance="",
    ) -> Account:
        """
        Create an account and its opening movement.

        The account row is inserted first and the opening movement (cadence
        none, amount = starting balance) second. If the movement insert
        fails, the account is deleted again; if that delete fails too, both
        messages are reported.
        """
        name = (name or "").strip()
        if not name:
            raise ValidationError("Give the account a name before creating it.")
        self._validate_type(account_type)
        if starting_balance in (None, ""):
            balance = 0.0
        else:
            balance = parse_amount(starting_balance)
            if balance is None:
                raise ValidationError("Starting balance must be a valid number.")

        saga = (
            Saga("create account")
            .step(
                "account",
                lambda ctx: self._dao.create(user_id, name, account_type, balance),
                compensate=lambda ctx: self._dao.delete(ctx["account"].id, user_id),
            )
            .step(
                "opening_movement",
                lambda ctx: self._movement_dao.create(
                    ctx["account"].id, user_id, balance, Cadence.NONE
                ),
            )
        )
        try:
            result = saga.run()
        except SagaCompensationFailed as exc:
            cleanup = " ".join(describe_store_error(err) for _, err in exc.failures)
            raise CompensationError(f"{describe_store_error(exc.error)} {cleanup}") from exc
        except sqlite3.Error as exc:
            raise CollaboratorError(describe_store_error(exc)) from exc

        account = result["account"]
        account.movements = [result["opening_movement"]]
        logger.info("Created %s account %s for user %s", account_type, account.id, user_id)
        return account

    def delete(self, user_id: str, account_id: int):
        """Delete an account: its movements first, then the account row."""
        if account_id is None:
            raise ValidationError("Choose an account to delete.")
        try:
            self._movement_dao.delete_by_account(account_id, user_id)
            self._dao.delete(account_id, user_id)
        except sqlite3.Error as exc:
            raise CollaboratorError(describe_store_error(exc)) from exc
        logger.info("Deleted account %s for user %s", account_id, user_id)

    # ── Helpers ──────────────────────────────────────────────────────────────

    @staticmethod
    def _validate_type(account_type: str):
        if account_type not in ACCOUNT_TYPES:
            raise ValidationError(
                f"Invalid account type '{account_type}'. "
                f"Must be one of: {', '.join(ACCOUNT_TYPES)}."
            )
