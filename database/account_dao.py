from typing import Optional
from database.db_manager import DatabaseManager
from models.account import Account
from utils.constants import DEFAULT_ACCOUNT_TYPE


class AccountDAO:
    def __init__(self, db: DatabaseManager):
        self._db = db

    def _row_to_model(self, row) -> Account:
        return Account.from_record(row)

    def get_all(self, user_id: str) -> list[Account]:
        """Accounts of one user in creation order, without movements."""
        conn = self._db.get_connection()
        rows = conn.execute(
            "SELECT * FROM accounts WHERE user_id = ? ORDER BY created_at ASC, id ASC",
            (user_id,),
        ).fetchall()
        return [self._row_to_model(r) for r in rows]

    def get_by_id(self, account_id: int, user_id: str) -> Optional[Account]:
        conn = self._db.get_connection()
        row = conn.execute(
            "SELECT * FROM accounts WHERE id = ? AND user_id = ?", (account_id, user_id)
        ).fetchone()
        return self._row_to_model(row) if row else None

    def create(
        self,
        user_id: str,
        name: str,
        account_type: str = DEFAULT_ACCOUNT_TYPE,
        starting_balance: float = 0.0,
    ) -> Account:
        cursor = self._db.execute_write(
            "INSERT INTO accounts(user_id, name, type, starting_balance) VALUES (?, ?, ?, ?)",
            (user_id, name, account_type, starting_balance),
        )
        return self.get_by_id(cursor.lastrowid, user_id)

    def delete(self, account_id: int, user_id: str):
        self._db.execute_write(
            "DELETE FROM accounts WHERE id = ? AND user_id = ?", (account_id, user_id)
        )
