from datetime import datetime
from typing import Optional
from database.db_manager import DatabaseManager
from models.cadence import Cadence
from models.movement import Movement, normalize_movements
from utils.date_helpers import format_timestamp


class MovementDAO:
    def __init__(self, db: DatabaseManager):
        self._db = db

    def _select(self) -> str:
        return """
            SELECT id, account_id, amount, cadence,
                   COALESCE(occurs_at, created_at) AS occurs_at,
                   created_at
            FROM movements
        """

    def get_by_accounts(self, account_ids: list[int], user_id: str) -> dict[int, list[Movement]]:
        """Fetch the movements of several accounts in one query.
        Returns {account_id: [movement, ...]} sorted by occurs_at, creation order on ties."""
        if not account_ids:
            return {}
        conn = self._db.get_connection()
        placeholders = ",".join("?" * len(account_ids))
        rows = conn.execute(
            self._select()
            + f" WHERE account_id IN ({placeholders}) AND user_id = ?"
            + " ORDER BY created_at ASC, id ASC",
            [*account_ids, user_id],
        ).fetchall()
        grouped: dict[int, list] = {account_id: [] for account_id in account_ids}
        for row in rows:
            grouped[row["account_id"]].append(row)
        return {account_id: normalize_movements(rs) for account_id, rs in grouped.items()}

    def get_by_id(self, movement_id: int, user_id: str) -> Optional[Movement]:
        conn = self._db.get_connection()
        row = conn.execute(
            self._select() + " WHERE id = ? AND user_id = ?", (movement_id, user_id)
        ).fetchone()
        return Movement.from_record(row) if row else None

    def create(
        self,
        account_id: int,
        user_id: str,
        amount: float,
        cadence: Cadence = Cadence.NONE,
        occurs_at: datetime | None = None,
    ) -> Movement:
        cursor = self._db.execute_write(
            """INSERT INTO movements(account_id, user_id, amount, cadence, occurs_at)
               VALUES (?, ?, ?, ?, ?)""",
            (
                account_id, user_id, amount, Cadence.parse(cadence).value,
                format_timestamp(occurs_at) if occurs_at else None,
            ),
        )
        return self.get_by_id(cursor.lastrowid, user_id)

    def delete(self, movement_id: int, user_id: str):
        self._db.execute_write(
            "DELETE FROM movements WHERE id = ? AND user_id = ?", (movement_id, user_id)
        )

    def delete_by_account(self, account_id: int, user_id: str):
        self._db.execute_write(
            "DELETE FROM movements WHERE account_id = ? AND user_id = ?", (account_id, user_id)
        )
