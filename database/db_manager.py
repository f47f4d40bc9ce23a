import logging
import os
import sqlite3
from utils.constants import DB_FILE

logger = logging.getLogger(__name__)


class DatabaseManager:
    def __init__(self, db_path: str | None = None):
        self.db_path = db_path or DB_FILE
        self._conn: sqlite3.Connection | None = None

    def get_connection(self) -> sqlite3.Connection:
        if self._conn is None:
            self._conn = sqlite3.connect(self.db_path, check_same_thread=False)
            self._conn.row_factory = sqlite3.Row
            self._conn.execute("PRAGMA foreign_keys = ON")
            self._conn.execute("PRAGMA journal_mode = WAL")
        return self._conn

    def initialize(self):
        """Create schema and seed defaults."""
        conn = self.get_connection()
        self._create_schema(conn)
        self._seed_defaults(conn)
        conn.commit()

    def _create_schema(self, conn: sqlite3.Connection):
        # movements.account_id has no ON DELETE CASCADE: callers delete an
        # account's movements before the account itself.
        conn.executescript("""
            CREATE TABLE IF NOT EXISTS accounts (
                id               INTEGER PRIMARY KEY AUTOINCREMENT,
                user_id          TEXT    NOT NULL,
                name             TEXT    NOT NULL,
                type             TEXT    NOT NULL DEFAULT 'cash'
                                 CHECK(type IN ('cash','bank','savings','assets')),
                starting_balance REAL    NOT NULL DEFAULT 0.0,
                created_at       TEXT    NOT NULL DEFAULT (strftime('%Y-%m-%d %H:%M:%f', 'now'))
            );

            CREATE TABLE IF NOT EXISTS movements (
                id          INTEGER PRIMARY KEY AUTOINCREMENT,
                account_id  INTEGER NOT NULL REFERENCES accounts(id),
                user_id     TEXT    NOT NULL,
                amount      REAL    NOT NULL,
                cadence     TEXT    NOT NULL DEFAULT 'none'
                            CHECK(cadence IN ('none','daily','weekly','biweekly','monthly','yearly')),
                occurs_at   TEXT,
                created_at  TEXT    NOT NULL DEFAULT (strftime('%Y-%m-%d %H:%M:%f', 'now'))
            );

            CREATE INDEX IF NOT EXISTS idx_accounts_user_id      ON accounts(user_id);
            CREATE INDEX IF NOT EXISTS idx_movements_account_id  ON movements(account_id);

            CREATE TABLE IF NOT EXISTS app_settings (
                key   TEXT PRIMARY KEY,
                value TEXT NOT NULL
            );
        """)

    def _seed_defaults(self, conn: sqlite3.Connection):
        defaults = [
            ("appearance_mode", "system"),
            ("date_format", "MMM D, YYYY"),
            ("last_account_id", ""),
        ]
        for key, value in defaults:
            conn.execute(
                "INSERT OR IGNORE INTO app_settings(key, value) VALUES (?, ?)",
                (key, value),
            )

    def execute_write(self, sql: str, params=()) -> sqlite3.Cursor:
        """Run one write statement in its own transaction; rolls back and re-raises on failure."""
        conn = self.get_connection()
        try:
            cursor = conn.execute(sql, params)
            conn.commit()
        except sqlite3.Error:
            conn.rollback()
            raise
        return cursor

    def get_setting(self, key: str, default: str = "") -> str:
        conn = self.get_connection()
        row = conn.execute(
            "SELECT value FROM app_settings WHERE key = ?", (key,)
        ).fetchone()
        return row["value"] if row else default

    def set_setting(self, key: str, value: str):
        conn = self.get_connection()
        conn.execute(
            "INSERT OR REPLACE INTO app_settings(key, value) VALUES (?, ?)",
            (key, value),
        )
        conn.commit()

    @staticmethod
    def open(db_folder: str | None = None) -> "DatabaseManager":
        """Startup factory: opens (creating if needed) the store in db_folder or the CWD."""
        if db_folder:
            os.makedirs(db_folder, exist_ok=True)
            db_path = os.path.join(db_folder, DB_FILE)
        else:
            db_path = DB_FILE
        logger.info("Opening store at %s", db_path)
        db = DatabaseManager(db_path)
        db.initialize()
        return db

    def close(self):
        if self._conn:
            self._conn.close()
            self._conn = None
