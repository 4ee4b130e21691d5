"""
Database utilities and connection management
SQLite backing for the durable record store.

Usage:
    db = get_database(config)
    db.initialize_schema()
"""

import sqlite3
from pathlib import Path
from typing import List, Dict, Any, Optional, Tuple
from contextlib import contextmanager


SCHEMA = [
    """
    CREATE TABLE IF NOT EXISTS records (
        kind TEXT NOT NULL,
        id INTEGER NOT NULL,
        payload TEXT NOT NULL,
        recorded_at TEXT,
        PRIMARY KEY (kind, id)
    )
    """,
    "CREATE INDEX IF NOT EXISTS idx_records_recorded_at ON records(kind, recorded_at)",
    """
    CREATE TABLE IF NOT EXISTS id_counters (
        kind TEXT PRIMARY KEY,
        last_id INTEGER NOT NULL DEFAULT 0
    )
    """,
]


class SQLiteDatabase:
    """SQLite database wrapper with per-operation connections"""

    def __init__(self, db_path: Optional[Path] = None, create: bool = False):
        if db_path is None:
            db_path = Path(__file__).parent.parent.parent / "data" / "database" / "planner.db"

        self.db_path = Path(db_path)

        if create:
            self.db_path.parent.mkdir(parents=True, exist_ok=True)
            self.initialize_schema()
        elif not self.db_path.exists():
            raise FileNotFoundError(
                f"Database not found at {self.db_path}. "
                "Run 'python scripts/init_db.py' to create it."
            )

    @contextmanager
    def get_connection(self):
        conn = sqlite3.connect(self.db_path)
        conn.row_factory = sqlite3.Row
        try:
            yield conn
        finally:
            conn.close()

    def initialize_schema(self) -> None:
        """Create the record and counter tables if they are missing"""
        with self.get_connection() as conn:
            for statement in SCHEMA:
                conn.execute(statement)
            conn.commit()

    def execute(self, query: str, params: Tuple = ()) -> List[Dict[str, Any]]:
        with self.get_connection() as conn:
            cursor = conn.cursor()
            cursor.execute(query, params)
            rows = cursor.fetchall()
            return [dict(row) for row in rows]

    def execute_one(self, query: str, params: Tuple = ()) -> Optional[Dict[str, Any]]:
        with self.get_connection() as conn:
            cursor = conn.cursor()
            cursor.execute(query, params)
            row = cursor.fetchone()
            return dict(row) if row else None

    def execute_write(self, query: str, params: Tuple = ()) -> int:
        with self.get_connection() as conn:
            cursor = conn.cursor()
            cursor.execute(query, params)
            conn.commit()
            return cursor.lastrowid if cursor.lastrowid else cursor.rowcount

    @contextmanager
    def transaction(self):
        with self.get_connection() as conn:
            try:
                yield conn
                conn.commit()
            except Exception:
                conn.rollback()
                raise


# Type alias for backwards compatibility
Database = SQLiteDatabase


def get_database(config=None, create: bool = True) -> SQLiteDatabase:
    """
    Factory function for the configured SQLite database.

    Args:
        config: Config instance (uses the default location when omitted)
        create: Create the file and schema if missing
    """
    db_path = config.get_database_path() if config is not None else None
    return SQLiteDatabase(db_path, create=create)
