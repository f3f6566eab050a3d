"""Read-only SQLite connection to the host application's database."""

import sqlite3
from pathlib import Path
from typing import Any


class Database:
    """SQLite database wrapper that never writes to the database.

    The connection is opened in read-only URI mode so that inspecting a
    missing database does not create an empty file.
    """

    def __init__(self, db_path: Path):
        """Open a read-only connection."""
        self.db_path = db_path
        uri = f"{db_path.resolve().as_uri()}?mode=ro"
        self._conn = sqlite3.connect(uri, uri=True)
        self._conn.row_factory = sqlite3.Row

    def execute(self, sql: str, params: tuple[Any, ...] = ()) -> sqlite3.Cursor:
        """Execute SQL statement."""
        return self._conn.execute(sql, params)

    def close(self) -> None:
        """Close database connection."""
        self._conn.close()

    def __enter__(self) -> "Database":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()
