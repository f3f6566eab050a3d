"""Unique-index discovery from a live SQLite schema."""

import logging
import sqlite3
from pathlib import Path

from crudgen.db.connection import Database
from crudgen.exceptions import MetadataIntrospectionError

logger = logging.getLogger(__name__)


def _quote_identifier(name: str) -> str:
    return '"' + name.replace('"', '""') + '"'


class SchemaInspector:
    """Reads single-column unique indexes of a table.

    Used as a fallback source of unique fields for models that do not
    declare them explicitly.
    """

    def __init__(self, db_path: Path):
        self.db_path = db_path

    def unique_columns(self, table: str) -> list[str]:
        """Columns covered by a single-column, non-primary unique index.

        Args:
            table: Table name to inspect.

        Returns:
            Sorted column names.

        Raises:
            MetadataIntrospectionError: If the database or table is unavailable.
        """
        if not self.db_path.is_file():
            raise MetadataIntrospectionError(f"Database {self.db_path} does not exist")

        try:
            with Database(self.db_path) as db:
                found = db.execute(
                    "SELECT 1 FROM sqlite_master WHERE type = 'table' AND name = ?",
                    (table,),
                ).fetchone()
                if found is None:
                    raise MetadataIntrospectionError(
                        f"Table {table} not found in {self.db_path}"
                    )

                columns: set[str] = set()
                indexes = db.execute(f"PRAGMA index_list({_quote_identifier(table)})")
                for index in indexes.fetchall():
                    # origin "pk" marks the index backing the primary key
                    if not index["unique"] or index["origin"] == "pk":
                        continue
                    info = db.execute(
                        f"PRAGMA index_info({_quote_identifier(index['name'])})"
                    ).fetchall()
                    if len(info) == 1 and info[0]["name"] is not None:
                        columns.add(info[0]["name"])
        except sqlite3.Error as e:
            raise MetadataIntrospectionError(
                f"Could not read indexes of {table}", original_error=str(e)
            ) from e

        logger.debug(f"Unique columns of {table}: {sorted(columns)}")
        return sorted(columns)
