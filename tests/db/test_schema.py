"""Tests for SchemaInspector and the read-only Database wrapper."""

import sqlite3
from pathlib import Path

import pytest

from crudgen.db.connection import Database
from crudgen.db.schema import SchemaInspector
from crudgen.exceptions import MetadataIntrospectionError


@pytest.fixture
def db_path(tmp_path: Path) -> Path:
    path = tmp_path / "app.db"
    conn = sqlite3.connect(path)
    conn.executescript(
        """
        CREATE TABLE accounts (
            code TEXT PRIMARY KEY,
            email TEXT UNIQUE,
            phone TEXT,
            region TEXT,
            UNIQUE (phone, region)
        );
        CREATE UNIQUE INDEX "idx accounts phone" ON accounts (phone);
        CREATE TABLE "order items" (id INTEGER PRIMARY KEY, sku TEXT UNIQUE);
        """
    )
    conn.close()
    return path


class TestSchemaInspector:
    def test_single_column_unique_indexes(self, db_path):
        """Primary keys and composite indexes are excluded."""
        assert SchemaInspector(db_path).unique_columns("accounts") == ["email", "phone"]

    def test_quoted_table_name(self, db_path):
        assert SchemaInspector(db_path).unique_columns("order items") == ["sku"]

    def test_missing_table(self, db_path):
        with pytest.raises(MetadataIntrospectionError, match="Table users not found"):
            SchemaInspector(db_path).unique_columns("users")

    def test_missing_database_is_not_created(self, tmp_path):
        path = tmp_path / "absent.db"

        with pytest.raises(MetadataIntrospectionError, match="does not exist"):
            SchemaInspector(path).unique_columns("users")

        assert not path.exists()

    def test_not_a_database(self, tmp_path):
        path = tmp_path / "notes.db"
        path.write_text("plain text, not sqlite\n" * 100)

        with pytest.raises(MetadataIntrospectionError) as exc_info:
            SchemaInspector(path).unique_columns("users")

        assert exc_info.value.original_error


class TestDatabase:
    def test_is_read_only(self, db_path):
        with Database(db_path) as db:
            with pytest.raises(sqlite3.OperationalError):
                db.execute("CREATE TABLE extra (id INTEGER)")

    def test_rows_by_column_name(self, db_path):
        with Database(db_path) as db:
            cursor = db.execute("SELECT name FROM sqlite_master WHERE name = ?", ("accounts",))
            row = cursor.fetchone()

        assert row["name"] == "accounts"
