"""Tests for ManifestModelResolver."""

import sqlite3
from pathlib import Path

import pytest

from crudgen.config import ConfigError
from crudgen.db.schema import SchemaInspector
from crudgen.exceptions import ModelNotFoundError
from crudgen.models.manifest_resolver import ManifestModelResolver

MANIFEST = """
models:
  User:
    module: app.accounts.models
    table: accounts
    fillable: [name, email, password]
    unique: [email]
    rules:
      email: required|email|max:255
      code:
        - required
        - "regex:/^(a|b)$/"
  Post:
    fillable: [title]
    soft_delete: true
"""


@pytest.fixture
def manifest(project_root: Path) -> Path:
    path = project_root / "models.yaml"
    path.write_text(MANIFEST)
    return path


@pytest.fixture
def resolver(manifest) -> ManifestModelResolver:
    return ManifestModelResolver(manifest, "app.models")


class TestManifestModelResolver:
    def test_full_entry(self, resolver):
        descriptor = resolver.resolve("User")

        assert descriptor.module == "app.accounts.models"
        assert descriptor.table_name == "accounts"
        assert descriptor.fillable == ("name", "email", "password")
        assert descriptor.unique == ("email",)
        assert descriptor.rules == {
            "email": "required|email|max:255",
            "code": ["required", "regex:/^(a|b)$/"],
        }
        assert descriptor.soft_delete is False

    def test_defaults(self, resolver):
        descriptor = resolver.resolve("Post")

        assert descriptor.module == "app.models"
        assert descriptor.table_name == "posts"
        assert descriptor.unique == ()
        assert descriptor.rules == {}
        assert descriptor.soft_delete is True

    def test_unknown_model(self, resolver, manifest):
        with pytest.raises(ModelNotFoundError) as exc_info:
            resolver.resolve("Invoice")

        assert str(manifest) in exc_info.value.message

    def test_missing_manifest(self, project_root):
        resolver = ManifestModelResolver(project_root / "absent.yaml", "app.models")

        with pytest.raises(ModelNotFoundError):
            resolver.resolve("User")

    def test_empty_manifest(self, project_root):
        path = project_root / "models.yaml"
        path.write_text("")

        with pytest.raises(ModelNotFoundError):
            ManifestModelResolver(path, "app.models").resolve("User")

    def test_invalid_yaml(self, project_root):
        path = project_root / "models.yaml"
        path.write_text("models: [unclosed\n")

        with pytest.raises(ConfigError, match="Invalid YAML"):
            ManifestModelResolver(path, "app.models").resolve("User")

    def test_invalid_entry(self, project_root):
        path = project_root / "models.yaml"
        path.write_text("models:\n  User:\n    fillable: 5\n")

        with pytest.raises(ConfigError, match="Invalid model manifest"):
            ManifestModelResolver(path, "app.models").resolve("User")

    def test_manifest_is_loaded_once(self, resolver, manifest):
        resolver.resolve("User")
        manifest.write_text("models: {}\n")

        assert resolver.resolve("Post").fillable == ("title",)

    def test_schema_fallback(self, project_root, tmp_path):
        db_path = tmp_path / "app.db"
        conn = sqlite3.connect(db_path)
        conn.execute("CREATE TABLE posts (id INTEGER PRIMARY KEY, slug TEXT UNIQUE)")
        conn.commit()
        conn.close()
        path = project_root / "models.yaml"
        path.write_text("models:\n  Post:\n    fillable: [slug]\n")

        resolver = ManifestModelResolver(path, "app.models", schema=SchemaInspector(db_path))

        assert resolver.resolve("Post").unique == ("slug",)
