"""Tests for configuration loading."""

from pathlib import Path

import pytest

from crudgen.config import (
    CONFIG_SCHEMA,
    Config,
    ConfigError,
    _load_config,
    load_settings,
)


pytestmark = pytest.mark.usefixtures("clear_settings_cache")


@pytest.fixture
def env_root(project_root: Path, monkeypatch) -> Path:
    monkeypatch.setenv("CRUDGEN_PROJECT_ROOT", str(project_root))
    monkeypatch.delenv("CRUDGEN_SQLITE_PATH", raising=False)
    return project_root


class TestLoadConfig:
    """Tests for _load_config."""

    def test_defaults_without_file(self):
        config = _load_config(None)

        assert config.models.module == "app.models"
        assert config.models.resolver == "source"
        assert config.models.manifest == "models.yaml"
        assert config.models.soft_delete_mixin_names == ("SoftDeleteMixin", "SoftDeletes")
        assert config.database.sqlite_path == ""
        assert config.output.tests_dir == "tests/feature"
        assert config.output.support_module == "tests.support"
        assert config.output.session_fixture == "db_session"

    def test_defaults_match_schema(self):
        config = _load_config(None)

        for section, keys in CONFIG_SCHEMA.items():
            values = getattr(config, section)
            for key, (default, _, _, _) in keys.items():
                assert getattr(values, key) == default

    def test_overrides_from_file(self, tmp_path):
        path = tmp_path / "crudgen.ini"
        path.write_text(
            "[models]\n"
            "module = shop.models\n"
            "resolver = manifest\n"
            "soft_delete_mixins = Trashable, , Archived\n"
            "\n"
            "[output]\n"
            "tests_dir = tests/generated\n"
        )

        config = _load_config(path)

        assert config.models.module == "shop.models"
        assert config.models.resolver == "manifest"
        assert config.models.soft_delete_mixin_names == ("Trashable", "Archived")
        assert config.output.tests_dir == "tests/generated"
        assert config.output.session_fixture == "db_session"

    def test_invalid_resolver(self, tmp_path):
        path = tmp_path / "crudgen.ini"
        path.write_text("[models]\nresolver = magic\n")

        with pytest.raises(ConfigError, match="resolver"):
            _load_config(path)

    def test_empty_module(self, tmp_path):
        path = tmp_path / "crudgen.ini"
        path.write_text("[models]\nmodule =\n")

        with pytest.raises(ConfigError, match="must not be empty"):
            _load_config(path)


class TestConfigPaths:
    """Tests for derived Config paths."""

    def test_tests_path(self, tmp_path):
        assert Config(project_root=tmp_path).tests_path == tmp_path / "tests" / "feature"

    def test_manifest_path(self, tmp_path):
        assert Config(project_root=tmp_path).manifest_path == tmp_path / "models.yaml"

    def test_sqlite_path_unset(self, tmp_path):
        assert Config(project_root=tmp_path).sqlite_path is None

    def test_sqlite_path_relative(self, tmp_path):
        config = _load_config(None)
        config = Config(
            project_root=tmp_path,
            models=config.models,
            database=type(config.database)(sqlite_path="var/app.db"),
            output=config.output,
        )

        assert config.sqlite_path == tmp_path / "var" / "app.db"


class TestLoadSettings:
    """Tests for load_settings."""

    def test_project_root_from_env(self, env_root):
        assert load_settings().project_root == env_root

    def test_project_root_defaults_to_cwd(self, project_root, monkeypatch):
        monkeypatch.delenv("CRUDGEN_PROJECT_ROOT", raising=False)
        monkeypatch.chdir(project_root)

        assert load_settings().project_root == project_root

    def test_reads_config_file(self, env_root):
        (env_root / "crudgen.ini").write_text("[database]\nsqlite_path = db.sqlite3\n")

        assert load_settings().sqlite_path == env_root / "db.sqlite3"

    def test_sqlite_path_env_overrides_file(self, env_root, tmp_path, monkeypatch):
        (env_root / "crudgen.ini").write_text("[database]\nsqlite_path = db.sqlite3\n")
        monkeypatch.setenv("CRUDGEN_SQLITE_PATH", str(tmp_path / "other.db"))

        assert load_settings().sqlite_path == tmp_path / "other.db"

    def test_settings_are_cached(self, env_root):
        first = load_settings()
        (env_root / "crudgen.ini").write_text("[models]\nmodule = changed\n")

        assert load_settings() is first

        load_settings.cache_clear()
        assert load_settings().models.module == "changed"

    def test_invalid_file_raises(self, env_root):
        (env_root / "crudgen.ini").write_text("[models]\nresolver = magic\n")

        with pytest.raises(ConfigError):
            load_settings()
