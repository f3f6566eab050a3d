# src/crudgen/config.py
"""Configuration system for crudgen.

Settings come from crudgen.ini in the project root, with environment
variables for the project root itself and the SQLite database. Derived
paths (tests directory, manifest, database) are resolved against the
project root.
"""

from configparser import ConfigParser
from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path
from typing import Any, Optional
import os


CONFIG_FILE_NAME = "crudgen.ini"
RESOLVER_CHOICES = ("source", "import", "manifest")


class ConfigError(Exception):
    """Raised when configuration validation fails."""

    pass


# Schema: section -> key -> (default, allowed values or None, required, description)
CONFIG_SCHEMA: dict[str, dict[str, tuple[str, Optional[tuple[str, ...]], bool, str]]] = {
    "models": {
        "module": ("app.models", None, True, "Dotted path of the models module"),
        "resolver": ("source", RESOLVER_CHOICES, True, "How model metadata is read"),
        "manifest": ("models.yaml", None, True, "Model manifest, relative to the root"),
        "soft_delete_mixins": (
            "SoftDeleteMixin,SoftDeletes",
            None,
            False,
            "Comma-separated base classes that make a model soft-deletable",
        ),
    },
    "database": {
        "sqlite_path": ("", None, False, "SQLite database used to discover unique indexes"),
    },
    "output": {
        "tests_dir": ("tests/feature", None, True, "Directory for generated tests"),
        "support_module": ("tests.support", None, True, "Module providing test helpers"),
        "session_fixture": ("db_session", None, True, "Database session fixture name"),
    },
}


@dataclass(frozen=True)
class ModelsConfig:
    """Where and how model metadata is found."""

    module: str
    resolver: str
    manifest: str
    soft_delete_mixins: str

    @property
    def soft_delete_mixin_names(self) -> tuple[str, ...]:
        """Mixin class names as a tuple, ignoring blanks."""
        return tuple(name.strip() for name in self.soft_delete_mixins.split(",") if name.strip())


@dataclass(frozen=True)
class DatabaseConfig:
    """Database used for the unique-index fallback."""

    sqlite_path: str


@dataclass(frozen=True)
class OutputConfig:
    """Generated test file configuration."""

    tests_dir: str
    support_module: str
    session_fixture: str


def _load_section(parser: ConfigParser, section: str) -> dict[str, str]:
    """Read one section, falling back to schema defaults.

    Args:
        parser: ConfigParser with the config file loaded (possibly empty)
        section: Section name in CONFIG_SCHEMA

    Returns:
        Dictionary of stripped values for every key of the section

    Raises:
        ConfigError: If a required value is empty or not an allowed value
    """
    result = {}

    for key, (default, choices, required, _) in CONFIG_SCHEMA[section].items():
        value = parser.get(section, key, fallback=default).strip()

        if required and not value:
            raise ConfigError(f"Value for [{section}].{key} must not be empty")
        if choices is not None and value not in choices:
            raise ConfigError(
                f"Value for [{section}].{key} is {value!r}, expected one of {', '.join(choices)}"
            )

        result[key] = value

    return result


def _load_config(config_path: Optional[Path] = None) -> "Config":
    """Load configuration from an INI file (internal use only).

    Returns a Config with a placeholder project_root that load_settings()
    replaces with the actual project root.

    Args:
        config_path: Path to config file. If None, uses defaults from schema.

    Raises:
        ConfigError: If validation fails
    """
    parser = ConfigParser()
    if config_path and config_path.exists():
        parser.read(config_path, encoding="utf-8")

    return Config(
        project_root=Path("."),
        models=ModelsConfig(**_load_section(parser, "models")),
        database=DatabaseConfig(**_load_section(parser, "database")),
        output=OutputConfig(**_load_section(parser, "output")),
    )


def _defaults(section: str) -> dict[str, Any]:
    return {key: entry[0] for key, entry in CONFIG_SCHEMA[section].items()}


@dataclass(frozen=True)
class Config:
    """Complete crudgen configuration."""

    project_root: Path
    models: ModelsConfig = None  # type: ignore[assignment]
    database: DatabaseConfig = None  # type: ignore[assignment]
    output: OutputConfig = None  # type: ignore[assignment]

    def __post_init__(self):
        # Frozen: sections missing at construction get their defaults here
        if self.models is None:
            object.__setattr__(self, "models", ModelsConfig(**_defaults("models")))
        if self.database is None:
            object.__setattr__(self, "database", DatabaseConfig(**_defaults("database")))
        if self.output is None:
            object.__setattr__(self, "output", OutputConfig(**_defaults("output")))

    @property
    def tests_path(self) -> Path:
        """Directory generated test files are written to."""
        return self.project_root / self.output.tests_dir

    @property
    def manifest_path(self) -> Path:
        """Path to the model manifest used by the manifest resolver."""
        return self.project_root / self.models.manifest

    @property
    def sqlite_path(self) -> Optional[Path]:
        """SQLite database for the unique-index fallback, if configured."""
        if not self.database.sqlite_path:
            return None
        path = Path(self.database.sqlite_path)
        return path if path.is_absolute() else self.project_root / path


@lru_cache(maxsize=1)
def load_settings() -> Config:
    """Load settings from environment variables and the config file.

    Settings are cached for the lifetime of the process.
    Use load_settings.cache_clear() to reload settings.

    Environment:
        CRUDGEN_PROJECT_ROOT: Host application root (default: current directory)
        CRUDGEN_SQLITE_PATH: Overrides [database].sqlite_path

    Raises:
        ConfigError: If the config file holds invalid values.
    """
    root_str = os.getenv("CRUDGEN_PROJECT_ROOT")
    project_root = Path(root_str) if root_str else Path.cwd()

    config_file = project_root / CONFIG_FILE_NAME
    base_config = _load_config(config_file if config_file.is_file() else None)

    database = base_config.database
    sqlite_env = os.getenv("CRUDGEN_SQLITE_PATH")
    if sqlite_env is not None:
        database = DatabaseConfig(sqlite_path=sqlite_env)

    return Config(
        project_root=project_root,
        models=base_config.models,
        database=database,
        output=base_config.output,
    )
