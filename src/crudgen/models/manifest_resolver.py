"""Model resolver backed by a YAML manifest.

The manifest describes models explicitly, for host applications whose
models cannot be read from source or imported:

    models:
      User:
        module: app.models
        table: users
        fillable: [name, email, password]
        unique: [email]
        soft_delete: false
        rules:
          email: required|email|max:255
"""

from __future__ import annotations

from pathlib import Path
from typing import Optional, Union

import yaml
from pydantic import BaseModel, Field, ValidationError

from crudgen.config import ConfigError
from crudgen.db.schema import SchemaInspector
from crudgen.exceptions import ModelNotFoundError
from crudgen.models.base import ModelResolver
from crudgen.models.descriptor import ModelDescriptor
from crudgen.naming import default_table_name


class ManifestModel(BaseModel):
    """One model entry of the manifest."""

    module: Optional[str] = Field(None, description="Module to import the model from")
    table: Optional[str] = Field(None, description="Backing table name")
    fillable: list[str] = Field(default_factory=list, description="Mass-assignable fields")
    unique: Optional[list[str]] = Field(
        None, description="Unique fields; the database schema is used when omitted"
    )
    soft_delete: bool = Field(False, description="Whether deletes are soft deletes")
    rules: dict[str, Union[str, list[str]]] = Field(
        default_factory=dict, description="Validation rules keyed by field"
    )


class Manifest(BaseModel):
    """Top-level manifest document."""

    models: dict[str, ManifestModel] = Field(default_factory=dict)


class ManifestModelResolver(ModelResolver):
    """Resolves models from a YAML manifest file."""

    def __init__(
        self,
        manifest_path: Path,
        default_module: str,
        schema: Optional[SchemaInspector] = None,
    ):
        """Initialize the resolver.

        Args:
            manifest_path: Path to the YAML manifest.
            default_module: Module used for entries that do not name one.
            schema: Optional schema inspector for the unique-field fallback.
        """
        super().__init__(schema)
        self.manifest_path = manifest_path
        self.default_module = default_module
        self._manifest: Optional[Manifest] = None

    @property
    def source_name(self) -> str:
        return str(self.manifest_path)

    def load(self) -> Manifest:
        """Load and validate the manifest.

        Raises:
            ConfigError: If the manifest is not valid YAML or not a valid manifest.
        """
        if self._manifest is not None:
            return self._manifest

        if not self.manifest_path.is_file():
            self._manifest = Manifest()
            return self._manifest

        try:
            with open(self.manifest_path, encoding="utf-8") as f:
                raw = yaml.safe_load(f) or {}
        except yaml.YAMLError as e:
            raise ConfigError(f"Invalid YAML in {self.manifest_path}: {e}") from e

        try:
            self._manifest = Manifest.model_validate(raw)
        except ValidationError as e:
            raise ConfigError(f"Invalid model manifest {self.manifest_path}: {e}") from e
        return self._manifest

    def resolve(self, name: str) -> ModelDescriptor:
        entry = self.load().models.get(name)
        if entry is None:
            raise ModelNotFoundError(name, str(self.manifest_path))

        return ModelDescriptor.create(
            name=name,
            module=entry.module or self.default_module,
            fillable=entry.fillable,
            unique=self._unique_fields(entry.unique, entry.table or default_table_name(name)),
            soft_delete=entry.soft_delete,
            rules=entry.rules,
            table_name=entry.table,
        )
