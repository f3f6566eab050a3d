# src/crudgen/models/registry.py
"""Resolver selection from configuration."""

import logging

from crudgen.config import Config, ConfigError
from crudgen.db.schema import SchemaInspector
from crudgen.models.base import ModelResolver
from crudgen.models.import_resolver import ImportModelResolver
from crudgen.models.manifest_resolver import ManifestModelResolver
from crudgen.models.source_resolver import SourceModelResolver

logger = logging.getLogger(__name__)


def create_resolver(settings: Config) -> ModelResolver:
    """Build the model resolver named by [models].resolver.

    Args:
        settings: Loaded configuration.

    Returns:
        Resolver wired with a schema inspector when a SQLite database
        is configured.

    Raises:
        ConfigError: If the resolver name is unknown.
    """
    schema = SchemaInspector(settings.sqlite_path) if settings.sqlite_path else None
    kind = settings.models.resolver

    if kind == "source":
        resolver: ModelResolver = SourceModelResolver(
            settings.project_root,
            settings.models.module,
            soft_delete_mixins=settings.models.soft_delete_mixin_names,
            schema=schema,
        )
    elif kind == "import":
        resolver = ImportModelResolver(
            settings.project_root,
            settings.models.module,
            soft_delete_mixins=settings.models.soft_delete_mixin_names,
            schema=schema,
        )
    elif kind == "manifest":
        resolver = ManifestModelResolver(
            settings.manifest_path,
            settings.models.module,
            schema=schema,
        )
    else:
        raise ConfigError(f"Unknown model resolver: {kind!r}")

    logger.info(f"Resolving models from {resolver.source_name} ({kind})")
    return resolver
