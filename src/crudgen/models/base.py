"""Base model resolver interface."""

import logging
from abc import ABC, abstractmethod
from typing import Any, Iterable, Optional

from crudgen.db.schema import SchemaInspector
from crudgen.exceptions import MetadataIntrospectionError
from crudgen.models.descriptor import ModelDescriptor

logger = logging.getLogger(__name__)


class ModelResolver(ABC):
    """Abstract base class for model metadata sources.

    Each resolver turns a model name into a ModelDescriptor using one
    metadata mechanism (source files, imported classes, a manifest).
    """

    def __init__(self, schema: Optional[SchemaInspector] = None):
        """Initialize the resolver.

        Args:
            schema: Optional schema inspector used to discover unique
                fields for models that do not declare any.
        """
        self.schema = schema

    @property
    @abstractmethod
    def source_name(self) -> str:
        """Human-readable description of where models are looked up."""
        pass

    @abstractmethod
    def resolve(self, name: str) -> ModelDescriptor:
        """Resolve a model name to its descriptor.

        Args:
            name: Model class name (e.g. "User").

        Returns:
            ModelDescriptor for the model.

        Raises:
            ModelNotFoundError: If no model with that name exists.
        """
        pass

    def _unique_fields(
        self, declared: Optional[Iterable[Any]], table: str
    ) -> Optional[Iterable[Any]]:
        """Declared unique fields, or those found in the database schema.

        The schema is only consulted when nothing is declared. Schema
        failures are logged and yield no unique fields.
        """
        if declared is not None:
            return declared
        if self.schema is None:
            return None

        try:
            return self.schema.unique_columns(table)
        except MetadataIntrospectionError as e:
            logger.warning(f"Could not retrieve unique fields from database: {e.message}")
            return None
