"""Model resolver that imports the host application's models module."""

import importlib
import inspect
import logging
import sys
from pathlib import Path
from typing import Optional

from crudgen.constants import (
    FILLABLE_ATTR,
    RULES_ATTR,
    SOFT_DELETE_ATTR,
    TABLE_ATTR,
    UNIQUE_ATTR,
)
from crudgen.db.schema import SchemaInspector
from crudgen.exceptions import ModelImportError, ModelNotFoundError
from crudgen.models.base import ModelResolver
from crudgen.models.descriptor import ModelDescriptor
from crudgen.naming import default_table_name

logger = logging.getLogger(__name__)


class ImportModelResolver(ModelResolver):
    """Resolves models by importing them and reading their class attributes.

    Unlike SourceModelResolver this sees computed declarations and
    inherited attributes from any base class, at the cost of executing the
    host application's models module.
    """

    def __init__(
        self,
        project_root: Path,
        module: str,
        soft_delete_mixins: tuple[str, ...] = ("SoftDeleteMixin", "SoftDeletes"),
        schema: Optional[SchemaInspector] = None,
    ):
        super().__init__(schema)
        self.project_root = project_root
        self.module = module
        self.soft_delete_mixins = frozenset(soft_delete_mixins)

    @property
    def source_name(self) -> str:
        return self.module

    def resolve(self, name: str) -> ModelDescriptor:
        root = str(self.project_root.resolve())
        if root not in sys.path:
            sys.path.insert(0, root)

        try:
            module = importlib.import_module(self.module)
        except ModuleNotFoundError as e:
            if not self._is_configured_module(e.name):
                logger.error(f"Could not import {self.module}: {e}")
                raise ModelImportError(f"Could not import {self.module}: {e}", str(e)) from e
            logger.warning(f"Models module {self.module} does not exist: {e}")
            raise ModelNotFoundError(name, self.module) from e
        except Exception as e:
            logger.error(f"Could not import {self.module}: {e}")
            raise ModelImportError(f"Could not import {self.module}: {e}", str(e)) from e

        model = getattr(module, name, None)
        if not inspect.isclass(model):
            raise ModelNotFoundError(name, self.module)

        declared_table = getattr(model, TABLE_ATTR, None)
        table_name = declared_table if isinstance(declared_table, str) and declared_table else None

        return ModelDescriptor.create(
            name=name,
            module=self.module,
            fillable=getattr(model, FILLABLE_ATTR, None),
            unique=self._unique_fields(
                getattr(model, UNIQUE_ATTR, None), table_name or default_table_name(name)
            ),
            soft_delete=self._is_soft_deletable(model),
            rules=getattr(model, RULES_ATTR, None),
            table_name=table_name,
        )

    def _is_configured_module(self, missing: Optional[str]) -> bool:
        """Whether the missing module is the models module or one of its packages."""
        parts = self.module.split(".")
        return missing in {".".join(parts[: i + 1]) for i in range(len(parts))}

    def _is_soft_deletable(self, model: type) -> bool:
        explicit = getattr(model, SOFT_DELETE_ATTR, None)
        if isinstance(explicit, bool):
            return explicit
        return any(cls.__name__ in self.soft_delete_mixins for cls in model.__mro__[1:])
