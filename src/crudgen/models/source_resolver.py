"""Model resolver that reads model classes from source files using ast.

The host application is never imported: class-level declarations are read
with ast.literal_eval, so only literal values (lists, dicts, strings,
booleans) are understood.
"""

import ast
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Optional

from crudgen.constants import (
    FILLABLE_ATTR,
    MODEL_ATTRS,
    RULES_ATTR,
    SOFT_DELETE_ATTR,
    TABLE_ATTR,
    UNIQUE_ATTR,
)
from crudgen.db.schema import SchemaInspector
from crudgen.exceptions import ModelNotFoundError
from crudgen.models.base import ModelResolver
from crudgen.models.descriptor import ModelDescriptor
from crudgen.naming import default_table_name

logger = logging.getLogger(__name__)

# Sentinel for declarations that are absent or could not be evaluated.
_MISSING = object()


def _package_order(package_dir: Path):
    """Sort key for files below package_dir that puts __init__.py first in every directory."""

    def key(path: Path) -> list[tuple[bool, str]]:
        return [(part != "__init__.py", part) for part in path.relative_to(package_dir).parts]

    return key


@dataclass
class ParsedModelClass:
    """A top-level class found in a models module."""

    name: str
    module: str
    path: Path
    bases: list[str]
    declarations: dict[str, Any]


class SourceModelResolver(ModelResolver):
    """Resolves models by statically parsing the configured models module.

    A dotted module such as "app.models" maps to app/models.py and to every
    .py file below app/models/, relative to the project root.
    """

    def __init__(
        self,
        project_root: Path,
        module: str,
        soft_delete_mixins: tuple[str, ...] = ("SoftDeleteMixin", "SoftDeletes"),
        schema: Optional[SchemaInspector] = None,
    ):
        """Initialize the resolver.

        Args:
            project_root: Root directory of the host application.
            module: Dotted path of the models module or package.
            soft_delete_mixins: Base class names that make a model soft-deletable.
            schema: Optional schema inspector for the unique-field fallback.
        """
        super().__init__(schema)
        self.project_root = project_root
        self.module = module
        self.soft_delete_mixins = frozenset(soft_delete_mixins)
        self._classes: Optional[dict[str, ParsedModelClass]] = None

    @property
    def source_name(self) -> str:
        return self.module

    def resolve(self, name: str) -> ModelDescriptor:
        classes = self._load_classes()
        model = classes.get(name)
        if model is None:
            raise ModelNotFoundError(name, self.module)

        declared_table = self._lookup(model, TABLE_ATTR)
        table_name = declared_table if isinstance(declared_table, str) and declared_table else None
        declared_unique = self._lookup(model, UNIQUE_ATTR)
        unique = self._unique_fields(
            None if declared_unique is _MISSING else declared_unique,
            table_name or default_table_name(name),
        )
        fillable = self._lookup(model, FILLABLE_ATTR)
        rules = self._lookup(model, RULES_ATTR)

        return ModelDescriptor.create(
            name=name,
            module=model.module,
            fillable=None if fillable is _MISSING else fillable,
            unique=unique,
            soft_delete=self._is_soft_deletable(model),
            rules=None if rules is _MISSING else rules,
            table_name=table_name,
        )

    def module_files(self) -> list[tuple[str, Path]]:
        """Source files of the models module with their dotted module names."""
        relative = Path(*self.module.split("."))
        files: list[tuple[str, Path]] = []

        module_file = self.project_root / relative.with_suffix(".py")
        if module_file.is_file():
            files.append((self.module, module_file))

        package_dir = self.project_root / relative
        if package_dir.is_dir():
            # Each package __init__ before its sibling modules and subpackages
            for path in sorted(package_dir.rglob("*.py"), key=_package_order(package_dir)):
                parts = path.relative_to(package_dir).with_suffix("").parts
                if parts[-1] == "__init__":
                    parts = parts[:-1]
                dotted = ".".join((self.module, *parts))
                files.append((dotted, path))

        return files

    def _load_classes(self) -> dict[str, ParsedModelClass]:
        if self._classes is not None:
            return self._classes

        classes: dict[str, ParsedModelClass] = {}
        for dotted, path in self.module_files():
            for parsed in self._parse_file(dotted, path):
                # First definition in module_files order wins
                classes.setdefault(parsed.name, parsed)

        self._classes = classes
        return classes

    def _parse_file(self, dotted: str, path: Path) -> list[ParsedModelClass]:
        try:
            tree = ast.parse(path.read_text(encoding="utf-8"), filename=str(path))
        except (SyntaxError, UnicodeDecodeError) as e:
            logger.warning(f"Skipping {path}: {e}")
            return []

        parsed = []
        for node in ast.iter_child_nodes(tree):
            if isinstance(node, ast.ClassDef):
                parsed.append(
                    ParsedModelClass(
                        name=node.name,
                        module=dotted,
                        path=path,
                        bases=[self._base_name(base) for base in node.bases],
                        declarations=self._parse_declarations(node, path),
                    )
                )
        return parsed

    def _parse_declarations(self, node: ast.ClassDef, path: Path) -> dict[str, Any]:
        """Evaluate the model attributes declared in a class body."""
        declarations: dict[str, Any] = {}

        for item in node.body:
            if isinstance(item, ast.Assign) and len(item.targets) == 1:
                target, value = item.targets[0], item.value
            elif isinstance(item, ast.AnnAssign) and item.value is not None:
                target, value = item.target, item.value
            else:
                continue

            if not isinstance(target, ast.Name) or target.id not in MODEL_ATTRS:
                continue

            try:
                declarations[target.id] = ast.literal_eval(value)
            except (ValueError, TypeError, SyntaxError):
                logger.warning(
                    f"{path}:{item.lineno}: {node.name}.{target.id} is not a literal, ignoring it"
                )
                declarations[target.id] = _MISSING

        return declarations

    @staticmethod
    def _base_name(node: ast.expr) -> str:
        """Name of a base class expression (Base, db.Model -> Model)."""
        if isinstance(node, ast.Name):
            return node.id
        if isinstance(node, ast.Attribute):
            return node.attr
        if isinstance(node, ast.Subscript):
            return SourceModelResolver._base_name(node.value)
        return ""

    def _lineage(self, model: ParsedModelClass) -> list[ParsedModelClass]:
        """The model followed by its base classes defined in the models module."""
        classes = self._load_classes()
        lineage: list[ParsedModelClass] = []
        seen: set[str] = set()
        pending = [model]
        while pending:
            current = pending.pop(0)
            if current.name in seen:
                continue
            seen.add(current.name)
            lineage.append(current)
            pending.extend(classes[base] for base in current.bases if base in classes)
        return lineage

    def _lookup(self, model: ParsedModelClass, attr: str) -> Any:
        """Attribute value as inherited through locally defined base classes."""
        for cls in self._lineage(model):
            if attr in cls.declarations:
                return cls.declarations[attr]
        return _MISSING

    def _is_soft_deletable(self, model: ParsedModelClass) -> bool:
        explicit = self._lookup(model, SOFT_DELETE_ATTR)
        if isinstance(explicit, bool):
            return explicit
        return any(
            base in self.soft_delete_mixins
            for cls in self._lineage(model)
            for base in cls.bases
        )
