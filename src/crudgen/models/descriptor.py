"""Model metadata consumed by the test-suite generators."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Iterable, Mapping, Union

from crudgen.naming import default_table_name

logger = logging.getLogger(__name__)

# A rule is declared either as a pipe-delimited string ("required|max:255")
# or as a list of single rule tokens (["required", "regex:/^(a|b)$/"]).
RuleValue = Union[str, list[str]]


@dataclass(frozen=True)
class ModelDescriptor:
    """Everything the generators need to know about one model.

    Attributes:
        name: Class name of the model (e.g. "User").
        module: Dotted module the generated tests import the model from.
        fillable: Fields that may be mass-assigned, in declaration order.
        unique: Fields with a single-column unique constraint.
        soft_delete: Whether deleting the model only marks it as deleted.
        rules: Validation rules keyed by field name.
        table_name: Database table backing the model.
    """

    name: str
    module: str
    fillable: tuple[str, ...] = ()
    unique: tuple[str, ...] = ()
    soft_delete: bool = False
    rules: dict[str, RuleValue] = field(default_factory=dict)
    table_name: str = ""

    def __post_init__(self):
        if not self.table_name:
            object.__setattr__(self, "table_name", default_table_name(self.name))

    @classmethod
    def create(
        cls,
        name: str,
        module: str,
        fillable: Iterable[Any] | None = None,
        unique: Iterable[Any] | None = None,
        soft_delete: bool = False,
        rules: Mapping[Any, Any] | None = None,
        table_name: str | None = None,
    ) -> "ModelDescriptor":
        """Build a descriptor from loosely typed declarations.

        Field lists are de-duplicated keeping the first occurrence, and
        malformed rule entries are dropped with a warning.
        """
        return cls(
            name=name,
            module=module,
            fillable=_field_list(fillable, name, "fillable"),
            unique=_field_list(unique, name, "unique"),
            soft_delete=bool(soft_delete),
            rules=normalize_rules(rules, name),
            table_name=table_name or "",
        )


def _field_list(values: Iterable[Any] | None, model: str, kind: str) -> tuple[str, ...]:
    if values is None:
        return ()
    if isinstance(values, str):
        values = [values]

    fields: list[str] = []
    for value in values:
        if not isinstance(value, str) or not value:
            logger.warning(f"Ignoring invalid {kind} field {value!r} on {model}")
            continue
        if value not in fields:
            fields.append(value)
    return tuple(fields)


def normalize_rules(rules: Mapping[Any, Any] | None, model: str = "") -> dict[str, RuleValue]:
    """Keep only rule entries of the form field -> str or field -> list[str].

    Args:
        rules: Raw rule mapping as declared on the model.
        model: Model name, used in log messages.

    Returns:
        New dict with valid entries in their original order.
    """
    if not rules:
        return {}
    if not isinstance(rules, Mapping):
        logger.warning(f"Ignoring rules on {model}: expected a mapping, got {type(rules).__name__}")
        return {}

    result: dict[str, RuleValue] = {}
    for field_name, value in rules.items():
        if not isinstance(field_name, str):
            logger.warning(f"Ignoring rules for non-string field {field_name!r} on {model}")
            continue
        if isinstance(value, str):
            result[field_name] = value
        elif isinstance(value, (list, tuple)) and all(isinstance(v, str) for v in value):
            result[field_name] = list(value)
        else:
            logger.warning(f"Ignoring rules for {model}.{field_name}: {value!r}")
    return result
