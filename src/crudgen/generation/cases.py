"""Typed test-case nodes of a generated suite."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional, Union

from crudgen.generation.attributes import AttributeSet


class CaseKind(str, Enum):
    """Kinds of generated test cases."""

    CREATE = "create"
    RETRIEVE = "retrieve"
    UPDATE = "update"
    DELETE = "delete"
    UNIQUE = "unique"
    VALIDATION = "validation"


@dataclass
class CrudCase:
    """A create, retrieve, update or delete test.

    Attributes:
        name: Test method name.
        kind: One of the four CRUD kinds.
        fields: Fillable fields in declaration order.
        attributes: Valid attribute set the instance is created with.
        password_field: Field compared through password hashing, if fillable.
        updated_attributes: New plain values (update tests only).
        soft_delete: Whether deletion is asserted as a soft delete (delete tests only).
    """

    name: str
    kind: CaseKind
    fields: list[str]
    attributes: AttributeSet
    password_field: Optional[str] = None
    updated_attributes: AttributeSet = field(default_factory=dict)
    soft_delete: bool = False


@dataclass
class UniqueCase:
    """A test asserting that a second identical row violates a unique field."""

    name: str
    field: str
    attributes: AttributeSet

    @property
    def kind(self) -> CaseKind:
        return CaseKind.UNIQUE


@dataclass
class ValidationCase:
    """One test asserting that a single rule rejects an attribute set.

    Attributes:
        name: Test method name.
        field: Field the rule applies to.
        rule: Rule name (e.g. "max").
        attributes: Adversarial attribute set violating only this rule.
        assertion: Assertion block, one statement per line.
        parameter: Rule parameter, if any (e.g. "255").
    """

    name: str
    field: str
    rule: str
    attributes: AttributeSet = field(default_factory=dict)
    assertion: str = ""
    parameter: Optional[str] = None

    @property
    def kind(self) -> CaseKind:
        return CaseKind.VALIDATION


SuiteCase = Union[CrudCase, UniqueCase, ValidationCase]
