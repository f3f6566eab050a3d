"""Structured test-suite documents and the builder that composes them.

A SuiteDocument is an ordered list of typed case nodes. It holds no
Python syntax; PytestRenderer turns it into source text.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Mapping, Optional

from crudgen.constants import PASSWORD_FIELD, UPDATED_EMAIL, UPDATED_PASSWORD, UPDATED_PREFIX
from crudgen.generation.attributes import AttributeSet, synthesize_attributes
from crudgen.generation.cases import CaseKind, CrudCase, SuiteCase, UniqueCase, ValidationCase
from crudgen.generation.rules import RuleSpec
from crudgen.generation.templates import (
    CREATE_NAME,
    DELETE_NAME,
    RETRIEVE_NAME,
    UNIQUE_NAME,
    UPDATE_NAME,
)
from crudgen.generation.validation import generate_validation_cases
from crudgen.models.descriptor import ModelDescriptor, RuleValue
from crudgen.naming import snake_case, unique_method_name


@dataclass
class SuiteDocument:
    """Everything needed to render the test module of one model."""

    model: str
    module: str
    table_name: str
    rules: dict[str, RuleValue] = field(default_factory=dict)
    cases: list[SuiteCase] = field(default_factory=list)

    @property
    def crud_cases(self) -> list[CrudCase]:
        return [case for case in self.cases if isinstance(case, CrudCase)]

    @property
    def unique_cases(self) -> list[UniqueCase]:
        return [case for case in self.cases if isinstance(case, UniqueCase)]

    @property
    def validation_cases(self) -> list[ValidationCase]:
        return [case for case in self.cases if isinstance(case, ValidationCase)]


def updated_value(field_name: str) -> str:
    """New value written by the update test, different from the sample value."""
    if field_name == PASSWORD_FIELD:
        return UPDATED_PASSWORD
    if "email" in field_name:
        return UPDATED_EMAIL
    return UPDATED_PREFIX + field_name


class SuiteBuilder:
    """Composes the SuiteDocument for a model.

    Cases are ordered CRUD, then uniqueness, then validation; within each
    block fields follow the model's fillable order.
    """

    def __init__(self, registry: Optional[Mapping[str, RuleSpec]] = None):
        """Initialize the builder.

        Args:
            registry: Rule registry passed to the validation generator
                (defaults to the global registry).
        """
        self.registry = registry

    def build(self, descriptor: ModelDescriptor) -> SuiteDocument:
        """Build the document for one model.

        Args:
            descriptor: Model metadata.

        Returns:
            SuiteDocument with all cases in output order.
        """
        fields = list(descriptor.fillable)
        attributes = synthesize_attributes(fields)
        document = SuiteDocument(
            model=descriptor.name,
            module=descriptor.module,
            table_name=descriptor.table_name,
            rules=dict(descriptor.rules),
        )

        document.cases.extend(self._crud_cases(descriptor, fields, attributes))
        used_names = {case.name for case in document.cases}
        document.cases.extend(self._unique_cases(descriptor, fields, attributes, used_names))
        if descriptor.rules:
            document.cases.extend(
                generate_validation_cases(
                    descriptor.name,
                    descriptor.rules,
                    attributes,
                    registry=self.registry,
                    used_names=used_names,
                )
            )

        return document

    def _crud_cases(
        self, descriptor: ModelDescriptor, fields: list[str], attributes: AttributeSet
    ) -> list[CrudCase]:
        model = snake_case(descriptor.name)
        password_field = PASSWORD_FIELD if PASSWORD_FIELD in fields else None

        def case(name: str, kind: CaseKind, **extra) -> CrudCase:
            return CrudCase(
                name=name,
                kind=kind,
                fields=list(fields),
                attributes=dict(attributes),
                password_field=password_field,
                **extra,
            )

        return [
            case(CREATE_NAME.render(model=model), CaseKind.CREATE),
            case(RETRIEVE_NAME.render(model=model), CaseKind.RETRIEVE),
            case(
                UPDATE_NAME.render(model=model),
                CaseKind.UPDATE,
                updated_attributes={name: updated_value(name) for name in fields},
            ),
            case(
                DELETE_NAME.render(model=model),
                CaseKind.DELETE,
                soft_delete=descriptor.soft_delete,
            ),
        ]

    def _unique_cases(
        self,
        descriptor: ModelDescriptor,
        fields: list[str],
        attributes: AttributeSet,
        used_names: set[str],
    ) -> list[UniqueCase]:
        model = snake_case(descriptor.name)
        unique = set(descriptor.unique)
        return [
            UniqueCase(
                name=unique_method_name(
                    UNIQUE_NAME.render(model=model, field=snake_case(name)), used_names
                ),
                field=name,
                attributes=dict(attributes),
            )
            for name in fields
            if name in unique
        ]
