"""Serializer turning a SuiteDocument into pytest source code."""

from __future__ import annotations

import keyword

from crudgen.constants import INDENT, INTEGRITY_ERROR_IMPORT, SUPPORT_HELPERS
from crudgen.generation.attributes import AttributeSet
from crudgen.generation.cases import CaseKind, CrudCase, SuiteCase, UniqueCase, ValidationCase
from crudgen.generation.suite import SuiteDocument
from crudgen.generation.templates import (
    EQUALS_ASSERTION,
    HARD_DELETE,
    HARD_DELETE_ASSERTION,
    MODEL_IMPORT,
    MODULE_DOCSTRING,
    PASSWORD_ASSERTION,
    PERSIST,
    SOFT_DELETE,
    SOFT_DELETE_ASSERTION,
    VALIDATE,
    python_literal,
)
from crudgen.models.descriptor import RuleValue
from crudgen.naming import instance_name, suite_class_name

# Local names used inside generated methods; the model instance must not
# shadow any of them.
_RESERVED_NAMES = frozenset(
    {
        "attributes",
        "updated_attributes",
        "retrieved",
        "result",
        "key",
        "value",
        "self",
        "pytest",
        "setattr",
        "getattr",
        *SUPPORT_HELPERS,
    }
)


def _indent(lines: list[str], level: int = 1) -> list[str]:
    return [INDENT * level + line if line else "" for line in lines]


def _split(text: str) -> list[str]:
    return text.split("\n")


def _attribute(obj: str, name: str) -> str:
    """Attribute access that stays valid for non-identifier field names."""
    if name.isidentifier() and not keyword.iskeyword(name):
        return f"{obj}.{name}"
    return f"getattr({obj}, {python_literal(name)})"


def _rule_literal(value: RuleValue) -> str:
    if isinstance(value, str):
        return python_literal(value)
    return "[" + ", ".join(python_literal(token) for token in value) + "]"


def _dict_lines(name: str, entries: list[tuple[str, str]]) -> list[str]:
    """Assignment of a dict literal, one entry per line."""
    if not entries:
        return [f"{name} = {{}}"]
    lines = [f"{name} = {{"]
    lines.extend(f"{INDENT}{key}: {value}," for key, value in entries)
    lines.append("}")
    return lines


def _attribute_lines(name: str, attributes: AttributeSet) -> list[str]:
    return _dict_lines(
        name, [(python_literal(key), python_literal(value)) for key, value in attributes.items()]
    )


class PytestRenderer:
    """Renders suites as a pytest module with one test class per model.

    Database tests receive a SQLAlchemy session fixture; assertions that
    depend on the host application come from its support module.
    """

    def __init__(self, support_module: str = "tests.support", session_fixture: str = "db_session"):
        """Initialize the renderer.

        Args:
            support_module: Dotted module providing the SUPPORT_HELPERS.
            session_fixture: Name of the pytest fixture yielding a session.
        """
        self.support_module = support_module
        self.session = session_fixture

    def render(self, document: SuiteDocument) -> str:
        """Render the complete test module.

        Args:
            document: Suite to render.

        Returns:
            Python source text ending with a newline.
        """
        instance = self._instance_name(document.model)

        lines = _split(MODULE_DOCSTRING.render(model=document.model))
        lines.append("")
        lines.extend(self._imports(document))
        lines.extend(["", "", f"class {suite_class_name(document.model)}:"])

        blocks: list[list[str]] = []
        if document.rules:
            blocks.append(
                _dict_lines(
                    "rules",
                    [(python_literal(f), _rule_literal(v)) for f, v in document.rules.items()],
                )
            )
        for case in document.cases:
            blocks.append(self._render_case(case, document, instance))

        if not blocks:
            blocks.append(["pass"])

        for index, block in enumerate(blocks):
            if index:
                lines.append("")
            lines.extend(_indent(block))

        return "\n".join(lines) + "\n"

    def _instance_name(self, model: str) -> str:
        name = instance_name(model)
        if (
            name in _RESERVED_NAMES
            or name == self.session
            or name == model
            or keyword.iskeyword(name)
            or not name.isidentifier()
        ):
            name = f"{name}_instance"
        return name

    def required_helpers(self, document: SuiteDocument) -> list[str]:
        """Support helpers the rendered module uses, in import order."""
        needed: set[str] = set()
        for case in document.cases:
            if isinstance(case, CrudCase):
                if case.password_field and case.kind in (CaseKind.CREATE, CaseKind.UPDATE):
                    needed.add("check_password")
                if case.password_field and case.kind == CaseKind.UPDATE:
                    needed.add("make_password")
                if case.kind == CaseKind.DELETE and case.soft_delete:
                    needed.add("assert_soft_deleted")
                elif case.kind == CaseKind.DELETE:
                    needed.add("assert_database_missing")
            elif isinstance(case, UniqueCase):
                needed.add("assert_database_count")
            elif isinstance(case, ValidationCase):
                needed.add("validate")
        return [helper for helper in SUPPORT_HELPERS if helper in needed]

    def _imports(self, document: SuiteDocument) -> list[str]:
        lines: list[str] = []
        if document.unique_cases:
            lines.extend(["import pytest", INTEGRITY_ERROR_IMPORT, ""])

        lines.append(MODEL_IMPORT.render(module=document.module, model=document.model))

        helpers = self.required_helpers(document)
        if len(helpers) == 1:
            lines.append(f"from {self.support_module} import {helpers[0]}")
        elif helpers:
            lines.append(f"from {self.support_module} import (")
            lines.extend(f"{INDENT}{helper}," for helper in helpers)
            lines.append(")")
        return lines

    def _render_case(self, case: SuiteCase, document: SuiteDocument, instance: str) -> list[str]:
        if isinstance(case, ValidationCase):
            return self._method(case.name, [], self._validation_body(case))
        if isinstance(case, UniqueCase):
            return self._method(case.name, [self.session], self._unique_body(case, document))

        bodies = {
            CaseKind.CREATE: self._create_body,
            CaseKind.RETRIEVE: self._retrieve_body,
            CaseKind.UPDATE: self._update_body,
            CaseKind.DELETE: self._delete_body,
        }
        body = bodies[case.kind](case, document, instance)
        return self._method(case.name, [self.session], body)

    @staticmethod
    def _method(name: str, args: list[str], body: list[str]) -> list[str]:
        params = ", ".join(["self", *args])
        return [f"def {name}({params}):", *_indent(body)]

    def _create_instance(self, case: CrudCase, document: SuiteDocument, instance: str) -> list[str]:
        lines = _attribute_lines("attributes", case.attributes)
        lines.append(f"{instance} = {document.model}(**attributes)")
        lines.extend(_split(PERSIST.render(session=self.session, instance=instance)))
        return lines

    def _field_assertion(self, case: CrudCase, instance: str, source: str, field: str) -> str:
        """Compare one field against the attribute dict it was assigned from."""
        key = python_literal(field)
        if field == case.password_field:
            plain = (
                python_literal(case.updated_attributes[field])
                if case.kind == CaseKind.UPDATE
                else f"{source}[{key}]"
            )
            return PASSWORD_ASSERTION.render(plain=plain, hashed=_attribute(instance, field))
        return EQUALS_ASSERTION.render(left=_attribute(instance, field), right=f"{source}[{key}]")

    def _create_body(self, case: CrudCase, document: SuiteDocument, instance: str) -> list[str]:
        lines = self._create_instance(case, document, instance)
        lines.extend(
            self._field_assertion(case, instance, "attributes", field) for field in case.fields
        )
        return lines

    def _retrieve_body(self, case: CrudCase, document: SuiteDocument, instance: str) -> list[str]:
        lines = self._create_instance(case, document, instance)
        lines.append(f"retrieved = {self.session}.get({document.model}, {instance}.id)")
        lines.append("assert retrieved is not None")
        lines.extend(
            EQUALS_ASSERTION.render(
                left=_attribute("retrieved", field), right=_attribute(instance, field)
            )
            for field in case.fields
            if field != case.password_field
        )
        return lines

    def _update_body(self, case: CrudCase, document: SuiteDocument, instance: str) -> list[str]:
        lines = self._create_instance(case, document, instance)
        entries = []
        for field, value in case.updated_attributes.items():
            literal = python_literal(value)
            if field == case.password_field:
                literal = f"make_password({literal})"
            entries.append((python_literal(field), literal))
        lines.extend(_dict_lines("updated_attributes", entries))
        lines.append("for key, value in updated_attributes.items():")
        lines.append(f"{INDENT}setattr({instance}, key, value)")
        lines.append(f"{self.session}.commit()")
        lines.extend(
            self._field_assertion(case, instance, "updated_attributes", field)
            for field in case.fields
        )
        return lines

    def _delete_body(self, case: CrudCase, document: SuiteDocument, instance: str) -> list[str]:
        lines = self._create_instance(case, document, instance)
        lines.append(f"{instance}_id = {instance}.id")
        table = python_literal(document.table_name)
        if case.soft_delete:
            lines.extend(_split(SOFT_DELETE.render(session=self.session, instance=instance)))
            lines.append(
                SOFT_DELETE_ASSERTION.render(session=self.session, table=table, instance=instance)
            )
        else:
            lines.extend(_split(HARD_DELETE.render(session=self.session, instance=instance)))
            lines.append(
                HARD_DELETE_ASSERTION.render(session=self.session, table=table, instance=instance)
            )
        return lines

    def _unique_body(self, case: UniqueCase, document: SuiteDocument) -> list[str]:
        lines = _attribute_lines("attributes", case.attributes)
        create = f"{self.session}.add({document.model}(**attributes))"
        lines.append(create)
        lines.append(f"{self.session}.commit()")
        lines.append(
            f"assert_database_count({self.session}, {python_literal(document.table_name)}, 1)"
        )
        lines.append("with pytest.raises(IntegrityError):")
        lines.append(f"{INDENT}{create}")
        lines.append(f"{INDENT}{self.session}.commit()")
        return lines

    @staticmethod
    def _validation_body(case: ValidationCase) -> list[str]:
        lines = _attribute_lines("attributes", case.attributes)
        lines.append(VALIDATE.render())
        lines.extend(_split(case.assertion))
        return lines
