# src/crudgen/generation/templates.py
"""Code templates for generated test modules."""

from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True)
class CodeTemplate:
    """A template for generating code with variable substitution."""

    template: str

    def render(self, **kwargs: Any) -> str:
        """Render the template with the given variables.

        Args:
            **kwargs: Variables to substitute into the template.

        Returns:
            The rendered template string.

        Raises:
            KeyError: If a required variable is missing.
        """
        return self.template.format(**kwargs)


def python_literal(value: str) -> str:
    """Python string literal for a value, preferring double quotes."""
    text = repr(value)
    if text.startswith("'") and '"' not in value:
        text = f'"{text[1:-1]}"'
    return text


# =============================================================================
# Module Header
# =============================================================================

MODULE_DOCSTRING = CodeTemplate(
    '''"""Tests for the {model} model.

Generated by crudgen. Edit freely, the file is never regenerated in place.
"""'''
)

MODEL_IMPORT = CodeTemplate("from {module} import {model}")

# =============================================================================
# Test Names
# =============================================================================

CREATE_NAME = CodeTemplate("test_{model}_can_be_created_with_fillable_fields")
RETRIEVE_NAME = CodeTemplate("test_{model}_can_be_retrieved")
UPDATE_NAME = CodeTemplate("test_{model}_can_be_updated")
DELETE_NAME = CodeTemplate("test_{model}_can_be_deleted")
UNIQUE_NAME = CodeTemplate("test_{model}_{field}_must_be_unique")

# =============================================================================
# Statements
# =============================================================================
# Rendered inside test methods; one template per generated line.

PERSIST = CodeTemplate("{session}.add({instance})\n{session}.commit()")
EQUALS_ASSERTION = CodeTemplate("assert {left} == {right}")
PASSWORD_ASSERTION = CodeTemplate("assert check_password({plain}, {hashed})")
HARD_DELETE = CodeTemplate("{session}.delete({instance})\n{session}.commit()")
SOFT_DELETE = CodeTemplate("{instance}.soft_delete()\n{session}.commit()")
HARD_DELETE_ASSERTION = CodeTemplate(
    "assert_database_missing({session}, {table}, id={instance}_id)"
)
SOFT_DELETE_ASSERTION = CodeTemplate("assert_soft_deleted({session}, {table}, id={instance}_id)")
VALIDATE = CodeTemplate("result = validate(attributes, self.rules)")

# Uniform assertion block of validation tests.
VALIDATION_ASSERTION = CodeTemplate("assert result.fails()\nassert {field} in result.errors")
