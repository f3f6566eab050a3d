"""Registry of supported validation rules.

Each rule maps to a RuleSpec: how its test is named, how a valid attribute
set is mutated so that exactly this rule fails, and what the test asserts.
New rules are added with register_rule(); the generator never needs to
change.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from typing import Callable, Optional

from crudgen.constants import (
    DISALLOWED_FALLBACK,
    FILLER_CHARACTER,
    INVALID_CHOICE,
    INVALID_DATE,
    INVALID_EMAIL,
    INVALID_INTEGER,
    INVALID_NUMBER,
    INVALID_URL,
    REGEX_CANDIDATES,
    REGEX_FALLBACK,
)
from crudgen.generation.attributes import AttributeSet
from crudgen.generation.templates import VALIDATION_ASSERTION, CodeTemplate

logger = logging.getLogger(__name__)

# (field, valid attributes, rule parameter) -> adversarial attributes
Transform = Callable[[str, AttributeSet, Optional[str]], AttributeSet]


class InvalidRuleParameter(ValueError):
    """Raised by a transform whose rule parameter cannot be interpreted."""

    pass


@dataclass(frozen=True)
class RuleSpec:
    """How one validation rule is turned into a test case."""

    name_template: CodeTemplate
    transform: Transform
    assertion_template: CodeTemplate = VALIDATION_ASSERTION


@dataclass(frozen=True)
class Rule:
    """A single parsed rule token such as "max:255"."""

    name: str
    parameter: Optional[str] = None

    @classmethod
    def parse(cls, token: str) -> "Rule":
        """Split a token on its first colon."""
        name, sep, parameter = token.strip().partition(":")
        return cls(name=name.strip(), parameter=parameter if sep else None)


def parse_rules(value: str | list[str]) -> list[Rule]:
    """Parse a rule declaration into rules, skipping empty tokens.

    A string is split on "|"; a list is taken token by token, so list
    entries may contain "|" (e.g. in regex patterns).
    """
    tokens = value.split("|") if isinstance(value, str) else list(value)
    return [Rule.parse(token) for token in tokens if token.strip()]


def integer_parameter(parameter: Optional[str]) -> int:
    """Rule parameter as an integer (for max/min)."""
    try:
        return int((parameter or "").strip())
    except ValueError:
        raise InvalidRuleParameter(f"expected an integer, got {parameter!r}") from None


def _replace(field: str, attributes: AttributeSet, value: str) -> AttributeSet:
    return {**attributes, field: value}


def _fixed(value: str) -> Transform:
    """Transform that sets the field to a constant value."""

    def transform(field: str, attributes: AttributeSet, parameter: Optional[str]) -> AttributeSet:
        return _replace(field, attributes, value)

    return transform


def without_field(field: str, attributes: AttributeSet, parameter: Optional[str]) -> AttributeSet:
    """Drop the field entirely (violates "required")."""
    return {key: value for key, value in attributes.items() if key != field}


def too_long(field: str, attributes: AttributeSet, parameter: Optional[str]) -> AttributeSet:
    """One character more than allowed (violates "max:N")."""
    length = integer_parameter(parameter) + 1
    return _replace(field, attributes, FILLER_CHARACTER * max(length, 0))


def too_short(field: str, attributes: AttributeSet, parameter: Optional[str]) -> AttributeSet:
    """One character less than required (violates "min:N").

    "min:0" cannot be violated by length; the empty string is used.
    """
    length = integer_parameter(parameter) - 1
    return _replace(field, attributes, FILLER_CHARACTER * max(length, 0))


def _listed_values(parameter: Optional[str]) -> list[str]:
    if not parameter:
        return []
    return parameter.split(",")


def not_allowed(field: str, attributes: AttributeSet, parameter: Optional[str]) -> AttributeSet:
    """A value outside the allowed list (violates "in:a,b")."""
    allowed = set(_listed_values(parameter))
    value = INVALID_CHOICE
    suffix = 2
    while value in allowed:
        value = f"{INVALID_CHOICE}-{suffix}"
        suffix += 1
    return _replace(field, attributes, value)


def disallowed(field: str, attributes: AttributeSet, parameter: Optional[str]) -> AttributeSet:
    """The first disallowed value (violates "not_in:a,b")."""
    values = _listed_values(parameter)
    return _replace(field, attributes, values[0] if values else DISALLOWED_FALLBACK)


_REGEX_FLAGS = {"i": re.IGNORECASE, "m": re.MULTILINE, "s": re.DOTALL, "x": re.VERBOSE}


def compile_pattern(parameter: str) -> re.Pattern[str]:
    """Compile a delimited pattern such as "/^[a-z]+$/i".

    Raises:
        re.error: If Python's re module cannot compile the pattern.
    """
    pattern, flags = parameter, 0
    delimiter = parameter[:1]
    if delimiter and not delimiter.isalnum() and delimiter not in "\\ ":
        end = parameter.rfind(delimiter)
        if end > 0:
            pattern = parameter[1:end]
            for modifier in parameter[end + 1 :]:
                flags |= _REGEX_FLAGS.get(modifier, 0)
    return re.compile(pattern, flags)


def non_matching(field: str, attributes: AttributeSet, parameter: Optional[str]) -> AttributeSet:
    """A value the pattern does not match (violates "regex:/pattern/").

    Candidates are checked against the actual pattern. Patterns Python
    cannot evaluate fall back to a fixed literal, which may still match.
    """
    try:
        compiled = compile_pattern(parameter or "")
    except re.error as e:
        logger.warning(
            f"Cannot evaluate regex rule {parameter!r} on {field} ({e}), using {REGEX_FALLBACK!r}"
        )
        return _replace(field, attributes, REGEX_FALLBACK)

    for candidate in REGEX_CANDIDATES:
        if compiled.search(candidate) is None:
            return _replace(field, attributes, candidate)

    logger.warning(
        f"No candidate value violates regex rule {parameter!r} on {field}, "
        f"using {REGEX_FALLBACK!r}"
    )
    return _replace(field, attributes, REGEX_FALLBACK)


RULE_REGISTRY: dict[str, RuleSpec] = {
    "required": RuleSpec(CodeTemplate("test_{model}_{field}_is_required"), without_field),
    "email": RuleSpec(
        CodeTemplate("test_{model}_{field}_must_be_valid_email"), _fixed(INVALID_EMAIL)
    ),
    "max": RuleSpec(
        CodeTemplate("test_{model}_{field}_must_not_exceed_{param}_characters"), too_long
    ),
    "min": RuleSpec(
        CodeTemplate("test_{model}_{field}_must_be_at_least_{param}_characters"), too_short
    ),
    "numeric": RuleSpec(
        CodeTemplate("test_{model}_{field}_must_be_numeric"), _fixed(INVALID_NUMBER)
    ),
    "integer": RuleSpec(
        CodeTemplate("test_{model}_{field}_must_be_an_integer"), _fixed(INVALID_INTEGER)
    ),
    "in": RuleSpec(CodeTemplate("test_{model}_{field}_must_be_in_allowed_values"), not_allowed),
    "not_in": RuleSpec(
        CodeTemplate("test_{model}_{field}_must_not_be_in_disallowed_values"), disallowed
    ),
    "regex": RuleSpec(CodeTemplate("test_{model}_{field}_must_match_regex_pattern"), non_matching),
    "date": RuleSpec(
        CodeTemplate("test_{model}_{field}_must_be_a_valid_date"), _fixed(INVALID_DATE)
    ),
    "url": RuleSpec(CodeTemplate("test_{model}_{field}_must_be_a_valid_url"), _fixed(INVALID_URL)),
}


def register_rule(name: str, spec: RuleSpec) -> None:
    """Add or replace a rule in the global registry."""
    RULE_REGISTRY[name] = spec
