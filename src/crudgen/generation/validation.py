"""Validation test cases derived from declared validation rules."""

from __future__ import annotations

import logging
from typing import Mapping, Optional

from crudgen.generation.attributes import AttributeSet
from crudgen.generation.cases import ValidationCase
from crudgen.generation.rules import RULE_REGISTRY, InvalidRuleParameter, RuleSpec, parse_rules
from crudgen.generation.templates import python_literal
from crudgen.models.descriptor import RuleValue
from crudgen.naming import snake_case, unique_method_name

logger = logging.getLogger(__name__)


def generate_validation_cases(
    model: str,
    rules: Mapping[str, RuleValue],
    base_attributes: AttributeSet,
    registry: Optional[Mapping[str, RuleSpec]] = None,
    used_names: Optional[set[str]] = None,
) -> list[ValidationCase]:
    """Generate one validation case per recognized (field, rule) pair.

    Unrecognized rules produce no case. Cases follow the order of the
    rule mapping, then the order of rules within each declaration.

    Args:
        model: Model class name.
        rules: Validation rules keyed by field.
        base_attributes: Valid attribute set every case starts from.
        registry: Rule registry to use; defaults to RULE_REGISTRY.
        used_names: Method names already taken in the suite; names of the
            new cases are added to it.

    Returns:
        List of ValidationCase objects.
    """
    registry = RULE_REGISTRY if registry is None else registry
    model_name = snake_case(model)
    cases: list[ValidationCase] = []
    used_names = set() if used_names is None else used_names

    for field_name, declaration in rules.items():
        if not declaration:
            continue

        for rule in parse_rules(declaration):
            spec = registry.get(rule.name)
            if spec is None:
                logger.debug(f"Skipping unsupported rule {rule.name!r} on {model}.{field_name}")
                continue

            try:
                attributes = spec.transform(field_name, dict(base_attributes), rule.parameter)
            except InvalidRuleParameter as e:
                logger.warning(f"Skipping rule {rule.name!r} on {model}.{field_name}: {e}")
                continue

            name = unique_method_name(
                spec.name_template.render(
                    model=model_name,
                    field=snake_case(field_name),
                    param=(rule.parameter or "").strip(),
                ),
                used_names,
            )

            cases.append(
                ValidationCase(
                    name=name,
                    field=field_name,
                    rule=rule.name,
                    attributes=attributes,
                    assertion=spec.assertion_template.render(field=python_literal(field_name)),
                    parameter=rule.parameter,
                )
            )

    return cases
