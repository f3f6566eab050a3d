"""Plausible valid sample values for fillable fields."""

from typing import Iterable

from crudgen.constants import (
    GENERIC_PREFIX,
    NAME_PREFIX,
    SAMPLE_EMAIL,
    SAMPLE_PASSWORD,
    SLUG_PREFIX,
)

AttributeSet = dict[str, str]


def sample_value(field: str) -> str:
    """Sample value for one field, chosen from its name.

    The first matching rule wins: name/title, email, password, slug,
    then a generic placeholder.
    """
    if "name" in field or "title" in field:
        # Only the first letter changes: "first_name" -> "First_name"
        return NAME_PREFIX + field[:1].upper() + field[1:]
    if "email" in field:
        return SAMPLE_EMAIL
    if "password" in field:
        return SAMPLE_PASSWORD
    if "slug" in field:
        return SLUG_PREFIX + field
    return GENERIC_PREFIX + field


def synthesize_attributes(fields: Iterable[str]) -> AttributeSet:
    """Build a valid attribute set for the given fields.

    Args:
        fields: Field names in declaration order.

    Returns:
        Dict mapping every field to its sample value, in input order.
    """
    return {field: sample_value(field) for field in fields}
