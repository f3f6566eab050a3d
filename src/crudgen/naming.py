"""Name conversions shared by the resolvers and the generators."""

import re

from crudgen.constants import TEST_CLASS_PREFIX, TEST_MODULE_PREFIX

# Boundaries between a lowercase letter or digit and an uppercase letter
# ("blogPost"), and inside acronyms before a capitalized word ("HTTPClient").
_CAMEL_BOUNDARY = re.compile(r"(?<=[a-z0-9])(?=[A-Z])|(?<=[A-Z])(?=[A-Z][a-z])")
_SEPARATORS = re.compile(r"[\s\-]+")


def snake_case(value: str) -> str:
    """Convert a model or field name to snake_case.

    Examples:
        >>> snake_case("BlogPost")
        'blog_post'
        >>> snake_case("HTTPClient")
        'http_client'
        >>> snake_case("email_address")
        'email_address'
    """
    value = _SEPARATORS.sub("_", value.strip())
    return _CAMEL_BOUNDARY.sub("_", value).lower()


def instance_name(model: str) -> str:
    """Variable name used for a model instance in generated code."""
    return snake_case(model)


def default_table_name(model: str) -> str:
    """Table name assumed when a model does not declare one."""
    return f"{snake_case(model)}s"


def suite_module_name(model: str) -> str:
    """File name of the generated test module (e.g. test_blog_post.py)."""
    return f"{TEST_MODULE_PREFIX}{snake_case(model)}.py"


def suite_class_name(model: str) -> str:
    """Class name of the generated test class (e.g. TestBlogPost)."""
    return f"{TEST_CLASS_PREFIX}{model}"


_NON_IDENTIFIER = re.compile(r"\W+")


def method_name(name: str) -> str:
    """Fold a rendered test name into a valid identifier.

    Runs of non-word characters become a single underscore:
    "test_user_user.email_must_be_unique" -> "test_user_user_email_must_be_unique".
    """
    return _NON_IDENTIFIER.sub("_", name).strip("_")


def unique_method_name(name: str, used: set[str]) -> str:
    """Identifier for name that is not in used, then record it there.

    Clashing names get a numeric suffix (_2, _3, ...) so no generated
    method shadows another.
    """
    base = method_name(name)
    candidate, suffix = base, 2
    while candidate in used:
        candidate = f"{base}_{suffix}"
        suffix += 1
    used.add(candidate)
    return candidate
