"""Tests for name conversions."""

import pytest

from crudgen.naming import (
    default_table_name,
    instance_name,
    method_name,
    snake_case,
    suite_class_name,
    suite_module_name,
    unique_method_name,
)


@pytest.mark.parametrize(
    "value,expected",
    [
        ("User", "user"),
        ("BlogPost", "blog_post"),
        ("HTTPClient", "http_client"),
        ("OAuth2Token", "o_auth2_token"),
        ("email_address", "email_address"),
        ("firstName", "first_name"),
        ("first-name", "first_name"),
    ],
)
def test_snake_case(value, expected):
    assert snake_case(value) == expected


def test_instance_name():
    assert instance_name("BlogPost") == "blog_post"


def test_default_table_name():
    assert default_table_name("BlogPost") == "blog_posts"


def test_suite_module_name():
    assert suite_module_name("BlogPost") == "test_blog_post.py"


def test_suite_class_name():
    assert suite_class_name("BlogPost") == "TestBlogPost"


@pytest.mark.parametrize(
    "value,expected",
    [
        ("test_user_email_must_be_unique", "test_user_email_must_be_unique"),
        ("test_user_user.email_must_be_unique", "test_user_user_email_must_be_unique"),
        ("test_user_first name_is_required", "test_user_first_name_is_required"),
        ("test_user_code_must_be_at_most_10!", "test_user_code_must_be_at_most_10"),
    ],
)
def test_method_name(value, expected):
    assert method_name(value) == expected


def test_unique_method_name_appends_counter():
    used: set[str] = set()

    assert unique_method_name("test_a.b", used) == "test_a_b"
    assert unique_method_name("test_a_b", used) == "test_a_b_2"
    assert unique_method_name("test_a b", used) == "test_a_b_3"
    assert used == {"test_a_b", "test_a_b_2", "test_a_b_3"}
