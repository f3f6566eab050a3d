"""Tests for ModelDescriptor and rule normalization."""

import logging

import pytest

from crudgen.models.descriptor import ModelDescriptor, normalize_rules


class TestModelDescriptor:
    def test_default_table_name(self):
        assert ModelDescriptor(name="BlogPost", module="app.models").table_name == "blog_posts"

    def test_explicit_table_name(self):
        descriptor = ModelDescriptor(name="Person", module="app.models", table_name="people")

        assert descriptor.table_name == "people"

    def test_is_frozen(self):
        descriptor = ModelDescriptor(name="User", module="app.models")

        with pytest.raises(AttributeError):
            descriptor.name = "Other"

    def test_create_deduplicates_fields(self):
        descriptor = ModelDescriptor.create(
            name="User", module="app.models", fillable=["email", "name", "email"]
        )

        assert descriptor.fillable == ("email", "name")

    def test_create_accepts_single_string(self):
        descriptor = ModelDescriptor.create(name="User", module="app.models", unique="email")

        assert descriptor.unique == ("email",)

    def test_create_drops_invalid_fields(self, caplog):
        with caplog.at_level(logging.WARNING):
            descriptor = ModelDescriptor.create(
                name="User", module="app.models", fillable=["email", None, 7, ""]
            )

        assert descriptor.fillable == ("email",)
        assert "Ignoring invalid fillable field None on User" in caplog.text

    def test_create_defaults(self):
        descriptor = ModelDescriptor.create(name="User", module="app.models")

        assert descriptor.fillable == ()
        assert descriptor.unique == ()
        assert descriptor.rules == {}
        assert descriptor.soft_delete is False
        assert descriptor.table_name == "users"


class TestNormalizeRules:
    def test_keeps_strings_and_lists(self):
        rules = normalize_rules({"email": "required|email", "code": ("required", "min:2")})

        assert rules == {"email": "required|email", "code": ["required", "min:2"]}

    def test_preserves_order(self):
        rules = normalize_rules({"b": "required", "a": "required"})

        assert list(rules) == ["b", "a"]

    @pytest.mark.parametrize("rules", [None, {}, []])
    def test_empty(self, rules):
        assert normalize_rules(rules) == {}

    def test_non_mapping(self, caplog):
        with caplog.at_level(logging.WARNING):
            assert normalize_rules(["required"], "User") == {}

        assert "expected a mapping" in caplog.text

    def test_drops_invalid_entries(self, caplog):
        with caplog.at_level(logging.WARNING):
            rules = normalize_rules(
                {"age": 5, 3: "required", "tags": ["a", 1], "ok": "url"}, "User"
            )

        assert rules == {"ok": "url"}
        assert "Ignoring rules for User.age" in caplog.text
