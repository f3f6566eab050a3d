"""Shared pytest fixtures for all tests."""

import textwrap
from pathlib import Path

import pytest

from crudgen.config import load_settings
from crudgen.exceptions import ModelNotFoundError
from crudgen.models.base import ModelResolver
from crudgen.models.descriptor import ModelDescriptor

USER_MODELS = '''
"""Models of the sample application."""

from sqlalchemy import Column, Integer, String

from app.db import Base


class SoftDeleteMixin:
    deleted_at = None


class User(Base):
    __tablename__ = "users"
    __fillable__ = ["name", "email", "password"]
    __unique__ = ["email"]
    __rules__ = {
        "name": "required|max:255",
        "email": "required|email|max:100",
    }

    id = Column(Integer, primary_key=True)
    name = Column(String(255))
    email = Column(String(100), unique=True)
    password = Column(String(255))


class Post(Base, SoftDeleteMixin):
    __fillable__ = ["title", "slug", "body"]
'''


class DictResolver(ModelResolver):
    """Resolver serving descriptors from a dict, for pipeline tests."""

    def __init__(self, descriptors: dict[str, ModelDescriptor]):
        super().__init__()
        self.descriptors = descriptors
        self.calls: list[str] = []

    @property
    def source_name(self) -> str:
        return "memory"

    def resolve(self, name: str) -> ModelDescriptor:
        self.calls.append(name)
        if name not in self.descriptors:
            raise ModelNotFoundError(name, self.source_name)
        return self.descriptors[name]


@pytest.fixture
def clear_settings_cache():
    """Clear the load_settings cache before and after each test."""
    load_settings.cache_clear()
    yield
    load_settings.cache_clear()


@pytest.fixture
def project_root(tmp_path: Path) -> Path:
    """Empty host application root."""
    root = tmp_path / "project"
    root.mkdir()
    return root


@pytest.fixture
def write_source(project_root: Path):
    """Write a dedented source file below the project root and return its path."""

    def _write(relative: str, content: str) -> Path:
        path = project_root / relative
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(textwrap.dedent(content))
        return path

    return _write


@pytest.fixture
def user_models(write_source) -> Path:
    """The sample app/models.py module."""
    return write_source("app/models.py", USER_MODELS)


@pytest.fixture
def user_descriptor() -> ModelDescriptor:
    """Plain user model without unique fields, rules or soft deletes."""
    return ModelDescriptor.create(
        name="User",
        module="app.models",
        fillable=["name", "email", "password"],
    )


@pytest.fixture
def dict_resolver():
    """Factory for DictResolver instances."""
    return DictResolver
