"""Exceptions raised while generating a test suite."""

from __future__ import annotations

from pathlib import Path
from typing import Optional


class GenerationError(Exception):
    """Base exception for generation failures reported to the caller."""

    def __init__(self, message: str, original_error: Optional[str] = None):
        self.message = message
        self.original_error = original_error
        super().__init__(message)


class ModelNotFoundError(GenerationError):
    """Raised when a model name does not resolve to a known model."""

    def __init__(self, model: str, location: Optional[str] = None):
        self.model = model
        self.location = location
        message = f"Model {model} not found"
        if location:
            message += f" in {location}"
        super().__init__(message + "!")


class OutputExistsError(GenerationError):
    """Raised when the test file for a model is already present.

    Generation is write-once: an existing file is never overwritten.
    """

    def __init__(self, model: str, path: Path):
        self.model = model
        self.path = path
        super().__init__(f"Test file for {model} already exists at {path}!")


class MetadataIntrospectionError(GenerationError):
    """Raised when optional model metadata (the database schema) is unavailable.

    Callers recover from this locally; it never reaches the CLI.
    """

    pass


class ModelImportError(GenerationError):
    """Raised when the configured models module exists but fails to import."""

    pass
