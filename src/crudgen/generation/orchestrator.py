# src/crudgen/generation/orchestrator.py
"""Generation pipeline for a single model's test module."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

from crudgen.config import Config
from crudgen.exceptions import OutputExistsError
from crudgen.generation.output import OutputStore
from crudgen.generation.renderer import PytestRenderer
from crudgen.generation.suite import SuiteBuilder, SuiteDocument
from crudgen.models.base import ModelResolver
from crudgen.models.registry import create_resolver

logger = logging.getLogger(__name__)


class ModelTestGenerator:
    """Resolves a model, composes its test suite and writes it once.

    Pipeline:
        1. Resolve the ModelDescriptor (ModelNotFoundError if unknown)
        2. Refuse to touch an existing output file (OutputExistsError)
        3. Build the SuiteDocument
        4. Render it to pytest source
        5. Write the complete text in a single atomic write
    """

    def __init__(
        self,
        resolver: ModelResolver,
        store: OutputStore,
        builder: Optional[SuiteBuilder] = None,
        renderer: Optional[PytestRenderer] = None,
    ):
        """Initialize the generator.

        Args:
            resolver: Source of model metadata.
            store: Output file store.
            builder: Suite builder (default: SuiteBuilder()).
            renderer: Source renderer (default: PytestRenderer()).
        """
        self.resolver = resolver
        self.store = store
        self.builder = builder or SuiteBuilder()
        self.renderer = renderer or PytestRenderer()

    @classmethod
    def from_settings(cls, settings: Config) -> "ModelTestGenerator":
        """Wire a generator from configuration."""
        return cls(
            resolver=create_resolver(settings),
            store=OutputStore(settings.tests_path),
            renderer=PytestRenderer(
                support_module=settings.output.support_module,
                session_fixture=settings.output.session_fixture,
            ),
        )

    def output_path(self, model: str) -> Path:
        return self.store.path_for(model)

    def build(self, model: str) -> SuiteDocument:
        """Resolve a model and build its suite, checking the output path first.

        Raises:
            ModelNotFoundError: If the model cannot be resolved.
            OutputExistsError: If the model's test file already exists.
        """
        descriptor = self.resolver.resolve(model)

        path = self.output_path(model)
        if self.store.exists(path):
            raise OutputExistsError(model, path)

        document = self.builder.build(descriptor)
        logger.info(
            f"Composed {len(document.cases)} test(s) for {model}: "
            f"{len(document.crud_cases)} CRUD, {len(document.unique_cases)} unique, "
            f"{len(document.validation_cases)} validation"
        )
        return document

    def compose(self, model: str) -> str:
        """Return the rendered test module without writing it.

        Raises:
            ModelNotFoundError: If the model cannot be resolved.
            OutputExistsError: If the model's test file already exists.
        """
        return self.renderer.render(self.build(model))

    def generate(self, model: str) -> Path:
        """Generate and write the test module for a model.

        Args:
            model: Model class name.

        Returns:
            Path of the written file.

        Raises:
            ModelNotFoundError: If the model cannot be resolved.
            OutputExistsError: If the model's test file already exists.
            OSError: If the file cannot be written.
        """
        content = self.compose(model)
        path = self.output_path(model)
        try:
            self.store.write(path, content)
        except FileExistsError as e:
            # Created by someone else since build() checked
            raise OutputExistsError(model, path) from e
        return path
