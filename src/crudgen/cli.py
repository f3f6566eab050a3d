"""crudgen - generate a pytest suite for a model.

Usage:
    crudgen User

Configuration is read from crudgen.ini in the project root
(CRUDGEN_PROJECT_ROOT, default: the current directory).
"""

import logging
import os

import typer
from rich.console import Console

from crudgen.config import ConfigError, load_settings
from crudgen.exceptions import ModelImportError, ModelNotFoundError, OutputExistsError
from crudgen.generation.orchestrator import ModelTestGenerator

LOG_FORMAT = "%(asctime)s %(levelname)-8s %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

app = typer.Typer(
    help="Generate CRUD, uniqueness and validation tests for a model",
    add_completion=False,
)
console = Console()
logger = logging.getLogger(__name__)


def _configure_logging() -> None:
    level_name = os.getenv("CRUDGEN_LOG_LEVEL", "WARNING").upper()
    logging.basicConfig(
        format=LOG_FORMAT,
        datefmt=DATE_FORMAT,
        level=getattr(logging, level_name, logging.WARNING),
    )


@app.command()
def generate(
    model: str = typer.Argument(..., help="Model class name, e.g. User"),
):
    """
    Generate a test file for a model.

    The file is written to the configured tests directory as
    test_<model>.py and is never overwritten once it exists.
    """
    _configure_logging()
    console.print(f"[cyan]Generating test file for[/cyan] {model}...", highlight=False)

    try:
        settings = load_settings()
        generator = ModelTestGenerator.from_settings(settings)
        path = generator.generate(model)
    except ModelNotFoundError as e:
        console.print(e.message, style="red", markup=False)
        return
    except OutputExistsError as e:
        console.print(e.message, style="yellow", markup=False)
        return
    except ModelImportError as e:
        console.print(e.message, style="red", markup=False)
        raise typer.Exit(1)
    except ConfigError as e:
        console.print(f"Configuration error: {e}", style="red", markup=False)
        raise typer.Exit(1)
    except OSError as e:
        logger.error(f"Failed to write test file for {model}: {e}")
        console.print(f"Could not write test file: {e}", style="red", markup=False)
        raise typer.Exit(1)

    console.print("[green]✓[/green] Test file created successfully at:", path, highlight=False)


def main() -> None:
    app()
