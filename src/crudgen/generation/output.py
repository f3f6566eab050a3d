"""Write-once storage of generated test modules.

A test module is written to a temporary file next to its destination and
then hard-linked into place. An interrupted write never leaves a partial
file at the output path, and a file that already exists there is never
replaced.
"""

import logging
import os
import tempfile
from pathlib import Path

from crudgen.naming import suite_module_name

logger = logging.getLogger(__name__)


class OutputStore:
    """File-system access for generated test modules."""

    def __init__(self, tests_dir: Path):
        """Initialize the store.

        Args:
            tests_dir: Directory generated modules are written to.
        """
        self.tests_dir = tests_dir

    def path_for(self, model: str) -> Path:
        """Deterministic output path of a model's test module."""
        return self.tests_dir / suite_module_name(model)

    def exists(self, path: Path) -> bool:
        return path.exists()

    def write(self, path: Path, content: str) -> None:
        """Atomically create path with content, creating parent directories.

        Args:
            path: Destination file.
            content: Complete file content.

        Raises:
            FileExistsError: If path already exists.
            OSError: If the directory or file cannot be written.
        """
        path.parent.mkdir(parents=True, exist_ok=True)

        fd, tmp_name = tempfile.mkstemp(dir=path.parent, prefix=f".{path.name}.", suffix=".tmp")
        tmp_path = Path(tmp_name)
        try:
            with os.fdopen(fd, "w", encoding="utf-8", newline="\n") as f:
                f.write(content)
            os.link(tmp_path, path)
        finally:
            tmp_path.unlink(missing_ok=True)

        logger.info(f"Wrote {len(content)} characters to {path}")
