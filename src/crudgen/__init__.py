"""Generate pytest suites for ORM models from their declared metadata."""

__version__ = "0.1.0"
