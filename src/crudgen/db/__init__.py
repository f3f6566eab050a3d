"""Access to the host application's database schema."""

from crudgen.db.connection import Database
from crudgen.db.schema import SchemaInspector

__all__ = ["Database", "SchemaInspector"]
