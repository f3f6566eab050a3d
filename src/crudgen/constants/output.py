"""Settings of the generated test module.

The generated file targets a SQLAlchemy-backed application tested with
pytest. Helpers that depend on the host application (password hashing,
database assertions, the validator) are imported from the host's support
module, see SUPPORT_HELPERS.
"""

# Names the generated module imports from the configured support module.
SUPPORT_HELPERS = (
    "assert_database_count",
    "assert_database_missing",
    "assert_soft_deleted",
    "check_password",
    "make_password",
    "validate",
)

# Exception raised by the session when a unique constraint is violated.
INTEGRITY_ERROR_IMPORT = "from sqlalchemy.exc import IntegrityError"

# Four spaces, as written by the host's formatter.
INDENT = "    "

# Prefixes of the generated module and class names.
TEST_MODULE_PREFIX = "test_"
TEST_CLASS_PREFIX = "Test"
