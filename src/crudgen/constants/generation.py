"""Sample values and literals used when generating test suites.

These values end up verbatim in generated test files. Changing any of them
changes every generated suite, so treat them as part of the output format.
"""

# =============================================================================
# Valid Sample Values
# =============================================================================
# Values assigned to fillable fields in the "happy path" attribute set. The
# field name decides which one is used (see generation/attributes.py).

SAMPLE_EMAIL = "test@example.com"
SAMPLE_PASSWORD = "password"
NAME_PREFIX = "Test "
SLUG_PREFIX = "test-"
GENERIC_PREFIX = "Sample "

# =============================================================================
# Update Values
# =============================================================================
# The update test overwrites every fillable field with a value that differs
# from its sample value.

UPDATED_EMAIL = "updated@example.com"
UPDATED_PASSWORD = "newpassword"
UPDATED_PREFIX = "Updated "

# Only a field with exactly this name is compared through the password hash
# helpers; every other field is compared by equality.
PASSWORD_FIELD = "password"

# =============================================================================
# Adversarial Values
# =============================================================================
# Values that violate a single validation rule.

INVALID_EMAIL = "invalid-email"
INVALID_NUMBER = "not-a-number"
INVALID_INTEGER = "12.34"
INVALID_CHOICE = "invalid-value"
DISALLOWED_FALLBACK = "disallowed"
INVALID_DATE = "invalid-date"
INVALID_URL = "not-a-url"
FILLER_CHARACTER = "a"

# Tried in order against a regex rule; the first one re.search does not
# match is used. REGEX_FALLBACK is used when the pattern cannot be
# evaluated with Python's re module.
REGEX_CANDIDATES = ("123", "!@#$%", "abc", "ABC", "a b", "")
REGEX_FALLBACK = "123"
