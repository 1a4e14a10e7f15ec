"""
Constants for schema-form.

Centralizes the closed set of kinds, the format aliases, the scope grammar,
plus the filenames used by form bundle directories.
"""

import re

# Valid property name pattern (alphanumeric + underscore).
# Property names double as submission key segments, so they must be
# expressible in the flat key grammar.
VALID_FIELD_NAME = re.compile(r"^[a-zA-Z_][a-zA-Z0-9_]*$")

SUPPORTED_KINDS = ("string", "integer", "number", "boolean", "array", "object")

# Spellings seen in hand-written schemas, mapped onto the supported set
FORMAT_ALIASES = {
    "date-time": "datetime",
    "datetime-local": "datetime",
    "url": "uri",
}

# Form bundle filenames
SCHEMA_FILENAME = "schema.json"
UI_SCHEMA_FILENAME = "uischema.json"
EXAMPLES_FILENAME = "data-examples.json"
FAILURES_FILENAME = "data-failures.json"

# Scope grammar
SCOPE_PREFIX = "#/"
SCOPE_PROPERTIES = "properties"
SCOPE_ITEMS = "items"

# Largest list index accepted from a submission key; larger indices are
# treated as malformed keys rather than allocating huge placeholder lists
MAX_LIST_INDEX = 999
