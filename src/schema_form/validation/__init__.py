"""
Validation of nested value trees against compiled data schemas.
"""

from schema_form.validation.formats import FORMAT_VALIDATORS, check_format
from schema_form.validation.validator import (
    FormValidator,
    coerce_boolean,
    validate,
    validate_detailed,
)

__all__ = [
    "FORMAT_VALIDATORS",
    "FormValidator",
    "check_format",
    "coerce_boolean",
    "validate",
    "validate_detailed",
]
