"""
Data models for schema-form.

This module contains Pydantic models for:
- The data schema tree (kinds, formats, constraints, nesting)
- The layout tree (layouts, groups, controls, labels)
- Validation results
"""

from schema_form.models.data_schema import (
    DataSchema,
    PropertyKind,
    SchemaProperty,
    StringFormat,
)
from schema_form.models.layout import (
    Control,
    ControlOptions,
    Group,
    HorizontalLayout,
    Label,
    LayoutElement,
    VerticalLayout,
    iter_controls,
)
from schema_form.models.validation_result import (
    FieldValidationError,
    ValidationResult,
)
from schema_form.models.values import (
    ErrorSet,
    NestedValue,
    PathSegment,
    ValueTree,
)

__all__ = [
    # Data schema
    "DataSchema",
    "PropertyKind",
    "SchemaProperty",
    "StringFormat",
    # Layout
    "Control",
    "ControlOptions",
    "Group",
    "HorizontalLayout",
    "Label",
    "LayoutElement",
    "VerticalLayout",
    "iter_controls",
    # Values
    "ErrorSet",
    "NestedValue",
    "PathSegment",
    "ValueTree",
    # Validation
    "ValidationResult",
    "FieldValidationError",
]
