"""
Form validator.

Checks a nested value tree against a data schema by recursive descent over
the schema, walking the matching branch of the tree. Every field is
checked independently and the whole error set is returned in one pass, so
a re-rendered form can flag every invalid field at once.

Per field, checks run in a fixed order and stop at the first failure:

    presence -> type/coercion -> length bounds -> numeric bounds -> enum -> format
"""

import re
from typing import Any

from schema_form.codec.form_data import format_leaf, join_path
from schema_form.models.data_schema import DataSchema, PropertyKind, SchemaProperty
from schema_form.models.validation_result import FieldValidationError, ValidationResult
from schema_form.models.values import ErrorSet, NestedValue, PathSegment, is_empty
from schema_form.validation.formats import check_format

INTEGER_PATTERN = re.compile(r"^[+-]?\d+$")
NUMBER_PATTERN = re.compile(r"^[+-]?(\d+(\.\d*)?|\.\d+)([eE][+-]?\d+)?$")

# Submitted checkbox values that still mean "unchecked"
FALSE_STRINGS = frozenset({"false", "off", "0", ""})

# Returned by the per-kind checks when the field failed
_INVALID = object()


def coerce_boolean(value: Any) -> bool:
    """Presence semantics: anything submitted is true unless it spells false."""
    if isinstance(value, bool):
        return value
    if value is None:
        return False
    if isinstance(value, str):
        return value.strip().lower() not in FALSE_STRINGS
    return bool(value)


def validate(tree: dict[str, NestedValue] | None, schema: DataSchema) -> ErrorSet:
    """
    Validate a nested value tree and return its error set.

    Args:
        tree: Decoded submission (None is treated as an empty submission).
        schema: Compiled data schema.

    Returns:
        Mapping of field path -> message; empty when the tree is valid.
    """
    return validate_detailed(tree, schema).to_error_dict()


def validate_detailed(tree: dict[str, NestedValue] | None, schema: DataSchema) -> ValidationResult:
    """Validate and return the full result, including coerced data when valid."""
    return FormValidator(schema).validate(tree)


class FormValidator:
    """
    Validates value trees against one compiled data schema.

    Stateless apart from the schema, so one instance can serve any number
    of submissions.
    """

    def __init__(self, schema: DataSchema):
        self.schema = schema

    def validate(self, tree: dict[str, NestedValue] | None) -> ValidationResult:
        errors: list[FieldValidationError] = []
        coerced = self._check_object(self.schema, {} if tree is None else tree, [], errors)

        is_valid = len(errors) == 0
        return ValidationResult(
            is_valid=is_valid,
            errors=errors,
            validated_data=coerced if is_valid else None,
        )

    def _check_value(
        self,
        prop: SchemaProperty,
        value: NestedValue,
        path: list[PathSegment],
        errors: list[FieldValidationError],
    ) -> Any:
        if prop.kind is PropertyKind.OBJECT:
            return self._check_object(prop, value, path, errors)
        if prop.kind is PropertyKind.ARRAY:
            return self._check_array(prop, value, path, errors)
        if prop.kind is PropertyKind.BOOLEAN:
            return coerce_boolean(value)
        if prop.kind.is_numeric:
            return self._check_number(prop, value, path, errors)
        return self._check_string(prop, value, path, errors)

    def _check_object(self, prop, value, path, errors) -> Any:
        if not isinstance(value, dict):
            self._fail(errors, path, "type", "must be an object", value)
            return _INVALID

        coerced: dict[str, Any] = {}
        for name, child in (prop.properties or {}).items():
            child_path = path + [name]
            child_value = value.get(name)

            if is_empty(child_value):
                if prop.is_required(name):
                    self._fail(errors, child_path, "required", "required", child_value)
                elif child.kind is PropertyKind.BOOLEAN:
                    # Unchecked checkboxes are never submitted
                    coerced[name] = False
                continue

            result = self._check_value(child, child_value, child_path, errors)
            if result is not _INVALID:
                coerced[name] = result

        return coerced

    def _check_array(self, prop, value, path, errors) -> Any:
        if not isinstance(value, list):
            self._fail(errors, path, "type", "must be a list", value)
            return _INVALID

        coerced: list[Any] = []
        for index, element in enumerate(value):
            # Unfilled slots of primitive lists carry nothing to check
            if not prop.items.kind.is_container and is_empty(element):
                continue
            result = self._check_value(prop.items, element, path + [index], errors)
            if result is not _INVALID:
                coerced.append(result)
        return coerced

    def _check_string(self, prop, value, path, errors) -> Any:
        if not isinstance(value, str):
            self._fail(errors, path, "type", "must be a string", value)
            return _INVALID

        violation = _first_violation(prop, value, number=None)
        if violation is not None:
            self._fail(errors, path, violation[0], violation[1], value)
            return _INVALID
        return value

    def _check_number(self, prop, value, path, errors) -> Any:
        number = _parse_number(prop.kind, value)
        if number is None:
            message = "must be an integer" if prop.kind is PropertyKind.INTEGER else "must be a number"
            self._fail(errors, path, "type", message, value)
            return _INVALID

        violation = _first_violation(prop, format_leaf(value).strip(), number=number)
        if violation is not None:
            self._fail(errors, path, violation[0], violation[1], value)
            return _INVALID
        return number

    @staticmethod
    def _fail(errors, path, error_type: str, message: str, received: Any) -> None:
        errors.append(
            FieldValidationError(
                field_path=join_path(path) or "_root",
                error_type=error_type,
                message=message,
                received=received,
            )
        )


def _parse_number(kind: PropertyKind, value: Any) -> int | float | None:
    """Strict numeric parse; None means a type error."""
    if isinstance(value, bool):
        return None

    if kind is PropertyKind.INTEGER:
        if isinstance(value, int):
            return value
        if isinstance(value, float):
            return int(value) if value.is_integer() else None
        if isinstance(value, str) and INTEGER_PATTERN.match(value.strip()):
            return int(value.strip())
        return None

    if isinstance(value, int):
        return value
    if isinstance(value, float):
        return value if value == value and abs(value) != float("inf") else None
    if isinstance(value, str) and NUMBER_PATTERN.match(value.strip()):
        number = float(value.strip())
        return None if abs(number) == float("inf") else number
    return None


def _first_violation(
    prop: SchemaProperty, text: str, number: int | float | None
) -> tuple[str, str] | None:
    """First violated constraint as (error_type, message), or None."""
    if prop.kind is PropertyKind.STRING:
        if prop.min_length is not None and len(text) < prop.min_length:
            return "min_length", f"must be at least {prop.min_length} characters"
        if prop.max_length is not None and len(text) > prop.max_length:
            return "max_length", f"must be at most {prop.max_length} characters"

    if number is not None:
        if prop.minimum is not None and number < prop.minimum:
            return "minimum", f"must be at least {_format_bound(prop.minimum)}"
        if prop.maximum is not None and number > prop.maximum:
            return "maximum", f"must be at most {_format_bound(prop.maximum)}"

    if prop.enum and text not in prop.enum:
        return "enum", "must be one of: " + ", ".join(prop.enum)

    if not check_format(text, prop.format):
        return "format", f"invalid {prop.format.value} format"

    return None


def _format_bound(bound: int | float) -> str:
    if isinstance(bound, float) and bound.is_integer():
        return str(int(bound))
    return str(bound)
