"""
Schema loader.

Compiles the two declarative documents (data schema and layout) into
immutable model trees. Structural problems are collected in one pass and
reported together through SchemaLoadError, so an operator fixing a broken
schema sees every issue at once.

Layout scopes are not checked here. A scope that does not resolve is
rendered as an inline marker at render time instead of failing the page.
"""

import json
import logging
from collections.abc import Mapping
from typing import Any, NamedTuple

from pydantic import TypeAdapter, ValidationError

from schema_form.constants import SUPPORTED_KINDS, VALID_FIELD_NAME
from schema_form.models.data_schema import (
    DataSchema,
    PropertyKind,
    SchemaProperty,
    StringFormat,
)
from schema_form.models.layout import LayoutElement

logger = logging.getLogger("schema-form.compiler")

_LAYOUT_ADAPTER: TypeAdapter = TypeAdapter(LayoutElement)


class SchemaLoadError(Exception):
    """Raised when a data schema or layout document cannot be compiled."""

    def __init__(self, message: str, issues: list[str] | None = None):
        self.message = message
        self.issues = list(issues or [])
        detail = message
        if self.issues:
            detail += ":\n" + "\n".join(f"  - {issue}" for issue in self.issues)
        super().__init__(detail)


class CompiledForm(NamedTuple):
    """A data schema paired with the layout that presents it."""

    data_schema: DataSchema
    layout: LayoutElement


def load(raw_data_schema: str | Mapping, raw_layout: str | Mapping) -> CompiledForm:
    """
    Compile a data schema document and a layout document.

    Args:
        raw_data_schema: JSON text (or an already-parsed mapping) of the data schema.
        raw_layout: JSON text (or an already-parsed mapping) of the layout.

    Returns:
        CompiledForm, which unpacks as ``(data_schema, layout)``.

    Raises:
        SchemaLoadError: If either document is malformed.
    """
    data_schema = load_data_schema(raw_data_schema)
    layout = load_layout(raw_layout)
    return CompiledForm(data_schema=data_schema, layout=layout)


def load_data_schema(raw: str | Mapping) -> DataSchema:
    """Compile a data schema document into a DataSchema tree."""
    doc = _parse_document(raw, "data schema")
    _ensure_acyclic(doc, "data schema")

    issues: list[str] = []
    root = _compile_property(doc, "#", issues, model=DataSchema)
    if issues or root is None:
        raise SchemaLoadError("Invalid data schema", issues)

    logger.debug("Compiled data schema with %d top-level properties", len(root.properties or {}))
    return root


def load_layout(raw: str | Mapping) -> LayoutElement:
    """Compile a layout document into a layout element tree."""
    doc = _parse_document(raw, "layout")
    _ensure_acyclic(doc, "layout")

    try:
        return _LAYOUT_ADAPTER.validate_python(doc)
    except ValidationError as e:
        issues = []
        for error in e.errors():
            location = "/".join(str(part) for part in error["loc"]) or "#"
            issues.append(f"{location}: {error['msg']}")
        raise SchemaLoadError("Invalid layout", issues) from e


def _parse_document(raw: str | bytes | Mapping, what: str) -> Any:
    """Parse JSON text; mappings are passed through untouched."""
    if isinstance(raw, (str, bytes, bytearray)):
        try:
            return json.loads(raw)
        except json.JSONDecodeError as e:
            raise SchemaLoadError(f"Malformed JSON in {what}: {e}") from e
    return raw


def _ensure_acyclic(doc: Any, what: str) -> None:
    """Reject documents whose containers (transitively) contain themselves."""
    issues: list[str] = []
    _find_cycles(doc, "#", set(), issues)
    if issues:
        raise SchemaLoadError(f"Cyclic {what}", issues)


def _find_cycles(node: Any, path: str, ancestors: set[int], issues: list[str]) -> None:
    if isinstance(node, Mapping):
        children = node.items()
    elif isinstance(node, list):
        children = enumerate(node)
    else:
        return

    if id(node) in ancestors:
        issues.append(f"{path}: cyclic definition")
        return

    ancestors.add(id(node))
    for key, child in children:
        _find_cycles(child, f"{path}/{key}", ancestors, issues)
    ancestors.discard(id(node))


def _compile_property(
    raw: Any,
    path: str,
    issues: list[str],
    model: type[SchemaProperty] = SchemaProperty,
) -> SchemaProperty | None:
    """
    Compile one data schema node.

    Appends a message to ``issues`` for every problem found (children
    included) and returns None if this node or any descendant is invalid.
    """
    if not isinstance(raw, Mapping):
        issues.append(f"{path}: must be an object")
        return None

    kind_name = raw.get("type")
    if kind_name is None:
        issues.append(f"{path}: missing 'type'")
        return None
    if kind_name not in SUPPORTED_KINDS:
        issues.append(f"{path}: unknown type {kind_name!r}")
        return None

    kind = PropertyKind(kind_name)
    if model is DataSchema and kind is not PropertyKind.OBJECT:
        issues.append(f"{path}: root data schema must be of type 'object'")
        return None

    start = len(issues)
    fields: dict[str, Any] = {"kind": kind}

    # Display hints
    for key in ("title", "description"):
        value = raw.get(key)
        if value is None:
            continue
        if isinstance(value, str):
            fields[key] = value
        else:
            issues.append(f"{path}: '{key}' must be a string")

    examples = raw.get("examples")
    if examples is not None:
        if isinstance(examples, list):
            fields["examples"] = tuple(str(example) for example in examples)
        else:
            issues.append(f"{path}: 'examples' must be an array")

    if "default" in raw:
        fields["default"] = raw["default"]

    # Format
    format_name = raw.get("format")
    if format_name is not None:
        if kind is not PropertyKind.STRING:
            issues.append(f"{path}: 'format' is only allowed on string properties")
        elif not isinstance(format_name, str):
            issues.append(f"{path}: 'format' must be a string")
        else:
            try:
                fields["format"] = StringFormat.parse(format_name)
            except ValueError:
                issues.append(f"{path}: unknown format {format_name!r}")

    # Constraints
    min_length = _length_constraint(raw, "minLength", kind, path, issues)
    max_length = _length_constraint(raw, "maxLength", kind, path, issues)
    if min_length is not None and max_length is not None and min_length > max_length:
        issues.append(f"{path}: 'minLength' is greater than 'maxLength'")
    fields["min_length"] = min_length
    fields["max_length"] = max_length

    minimum = _numeric_constraint(raw, "minimum", kind, path, issues)
    maximum = _numeric_constraint(raw, "maximum", kind, path, issues)
    if minimum is not None and maximum is not None and minimum > maximum:
        issues.append(f"{path}: 'minimum' is greater than 'maximum'")
    fields["minimum"] = minimum
    fields["maximum"] = maximum

    enum = raw.get("enum")
    if enum is not None:
        if kind.is_container:
            issues.append(f"{path}: 'enum' is not allowed on {kind.value} properties")
        elif (
            not isinstance(enum, list)
            or not enum
            or not all(isinstance(option, str) for option in enum)
        ):
            issues.append(f"{path}: 'enum' must be a non-empty array of strings")
        else:
            fields["enum"] = tuple(enum)

    # Nesting
    if kind is PropertyKind.OBJECT:
        properties, required = _compile_object(raw, path, issues)
        fields["properties"] = properties
        fields["required_names"] = required
    elif kind is PropertyKind.ARRAY:
        if "items" not in raw:
            issues.append(f"{path}: array property must declare 'items'")
        else:
            fields["items"] = _compile_property(raw["items"], f"{path}/items", issues)

    if len(issues) > start:
        return None

    try:
        return model(**fields)
    except ValidationError as e:
        issues.extend(f"{path}: {error['msg']}" for error in e.errors())
        return None


def _compile_object(
    raw: Mapping, path: str, issues: list[str]
) -> tuple[dict[str, SchemaProperty], frozenset[str]]:
    raw_properties = raw.get("properties", {})
    properties: dict[str, SchemaProperty] = {}

    if not isinstance(raw_properties, Mapping):
        issues.append(f"{path}: 'properties' must be an object")
        raw_properties = {}

    for name, raw_child in raw_properties.items():
        child_path = f"{path}/properties/{name}"
        if not isinstance(name, str) or not VALID_FIELD_NAME.match(name):
            issues.append(f"{child_path}: invalid property name")
            continue
        child = _compile_property(raw_child, child_path, issues)
        if child is not None:
            properties[name] = child

    raw_required = raw.get("required", [])
    if not isinstance(raw_required, list):
        issues.append(f"{path}: 'required' must be an array")
        return properties, frozenset()

    required: set[str] = set()
    for name in raw_required:
        if not isinstance(name, str):
            issues.append(f"{path}: 'required' entries must be strings")
        elif name not in raw_properties:
            issues.append(f"{path}: required field '{name}' not in properties")
        else:
            required.add(name)

    return properties, frozenset(required)


def _length_constraint(
    raw: Mapping, key: str, kind: PropertyKind, path: str, issues: list[str]
) -> int | None:
    value = raw.get(key)
    if value is None:
        return None
    if kind is not PropertyKind.STRING:
        issues.append(f"{path}: '{key}' is only allowed on string properties")
        return None
    if isinstance(value, bool) or not isinstance(value, int) or value < 0:
        issues.append(f"{path}: '{key}' must be a non-negative integer")
        return None
    return value


def _numeric_constraint(
    raw: Mapping, key: str, kind: PropertyKind, path: str, issues: list[str]
) -> int | float | None:
    value = raw.get(key)
    if value is None:
        return None
    if not kind.is_numeric:
        issues.append(f"{path}: '{key}' is only allowed on integer and number properties")
        return None
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        issues.append(f"{path}: '{key}' must be a number")
        return None
    return value
