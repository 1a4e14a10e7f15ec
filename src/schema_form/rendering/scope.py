"""
Scope resolution.

A Control names its data schema property with a scope path such as
``properties/organizer/properties/email``. Scopes are resolved once per
render into ScopeRef values, which carry everything the renderer needs:
the property, its required flag, and the field identity shared with the
codec (``organizer.email``).
"""

import re
from dataclasses import dataclass, replace

from schema_form.codec.form_data import join_path
from schema_form.constants import SCOPE_ITEMS, SCOPE_PREFIX, SCOPE_PROPERTIES
from schema_form.models.data_schema import DataSchema, SchemaProperty
from schema_form.models.layout import LayoutElement, iter_controls
from schema_form.models.values import PathSegment

_ID_UNSAFE = re.compile(r"[^A-Za-z0-9_]+")


class ScopeResolutionError(LookupError):
    """Raised when a scope does not name a property of the data schema."""

    def __init__(self, scope: str, reason: str):
        self.scope = scope
        self.reason = reason
        super().__init__(f"Cannot resolve scope {scope!r}: {reason}")


@dataclass(frozen=True)
class ScopeRef:
    """A scope resolved against a data schema."""

    scope: str
    name: str
    segments: tuple[PathSegment, ...]
    prop: SchemaProperty
    required: bool
    # Positions in segments that came from an "items" step
    item_positions: tuple[int, ...] = ()

    @property
    def field_path(self) -> str:
        """Submission key for this field, e.g. ``organizer.email``."""
        return join_path(self.segments)

    @property
    def element_id(self) -> str:
        """HTML id derived from the field path."""
        return "field-" + _ID_UNSAFE.sub("-", self.field_path).strip("-")

    def at_index(self, position: int, index: int) -> "ScopeRef":
        """The same field bound to list element ``index`` at an ``items`` position."""
        segments = list(self.segments)
        segments[position] = index
        return replace(self, segments=tuple(segments))


def resolve_scope(scope: str, schema: DataSchema) -> ScopeRef:
    """
    Resolve a scope path against a data schema.

    ``#/properties/title`` and ``properties/title`` are equivalent. An
    ``items`` segment steps into an array's element property and binds
    the control to element ``[0]``; the renderer rebinds it to every
    element present in a value tree (see ``ScopeRef.at_index``).

    Raises:
        ScopeResolutionError: If any segment does not resolve.
    """
    text = scope.strip()
    if text.startswith(SCOPE_PREFIX):
        text = text[len(SCOPE_PREFIX):]
    parts = text.split("/") if text else []

    node: SchemaProperty = schema
    segments: list[PathSegment] = []
    item_positions: list[int] = []
    name: str | None = None
    required = False

    i = 0
    while i < len(parts):
        part = parts[i]
        if part == SCOPE_PROPERTIES:
            if i + 1 >= len(parts):
                raise ScopeResolutionError(scope, "missing property name")
            child_name = parts[i + 1]
            child = node.child(child_name)
            if child is None:
                raise ScopeResolutionError(scope, f"no property '{child_name}'")
            required = node.is_required(child_name)
            node, name = child, child_name
            segments.append(child_name)
            i += 2
        elif part == SCOPE_ITEMS:
            if node.items is None:
                raise ScopeResolutionError(scope, "'items' on a non-array property")
            node = node.items
            item_positions.append(len(segments))
            segments.append(0)
            required = False
            i += 1
        else:
            raise ScopeResolutionError(scope, f"unexpected segment {part!r}")

    if name is None:
        raise ScopeResolutionError(scope, "scope names no property")

    return ScopeRef(
        scope=scope,
        name=name,
        segments=tuple(segments),
        prop=node,
        required=required,
        item_positions=tuple(item_positions),
    )


def resolve_layout_scopes(
    layout: LayoutElement, schema: DataSchema
) -> dict[str, ScopeRef | ScopeResolutionError]:
    """Resolve every Control scope in a layout, keyed by scope string."""
    resolved: dict[str, ScopeRef | ScopeResolutionError] = {}
    for control in iter_controls(layout):
        if control.scope in resolved:
            continue
        try:
            resolved[control.scope] = resolve_scope(control.scope, schema)
        except ScopeResolutionError as e:
            resolved[control.scope] = e
    return resolved
