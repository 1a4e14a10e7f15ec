"""
Form renderer.

Draws a layout tree as HTML form markup. The walk is a deterministic
pre-order traversal and is identical whether or not a value tree and an
error set are supplied; those add pre-filled values and inline messages
to the controls. A control bound through ``items`` is drawn once per list
element present in the value tree (once, for element [0], when there are
none), so every submitted element keeps its value and its error.

Every control's ``name`` is its field path in submission-key notation, the
same identity the codec decodes and the validator reports errors under.
"""

import logging
from dataclasses import dataclass
from html import escape

from schema_form.codec.form_data import format_leaf, lookup
from schema_form.config import get_config
from schema_form.models.data_schema import DataSchema, PropertyKind, StringFormat
from schema_form.models.layout import (
    Control,
    Group,
    HorizontalLayout,
    Label,
    LayoutElement,
    VerticalLayout,
)
from schema_form.models.values import ErrorSet, NestedValue, ValueTree
from schema_form.rendering.scope import ScopeRef, ScopeResolutionError, resolve_layout_scopes
from schema_form.rendering.widgets import WidgetKind, effective_format, select_widget
from schema_form.validation.validator import coerce_boolean

logger = logging.getLogger("schema-form.rendering")

_INDENT = "  "

_DATE_TIME_INPUT_TYPES = {
    WidgetKind.DATE: "date",
    WidgetKind.TIME: "time",
    WidgetKind.DATETIME: "datetime-local",
}

_TEXT_INPUT_TYPES = {
    StringFormat.EMAIL: "email",
    StringFormat.URI: "url",
}


@dataclass
class _RenderContext:
    """Per-call state threaded through the walk."""

    scopes: dict[str, ScopeRef | ScopeResolutionError]
    values: ValueTree | None
    errors: ErrorSet
    lines: list[str]


def _element_refs(ref: ScopeRef, values: ValueTree | None) -> list[ScopeRef]:
    """Bind ``ref`` to each list element present in ``values``, per ``items`` step."""
    refs = [ref]
    for position in ref.item_positions:
        expanded = []
        for candidate in refs:
            elements = lookup(values, candidate.segments[:position])
            count = len(elements) if isinstance(elements, list) and elements else 1
            expanded.extend(candidate.at_index(position, index) for index in range(count))
        refs = expanded
    return refs


def _attrs(*pairs: tuple[str, object]) -> str:
    """Render attributes in the given order; True is a bare attribute, None/False are dropped."""
    parts = []
    for name, value in pairs:
        if value is None or value is False:
            continue
        if value is True:
            parts.append(f" {name}")
        else:
            parts.append(f' {name}="{escape(str(value))}"')
    return "".join(parts)


class FormRenderer:
    """
    Renders layout trees against a data schema.

    Usage:
        renderer = FormRenderer()

        # First visit
        html = renderer.render(layout, schema)

        # After an invalid submission
        html = renderer.render(layout, schema, values=tree, errors=error_set)
    """

    def __init__(
        self,
        long_text_threshold: int | None = None,
        required_marker: str | None = None,
    ):
        """
        Initialize the renderer.

        Args:
            long_text_threshold: maxLength above which strings render as text
                areas. If None, uses config.long_text_threshold.
            required_marker: Text appended to labels of required fields. If
                None, uses config.required_marker.
        """
        config = get_config()
        self.long_text_threshold = (
            config.long_text_threshold if long_text_threshold is None else long_text_threshold
        )
        self.required_marker = (
            config.required_marker if required_marker is None else required_marker
        )

    def render(
        self,
        layout: LayoutElement,
        schema: DataSchema,
        values: ValueTree | None = None,
        errors: ErrorSet | None = None,
    ) -> str:
        """
        Render a layout as form markup.

        Args:
            layout: Compiled layout tree.
            schema: Compiled data schema the layout's scopes point into.
            values: Nested value tree to pre-fill from. None means a first
                render, where schema defaults are used instead.
            errors: Error set from validation; messages are shown next to
                the matching controls.

        Returns:
            HTML markup (without the surrounding <form> element).
        """
        ctx = _RenderContext(
            scopes=resolve_layout_scopes(layout, schema),
            values=values,
            errors=errors or {},
            lines=['<div class="ui-schema-form">'],
        )
        self._render_element(layout, ctx, 1)
        ctx.lines.append("</div>")
        return "\n".join(ctx.lines) + "\n"

    def _render_element(self, element: LayoutElement, ctx: _RenderContext, depth: int) -> None:
        indent = _INDENT * depth
        lines = ctx.lines

        if isinstance(element, VerticalLayout):
            lines.append(f'{indent}<div class="vertical-layout">')
            for child in element.elements:
                self._render_element(child, ctx, depth + 1)
            lines.append(f"{indent}</div>")

        elif isinstance(element, HorizontalLayout):
            lines.append(f'{indent}<div class="horizontal-layout">')
            for child in element.elements:
                lines.append(f'{indent}{_INDENT}<div class="horizontal-item">')
                self._render_element(child, ctx, depth + 2)
                lines.append(f"{indent}{_INDENT}</div>")
            lines.append(f"{indent}</div>")

        elif isinstance(element, Group):
            lines.append(f'{indent}<fieldset class="form-group-section">')
            if element.title:
                lines.append(f"{indent}{_INDENT}<legend>{escape(element.title)}</legend>")
            for child in element.elements:
                self._render_element(child, ctx, depth + 1)
            lines.append(f"{indent}</fieldset>")

        elif isinstance(element, Label):
            if element.display_text:
                lines.append(f'{indent}<h4 class="ui-label">{escape(element.display_text)}</h4>')

        elif isinstance(element, Control):
            self._render_control(element, ctx, depth)

    def _render_control(self, control: Control, ctx: _RenderContext, depth: int) -> None:
        indent = _INDENT * depth
        inner = indent + _INDENT
        lines = ctx.lines

        ref = ctx.scopes[control.scope]
        if isinstance(ref, ScopeResolutionError):
            logger.debug("Rendering unresolved field marker: %s", ref)
            lines.append(f'{indent}<div class="form-group unresolved-field">')
            lines.append(
                f'{inner}<p class="unresolved-field">Unresolved field: {escape(control.scope)}</p>'
            )
            lines.append(f"{indent}</div>")
            return

        for element_ref in _element_refs(ref, ctx.values):
            self._render_field(control, element_ref, ctx, depth)

    def _render_field(self, control: Control, ref: ScopeRef, ctx: _RenderContext, depth: int) -> None:
        indent = _INDENT * depth
        inner = indent + _INDENT
        lines = ctx.lines

        prop = ref.prop
        label = control.label or prop.title or ref.name
        description = control.description or prop.description
        error = ctx.errors.get(ref.field_path)

        css_class = "form-group has-error" if error else "form-group"
        lines.append(f'{indent}<div class="{css_class}">')

        if control.options.show_label:
            marker = self.required_marker if ref.required else ""
            lines.append(
                f'{inner}<label for="{ref.element_id}">{escape(label)}{escape(marker)}</label>'
            )
        if description:
            lines.append(f'{inner}<p class="field-description">{escape(description)}</p>')

        widget = select_widget(
            prop.kind,
            prop.format,
            prop.has_enum,
            options=control.options,
            max_length=prop.max_length,
            long_text_threshold=self.long_text_threshold,
        )
        value = self._current_value(ref, ctx)
        self._render_widget(widget, control, ref, label, value, bool(error), lines, inner)

        if error:
            lines.append(
                f'{inner}<span class="field-error" id="{ref.element_id}-error">{escape(error)}</span>'
            )
        lines.append(f"{indent}</div>")

    @staticmethod
    def _current_value(ref: ScopeRef, ctx: _RenderContext) -> NestedValue | None:
        if ctx.values is None:
            return ref.prop.default
        return lookup(ctx.values, ref.segments)

    def _render_widget(
        self,
        widget: WidgetKind,
        control: Control,
        ref: ScopeRef,
        label: str,
        value: NestedValue | None,
        has_error: bool,
        lines: list[str],
        indent: str,
    ) -> None:
        prop = ref.prop
        options = control.options
        text = format_leaf(value) if value is not None and not isinstance(value, (list, dict)) else None
        placeholder = options.placeholder or (prop.examples[0] if prop.examples else None)
        common = (
            ("id", ref.element_id),
            ("name", ref.field_path),
            ("required", ref.required),
            ("aria-invalid", "true" if has_error else None),
        )

        if widget is WidgetKind.SELECT:
            lines.append(f"{indent}<select{_attrs(*common)}>")
            lines.append(f'{indent}{_INDENT}<option value="">-- Select --</option>')
            for option in prop.enum:
                selected = _attrs(("selected", option == text))
                lines.append(
                    f'{indent}{_INDENT}<option value="{escape(option)}"{selected}>{escape(option)}</option>'
                )
            lines.append(f"{indent}</select>")

        elif widget in _DATE_TIME_INPUT_TYPES:
            attrs = _attrs(("type", _DATE_TIME_INPUT_TYPES[widget]), *common, ("value", text))
            lines.append(f"{indent}<input{attrs}>")

        elif widget is WidgetKind.TEXTAREA:
            attrs = _attrs(
                *common,
                ("minlength", prop.min_length),
                ("maxlength", prop.max_length),
                ("placeholder", placeholder),
            )
            lines.append(f"{indent}<textarea{attrs}>{escape(text or '')}</textarea>")

        elif widget is WidgetKind.TEXT:
            fmt = effective_format(prop.format, options)
            datalist_id = f"{ref.element_id}-suggestions" if options.suggestions else None
            attrs = _attrs(
                ("type", _TEXT_INPUT_TYPES.get(fmt, "text")),
                *common,
                ("minlength", prop.min_length),
                ("maxlength", prop.max_length),
                ("placeholder", placeholder),
                ("list", datalist_id),
                ("value", text),
            )
            lines.append(f"{indent}<input{attrs}>")
            if datalist_id:
                lines.append(f'{indent}<datalist id="{datalist_id}">')
                for suggestion in options.suggestions:
                    lines.append(f'{indent}{_INDENT}<option value="{escape(suggestion)}"></option>')
                lines.append(f"{indent}</datalist>")

        elif widget is WidgetKind.CHECKBOX:
            attrs = _attrs(
                ("type", "checkbox"),
                ("id", ref.element_id),
                ("name", ref.field_path),
                ("value", "true"),
                ("checked", coerce_boolean(value)),
            )
            lines.append(f"{indent}<input{attrs}>")

        elif widget is WidgetKind.NUMBER:
            attrs = _attrs(
                ("type", "number"),
                *common,
                ("min", prop.minimum),
                ("max", prop.maximum),
                ("step", "1" if prop.kind is PropertyKind.INTEGER else "any"),
                ("placeholder", placeholder),
                ("value", text),
            )
            lines.append(f"{indent}<input{attrs}>")

        else:
            noun = "Array input" if prop.kind is PropertyKind.ARRAY else "Nested object input"
            css = "array-input-placeholder" if prop.kind is PropertyKind.ARRAY else "object-input-placeholder"
            lines.append(f'{indent}<div class="{css} unsupported-field">')
            lines.append(
                f'{indent}{_INDENT}<p><em>{noun} for "{escape(label)}" is not yet supported inline</em></p>'
            )
            lines.append(f"{indent}</div>")


def render(
    layout: LayoutElement,
    schema: DataSchema,
    values: ValueTree | None = None,
    errors: ErrorSet | None = None,
) -> str:
    """Render with a default-configured FormRenderer."""
    return FormRenderer().render(layout, schema, values=values, errors=errors)
