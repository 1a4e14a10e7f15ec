"""
Widget selection.

One pure function decides which control a field renders as, from the
property kind, its format, whether it has an enum, and the layout options.
Nothing here touches markup.
"""

from enum import Enum

from schema_form.config import get_config
from schema_form.models.data_schema import PropertyKind, StringFormat
from schema_form.models.layout import ControlOptions


class WidgetKind(str, Enum):
    SELECT = "select"
    DATE = "date"
    TIME = "time"
    DATETIME = "datetime"
    TEXTAREA = "textarea"
    TEXT = "text"
    CHECKBOX = "checkbox"
    NUMBER = "number"
    UNSUPPORTED = "unsupported"


_DATE_TIME_WIDGETS = {
    StringFormat.DATE: WidgetKind.DATE,
    StringFormat.TIME: WidgetKind.TIME,
    StringFormat.DATETIME: WidgetKind.DATETIME,
}


def effective_format(
    fmt: StringFormat | None, options: ControlOptions | None
) -> StringFormat | None:
    """The layout's format override wins over the schema format."""
    if options is not None and options.format is not None:
        return options.format
    return fmt


def select_widget(
    kind: PropertyKind,
    fmt: StringFormat | None,
    has_enum: bool,
    options: ControlOptions | None = None,
    max_length: int | None = None,
    long_text_threshold: int | None = None,
) -> WidgetKind:
    """
    Choose the widget for a field.

    Args:
        kind: Property kind.
        fmt: Schema format (string kind only).
        has_enum: Whether the property declares allowed values.
        options: Control options from the layout, if any.
        max_length: Declared maximum string length, if any.
        long_text_threshold: maxLength above which strings become text areas.
            Defaults to the configured threshold.

    Returns:
        The WidgetKind to render.
    """
    if kind.is_container:
        return WidgetKind.UNSUPPORTED

    if has_enum:
        return WidgetKind.SELECT

    if kind is PropertyKind.BOOLEAN:
        return WidgetKind.CHECKBOX

    if kind.is_numeric:
        return WidgetKind.NUMBER

    fmt = effective_format(fmt, options)
    if fmt in _DATE_TIME_WIDGETS:
        return _DATE_TIME_WIDGETS[fmt]

    if long_text_threshold is None:
        long_text_threshold = get_config().long_text_threshold
    if (options is not None and options.multi) or (
        max_length is not None and max_length > long_text_threshold
    ):
        return WidgetKind.TEXTAREA

    return WidgetKind.TEXT
