"""
Rendering of layout trees into HTML form markup.
"""

from schema_form.rendering.renderer import FormRenderer, render
from schema_form.rendering.scope import (
    ScopeRef,
    ScopeResolutionError,
    resolve_layout_scopes,
    resolve_scope,
)
from schema_form.rendering.widgets import WidgetKind, select_widget

__all__ = [
    "FormRenderer",
    "render",
    "ScopeRef",
    "ScopeResolutionError",
    "resolve_layout_scopes",
    "resolve_scope",
    "WidgetKind",
    "select_widget",
]
