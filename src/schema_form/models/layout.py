"""
Layout schema models.

The layout tree is a tagged union on ``type``. Only Control elements bind
to the data schema (through their scope); the other element types are
purely presentational.
"""

from typing import Annotated, Literal, Union

from pydantic import BaseModel, Field, field_validator

from schema_form.models.data_schema import StringFormat


class ControlOptions(BaseModel):
    """Rendering hints for a Control."""

    placeholder: str | None = Field(default=None, description="Placeholder text")
    multi: bool = Field(default=False, description="Render strings as a multi-line text area")
    format: StringFormat | None = Field(default=None, description="Override the schema format")
    show_label: bool = Field(default=True, alias="showLabel", description="Show/hide label")
    suggestions: tuple[str, ...] = Field(default=(), description="Autocomplete suggestions")

    model_config = {"frozen": True, "populate_by_name": True}

    @field_validator("format", mode="before")
    @classmethod
    def _parse_format(cls, value):
        if value is None or isinstance(value, StringFormat):
            return value
        return StringFormat.parse(value)


class Control(BaseModel):
    """Leaf bound to exactly one data schema property."""

    type: Literal["Control"] = "Control"
    scope: str = Field(..., description="Path such as properties/organizer/properties/email")
    label: str | None = Field(default=None, description="Override label from schema")
    description: str | None = Field(default=None, description="Override description from schema")
    options: ControlOptions = Field(default_factory=ControlOptions)

    model_config = {"frozen": True}


class Label(BaseModel):
    """Static, non-interactive text."""

    type: Literal["Label"] = "Label"
    text: str = ""
    title: str | None = None

    model_config = {"frozen": True}

    @property
    def display_text(self) -> str:
        return self.text or self.title or ""


class Group(BaseModel):
    """Titled fieldset."""

    type: Literal["Group"] = "Group"
    title: str | None = None
    elements: tuple["LayoutElement", ...] = ()

    model_config = {"frozen": True}


class VerticalLayout(BaseModel):
    type: Literal["VerticalLayout"] = "VerticalLayout"
    elements: tuple["LayoutElement", ...] = ()

    model_config = {"frozen": True}


class HorizontalLayout(BaseModel):
    type: Literal["HorizontalLayout"] = "HorizontalLayout"
    elements: tuple["LayoutElement", ...] = ()

    model_config = {"frozen": True}


LayoutElement = Annotated[
    Union[VerticalLayout, HorizontalLayout, Group, Control, Label],
    Field(discriminator="type"),
]

# Element types that hold children
CONTAINER_TYPES = (VerticalLayout, HorizontalLayout, Group)

Group.model_rebuild()
VerticalLayout.model_rebuild()
HorizontalLayout.model_rebuild()


def iter_controls(element) -> list[Control]:
    """Collect every Control in pre-order."""
    if isinstance(element, Control):
        return [element]
    if isinstance(element, CONTAINER_TYPES):
        controls: list[Control] = []
        for child in element.elements:
            controls.extend(iter_controls(child))
        return controls
    return []
