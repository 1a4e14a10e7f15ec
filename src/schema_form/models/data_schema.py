"""
Data schema models.

A compiled data schema is a tree of immutable SchemaProperty nodes. It
carries everything validation needs (kinds, formats, constraints, nesting)
plus the display hints (title, description, examples) the renderer falls
back to when the layout does not override them.
"""

from enum import Enum
from typing import Any

from pydantic import BaseModel, Field, model_validator

from schema_form.constants import FORMAT_ALIASES


class PropertyKind(str, Enum):
    """Closed set of value kinds a property can declare."""

    STRING = "string"
    INTEGER = "integer"
    NUMBER = "number"
    BOOLEAN = "boolean"
    ARRAY = "array"
    OBJECT = "object"

    @property
    def is_numeric(self) -> bool:
        return self in (PropertyKind.INTEGER, PropertyKind.NUMBER)

    @property
    def is_container(self) -> bool:
        return self in (PropertyKind.ARRAY, PropertyKind.OBJECT)


class StringFormat(str, Enum):
    """Closed set of string formats with exact lexical rules."""

    DATE = "date"
    TIME = "time"
    DATETIME = "datetime"
    EMAIL = "email"
    URI = "uri"
    PLAIN = "plain"

    @classmethod
    def parse(cls, name: str) -> "StringFormat":
        """Resolve a format name, accepting the common aliases.

        Raises:
            ValueError: If the name is not a supported format.
        """
        return cls(FORMAT_ALIASES.get(name, name))


class SchemaProperty(BaseModel):
    """One node of the data schema tree."""

    kind: PropertyKind = Field(..., description="Value kind")
    format: StringFormat | None = Field(default=None, description="String format (string kind only)")

    # Constraints
    min_length: int | None = Field(default=None, description="Minimum string length")
    max_length: int | None = Field(default=None, description="Maximum string length")
    minimum: int | float | None = Field(default=None, description="Minimum numeric value")
    maximum: int | float | None = Field(default=None, description="Maximum numeric value")
    enum: tuple[str, ...] | None = Field(default=None, description="Allowed values, in declared order")

    # Display hints
    title: str | None = Field(default=None)
    description: str | None = Field(default=None)
    examples: tuple[str, ...] = Field(default=())
    default: Any = Field(default=None, description="Initial value for first render")

    # Nesting
    properties: dict[str, "SchemaProperty"] | None = Field(
        default=None, description="Ordered child properties (object kind only)"
    )
    required_names: frozenset[str] = Field(
        default=frozenset(), description="Children that must be present and non-empty"
    )
    items: "SchemaProperty | None" = Field(
        default=None, description="Element property (array kind only)"
    )

    model_config = {"frozen": True}

    @model_validator(mode="after")
    def _check_shape(self) -> "SchemaProperty":
        if self.kind is PropertyKind.OBJECT and self.properties is None:
            raise ValueError("object property must declare properties")
        if self.kind is PropertyKind.ARRAY and self.items is None:
            raise ValueError("array property must declare items")
        if self.format is not None and self.kind is not PropertyKind.STRING:
            raise ValueError("format is only allowed on string properties")
        return self

    @property
    def has_enum(self) -> bool:
        return bool(self.enum)

    def is_required(self, name: str) -> bool:
        """Whether the child ``name`` is listed in this object's required names."""
        return name in self.required_names

    def child(self, name: str) -> "SchemaProperty | None":
        """Get a child property by name, or None if undeclared."""
        if self.properties is None:
            return None
        return self.properties.get(name)

    def to_json_schema(self) -> dict[str, Any]:
        """Export back to the document form this node was compiled from."""
        doc: dict[str, Any] = {"type": self.kind.value}
        if self.title:
            doc["title"] = self.title
        if self.description:
            doc["description"] = self.description
        if self.format is not None:
            doc["format"] = self.format.value
        if self.min_length is not None:
            doc["minLength"] = self.min_length
        if self.max_length is not None:
            doc["maxLength"] = self.max_length
        if self.minimum is not None:
            doc["minimum"] = self.minimum
        if self.maximum is not None:
            doc["maximum"] = self.maximum
        if self.enum:
            doc["enum"] = list(self.enum)
        if self.examples:
            doc["examples"] = list(self.examples)
        if self.default is not None:
            doc["default"] = self.default
        if self.properties is not None:
            doc["properties"] = {
                name: prop.to_json_schema() for name, prop in self.properties.items()
            }
            # Keep declared order so the export is stable
            required = [name for name in self.properties if name in self.required_names]
            if required:
                doc["required"] = required
        if self.items is not None:
            doc["items"] = self.items.to_json_schema()
        return doc


class DataSchema(SchemaProperty):
    """Root of a data schema. Always an object."""

    @model_validator(mode="after")
    def _check_root(self) -> "DataSchema":
        if self.kind is not PropertyKind.OBJECT:
            raise ValueError("root data schema must be of type 'object'")
        return self


SchemaProperty.model_rebuild()
