"""
Schema metadata extraction.

Summarizes the top level of a compiled data schema: which fields exist,
which are required, and what kind each one is. Used by the JSON API and
by documentation/test tooling that needs a flat view of a form.
"""

from pydantic import BaseModel, Field

from schema_form.models.data_schema import DataSchema


class SchemaMetadata(BaseModel):
    """Flat summary of a data schema's top-level fields."""

    title: str | None = Field(default=None)
    description: str | None = Field(default=None)
    required_fields: list[str] = Field(default_factory=list)
    optional_fields: list[str] = Field(default_factory=list)
    field_types: dict[str, str] = Field(default_factory=dict)


def extract_metadata(schema: DataSchema) -> SchemaMetadata:
    """Extract metadata from a compiled data schema, in declared field order."""
    metadata = SchemaMetadata(title=schema.title, description=schema.description)

    for name, prop in (schema.properties or {}).items():
        metadata.field_types[name] = prop.kind.value
        if schema.is_required(name):
            metadata.required_fields.append(name)
        else:
            metadata.optional_fields.append(name)

    return metadata
