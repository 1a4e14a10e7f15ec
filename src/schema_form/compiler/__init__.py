"""
Schema compiler: raw documents -> immutable data schema and layout trees.
"""

from schema_form.compiler.bundle import (
    FormBundle,
    ShowcaseExample,
    discover_bundles,
    load_bundle,
)
from schema_form.compiler.loader import (
    CompiledForm,
    SchemaLoadError,
    load,
    load_data_schema,
    load_layout,
)
from schema_form.compiler.metadata import SchemaMetadata, extract_metadata

__all__ = [
    "CompiledForm",
    "SchemaLoadError",
    "load",
    "load_data_schema",
    "load_layout",
    "FormBundle",
    "ShowcaseExample",
    "discover_bundles",
    "load_bundle",
    "SchemaMetadata",
    "extract_metadata",
]
