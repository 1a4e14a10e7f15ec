"""
Generation seam: registry of forms and the functions that consume their valid submissions.
"""

from schema_form.generators.builtin import json_artifact
from schema_form.generators.registry import (
    FormEntry,
    FormRegistry,
    GenerationError,
    GenerationFunction,
    build_registry,
)

__all__ = [
    "FormEntry",
    "FormRegistry",
    "GenerationError",
    "GenerationFunction",
    "build_registry",
    "json_artifact",
]
