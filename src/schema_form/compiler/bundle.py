"""
Form bundles.

A bundle is a directory holding one form's documents:

    <name>/
        schema.json          data schema (required)
        uischema.json        layout (required)
        data-examples.json   valid showcase submissions (optional)
        data-failures.json   submissions that must fail validation (optional)

Example files use the shape ``{"examples": [{"name", "description", "data"}]}``.
"""

import json
import logging
from pathlib import Path
from typing import Any

from pydantic import BaseModel, Field, ValidationError

from schema_form.compiler.loader import CompiledForm, SchemaLoadError, load
from schema_form.constants import (
    EXAMPLES_FILENAME,
    FAILURES_FILENAME,
    SCHEMA_FILENAME,
    UI_SCHEMA_FILENAME,
)

logger = logging.getLogger("schema-form.compiler")


class ShowcaseExample(BaseModel):
    """A named sample submission."""

    name: str = Field(..., description="Display name")
    description: str = Field(default="", description="What the example demonstrates")
    data: dict[str, Any] = Field(..., description="Nested value tree")


class FormBundle(BaseModel):
    """A compiled form plus the sample data shipped beside it."""

    name: str
    title: str
    form: CompiledForm
    examples: list[ShowcaseExample] = Field(default_factory=list)
    failures: list[ShowcaseExample] = Field(default_factory=list)

    model_config = {"arbitrary_types_allowed": True}


def load_bundle(directory: str | Path) -> FormBundle:
    """
    Load a form bundle from a directory.

    Raises:
        SchemaLoadError: If a required file is missing or any document is malformed.
    """
    directory = Path(directory)
    form = load(
        _read_text(directory / SCHEMA_FILENAME),
        _read_text(directory / UI_SCHEMA_FILENAME),
    )

    bundle = FormBundle(
        name=directory.name,
        title=form.data_schema.title or directory.name,
        form=form,
        examples=_load_examples(directory / EXAMPLES_FILENAME),
        failures=_load_examples(directory / FAILURES_FILENAME),
    )
    logger.info(
        "Loaded form bundle '%s' (%d examples, %d failures)",
        bundle.name,
        len(bundle.examples),
        len(bundle.failures),
    )
    return bundle


def discover_bundles(root: str | Path) -> list[FormBundle]:
    """Load every bundle directory (one holding a schema file) under ``root``."""
    root = Path(root)
    if not root.is_dir():
        raise SchemaLoadError(f"Forms directory not found: {root}")

    bundles = []
    for candidate in sorted(root.iterdir()):
        if candidate.is_dir() and (candidate / SCHEMA_FILENAME).exists():
            bundles.append(load_bundle(candidate))
    return bundles


def _read_text(path: Path) -> str:
    try:
        return path.read_text(encoding="utf-8")
    except FileNotFoundError as e:
        raise SchemaLoadError(f"Form file not found: {path}") from e


def _load_examples(path: Path) -> list[ShowcaseExample]:
    if not path.exists():
        return []

    try:
        doc = json.loads(path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as e:
        raise SchemaLoadError(f"Malformed JSON in {path.name}: {e}") from e

    if not isinstance(doc, dict):
        raise SchemaLoadError(f"{path.name} must hold an object with an 'examples' array")

    try:
        return [ShowcaseExample.model_validate(item) for item in doc.get("examples", [])]
    except ValidationError as e:
        raise SchemaLoadError(
            f"Invalid examples in {path.name}",
            [f"{'/'.join(str(p) for p in err['loc'])}: {err['msg']}" for err in e.errors()],
        ) from e
