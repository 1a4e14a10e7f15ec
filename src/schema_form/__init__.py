"""
schema-form: Schema-driven HTML forms.

Describe a form with two declarative documents, a data schema (what the
data is) and a layout (how it is presented), and get rendering,
submission decoding and validation for free.

Simple Usage:
    from schema_form import load, render, encode, validate

    data_schema, layout = load(schema_json, uischema_json)

    # First visit
    html = render(layout, data_schema)

    # Submission
    tree = encode([("title", "Standup"), ("attendees[0].email", "a@b.co")])
    errors = validate(tree, data_schema)
    if errors:
        html = render(layout, data_schema, values=tree, errors=errors)

Advanced Usage:
    from schema_form import FormOrchestrator, FormRegistry, discover_bundles, build_registry

    registry = build_registry(discover_bundles("examples"))
    orchestrator = FormOrchestrator.from_entry(registry.get("calendar"))

    outcome = orchestrator.submit(pairs)
    if outcome.is_valid:
        print(outcome.artifact)
    else:
        html = outcome.markup

Server:
    from schema_form.server import run_server

    run_server(registry, port=9110)
"""

from schema_form.codec import decode, encode
from schema_form.compiler import (
    CompiledForm,
    FormBundle,
    SchemaLoadError,
    SchemaMetadata,
    discover_bundles,
    extract_metadata,
    load,
    load_bundle,
)
from schema_form.config import FormConfig, get_config, update_config
from schema_form.generators import (
    FormEntry,
    FormRegistry,
    GenerationError,
    GenerationFunction,
    build_registry,
    json_artifact,
)
from schema_form.models import (
    DataSchema,
    ErrorSet,
    LayoutElement,
    SchemaProperty,
    ValidationResult,
    ValueTree,
)
from schema_form.orchestrator import (
    FormOrchestrator,
    RequestState,
    SubmissionOutcome,
    process_submission,
)
from schema_form.rendering import FormRenderer, ScopeResolutionError, render, select_widget
from schema_form.validation import validate, validate_detailed

__version__ = "0.1.0"

__all__ = [
    # Main API
    "load",
    "render",
    "encode",
    "decode",
    "validate",
    "validate_detailed",
    "select_widget",
    # Orchestration
    "FormOrchestrator",
    "RequestState",
    "SubmissionOutcome",
    "process_submission",
    # Registry
    "FormRegistry",
    "FormEntry",
    "GenerationFunction",
    "GenerationError",
    "build_registry",
    "json_artifact",
    # Bundles
    "FormBundle",
    "load_bundle",
    "discover_bundles",
    "SchemaMetadata",
    "extract_metadata",
    # Models
    "CompiledForm",
    "DataSchema",
    "SchemaProperty",
    "LayoutElement",
    "ValueTree",
    "ErrorSet",
    "ValidationResult",
    "FormRenderer",
    # Errors
    "SchemaLoadError",
    "ScopeResolutionError",
    # Config
    "FormConfig",
    "get_config",
    "update_config",
]
