"""
Form request orchestrator.

Drives one request through the form lifecycle:

    Initial -> (submit) -> Decoded -> (errors) -> Invalid-Rendered -> (resubmit) -> ...
                                   -> (no errors) -> Valid -> generation function

Initial and Invalid-Rendered are the only states that produce markup;
Valid hands the decoded tree to the generation function and leaves the core.
"""

import logging
from collections.abc import Iterable
from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from schema_form.codec.form_data import encode
from schema_form.compiler.loader import CompiledForm
from schema_form.generators.registry import FormEntry, GenerationError, GenerationFunction
from schema_form.models.values import ErrorSet, ValueTree
from schema_form.rendering.renderer import FormRenderer
from schema_form.validation.validator import validate_detailed

logger = logging.getLogger("schema-form")


class RequestState(str, Enum):
    INITIAL = "initial"
    DECODED = "decoded"
    INVALID_RENDERED = "invalid-rendered"
    VALID = "valid"


@dataclass
class SubmissionOutcome:
    """What one submission produced."""

    state: RequestState
    values: ValueTree
    errors: ErrorSet = field(default_factory=dict)
    markup: str | None = None
    artifact: str | None = None
    validated_data: dict[str, Any] | None = None

    @property
    def is_valid(self) -> bool:
        return self.state is RequestState.VALID


class FormOrchestrator:
    """
    Runs the decode -> validate -> render/generate cycle for one form.

    Usage:
        orchestrator = FormOrchestrator(form, generator=calendar_link)

        # First visit
        html = orchestrator.render_initial()

        # Submission
        outcome = orchestrator.submit([("title", "Standup"), ("start", "2025-10-28T10:00")])
        if outcome.is_valid:
            print(outcome.artifact)
        else:
            html = outcome.markup   # pre-filled, with inline errors
    """

    def __init__(
        self,
        form: CompiledForm,
        generator: GenerationFunction | None = None,
        name: str = "form",
        renderer: FormRenderer | None = None,
    ):
        """
        Initialize the orchestrator.

        Args:
            form: Compiled data schema and layout.
            generator: Called once with the decoded tree when a submission is
                valid. If None, valid submissions produce no artifact.
            name: Form name, used in logs and errors.
            renderer: Renderer to use. If None, a default-configured one.
        """
        self.form = form
        self.generator = generator
        self.name = name
        self.renderer = renderer or FormRenderer()

    @classmethod
    def from_entry(cls, entry: FormEntry, renderer: FormRenderer | None = None) -> "FormOrchestrator":
        """Build an orchestrator for a registered form."""
        return cls(entry.form, generator=entry.generator, name=entry.name, renderer=renderer)

    def render_initial(self) -> str:
        """Render the form with no values and no errors."""
        logger.info("Form '%s': %s", self.name, RequestState.INITIAL.value)
        return self.renderer.render(self.form.layout, self.form.data_schema)

    def submit(self, pairs: Iterable[tuple[str, str]]) -> SubmissionOutcome:
        """
        Process a flat submission.

        Args:
            pairs: Ordered (key, value) pairs as submitted by the browser.

        Returns:
            SubmissionOutcome in state INVALID_RENDERED (with markup and
            errors) or VALID (with the artifact).

        Raises:
            GenerationError: If the generation function fails.
        """
        values = encode(pairs)
        logger.info("Form '%s': %s", self.name, RequestState.DECODED.value)

        result = validate_detailed(values, self.form.data_schema)
        if not result.is_valid:
            errors = result.to_error_dict()
            logger.info(
                "Form '%s': %s (%d errors)",
                self.name,
                RequestState.INVALID_RENDERED.value,
                len(errors),
            )
            markup = self.renderer.render(
                self.form.layout, self.form.data_schema, values=values, errors=errors
            )
            return SubmissionOutcome(
                state=RequestState.INVALID_RENDERED,
                values=values,
                errors=errors,
                markup=markup,
            )

        logger.info("Form '%s': %s", self.name, RequestState.VALID.value)
        artifact = self._generate(values) if self.generator is not None else None
        return SubmissionOutcome(
            state=RequestState.VALID,
            values=values,
            artifact=artifact,
            validated_data=result.validated_data,
        )

    def _generate(self, values: ValueTree) -> str:
        try:
            artifact = self.generator(values)
        except GenerationError:
            raise
        except Exception as e:
            logger.error("Generation failed for form '%s': %s", self.name, e)
            raise GenerationError(self.name, str(e)) from e

        if not isinstance(artifact, str):
            raise GenerationError(
                self.name, f"generation function returned {type(artifact).__name__}, expected str"
            )
        return artifact


def process_submission(
    form: CompiledForm,
    pairs: Iterable[tuple[str, str]],
    generator: GenerationFunction | None = None,
) -> SubmissionOutcome:
    """
    Convenience function to process one submission.

    Example:
        >>> from schema_form import load, process_submission
        >>> form = load(schema_json, layout_json)
        >>> outcome = process_submission(form, [("title", "")])
        >>> outcome.errors
        {'title': 'required'}
    """
    return FormOrchestrator(form, generator=generator).submit(pairs)
