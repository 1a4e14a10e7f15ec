"""
Form registry.

Forms and their generation functions are registered on an explicit
FormRegistry object, built once at startup and handed to whatever
assembles pages. There is no process-wide registry.
"""

import logging
from collections.abc import Callable, Iterable, Iterator, Mapping
from dataclasses import dataclass

from schema_form.compiler.bundle import FormBundle
from schema_form.compiler.loader import CompiledForm
from schema_form.generators.builtin import json_artifact
from schema_form.models.values import ValueTree

logger = logging.getLogger("schema-form.generators")

# (nested value tree) -> result artifact
GenerationFunction = Callable[[ValueTree], str]


class GenerationError(Exception):
    """Raised when a generation function fails on validated data."""

    def __init__(self, form_name: str, message: str):
        self.form_name = form_name
        self.message = message
        super().__init__(f"Generation failed for form '{form_name}': {message}")


@dataclass(frozen=True)
class FormEntry:
    """A named form and the function that turns its valid submissions into an artifact."""

    name: str
    title: str
    form: CompiledForm
    generator: GenerationFunction
    description: str | None = None


class FormRegistry:
    """
    Named forms available to a page assembler.

    Usage:
        registry = FormRegistry()
        registry.register("calendar", form, generator=calendar_link, title="Calendar event")

        entry = registry.get("calendar")
        for entry in registry:   # navigation order = registration order
            ...
    """

    def __init__(self):
        self._entries: dict[str, FormEntry] = {}

    def register(
        self,
        name: str,
        form: CompiledForm,
        generator: GenerationFunction,
        title: str | None = None,
        description: str | None = None,
    ) -> FormEntry:
        """
        Register a form.

        Raises:
            ValueError: If the name is already taken.
        """
        if name in self._entries:
            raise ValueError(f"Form '{name}' is already registered")

        entry = FormEntry(
            name=name,
            title=title or form.data_schema.title or name,
            form=form,
            generator=generator,
            description=description or form.data_schema.description,
        )
        self._entries[name] = entry
        logger.debug("Registered form '%s'", name)
        return entry

    def get(self, name: str) -> FormEntry:
        """
        Look up a form by name.

        Raises:
            KeyError: If no form has that name.
        """
        try:
            return self._entries[name]
        except KeyError:
            raise KeyError(f"Unknown form: {name}") from None

    def __contains__(self, name: object) -> bool:
        return name in self._entries

    def __iter__(self) -> Iterator[FormEntry]:
        return iter(self._entries.values())

    def __len__(self) -> int:
        return len(self._entries)

    def names(self) -> list[str]:
        return list(self._entries)


def build_registry(
    bundles: Iterable[FormBundle],
    generators: Mapping[str, GenerationFunction] | None = None,
    default_generator: GenerationFunction = json_artifact,
) -> FormRegistry:
    """
    Register a list of form bundles.

    Args:
        bundles: Loaded form bundles, registered in the given order.
        generators: Generation function per bundle name.
        default_generator: Used for bundles without an entry in ``generators``.
    """
    generators = generators or {}
    registry = FormRegistry()
    for bundle in bundles:
        registry.register(
            bundle.name,
            bundle.form,
            generator=generators.get(bundle.name, default_generator),
            title=bundle.title,
        )
    return registry
