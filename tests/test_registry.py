"""Tests for the form registry."""

import json

import pytest

from schema_form.generators import FormRegistry, build_registry, json_artifact
from schema_form.orchestrator import FormOrchestrator


class TestFormRegistry:
    """Tests for FormRegistry."""

    def test_register_and_get(self, event_form):
        registry = FormRegistry()
        entry = registry.register("event", event_form, generator=json_artifact)

        assert registry.get("event") is entry
        assert entry.title == "Event"
        assert "event" in registry
        assert len(registry) == 1

    def test_title_override(self, event_form):
        registry = FormRegistry()
        entry = registry.register("event", event_form, json_artifact, title="New Event")
        assert entry.title == "New Event"

    def test_duplicate_name(self, event_form):
        registry = FormRegistry()
        registry.register("event", event_form, json_artifact)
        with pytest.raises(ValueError, match="already registered"):
            registry.register("event", event_form, json_artifact)

    def test_unknown_name(self):
        with pytest.raises(KeyError, match="Unknown form"):
            FormRegistry().get("nope")

    def test_registration_order(self, event_form):
        registry = FormRegistry()
        for name in ("zeta", "alpha", "mid"):
            registry.register(name, event_form, json_artifact)
        assert registry.names() == ["zeta", "alpha", "mid"]
        assert [entry.name for entry in registry] == ["zeta", "alpha", "mid"]

    def test_registries_are_independent(self, event_form):
        first = FormRegistry()
        first.register("event", event_form, json_artifact)
        assert "event" not in FormRegistry()


class TestBuildRegistry:
    """Tests for registering bundles."""

    def test_default_generator(self, calendar_bundle):
        registry = build_registry([calendar_bundle])
        entry = registry.get("calendar")
        assert entry.title == "Calendar Event"
        assert entry.generator is json_artifact

    def test_named_generator(self, calendar_bundle):
        def link(tree):
            return "link"

        registry = build_registry([calendar_bundle], generators={"calendar": link})
        assert registry.get("calendar").generator is link

    def test_json_artifact(self, calendar_bundle):
        registry = build_registry([calendar_bundle])
        outcome = FormOrchestrator.from_entry(registry.get("calendar")).submit([
            ("title", "Standup"),
            ("start", "2025-10-28T09:00"),
            ("end", "2025-10-28T09:15"),
        ])
        assert json.loads(outcome.artifact) == {
            "title": "Standup",
            "start": "2025-10-28T09:00",
            "end": "2025-10-28T09:15",
        }
