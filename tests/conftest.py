"""Shared fixtures for schema-form tests."""

from pathlib import Path

import pytest

from schema_form.compiler import load, load_bundle

EXAMPLES_DIR = Path(__file__).resolve().parent.parent / "examples"

EVENT_SCHEMA = {
    "type": "object",
    "title": "Event",
    "properties": {
        "title": {"type": "string", "title": "Event Title", "maxLength": 50},
        "start": {"type": "string", "format": "datetime"},
        "kind": {"type": "string", "enum": ["meeting", "call"]},
        "seats": {"type": "integer", "minimum": 1, "maximum": 10},
        "public": {"type": "boolean"},
        "notes": {"type": "string", "maxLength": 500},
        "organizer": {
            "type": "object",
            "properties": {
                "email": {"type": "string", "format": "email"},
            },
            "required": ["email"],
        },
        "attendees": {
            "type": "array",
            "items": {
                "type": "object",
                "properties": {
                    "email": {"type": "string", "format": "email"},
                },
            },
        },
    },
    "required": ["title", "start"],
}

EVENT_LAYOUT = {
    "type": "VerticalLayout",
    "elements": [
        {"type": "Label", "text": "Details"},
        {"type": "Control", "scope": "#/properties/title"},
        {
            "type": "HorizontalLayout",
            "elements": [
                {"type": "Control", "scope": "#/properties/start", "label": "Starts"},
                {"type": "Control", "scope": "#/properties/kind"},
            ],
        },
        {
            "type": "Group",
            "title": "Extras",
            "elements": [
                {"type": "Control", "scope": "#/properties/seats"},
                {"type": "Control", "scope": "#/properties/public"},
                {"type": "Control", "scope": "#/properties/notes"},
                {"type": "Control", "scope": "#/properties/organizer/properties/email"},
                {"type": "Control", "scope": "#/properties/attendees/items/properties/email"},
            ],
        },
    ],
}


@pytest.fixture
def event_form():
    """Compiled event schema and layout."""
    return load(EVENT_SCHEMA, EVENT_LAYOUT)


@pytest.fixture
def event_schema(event_form):
    return event_form.data_schema


@pytest.fixture
def event_layout(event_form):
    return event_form.layout


@pytest.fixture
def calendar_bundle():
    """The calendar bundle shipped in examples/."""
    return load_bundle(EXAMPLES_DIR / "calendar")
