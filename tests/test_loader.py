"""Tests for the schema loader."""

import json

import pytest

from schema_form.compiler import (
    CompiledForm,
    SchemaLoadError,
    extract_metadata,
    load,
    load_data_schema,
    load_layout,
)
from schema_form.models.data_schema import PropertyKind, StringFormat
from schema_form.models.layout import Control, Group, Label, VerticalLayout

from conftest import EVENT_LAYOUT, EVENT_SCHEMA


def _object(**properties):
    return {"type": "object", "properties": properties}


class TestLoad:
    """Tests for loading well-formed documents."""

    def test_load_from_json_text(self):
        form = load(json.dumps(EVENT_SCHEMA), json.dumps(EVENT_LAYOUT))
        assert isinstance(form, CompiledForm)

        data_schema, layout = form
        assert data_schema.title == "Event"
        assert isinstance(layout, VerticalLayout)

    def test_load_from_mappings(self):
        form = load(EVENT_SCHEMA, EVENT_LAYOUT)
        assert form.data_schema.child("start").format is StringFormat.DATETIME

    def test_nested_properties(self):
        schema = load_data_schema(EVENT_SCHEMA)
        organizer = schema.child("organizer")
        assert organizer.kind is PropertyKind.OBJECT
        assert organizer.is_required("email")

        attendees = schema.child("attendees")
        assert attendees.items.child("email").format is StringFormat.EMAIL

    def test_format_alias(self):
        schema = load_data_schema(_object(when={"type": "string", "format": "date-time"}))
        assert schema.child("when").format is StringFormat.DATETIME

    def test_display_hints(self):
        schema = load_data_schema(
            _object(city={"type": "string", "examples": ["Berlin"], "default": "Paris"})
        )
        city = schema.child("city")
        assert city.examples == ("Berlin",)
        assert city.default == "Paris"

    def test_layout_elements(self):
        layout = load_layout(EVENT_LAYOUT)
        assert isinstance(layout.elements[0], Label)
        assert isinstance(layout.elements[1], Control)
        assert isinstance(layout.elements[3], Group)
        assert layout.elements[3].title == "Extras"

    def test_layout_options(self):
        layout = load_layout({
            "type": "Control",
            "scope": "#/properties/notes",
            "options": {"multi": True, "showLabel": False, "placeholder": "..."},
        })
        assert layout.options.multi is True
        assert layout.options.show_label is False
        assert layout.options.placeholder == "..."

    def test_unresolvable_scope_still_loads(self):
        """Scopes are checked at render time, not at load time."""
        form = load(EVENT_SCHEMA, {"type": "Control", "scope": "#/properties/nope"})
        assert form.layout.scope == "#/properties/nope"


class TestSchemaLoadErrors:
    """Tests for structural problems in data schemas."""

    def test_malformed_json(self):
        with pytest.raises(SchemaLoadError, match="Malformed JSON"):
            load_data_schema('{"type": "object", ')

    def test_unknown_type(self):
        with pytest.raises(SchemaLoadError) as excinfo:
            load_data_schema(_object(age={"type": "decimal"}))
        assert excinfo.value.issues == ["#/properties/age: unknown type 'decimal'"]

    def test_missing_type(self):
        with pytest.raises(SchemaLoadError) as excinfo:
            load_data_schema(_object(age={"minimum": 1}))
        assert "#/properties/age: missing 'type'" in excinfo.value.issues

    def test_root_must_be_object(self):
        with pytest.raises(SchemaLoadError) as excinfo:
            load_data_schema({"type": "string"})
        assert "#: root data schema must be of type 'object'" in excinfo.value.issues

    def test_array_without_items(self):
        with pytest.raises(SchemaLoadError) as excinfo:
            load_data_schema(_object(tags={"type": "array"}))
        assert "#/properties/tags: array property must declare 'items'" in excinfo.value.issues

    def test_invalid_property_name(self):
        with pytest.raises(SchemaLoadError) as excinfo:
            load_data_schema(_object(**{"first-name": {"type": "string"}}))
        assert "#/properties/first-name: invalid property name" in excinfo.value.issues

    def test_unknown_format(self):
        with pytest.raises(SchemaLoadError) as excinfo:
            load_data_schema(_object(phone={"type": "string", "format": "phone"}))
        assert "#/properties/phone: unknown format 'phone'" in excinfo.value.issues

    def test_constraint_on_wrong_kind(self):
        with pytest.raises(SchemaLoadError) as excinfo:
            load_data_schema(_object(age={"type": "integer", "maxLength": 3}))
        assert (
            "#/properties/age: 'maxLength' is only allowed on string properties"
            in excinfo.value.issues
        )

    def test_enum_must_hold_strings(self):
        with pytest.raises(SchemaLoadError) as excinfo:
            load_data_schema(_object(size={"type": "string", "enum": []}))
        assert (
            "#/properties/size: 'enum' must be a non-empty array of strings"
            in excinfo.value.issues
        )

    def test_all_issues_reported_together(self):
        """Every problem is reported in one pass."""
        raw = {
            "type": "object",
            "properties": {
                "name": {"type": "string", "minLength": 5, "maxLength": 2},
                "age": {"type": "integer", "minimum": 10, "maximum": 1},
            },
            "required": ["name", "email"],
        }
        with pytest.raises(SchemaLoadError) as excinfo:
            load_data_schema(raw)

        issues = excinfo.value.issues
        assert "#/properties/name: 'minLength' is greater than 'maxLength'" in issues
        assert "#/properties/age: 'minimum' is greater than 'maximum'" in issues
        assert "#: required field 'email' not in properties" in issues
        assert len(issues) == 3
        assert "required field 'email'" in str(excinfo.value)

    def test_cyclic_schema(self):
        raw = {"type": "object", "properties": {}}
        raw["properties"]["self"] = raw
        with pytest.raises(SchemaLoadError, match="Cyclic data schema"):
            load_data_schema(raw)

    def test_shared_subtree_is_not_a_cycle(self):
        email = {"type": "string", "format": "email"}
        schema = load_data_schema(_object(primary=email, backup=email))
        assert schema.child("backup").format is StringFormat.EMAIL


class TestLayoutLoadErrors:
    """Tests for structural problems in layouts."""

    def test_unknown_element_type(self):
        with pytest.raises(SchemaLoadError, match="Invalid layout"):
            load_layout({"type": "Tabs", "elements": []})

    def test_control_without_scope(self):
        with pytest.raises(SchemaLoadError) as excinfo:
            load_layout({"type": "VerticalLayout", "elements": [{"type": "Control"}]})
        assert any("scope" in issue for issue in excinfo.value.issues)

    def test_malformed_layout_json(self):
        with pytest.raises(SchemaLoadError, match="Malformed JSON in layout"):
            load_layout("{")

    def test_cyclic_layout(self):
        raw = {"type": "VerticalLayout", "elements": []}
        raw["elements"].append(raw)
        with pytest.raises(SchemaLoadError, match="Cyclic layout"):
            load_layout(raw)


class TestMetadata:
    """Tests for schema metadata extraction."""

    def test_extract_metadata(self):
        metadata = extract_metadata(load_data_schema(EVENT_SCHEMA))
        assert metadata.title == "Event"
        assert metadata.required_fields == ["title", "start"]
        assert "notes" in metadata.optional_fields
        assert metadata.field_types["seats"] == "integer"
        assert metadata.field_types["attendees"] == "array"
