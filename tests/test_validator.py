"""Tests for the form validator."""

import pytest

from schema_form.codec import encode
from schema_form.compiler import load_data_schema
from schema_form.validation import coerce_boolean, validate, validate_detailed
from schema_form.validation.formats import is_date, is_datetime, is_email, is_time, is_uri

VALID_EVENT = {
    "title": "Planning",
    "start": "2025-10-28T10:00",
    "kind": "meeting",
    "seats": "4",
    "public": "true",
    "organizer": {"email": "sam@example.com"},
    "attendees": [{"email": "a@b.com"}],
}


class TestScenarios:
    """End-to-end decode + validate scenarios."""

    def test_empty_required_field(self):
        schema = load_data_schema({
            "type": "object",
            "properties": {"title": {"type": "string"}},
            "required": ["title"],
        })
        assert validate(encode([("title", "")]), schema) == {"title": "required"}

    def test_impossible_datetime(self):
        schema = load_data_schema({
            "type": "object",
            "properties": {"start": {"type": "string", "format": "datetime"}},
        })
        errors = validate(encode([("start", "2025-13-40T99:99")]), schema)
        assert errors == {"start": "invalid datetime format"}

    def test_error_in_second_list_element(self):
        schema = load_data_schema({
            "type": "object",
            "properties": {
                "attendees": {
                    "type": "array",
                    "items": {
                        "type": "object",
                        "properties": {"email": {"type": "string", "format": "email"}},
                    },
                },
            },
        })
        tree = encode([("attendees[0].email", "a@b.com"), ("attendees[1].email", "bad")])
        assert tree == {"attendees": [{"email": "a@b.com"}, {"email": "bad"}]}
        assert validate(tree, schema) == {"attendees[1].email": "invalid email format"}

    def test_valid_submission(self, event_schema):
        assert validate(VALID_EVENT, event_schema) == {}


class TestInvariants:
    """Properties that hold for every field."""

    @pytest.mark.parametrize("field", ["title", "start"])
    def test_removing_required_field(self, event_schema, field):
        tree = {name: value for name, value in VALID_EVENT.items() if name != field}
        assert validate(tree, event_schema) == {field: "required"}

    def test_removing_nested_required_field(self, event_schema):
        tree = dict(VALID_EVENT, organizer={"email": "  "})
        assert validate(tree, event_schema) == {"organizer.email": "required"}

    @pytest.mark.parametrize("value", ["meeting", "call"])
    def test_enum_member_is_accepted(self, event_schema, value):
        assert validate(dict(VALID_EVENT, kind=value), event_schema) == {}

    @pytest.mark.parametrize("value", ["Meeting", "party", "meeting "])
    def test_enum_non_member_is_rejected(self, event_schema, value):
        errors = validate(dict(VALID_EVENT, kind=value), event_schema)
        assert errors == {"kind": "must be one of: meeting, call"}

    def test_deterministic(self, event_schema):
        tree = dict(VALID_EVENT, title="", seats="zero", attendees=[{"email": "x"}])
        assert validate(tree, event_schema) == validate(tree, event_schema)

    def test_every_invalid_field_reported(self, event_schema):
        tree = dict(VALID_EVENT, title="", seats="zero", attendees=[{"email": "x"}])
        assert validate(tree, event_schema) == {
            "title": "required",
            "seats": "must be an integer",
            "attendees[0].email": "invalid email format",
        }


class TestConstraints:
    """Tests for individual constraint checks."""

    def test_max_length(self, event_schema):
        errors = validate(dict(VALID_EVENT, title="x" * 51), event_schema)
        assert errors == {"title": "must be at most 50 characters"}

    def test_min_length(self):
        schema = load_data_schema({
            "type": "object",
            "properties": {"code": {"type": "string", "minLength": 3}},
        })
        assert validate({"code": "ab"}, schema) == {"code": "must be at least 3 characters"}

    @pytest.mark.parametrize(
        "seats, message",
        [
            ("0", "must be at least 1"),
            ("11", "must be at most 10"),
            ("2.5", "must be an integer"),
            ("four", "must be an integer"),
        ],
    )
    def test_integer_bounds(self, event_schema, seats, message):
        assert validate(dict(VALID_EVENT, seats=seats), event_schema) == {"seats": message}

    def test_number_parsing(self):
        schema = load_data_schema({
            "type": "object",
            "properties": {"price": {"type": "number", "minimum": 0.5}},
        })
        assert validate({"price": "1.25"}, schema) == {}
        assert validate({"price": "1e3"}, schema) == {}
        assert validate({"price": "0.1"}, schema) == {"price": "must be at least 0.5"}
        assert validate({"price": "1,5"}, schema) == {"price": "must be a number"}

    def test_first_failure_wins(self):
        """A field gets exactly one message, from the first failing check."""
        schema = load_data_schema({
            "type": "object",
            "properties": {
                "code": {"type": "string", "maxLength": 3, "enum": ["abc", "xyz"]},
            },
        })
        assert validate({"code": "abcd"}, schema) == {"code": "must be at most 3 characters"}

    def test_optional_empty_field_is_skipped(self, event_schema):
        assert validate(dict(VALID_EVENT, seats="", kind=""), event_schema) == {}

    def test_empty_list_slots_are_skipped(self):
        schema = load_data_schema({
            "type": "object",
            "properties": {"tags": {"type": "array", "items": {"type": "string", "maxLength": 3}}},
        })
        assert validate({"tags": ["", "abc"]}, schema) == {}
        assert validate({"tags": ["", "abcd"]}, schema) == {"tags[1]": "must be at most 3 characters"}

    def test_unknown_fields_are_ignored(self, event_schema):
        assert validate(dict(VALID_EVENT, extra="x"), event_schema) == {}

    def test_shape_mismatch(self, event_schema):
        errors = validate(dict(VALID_EVENT, organizer="sam", attendees="a@b.com"), event_schema)
        assert errors == {"organizer": "must be an object", "attendees": "must be a list"}

    def test_none_tree_is_empty_submission(self, event_schema):
        assert validate(None, event_schema) == {"title": "required", "start": "required"}


class TestValidatedData:
    """Tests for the coerced data returned on success."""

    def test_coercion(self, event_schema):
        result = validate_detailed(VALID_EVENT, event_schema)
        assert result.is_valid
        assert result.validated_data["seats"] == 4
        assert result.validated_data["public"] is True
        assert result.validated_data["attendees"] == [{"email": "a@b.com"}]

    def test_absent_boolean_is_false(self, event_schema):
        tree = {name: value for name, value in VALID_EVENT.items() if name != "public"}
        result = validate_detailed(tree, event_schema)
        assert result.validated_data["public"] is False

    def test_no_data_when_invalid(self, event_schema):
        result = validate_detailed({}, event_schema)
        assert not result.is_valid
        assert result.validated_data is None
        assert result.error_count == 2


class TestBooleanCoercion:
    """Tests for checkbox presence semantics."""

    @pytest.mark.parametrize("value", ["true", "on", "1", "yes", True])
    def test_true_values(self, value):
        assert coerce_boolean(value) is True

    @pytest.mark.parametrize("value", ["false", "off", "0", "", "FALSE", None, False])
    def test_false_values(self, value):
        assert coerce_boolean(value) is False


class TestFormats:
    """Tests for exact format rules."""

    def test_date(self):
        assert is_date("2025-02-28")
        assert not is_date("2025-02-30")
        assert not is_date("2025-2-28")

    def test_time(self):
        assert is_time("23:59")
        assert not is_time("24:00")
        assert not is_time("9:30")

    def test_datetime(self):
        assert is_datetime("2025-10-28T10:00")
        assert not is_datetime("2025-10-28 10:00")
        assert not is_datetime("2025-10-28T10:00:00")

    def test_email(self):
        assert is_email("a@b.com")
        assert not is_email("a@@b.com")
        assert not is_email("@b.com")
        assert not is_email("a@")

    def test_uri(self):
        assert is_uri("https://example.com")
        assert is_uri("mailto:sam@example.com")
        assert not is_uri("example.com")
        assert not is_uri("https://")
