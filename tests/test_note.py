"""Unit tests for the Note model."""

import math

import pytest

from stickyboard.exc import InvalidNoteRecord
from stickyboard.geometry import default_position
from stickyboard.models.note import (
    BODY_MAX_LENGTH,
    TITLE_MAX_LENGTH,
    Note,
    coerce_id,
    coerce_text,
)


class TestToJson:
    """Test cases for Note.to_json()."""

    def test_uses_stored_record_keys(self, make_note):
        """Test serialization uses the stored camelCase keys."""
        note = make_note("abc", color_key="mint", pinned=True, z=7, created_at=99)
        assert note.to_json() == {
            "id": "abc",
            "title": "Title",
            "body": "Body",
            "colorKey": "mint",
            "pinned": True,
            "x": 24.0,
            "y": 24.0,
            "z": 7,
            "createdAt": 99,
        }

    def test_round_trip(self, make_note):
        """Test a serialized note parses back to an equal note."""
        note = make_note("abc", color_key="sky", x=40.5, y=80.25, z=3)
        result = Note.from_json(note.to_json(), 0)
        assert result.ok
        assert result.note == note


class TestFromJson:
    """Test cases for Note.from_json()."""

    @pytest.mark.parametrize("record", [None, 42, "note", ["a", "b"], True])
    def test_rejects_non_mapping(self, record):
        """Test records that are not objects are rejected with a reason."""
        result = Note.from_json(record, 3)
        assert not result.ok
        assert result.note is None
        assert isinstance(result.error, InvalidNoteRecord)
        assert result.error.index == 3

    def test_empty_record_gets_positional_defaults(self):
        """Test an empty object gets defaults derived from its index."""
        result = Note.from_json({}, 2)
        assert result.ok
        note = result.note
        assert note.id == "note-3"
        assert note.title == ""
        assert note.body == ""
        assert note.color_key == "sunflower"
        assert note.pinned is False
        assert (note.x, note.y) == default_position(2)
        assert note.z == 3
        assert note.created_at == 2

    def test_truncates_text(self):
        """Test title and body are cut to their length caps."""
        result = Note.from_json({"title": "t" * 200, "body": "b" * 2000}, 0)
        assert len(result.note.title) == TITLE_MAX_LENGTH
        assert len(result.note.body) == BODY_MAX_LENGTH

    def test_unknown_color_falls_back(self):
        """Test an unknown color resolves to the first palette entry."""
        result = Note.from_json({"colorKey": "chartreuse"}, 0)
        assert result.note.color_key == "sunflower"

    def test_non_finite_numbers_fall_back(self):
        """Test non-numeric and non-finite coordinates use positional defaults."""
        record = {"x": "12", "y": math.nan, "z": None, "createdAt": math.inf}
        note = Note.from_json(record, 1).note
        assert (note.x, note.y) == default_position(1)
        assert note.z == 2
        assert note.created_at == 1

    def test_booleans_are_not_numbers(self):
        """Test boolean coordinates are treated as malformed."""
        note = Note.from_json({"x": True, "z": False}, 0).note
        assert note.x == default_position(0)[0]
        assert note.z == 1

    def test_float_z_is_truncated_to_int(self):
        """Test a float stacking key is stored as an int."""
        note = Note.from_json({"z": 4.0}, 0).note
        assert note.z == 4
        assert isinstance(note.z, int)

    def test_pinned_is_coerced(self):
        """Test pinned takes the truthiness of the stored value."""
        assert Note.from_json({"pinned": 1}, 0).note.pinned is True
        assert Note.from_json({"pinned": ""}, 0).note.pinned is False

    def test_extra_keys_are_ignored(self):
        """Test unknown keys do not prevent parsing."""
        result = Note.from_json({"id": "x", "legacy": {"a": 1}}, 0)
        assert result.ok
        assert result.note.id == "x"


class TestCoercion:
    """Test cases for the coercion helpers."""

    def test_coerce_text_stringifies_scalars(self):
        """Test numbers and booleans become text."""
        assert coerce_text(12, 80) == "12"
        assert coerce_text(1.5, 80) == "1.5"
        assert coerce_text(False, 80) == "false"

    def test_coerce_text_drops_containers(self):
        """Test missing values and containers become empty text."""
        assert coerce_text(None, 80) == ""
        assert coerce_text({"a": 1}, 80) == ""
        assert coerce_text([1, 2], 80) == ""

    def test_coerce_id(self):
        """Test IDs keep strings and ints and fall back otherwise."""
        assert coerce_id("abc", 0) == "abc"
        assert coerce_id(17, 0) == "17"
        assert coerce_id("   ", 4) == "note-5"
        assert coerce_id(None, 0) == "note-1"
        assert coerce_id(True, 0) == "note-1"
