"""Unit tests for identifier helpers.

Tests cover:
- ObjectId validation of hex strings
- Conversion and generation
- Canonical form used for equality checks
"""

from __future__ import annotations

import pytest
from bson import ObjectId
from bson.errors import InvalidId

from restaurant_reviews.database.identifiers import (
    is_valid_object_id,
    new_object_id,
    normalize_id,
    to_object_id,
)


pytestmark = pytest.mark.unit

HEX_ID = "65f0c0ffee0000000000beef"


class TestIsValidObjectId:
    """Tests for is_valid_object_id."""

    @pytest.mark.parametrize("value", [HEX_ID, HEX_ID.upper(), ObjectId()])
    def test_valid(self, value):
        """Should accept 24 character hex strings and ObjectIds."""
        assert is_valid_object_id(value)

    @pytest.mark.parametrize("value", ["", "nope", "x" * 24, b"twelve bytes", 123, None])
    def test_invalid(self, value):
        """Should reject everything else, including 12 byte strings."""
        assert not is_valid_object_id(value)


class TestConversions:
    """Tests for to_object_id, new_object_id and normalize_id."""

    def test_to_object_id(self):
        """Should convert hex strings and pass ObjectIds through."""
        oid = ObjectId(HEX_ID)

        assert to_object_id(HEX_ID) == oid
        assert to_object_id(oid) is oid

    def test_to_object_id_invalid(self):
        """Should raise InvalidId."""
        with pytest.raises(InvalidId):
            to_object_id("nope")

    def test_new_object_id(self):
        """Should generate distinct valid ids."""
        first, second = new_object_id(), new_object_id()

        assert first != second
        assert is_valid_object_id(first)

    @pytest.mark.parametrize("value", [HEX_ID, HEX_ID.upper(), f" {HEX_ID}\n", ObjectId(HEX_ID)])
    def test_normalize_id(self, value):
        """Should reduce every spelling of an id to one form."""
        assert normalize_id(value) == HEX_ID
