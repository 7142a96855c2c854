"""Unit tests for password hashing.

Tests cover:
- Hashing produces salted bcrypt hashes
- Verification of correct, wrong and non-bcrypt values
"""

from __future__ import annotations

import pytest

from restaurant_reviews.auth.passwords import hash_password, verify_password


pytestmark = pytest.mark.unit


class TestPasswords:
    """Tests for hash_password and verify_password."""

    def test_hash_is_salted(self):
        """Should produce different hashes for the same password."""
        first = hash_password("s3cret!pass")
        second = hash_password("s3cret!pass")

        assert first != second
        assert first.startswith("$2")

    def test_verify(self):
        """Should accept the right password and reject others."""
        hashed = hash_password("s3cret!pass")

        assert verify_password("s3cret!pass", hashed) is True
        assert verify_password("wrong!pass1", hashed) is False

    def test_verify_against_non_hash(self):
        """Should return False when the stored value is not a bcrypt hash."""
        assert verify_password("s3cret!pass", "plain-text") is False
