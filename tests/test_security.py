# =============================================================================
# tests/test_security.py - Password Hashing and Token Tests
# =============================================================================
# Unit tests for app/auth/security.py:
# - Argon2 hashes verify, mismatches and garbage hashes don't
# - Tokens round-trip their subject and reject expiry/tampering
#
# Run with: pytest tests/test_security.py -v
# =============================================================================

import pytest
from jose import jwt

from app.auth.security import TokenCodec, hash_password, verify_password
from app.exceptions import AuthenticationError


# =============================================================================
# Password Hashing Tests
# =============================================================================

class TestPasswordHashing:
    """Tests for hash_password / verify_password."""

    def test_hash_is_argon2_phc_string(self):
        """Hashes are self-describing Argon2id strings."""
        hashed = hash_password("jakejake")

        assert hashed.startswith("$argon2id$")
        assert "jakejake" not in hashed

    def test_same_password_hashes_differently(self):
        """A random salt makes every hash unique."""
        assert hash_password("jakejake") != hash_password("jakejake")

    def test_verify_correct_password(self):
        hashed = hash_password("jakejake")

        assert verify_password("jakejake", hashed) is True

    def test_verify_wrong_password(self):
        hashed = hash_password("jakejake")

        assert verify_password("jakejak", hashed) is False

    def test_verify_malformed_hash_returns_false(self):
        """A corrupt stored hash is a mismatch, not a crash."""
        assert verify_password("jakejake", "not-a-hash") is False


# =============================================================================
# Token Tests
# =============================================================================

class TestTokenCodec:
    """Tests for TokenCodec."""

    @pytest.fixture
    def codec(self):
        return TokenCodec(secret="unit-test-secret-key", expire_seconds=3600)

    def test_round_trip(self, codec):
        """The subject survives encode/decode as an int."""
        token = codec.create_token(42)

        payload = codec.decode_token(token)

        assert payload.sub == 42
        assert payload.exp - payload.iat == 3600

    def test_subject_is_string_claim(self, codec):
        """JWT requires sub to be a string."""
        token = codec.create_token(7)

        claims = jwt.get_unverified_claims(token)

        assert claims["sub"] == "7"

    def test_expired_token_rejected(self):
        codec = TokenCodec(secret="unit-test-secret-key", expire_seconds=-60)
        token = codec.create_token(1)

        with pytest.raises(AuthenticationError) as exc_info:
            codec.decode_token(token)

        assert exc_info.value.message == "Token has expired"
        assert exc_info.value.status_code == 401

    def test_token_signed_with_other_secret_rejected(self, codec):
        forged = TokenCodec(secret="attacker-secret-key!").create_token(1)

        with pytest.raises(AuthenticationError) as exc_info:
            codec.decode_token(forged)

        assert exc_info.value.message == "Invalid token"

    def test_garbage_token_rejected(self, codec):
        with pytest.raises(AuthenticationError):
            codec.decode_token("not.a.jwt")

    def test_non_numeric_subject_rejected(self, codec):
        """Tokens must identify a user by integer id."""
        token = jwt.encode(
            {"sub": "jake", "exp": 9999999999},
            "unit-test-secret-key",
            algorithm="HS256",
        )

        with pytest.raises(AuthenticationError) as exc_info:
            codec.decode_token(token)

        assert exc_info.value.message == "Invalid token"
