"""Tests for kimi_kitchen/services/auth.py - passwords and tokens."""
import uuid

from kimi_kitchen.services.auth import (
    create_access_token,
    decode_access_token,
    hash_password,
    verify_password,
)


class TestPasswords:
    def test_hash_and_verify(self):
        hashed = hash_password("admin123")
        assert hashed != "admin123"
        assert verify_password("admin123", hashed) is True
        assert verify_password("wrong", hashed) is False

    def test_missing_hash(self):
        assert verify_password("anything", None) is False

    def test_malformed_hash(self):
        assert verify_password("anything", "not-a-bcrypt-hash") is False


class TestTokens:
    def test_round_trip_claims(self):
        user_id = uuid.uuid4()
        token = create_access_token(user_id, "chef", "CHEF")

        payload = decode_access_token(token)

        assert payload["sub"] == str(user_id)
        assert payload["username"] == "chef"
        assert payload["role"] == "CHEF"

    def test_expired_token(self):
        token = create_access_token(uuid.uuid4(), "chef", "CHEF", expires_minutes=-1)
        assert decode_access_token(token) is None

    def test_tampered_token(self):
        token = create_access_token(uuid.uuid4(), "chef", "CHEF")
        assert decode_access_token(token[:-2] + "xx") is None
