"""
Tests for JWT issuance and verification.
"""

import pytest
from jose import jwt

from auth.jwt import create_token, verify_token
from config.settings import config
from utils.errors import AuthenticationError


class TestTokens:
    def test_roundtrip_returns_user_id(self):
        token = create_token("4f1c2a3e-0000-4000-8000-000000000001")
        assert verify_token(token) == "4f1c2a3e-0000-4000-8000-000000000001"

    def test_expiry_is_24_hours(self):
        claims = jwt.get_unverified_claims(create_token("u1"))
        assert claims["exp"] - claims["iat"] == 86400

    def test_expired_token_rejected(self, monkeypatch):
        monkeypatch.setattr(config, "jwt_expiry_seconds", -60)
        token = create_token("u1")
        with pytest.raises(AuthenticationError, match="expired"):
            verify_token(token)

    def test_wrong_secret_rejected(self, monkeypatch):
        token = create_token("u1")
        monkeypatch.setattr(config, "jwt_secret", "another-secret")
        with pytest.raises(AuthenticationError, match="Invalid token"):
            verify_token(token)

    def test_garbage_rejected(self):
        with pytest.raises(AuthenticationError):
            verify_token("not.a.jwt")

    def test_token_without_subject_rejected(self):
        token = jwt.encode({"exp": 9999999999}, config.jwt_secret, algorithm=config.jwt_algorithm)
        with pytest.raises(AuthenticationError):
            verify_token(token)
