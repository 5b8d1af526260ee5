"""
Tests for password hashing and access tokens.
"""

import logging
import uuid
from datetime import timedelta

import jwt
import pytest

from taskboard.config import DEFAULT_JWT_SECRET, Settings, get_settings
from taskboard.security import (
    TokenError,
    check_jwt_secret,
    create_access_token,
    decode_access_token,
    hash_password,
    verify_password,
)


class TestPasswords:

    def test_hash_is_not_plaintext(self):
        hashed = hash_password("password123")
        assert hashed != "password123"
        assert hashed.startswith("$2")

    def test_verify_accepts_correct_password(self):
        hashed = hash_password("password123")
        assert verify_password("password123", hashed)

    def test_verify_rejects_wrong_password(self):
        hashed = hash_password("password123")
        assert not verify_password("password124", hashed)

    def test_verify_rejects_garbage_hash(self):
        assert not verify_password("password123", "not-a-bcrypt-hash")


class TestAccessTokens:

    def test_round_trip_returns_user_id(self):
        user_id = uuid.uuid4()
        token = create_access_token(user_id)
        assert decode_access_token(token) == user_id

    def test_expired_token_is_rejected(self):
        token = create_access_token(uuid.uuid4(), expires_delta=timedelta(seconds=-10))
        with pytest.raises(TokenError, match="expired"):
            decode_access_token(token)

    def test_wrong_signature_is_rejected(self):
        settings = get_settings()
        forged = jwt.encode(
            {"sub": str(uuid.uuid4()), "exp": 4102444800},
            "some-other-secret-0123456789abcdef0123456789",
            algorithm=settings.jwt_algorithm,
        )
        with pytest.raises(TokenError):
            decode_access_token(forged)

    def test_malformed_token_is_rejected(self):
        with pytest.raises(TokenError):
            decode_access_token("not.a.token")

    def test_non_uuid_subject_is_rejected(self):
        settings = get_settings()
        token = jwt.encode(
            {"sub": "alice", "exp": 4102444800},
            settings.jwt_secret,
            algorithm=settings.jwt_algorithm,
        )
        with pytest.raises(TokenError):
            decode_access_token(token)

    def test_missing_exp_is_rejected(self):
        settings = get_settings()
        token = jwt.encode(
            {"sub": str(uuid.uuid4())},
            settings.jwt_secret,
            algorithm=settings.jwt_algorithm,
        )
        with pytest.raises(TokenError):
            decode_access_token(token)


class TestJwtSecretCheck:

    def test_default_secret_refused_outside_debug(self):
        with pytest.raises(RuntimeError, match="TASKBOARD_JWT_SECRET"):
            check_jwt_secret(Settings(jwt_secret=DEFAULT_JWT_SECRET, debug=False))

    def test_default_secret_warns_in_debug(self, caplog):
        with caplog.at_level(logging.WARNING, logger="taskboard.security"):
            check_jwt_secret(Settings(jwt_secret=DEFAULT_JWT_SECRET, debug=True))

        assert "default JWT secret" in caplog.text

    def test_configured_secret_passes(self, caplog):
        with caplog.at_level(logging.WARNING, logger="taskboard.security"):
            check_jwt_secret(Settings(jwt_secret="a-real-secret-0123456789abcdef0123", debug=False))

        assert caplog.text == ""
