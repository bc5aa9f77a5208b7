"""Password hashing, access tokens and one-time tokens."""

import uuid
from datetime import timedelta

import pytest
from jose import jwt

from influencer_network.config import settings
from influencer_network.exceptions import AuthenticationError
from influencer_network.security import (
    create_access_token,
    decode_access_token,
    generate_one_time_token,
    hash_password,
    hash_token,
    verify_password,
)


class TestPasswords:

    def test_hash_and_verify(self):
        hashed = hash_password("s3cret-pass", rounds=4)
        assert hashed != "s3cret-pass"
        assert hashed.startswith("$2")
        assert verify_password("s3cret-pass", hashed)
        assert not verify_password("wrong-pass", hashed)

    def test_hashes_are_salted(self):
        assert hash_password("same", rounds=4) != hash_password("same", rounds=4)

    def test_malformed_hash_never_matches(self):
        assert verify_password("anything", "not-a-bcrypt-hash") is False


class TestAccessTokens:

    def test_round_trip_claims(self):
        user_id = uuid.uuid4()
        token = create_access_token(user_id, "jane@example.com", "manager")

        claims = decode_access_token(token)
        assert claims["userId"] == str(user_id)
        assert claims["email"] == "jane@example.com"
        assert claims["role"] == "manager"
        assert claims["exp"] - claims["iat"] == settings.jwt_expires_in_seconds

    def test_expired_token(self):
        token = create_access_token(uuid.uuid4(), "a@b.co", "user", expires_delta=timedelta(seconds=-30))
        with pytest.raises(AuthenticationError, match="Token has expired"):
            decode_access_token(token)

    def test_wrong_signature(self):
        token = jwt.encode({"userId": str(uuid.uuid4())}, "another-secret-entirely-32-chars!!", algorithm="HS256")
        with pytest.raises(AuthenticationError, match="Invalid token"):
            decode_access_token(token)

    def test_missing_user_id_claim(self):
        token = jwt.encode({"sub": "someone"}, settings.jwt_secret, algorithm=settings.jwt_algorithm)
        with pytest.raises(AuthenticationError, match="Invalid token"):
            decode_access_token(token)

    def test_garbage_token(self):
        with pytest.raises(AuthenticationError):
            decode_access_token("not.a.jwt")


class TestOneTimeTokens:

    def test_only_hash_is_derivable(self):
        raw, digest = generate_one_time_token()
        assert len(raw) == 64
        assert digest == hash_token(raw)
        assert digest != raw

    def test_tokens_are_unique(self):
        assert generate_one_time_token()[0] != generate_one_time_token()[0]
