"""
Unit tests for password hashing and token handling.
"""

from datetime import timedelta
from uuid import uuid4

import pytest
from jose import jwt

from app.adapters.configuration.config import settings
from app.adapters.outbound.security.auth_user_manager import UserAuthManager
from app.domain.exceptions import AuthenticationException


class TestPasswordHashing:

    async def test_verify_accepts_original_password(self):
        hashed = await UserAuthManager.hash_password("secret1")
        assert hashed != "secret1"
        assert await UserAuthManager.verify_password("secret1", hashed) is True

    async def test_verify_rejects_other_password(self):
        hashed = await UserAuthManager.hash_password("secret1")
        assert await UserAuthManager.verify_password("secret2", hashed) is False

    async def test_hash_is_salted(self):
        first = await UserAuthManager.hash_password("secret1")
        second = await UserAuthManager.hash_password("secret1")
        assert first != second

    async def test_malformed_hash_fails_closed(self):
        assert await UserAuthManager.verify_password("secret1", "not-a-bcrypt-hash") is False

    async def test_empty_inputs_fail_closed(self):
        hashed = await UserAuthManager.hash_password("secret1")
        assert await UserAuthManager.verify_password("", hashed) is False
        assert await UserAuthManager.verify_password("secret1", None) is False

    async def test_dummy_verification_never_succeeds(self):
        assert await UserAuthManager.verify_against_dummy("dummy-password-for-timing") is False


class TestAccessToken:

    async def test_round_trip_yields_subject_and_role(self):
        user_id = uuid4()
        token = await UserAuthManager.create_access_token(subject=str(user_id), role="admin")

        payload = await UserAuthManager.verify_access_token(token)

        assert payload.subject == str(user_id)
        assert payload.role == "admin"
        assert payload.expires_at > payload.issued_at

    async def test_default_lifetime_is_access_token_lifetime(self):
        token = await UserAuthManager.create_access_token(subject="abc", role="user")
        payload = await UserAuthManager.verify_access_token(token)
        assert payload.expires_at - payload.issued_at == settings.ACCESS_TOKEN_EXPIRE_MINUTES * 60

    async def test_expired_token_is_rejected(self):
        token = await UserAuthManager.create_access_token(
            subject="abc", role="user", expires_delta=timedelta(seconds=-10)
        )
        with pytest.raises(AuthenticationException, match="expired"):
            await UserAuthManager.verify_access_token(token)

    async def test_tampered_token_is_rejected(self):
        token = await UserAuthManager.create_access_token(subject="abc", role="user")
        header, payload, signature = token.split(".")
        tampered = ".".join([header, payload, signature[::-1]])
        with pytest.raises(AuthenticationException):
            await UserAuthManager.verify_access_token(tampered)

    async def test_token_signed_with_other_secret_is_rejected(self):
        token = jwt.encode({"sub": "abc", "role": "admin", "type": "user"}, "other-secret", algorithm="HS256")
        with pytest.raises(AuthenticationException, match="Invalid token"):
            await UserAuthManager.verify_access_token(token)

    async def test_wrong_token_type_is_rejected(self):
        token = jwt.encode(
            {"sub": "abc", "role": "user", "type": "client"},
            settings.SECRET_KEY,
            algorithm=settings.ALGORITHM,
        )
        with pytest.raises(AuthenticationException, match="incorrect type"):
            await UserAuthManager.verify_access_token(token)

    async def test_missing_subject_is_rejected(self):
        token = jwt.encode({"role": "user", "type": "user"}, settings.SECRET_KEY, algorithm=settings.ALGORITHM)
        with pytest.raises(AuthenticationException, match="missing claims"):
            await UserAuthManager.verify_access_token(token)

    async def test_garbage_is_rejected(self):
        with pytest.raises(AuthenticationException):
            await UserAuthManager.verify_access_token("definitely.not.a-token")
