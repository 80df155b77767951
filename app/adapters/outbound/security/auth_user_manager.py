# app/adapters/outbound/security/auth_user_manager.py

import logging
from datetime import datetime, timedelta, timezone
from typing import Optional

from fastapi.concurrency import run_in_threadpool
from jose import jwt, JWTError, ExpiredSignatureError
from passlib.context import CryptContext

from app.adapters.configuration.config import settings
from app.domain.exceptions import AuthenticationException
from app.domain.models.user_domain_model import TokenPayload

logger = logging.getLogger(__name__)

TOKEN_TYPE = "user"


class UserAuthManager:
    """
    Password hashing and JWT handling for users.

    bcrypt work is CPU bound and runs in the thread pool so it does not
    stall the event loop.
    """

    crypt_context = CryptContext(
        schemes=["bcrypt"],
        deprecated="auto",
        bcrypt__rounds=settings.BCRYPT_ROUNDS,
    )

    _dummy_hash: Optional[str] = None

    @classmethod
    async def hash_password(cls, password: str) -> str:
        """Return the salted hash of a plain text password."""
        return await run_in_threadpool(cls.crypt_context.hash, password)

    @classmethod
    def _verify(cls, plain_password: str, hashed_password: str) -> bool:
        try:
            return cls.crypt_context.verify(plain_password, hashed_password)
        except (ValueError, TypeError):
            # Malformed or unknown hash format
            return False

    @classmethod
    async def verify_password(cls, plain_password: str, hashed_password: Optional[str]) -> bool:
        """Verify if the plain text password matches the stored hash. Never raises."""
        if not plain_password or not hashed_password:
            return False
        return await run_in_threadpool(cls._verify, plain_password, hashed_password)

    @classmethod
    async def verify_against_dummy(cls, plain_password: str) -> bool:
        """
        Spend the same bcrypt cost as a real check when the user does not exist,
        so response time does not reveal which usernames are registered.
        """
        if cls._dummy_hash is None:
            cls._dummy_hash = await cls.hash_password("dummy-password-for-timing")
        await cls.verify_password(plain_password or "x", cls._dummy_hash)
        return False

    @classmethod
    async def create_access_token(
            cls,
            subject: str,
            role: str,
            expires_delta: Optional[timedelta] = None,
    ) -> str:
        """
        Create a signed JWT carrying the user id and a snapshot of its role.

        - subject: the user's UUID.
        - role: role at issuance time.
        - expires_delta: custom lifetime, defaults to ACCESS_TOKEN_EXPIRE_MINUTES.
        """
        if expires_delta is None:
            expires_delta = timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES)

        now = datetime.now(timezone.utc)
        expire = now + expires_delta

        payload = {
            "sub": str(subject),
            "role": role,
            "type": TOKEN_TYPE,
            "iat": int(now.timestamp()),
            "exp": int(expire.timestamp()),
        }
        return jwt.encode(payload, settings.SECRET_KEY, algorithm=settings.ALGORITHM)

    @classmethod
    async def verify_access_token(cls, token: str) -> TokenPayload:
        """
        Verify signature and expiration of a JWT access token.

        Raises:
            AuthenticationException: malformed, tampered, expired or incomplete token
        """
        try:
            payload = jwt.decode(token, settings.SECRET_KEY, algorithms=[settings.ALGORITHM])
        except ExpiredSignatureError:
            raise AuthenticationException(detail="Token expired. Please login again.")
        except JWTError:
            raise AuthenticationException(detail="Invalid token")

        if payload.get("type") != TOKEN_TYPE:
            raise AuthenticationException(detail="Invalid token: incorrect type.")

        subject = payload.get("sub")
        role = payload.get("role")
        if not subject or not role:
            raise AuthenticationException(detail="Invalid token: missing claims.")

        return TokenPayload(
            subject=subject,
            role=role,
            issued_at=payload.get("iat"),
            expires_at=payload.get("exp"),
        )
