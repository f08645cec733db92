"""Security Primitives: password hashing (argon2) and signed session tokens (JWT).

Invariants:
    - Plaintext passwords are hashed once and never logged or returned
    - Tokens carry sub (user id), iat, exp; HS-signed with an injected secret
    - verify() is pure: no IO, safe to run concurrently
    - Every PyJWT failure maps to InvalidTokenError; expiry has its own message

Design Decisions:
    - argon2-cffi PasswordHasher: salted, memory-hard, verify raises on mismatch
    - Stateless tokens: no server-side session table, logout is client-side
    - now() injectable so expiry is testable without sleeping
"""

from datetime import datetime, timedelta, timezone
from typing import Callable
from uuid import UUID

import jwt
from argon2 import PasswordHasher as Argon2Hasher
from argon2.exceptions import InvalidHashError, VerificationError

from app.core.domain_types import UserId
from app.core.errors import InvalidTokenError


class PasswordHasher:
    """One-way password hashing."""

    def __init__(self, hasher: Argon2Hasher | None = None):
        self._hasher = hasher or Argon2Hasher()

    def hash(self, password: str) -> str:
        return self._hasher.hash(password)

    def verify(self, password_hash: str, password: str) -> bool:
        try:
            return self._hasher.verify(password_hash, password)
        except (VerificationError, InvalidHashError):
            return False


class TokenSigner:
    """Issues and verifies signed, expiring session tokens."""

    def __init__(
        self,
        secret: str,
        algorithm: str = "HS256",
        expire_minutes: int = 60,
        now: Callable[[], datetime] | None = None,
    ):
        if not secret:
            raise ValueError("token secret must not be empty")
        self._secret = secret
        self._algorithm = algorithm
        self._expires = timedelta(minutes=expire_minutes)
        self._now = now or (lambda: datetime.now(timezone.utc))

    def issue(self, user_id: UserId) -> str:
        now = self._now()
        payload = {
            "sub": str(user_id),
            "iat": int(now.timestamp()),
            "exp": int((now + self._expires).timestamp()),
        }
        return jwt.encode(payload, self._secret, algorithm=self._algorithm)

    def verify(self, token: str) -> UserId:
        try:
            payload = jwt.decode(
                token,
                self._secret,
                algorithms=[self._algorithm],
                options={"require": ["sub", "exp"], "verify_iat": False},
                leeway=0,
            )
        except jwt.ExpiredSignatureError:
            raise InvalidTokenError("Token expired")
        except jwt.InvalidTokenError:
            raise InvalidTokenError("Invalid token")
        try:
            return UserId(UUID(payload["sub"]))
        except (ValueError, TypeError, AttributeError):
            raise InvalidTokenError("Invalid token")
