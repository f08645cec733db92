"""Credential Service: registration, login and token verification.

Invariants:
    - Plaintext passwords only ever reach PasswordHasher; never stored, never logged
    - login() fails with the same AuthenticationError for unknown identifier and wrong password
    - verify_token() is stateless: signature + expiry only, no session table
    - The signing secret arrives via TokenSigner (constructor injection), never a global

Design Decisions:
    - Dummy hash verification on unknown identifier: both failure paths cost one argon2 verify
"""

import logging

from app.core.domain_types import UserId
from app.core.errors import AuthenticationError, ValidationError
from app.core.repository_protocols import UserLike, UserRepository
from app.core.user_rules import validate_registration
from app.infrastructure.security import PasswordHasher, TokenSigner

logger = logging.getLogger(__name__)


class CredentialService:
    """Issues identities and tokens for the blog."""

    def __init__(
        self,
        users: UserRepository,
        hasher: PasswordHasher,
        signer: TokenSigner,
    ):
        self._users = users
        self._hasher = hasher
        self._signer = signer
        self._dummy_hash: str | None = None

    async def register(self, username: str, email: str, password: str) -> UserLike:
        username, email = validate_registration(username, email, password)
        taken = await self._users.username_or_email_taken(username, email)
        if taken:
            raise ValidationError(f"That {taken} is already registered", field=taken)
        user = await self._users.insert_user(
            username, email, self._hasher.hash(password),
        )
        logger.info("User registered", extra={"user_id": user.id})
        return user

    async def login(self, identifier: str, password: str) -> tuple[str, UserLike]:
        """Return (token, user) or raise AuthenticationError."""
        user = await self._users.find_user_by_identifier(identifier or "")
        if user is None:
            self._hasher.verify(self._get_dummy_hash(), password or "")
            raise AuthenticationError()
        if not self._hasher.verify(user.password_hash, password or ""):
            logger.info("Login rejected", extra={"user_id": user.id})
            raise AuthenticationError()
        return self.issue_token(UserId(user.id)), user

    def issue_token(self, user_id: UserId) -> str:
        return self._signer.issue(user_id)

    def verify_token(self, token: str) -> UserId:
        return self._signer.verify(token)

    def _get_dummy_hash(self) -> str:
        if self._dummy_hash is None:
            self._dummy_hash = self._hasher.hash("not-a-real-password")
        return self._dummy_hash
