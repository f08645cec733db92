"""Request Dependencies: service wiring and the bearer-token authorization gate.

Invariants:
    - require_identity: missing/invalid/expired token or unknown user → 401 before any service call
    - optional_identity: no header → anonymous reader; a bad token is still 401
    - The gate never checks ownership (services do, after loading the resource)
    - Token secret flows Settings → TokenSigner → CredentialService (no module global)

Design Decisions:
    - HTTPBearer(auto_error=False): we raise our own InvalidTokenError so the
      401 body uses the same error envelope as every other failure
    - One ContentStore per request session; services are cheap to build per request
"""

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.ext.asyncio import AsyncSession

from app.config import Settings, get_settings
from app.core.domain_types import Identity, UserId
from app.core.errors import InvalidTokenError
from app.infrastructure.database import get_db
from app.infrastructure.security import PasswordHasher, TokenSigner
from app.services.content_service import ContentService
from app.services.content_store import ContentStore
from app.services.credential_service import CredentialService

bearer_scheme = HTTPBearer(auto_error=False)
_password_hasher = PasswordHasher()


def get_store(db: AsyncSession = Depends(get_db)) -> ContentStore:
    return ContentStore(db)


def get_token_signer(settings: Settings = Depends(get_settings)) -> TokenSigner:
    return TokenSigner(
        settings.jwt_secret,
        algorithm=settings.jwt_algorithm,
        expire_minutes=settings.jwt_expire_minutes,
    )


def get_credential_service(
    store: ContentStore = Depends(get_store),
    signer: TokenSigner = Depends(get_token_signer),
) -> CredentialService:
    return CredentialService(store, _password_hasher, signer)


def get_content_service(
    store: ContentStore = Depends(get_store),
    settings: Settings = Depends(get_settings),
) -> ContentService:
    return ContentService(
        store, store,
        page_size=settings.posts_page_size,
        max_page_size=settings.posts_max_page_size,
    )


async def _resolve_identity(
    token: str, credentials: CredentialService, store: ContentStore,
) -> Identity:
    user_id = credentials.verify_token(token)
    user = await store.get_user(user_id)
    if user is None:
        raise InvalidTokenError("Invalid token")
    return Identity(id=UserId(user.id), username=user.username)


async def require_identity(
    bearer: HTTPAuthorizationCredentials | None = Depends(bearer_scheme),
    credentials: CredentialService = Depends(get_credential_service),
    store: ContentStore = Depends(get_store),
) -> Identity:
    """Gate for protected endpoints."""
    if bearer is None or not bearer.credentials:
        raise InvalidTokenError("No token supplied")
    return await _resolve_identity(bearer.credentials, credentials, store)


async def optional_identity(
    bearer: HTTPAuthorizationCredentials | None = Depends(bearer_scheme),
    credentials: CredentialService = Depends(get_credential_service),
    store: ContentStore = Depends(get_store),
) -> Identity | None:
    """Gate variant for public reads that show drafts to their author."""
    if bearer is None or not bearer.credentials:
        return None
    return await _resolve_identity(bearer.credentials, credentials, store)
