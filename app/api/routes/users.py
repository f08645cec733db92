"""User Routes: registration, login and current identity.

Invariants:
    - register/login are public; /me sits behind the gate
    - Responses never include password_hash
"""

import logging

from fastapi import APIRouter, Depends, status

from app.api.dependencies import get_credential_service, require_identity
from app.core.domain_types import Identity
from app.schemas.user import (
    IdentityResponse, LoginResponse, UserLogin, UserRegister, UserResponse,
)
from app.services.credential_service import CredentialService

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/v1/users", tags=["users"])


@router.post(
    "/register", response_model=UserResponse,
    status_code=status.HTTP_201_CREATED,
)
async def register(
    body: UserRegister,
    credentials: CredentialService = Depends(get_credential_service),
):
    """Create an account."""
    user = await credentials.register(body.username, body.email, body.password)
    return UserResponse.model_validate(user)


@router.post("/login", response_model=LoginResponse)
async def login(
    body: UserLogin,
    credentials: CredentialService = Depends(get_credential_service),
):
    """Exchange username-or-email + password for a bearer token."""
    token, user = await credentials.login(body.identifier, body.password)
    return LoginResponse(token=token, user=UserResponse.model_validate(user))


@router.get("/me", response_model=IdentityResponse)
async def me(identity: Identity = Depends(require_identity)):
    return IdentityResponse.model_validate(identity)
