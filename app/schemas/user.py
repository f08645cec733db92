"""User Schemas: registration, login and identity payloads.

Invariants:
    - password is accepted on input only; no response model has a password field
    - login identifier may be a username or an email

Design Decisions:
    - Shape checks beyond "is a string" live in core/user_rules.py so the
      credential service enforces them for every caller, not just HTTP
"""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict


class UserRegister(BaseModel):
    username: str
    email: str
    password: str


class UserLogin(BaseModel):
    identifier: str
    password: str


class UserResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    username: str
    email: str
    created_at: datetime


class IdentityResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    username: str


class LoginResponse(BaseModel):
    token: str
    user: UserResponse
