"""Category Schemas: request/response models for categories.

Invariants:
    - name: 1-50 chars after trimming; description <= 200 chars
    - url is computed from slug on output, never accepted on input
"""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field, computed_field

from app.core.category_rules import (
    DESCRIPTION_MAX_LENGTH, NAME_MAX_LENGTH, category_url,
)


class CategoryCreate(BaseModel):
    name: str = Field(min_length=1, max_length=NAME_MAX_LENGTH)
    description: str | None = Field(None, max_length=DESCRIPTION_MAX_LENGTH)


class CategoryUpdate(BaseModel):
    name: str | None = Field(None, min_length=1, max_length=NAME_MAX_LENGTH)
    description: str | None = Field(None, max_length=DESCRIPTION_MAX_LENGTH)


class CategoryResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    name: str
    description: str
    slug: str
    created_at: datetime
    updated_at: datetime

    @computed_field
    @property
    def url(self) -> str:
        return category_url(self.slug)
