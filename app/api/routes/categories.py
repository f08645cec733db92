"""Category Routes: public listing/lookup, gated create/update/delete.

Invariants:
    - GET /categories/{slug} resolves the same path as Category.url
    - DELETE refused (409) while posts still reference the category
"""

from fastapi import APIRouter, Depends, Response, status

from app.api.dependencies import get_content_service, require_identity
from app.core.domain_types import Identity
from app.schemas.category import CategoryCreate, CategoryResponse, CategoryUpdate
from app.services.content_service import ContentService

router = APIRouter(prefix="/api/v1/categories", tags=["categories"])


@router.get("", response_model=list[CategoryResponse])
async def list_categories(
    content: ContentService = Depends(get_content_service),
):
    categories = await content.list_categories()
    return [CategoryResponse.model_validate(c) for c in categories]


@router.get("/{slug}", response_model=CategoryResponse)
async def get_category(
    slug: str, content: ContentService = Depends(get_content_service),
):
    return CategoryResponse.model_validate(await content.get_category(slug))


@router.post(
    "", response_model=CategoryResponse, status_code=status.HTTP_201_CREATED,
)
async def create_category(
    body: CategoryCreate,
    identity: Identity = Depends(require_identity),
    content: ContentService = Depends(get_content_service),
):
    category = await content.create_category(identity, body.name, body.description)
    return CategoryResponse.model_validate(category)


@router.put("/{category_id}", response_model=CategoryResponse)
async def update_category(
    category_id: str,
    body: CategoryUpdate,
    identity: Identity = Depends(require_identity),
    content: ContentService = Depends(get_content_service),
):
    category = await content.update_category(
        identity, category_id, body.name, body.description,
    )
    return CategoryResponse.model_validate(category)


@router.delete("/{category_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_category(
    category_id: str,
    identity: Identity = Depends(require_identity),
    content: ContentService = Depends(get_content_service),
):
    await content.delete_category(identity, category_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
