"""Post Routes: listing, search, detail, CRUD and comments.

Invariants:
    - Reads accept an optional bearer token (authors see their own drafts)
    - Mutations require the gate; ownership enforced by ContentService
    - /search is registered before /{post_id} so it is never captured as an id
    - DELETE returns 204 with an empty body

Design Decisions:
    - Thin routes: parse → service → response model, no business logic here
    - Listing returns a bare array; clients detect the last page by length < limit
"""

from fastapi import APIRouter, Depends, Query, Response, status

from app.api.dependencies import (
    get_content_service, optional_identity, require_identity,
)
from app.core.domain_types import Identity
from app.schemas.post import (
    CommentCreate, PostCreate, PostResponse, PostSummaryResponse, PostUpdate,
)
from app.services.content_service import ContentService

router = APIRouter(prefix="/api/v1/posts", tags=["posts"])


@router.get("", response_model=list[PostSummaryResponse])
async def list_posts(
    page: int = Query(1, ge=1),
    limit: int | None = Query(None, ge=1),
    category: str | None = Query(None),
    q: str | None = Query(None),
    viewer: Identity | None = Depends(optional_identity),
    content: ContentService = Depends(get_content_service),
):
    """Newest posts first, optionally filtered by category and search text."""
    return await content.list_posts(
        viewer=viewer, page=page, limit=limit, category=category, query=q,
    )


@router.get("/search", response_model=list[PostSummaryResponse])
async def search_posts(
    q: str = Query(..., min_length=1),
    page: int = Query(1, ge=1),
    limit: int | None = Query(None, ge=1),
    category: str | None = Query(None),
    viewer: Identity | None = Depends(optional_identity),
    content: ContentService = Depends(get_content_service),
):
    """Ranked free-text search over title, content, excerpt and tags."""
    return await content.list_posts(
        viewer=viewer, page=page, limit=limit, category=category, query=q,
    )


@router.get("/{post_id}", response_model=PostResponse)
async def get_post(
    post_id: str,
    viewer: Identity | None = Depends(optional_identity),
    content: ContentService = Depends(get_content_service),
):
    """Full post; counts as a view."""
    return await content.get_post(post_id, viewer)


@router.post(
    "", response_model=PostResponse, status_code=status.HTTP_201_CREATED,
)
async def create_post(
    body: PostCreate,
    identity: Identity = Depends(require_identity),
    content: ContentService = Depends(get_content_service),
):
    return await content.create_post(identity, body.to_fields())


@router.put("/{post_id}", response_model=PostResponse)
async def update_post(
    post_id: str,
    body: PostUpdate,
    identity: Identity = Depends(require_identity),
    content: ContentService = Depends(get_content_service),
):
    return await content.update_post(identity, post_id, body.to_fields())


@router.delete("/{post_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_post(
    post_id: str,
    identity: Identity = Depends(require_identity),
    content: ContentService = Depends(get_content_service),
):
    await content.delete_post(identity, post_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.post(
    "/{post_id}/comments", response_model=PostResponse,
    status_code=status.HTTP_201_CREATED,
)
async def add_comment(
    post_id: str,
    body: CommentCreate,
    identity: Identity = Depends(require_identity),
    content: ContentService = Depends(get_content_service),
):
    """Append a comment; returns the whole post with its comment thread."""
    return await content.add_comment(identity, post_id, body.content)
