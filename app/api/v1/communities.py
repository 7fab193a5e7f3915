"""Communities: public listings, admin-only management."""

from typing import Annotated

from fastapi import APIRouter, Query, status

from app.api.guards import AccessIdentity, Container, DbSession
from app.schemas.auth import MessageResponse
from app.schemas.boards import (
    CommunityCreateRequest,
    CommunityItem,
    CommunityListResponse,
    CommunityUpdateRequest,
    PostListItem,
    PostListResponse,
)
from app.services import communities

router = APIRouter()

Page = Annotated[int, Query(ge=1, description="1-based page number")]


@router.post("", response_model=CommunityItem, status_code=status.HTTP_201_CREATED)
def create_community(
    body: CommunityCreateRequest,
    identity: AccessIdentity,
    db: DbSession,
) -> CommunityItem:
    """Create a community (admin only)."""
    community = communities.create_community(db, identity, body)
    return CommunityItem.model_validate(community)


@router.get("", response_model=CommunityListResponse)
def list_communities(db: DbSession, container: Container, page: Page = 1) -> CommunityListResponse:
    rows, total, total_pages = communities.list_communities(
        db, page, container.settings.PAGE_SIZE
    )
    return CommunityListResponse(
        items=[CommunityItem.model_validate(c) for c in rows],
        total=total,
        page=page,
        total_pages=total_pages,
    )


@router.get("/{community_id}", response_model=PostListResponse)
def list_posts(
    community_id: int,
    db: DbSession,
    container: Container,
    page: Page = 1,
) -> PostListResponse:
    """Posts of a community, newest first."""
    rows, total, total_pages = communities.list_posts(
        db, community_id, page, container.settings.PAGE_SIZE
    )
    return PostListResponse(
        items=[PostListItem.model_validate(p) for p in rows],
        total=total,
        page=page,
        total_pages=total_pages,
    )


@router.patch("/{community_id}", response_model=CommunityItem)
def update_community(
    community_id: int,
    body: CommunityUpdateRequest,
    identity: AccessIdentity,
    db: DbSession,
) -> CommunityItem:
    """Update title, description or thumbnail (admin only)."""
    community = communities.update_community(db, identity, community_id, body)
    return CommunityItem.model_validate(community)


@router.delete("/{community_id}", response_model=MessageResponse)
def delete_community(community_id: int, identity: AccessIdentity, db: DbSession) -> MessageResponse:
    communities.delete_community(db, identity, community_id)
    return MessageResponse(message="Community deleted.")
