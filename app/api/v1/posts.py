"""Posts. Open to members and anonymous visitors; edits go through the ownership resolver."""

from fastapi import APIRouter, status

from app.api.guards import AccessIdentity, Container, DbSession
from app.schemas.auth import MessageResponse
from app.schemas.boards import (
    CheckPasswordRequest,
    IdResponse,
    PostCreateRequest,
    PostDetail,
    PostUpdateRequest,
    RateRequest,
)
from app.services import posts

router = APIRouter()


@router.post("", response_model=IdResponse, status_code=status.HTTP_201_CREATED)
def create_post(
    body: PostCreateRequest,
    identity: AccessIdentity,
    db: DbSession,
    container: Container,
) -> IdResponse:
    """
    Create a post. Logged-in members own it by account; anonymous visitors
    must send a display name (username) and a password for later edits.
    """
    post = posts.create_post(db, container.hasher, identity, body)
    return IdResponse(id=post.id)


@router.get("/{post_id}", response_model=PostDetail)
def get_post(post_id: int, db: DbSession) -> PostDetail:
    """Post detail; counts one view."""
    post = posts.read_post(db, post_id)
    return PostDetail.model_validate(post)


@router.post("/{post_id}/check", response_model=MessageResponse)
def check_password(
    post_id: int,
    body: CheckPasswordRequest,
    db: DbSession,
    container: Container,
) -> MessageResponse:
    """Verify the password of an anonymous post."""
    posts.check_secret(db, container.ownership, post_id, body.password)
    return MessageResponse(message="Password confirmed.")


@router.patch("/{post_id}", response_model=IdResponse)
def update_post(
    post_id: int,
    body: PostUpdateRequest,
    identity: AccessIdentity,
    db: DbSession,
    container: Container,
) -> IdResponse:
    posts.update_post(db, container.ownership, identity, post_id, body)
    return IdResponse(id=post_id)


@router.delete("/{post_id}", response_model=MessageResponse)
def delete_post(
    post_id: int,
    identity: AccessIdentity,
    db: DbSession,
    container: Container,
    password: str | None = None,
) -> MessageResponse:
    """Delete a post. Anonymous posts need ?password=."""
    posts.delete_post(db, container.ownership, identity, post_id, password)
    return MessageResponse(message="Post deleted.")


@router.post("/{post_id}/rate", response_model=MessageResponse)
def rate_post(
    post_id: int,
    body: RateRequest,
    identity: AccessIdentity,
    db: DbSession,
    container: Container,
) -> MessageResponse:
    """Like (rate=true) or dislike (rate=false). Members only, once per post."""
    posts.rate_post(db, container.ratings, identity, post_id, body.rate)
    return MessageResponse(message="Rating recorded.")
