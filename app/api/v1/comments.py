"""Comments on posts."""

from typing import Annotated

from fastapi import APIRouter, Query, status

from app.api.guards import AccessIdentity, Container, DbSession
from app.schemas.auth import MessageResponse
from app.schemas.boards import (
    CommentCreateRequest,
    CommentItem,
    CommentListResponse,
    CommentUpdateRequest,
    IdResponse,
)
from app.services import comments

router = APIRouter()


@router.post("", response_model=IdResponse, status_code=status.HTTP_201_CREATED)
def create_comment(
    body: CommentCreateRequest,
    identity: AccessIdentity,
    db: DbSession,
    container: Container,
) -> IdResponse:
    comment = comments.create_comment(db, container.hasher, identity, body)
    return IdResponse(id=comment.id)


@router.get("/{post_id}", response_model=CommentListResponse)
def list_comments(
    post_id: int,
    db: DbSession,
    container: Container,
    page: Annotated[int, Query(ge=1)] = 1,
) -> CommentListResponse:
    rows, total, total_pages = comments.list_comments(
        db, post_id, page, container.settings.PAGE_SIZE
    )
    return CommentListResponse(
        items=[CommentItem.model_validate(c) for c in rows],
        total=total,
        page=page,
        total_pages=total_pages,
    )


@router.patch("/{comment_id}", response_model=IdResponse)
def update_comment(
    comment_id: int,
    body: CommentUpdateRequest,
    identity: AccessIdentity,
    db: DbSession,
    container: Container,
) -> IdResponse:
    comments.update_comment(db, container.ownership, identity, comment_id, body)
    return IdResponse(id=comment_id)


@router.delete("/{comment_id}", response_model=MessageResponse)
def delete_comment(
    comment_id: int,
    identity: AccessIdentity,
    db: DbSession,
    container: Container,
    password: str | None = None,
) -> MessageResponse:
    comments.delete_comment(db, container.ownership, identity, comment_id, password)
    return MessageResponse(message="Comment deleted.")
