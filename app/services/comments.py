"""Comments on posts, with the same ownership rules as posts."""

import logging
from datetime import UTC, datetime

from sqlalchemy import update
from sqlalchemy.orm import Session

from app.core.database import transaction
from app.core.exceptions import NotFound
from app.core.security import PasswordHasher
from app.models import Comment, Post
from app.schemas.auth import Identity
from app.schemas.boards import CommentCreateRequest, CommentUpdateRequest
from app.services.ownership import OwnershipResolver, new_owner
from app.services.paging import page_of
from app.services.posts import get_post_row

logger = logging.getLogger(__name__)


def _get_comment(session: Session, comment_id: int) -> Comment:
    comment = session.get(Comment, comment_id)
    if comment is None:
        raise NotFound("Comment not found.")
    return comment


def _bump_comment_count(session: Session, post_id: int, delta: int) -> None:
    session.execute(
        update(Post)
        .where(Post.id == post_id)
        .values(comment_count=Post.comment_count + delta)
        .execution_options(synchronize_session=False)
    )


def create_comment(
    session: Session,
    hasher: PasswordHasher,
    identity: Identity,
    body: CommentCreateRequest,
) -> Comment:
    """Insert the comment and bump the post's comment_count together."""
    owner, display_name = new_owner(identity, body.username, body.password, hasher)
    with transaction(session):
        post = get_post_row(session, body.post_id)
        comment = Comment(
            post_id=post.id,
            community_id=post.community_id,
            content=body.content,
            username=display_name,
        )
        comment.set_owner(owner)
        session.add(comment)
        _bump_comment_count(session, post.id, 1)
    logger.info("Comment created: id=%s post_id=%s", comment.id, body.post_id)
    return comment


def list_comments(
    session: Session, post_id: int, page: int, page_size: int
) -> tuple[list[Comment], int, int]:
    query = (
        session.query(Comment)
        .filter(Comment.post_id == post_id)
        .order_by(Comment.id)
    )
    return page_of(query, page, page_size)


def update_comment(
    session: Session,
    ownership: OwnershipResolver,
    identity: Identity,
    comment_id: int,
    body: CommentUpdateRequest,
) -> Comment:
    with transaction(session):
        comment = _get_comment(session, comment_id)
        ownership.require(comment, identity, body.password, "mutate")
        comment.content = body.content
        comment.updated_at = datetime.now(UTC)
    return comment


def delete_comment(
    session: Session,
    ownership: OwnershipResolver,
    identity: Identity,
    comment_id: int,
    password: str | None,
) -> None:
    with transaction(session):
        comment = _get_comment(session, comment_id)
        ownership.require(comment, identity, password, "delete")
        post_id = comment.post_id
        session.delete(comment)
        _bump_comment_count(session, post_id, -1)
    logger.info("Comment deleted: id=%s post_id=%s", comment_id, post_id)
