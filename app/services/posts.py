"""Posts: create, read (with view count), edit, delete, secret check and rating."""

import logging
from datetime import UTC, datetime

from sqlalchemy import update
from sqlalchemy.orm import Session

from app.core.database import transaction
from app.core.exceptions import NotFound, PermissionDenied, Unregistered
from app.core.security import PasswordHasher
from app.models import AnonymousOwner, Post
from app.schemas.auth import Identity
from app.schemas.boards import PostCreateRequest, PostUpdateRequest
from app.services.communities import get_community
from app.services.ownership import OwnershipResolver, new_owner
from app.services.ratings import RatingLedger

logger = logging.getLogger(__name__)


def get_post_row(session: Session, post_id: int) -> Post:
    post = session.get(Post, post_id)
    if post is None:
        raise NotFound("Post not found.")
    return post


def create_post(
    session: Session,
    hasher: PasswordHasher,
    identity: Identity,
    body: PostCreateRequest,
) -> Post:
    owner, display_name = new_owner(identity, body.username, body.password, hasher)
    get_community(session, body.community_id)

    post = Post(
        community_id=body.community_id,
        title=body.title,
        content=body.content,
        username=display_name,
        view_count=0,
        rate_plus=0,
        rate_minus=0,
        comment_count=0,
    )
    post.set_owner(owner)
    with transaction(session):
        session.add(post)
    logger.info(
        "Post created: id=%s community_id=%s member=%s",
        post.id,
        body.community_id,
        identity.is_authenticated,
    )
    return post


def read_post(session: Session, post_id: int) -> Post:
    """Increment the view count and read the post in one transaction."""
    with transaction(session):
        result = session.execute(
            update(Post)
            .where(Post.id == post_id)
            .values(view_count=Post.view_count + 1)
            .execution_options(synchronize_session=False)
        )
        if result.rowcount == 0:
            raise NotFound("Post not found.")
        post = session.get(Post, post_id, populate_existing=True)
    return post


def check_secret(
    session: Session,
    ownership: OwnershipResolver,
    post_id: int,
    password: str,
) -> None:
    """Confirm the secret of an anonymous post (before showing its edit form)."""
    post = get_post_row(session, post_id)
    if not isinstance(post.owner, AnonymousOwner):
        raise PermissionDenied()
    ownership.require(post, Identity.anonymous(), password, "mutate")


def update_post(
    session: Session,
    ownership: OwnershipResolver,
    identity: Identity,
    post_id: int,
    body: PostUpdateRequest,
) -> Post:
    with transaction(session):
        post = get_post_row(session, post_id)
        ownership.require(post, identity, body.password, "mutate")
        if body.title is not None:
            post.title = body.title
        if body.content is not None:
            post.content = body.content
        post.updated_at = datetime.now(UTC)
    return post


def delete_post(
    session: Session,
    ownership: OwnershipResolver,
    identity: Identity,
    post_id: int,
    password: str | None,
) -> None:
    with transaction(session):
        post = get_post_row(session, post_id)
        ownership.require(post, identity, password, "delete")
        session.delete(post)
    logger.info("Post deleted: id=%s", post_id)


def rate_post(
    session: Session,
    ledger: RatingLedger,
    identity: Identity,
    post_id: int,
    rate: bool,
) -> None:
    """Members only; a second rating of the same post raises AlreadyRated."""
    if not identity.is_authenticated:
        raise Unregistered()
    ledger.cast_rating(session, post_id, identity.account_id, "plus" if rate else "minus")
