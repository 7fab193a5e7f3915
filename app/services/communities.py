"""Communities: admin-managed boards and their post listings."""

import logging

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from app.core.database import transaction
from app.core.exceptions import Conflict, NotFound, PermissionDenied, Unregistered
from app.models import Community, Post
from app.schemas.auth import Identity
from app.schemas.boards import CommunityCreateRequest, CommunityUpdateRequest
from app.services.paging import page_of

logger = logging.getLogger(__name__)


def require_admin(identity: Identity) -> None:
    if not identity.is_authenticated:
        raise Unregistered()
    if not identity.is_admin:
        logger.debug("Admin action denied for account id=%s", identity.account_id)
        raise PermissionDenied()


def get_community(session: Session, community_id: int) -> Community:
    community = session.get(Community, community_id)
    if community is None:
        raise NotFound("Community not found.")
    return community


def create_community(
    session: Session, identity: Identity, body: CommunityCreateRequest
) -> Community:
    require_admin(identity)
    community = Community(title=body.title, description=f"{body.title} board")
    try:
        with transaction(session):
            session.add(community)
    except IntegrityError as e:
        raise Conflict("A community with this title already exists.", cause=e) from e
    logger.info("Community created: id=%s", community.id)
    return community


def list_communities(session: Session, page: int, page_size: int) -> tuple[list[Community], int, int]:
    return page_of(session.query(Community).order_by(Community.id), page, page_size)


def list_posts(
    session: Session, community_id: int, page: int, page_size: int
) -> tuple[list[Post], int, int]:
    """Posts of one community, newest first."""
    get_community(session, community_id)
    query = (
        session.query(Post)
        .filter(Post.community_id == community_id)
        .order_by(Post.id.desc())
    )
    return page_of(query, page, page_size)


def update_community(
    session: Session,
    identity: Identity,
    community_id: int,
    body: CommunityUpdateRequest,
) -> Community:
    require_admin(identity)
    try:
        with transaction(session):
            community = get_community(session, community_id)
            for field, value in body.model_dump(exclude_unset=True, exclude_none=True).items():
                setattr(community, field, value)
    except IntegrityError as e:
        raise Conflict("A community with this title already exists.", cause=e) from e
    return community


def delete_community(session: Session, identity: Identity, community_id: int) -> None:
    require_admin(identity)
    with transaction(session):
        community = get_community(session, community_id)
        session.delete(community)
    logger.info("Community deleted: id=%s", community_id)
