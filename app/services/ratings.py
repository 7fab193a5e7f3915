"""Rating ledger: at most one like/dislike per (post, account)."""

import logging
from typing import Literal

from sqlalchemy import update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from app.core.database import transaction
from app.core.exceptions import AlreadyRated, NotFound, Unregistered
from app.models import Account, Post, PostRating

logger = logging.getLogger(__name__)

Direction = Literal["plus", "minus"]


class RatingLedger:
    """
    Counter increment and ledger insert commit together or not at all.

    No "has this account rated?" query runs first: the unique constraint on
    (post_id, account_id) rejects the second of two concurrent casts, and its
    IntegrityError rolls back the increment too.
    """

    def cast_rating(
        self,
        session: Session,
        post_id: int,
        account_id: int,
        direction: Direction,
    ) -> None:
        """Record the rating. Raises AlreadyRated (any direction), NotFound or Unregistered."""
        counter = Post.rate_plus if direction == "plus" else Post.rate_minus
        try:
            with transaction(session):
                result = session.execute(
                    update(Post)
                    .where(Post.id == post_id)
                    .values({counter: counter + 1})
                    .execution_options(synchronize_session=False)
                )
                if result.rowcount == 0:
                    raise NotFound("Post not found.")
                # An access token can outlive its account; the ledger would then fail
                # on the account foreign key, not on the duplicate check.
                if session.get(Account, account_id) is None:
                    raise Unregistered("Account no longer exists.")
                session.add(
                    PostRating(post_id=post_id, account_id=account_id, direction=direction)
                )
                session.flush()
        except IntegrityError as e:
            logger.debug("Duplicate rating rejected: post_id=%s", post_id)
            raise AlreadyRated(cause=e) from e
        logger.info("Rating recorded: post_id=%s direction=%s", post_id, direction)
