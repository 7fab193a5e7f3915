"""ORM models for posts and the post rating ledger."""

from sqlalchemy import (
    Column,
    DateTime,
    ForeignKey,
    Integer,
    String,
    Text,
    UniqueConstraint,
    func,
)

from app.models.base import Base
from app.models.ownable import OwnableMixin


class Post(OwnableMixin, Base):
    """
    A post in a community, owned by a member or by an anonymous secret.

    rate_plus / rate_minus are counters kept in step with PostRating rows;
    comment_count with Comment rows.
    """

    __tablename__ = "posts"

    id = Column(Integer, primary_key=True, autoincrement=True)
    community_id = Column(
        Integer,
        ForeignKey("communities.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    title = Column(String(255), nullable=False)
    content = Column(Text, nullable=False)
    view_count = Column(Integer, nullable=False, default=0)
    rate_plus = Column(Integer, nullable=False, default=0)
    rate_minus = Column(Integer, nullable=False, default=0)
    comment_count = Column(Integer, nullable=False, default=0)
    created_at = Column(
        DateTime(timezone=True),
        nullable=False,
        server_default=func.now(),
    )
    updated_at = Column(DateTime(timezone=True), nullable=True)


class PostRating(Base):
    """
    One like/dislike per (post, account), ever. The unique constraint is what
    rejects a second cast, including concurrent duplicates.
    """

    __tablename__ = "post_ratings"
    __table_args__ = (
        UniqueConstraint("post_id", "account_id", name="uq_post_ratings_post_account"),
    )

    id = Column(Integer, primary_key=True, autoincrement=True)
    post_id = Column(
        Integer,
        ForeignKey("posts.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    account_id = Column(
        Integer,
        ForeignKey("accounts.id", ondelete="CASCADE"),
        nullable=False,
    )
    # 'plus' or 'minus'
    direction = Column(String(8), nullable=False)
    created_at = Column(
        DateTime(timezone=True),
        nullable=False,
        server_default=func.now(),
    )
