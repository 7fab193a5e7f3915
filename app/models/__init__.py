"""SQLAlchemy ORM models."""

from app.models.account import Account
from app.models.base import Base
from app.models.comment import Comment
from app.models.community import Community
from app.models.ownable import AnonymousOwner, MemberOwner, Owner
from app.models.post import Post, PostRating

__all__ = [
    "Account",
    "AnonymousOwner",
    "Base",
    "Comment",
    "Community",
    "MemberOwner",
    "Owner",
    "Post",
    "PostRating",
]
