"""Ownership of posts and comments: a member account or an anonymous secret, never both."""

from pydantic import BaseModel, ConfigDict
from sqlalchemy import CheckConstraint, Column, Integer, String
from sqlalchemy.orm import declared_attr


class MemberOwner(BaseModel):
    """Resource owned by an account."""

    model_config = ConfigDict(frozen=True)

    account_id: int


class AnonymousOwner(BaseModel):
    """Resource owned by whoever knows the secret hashed at creation."""

    model_config = ConfigDict(frozen=True)

    secret_hash: str


Owner = MemberOwner | AnonymousOwner


class OwnableMixin:
    """
    Columns and accessors shared by Post and Comment.

    Exactly one of creator / secret_hash is set (check constraint below), and
    both are written only once, through set_owner() at creation. creator is a
    plain id without a foreign key: deleting an account leaves its content
    orphaned but still member-owned.
    """

    creator = Column(Integer, nullable=True, index=True)
    secret_hash = Column(String(255), nullable=True)
    # Display name shown with the post/comment (account username or free text)
    username = Column(String(255), nullable=False)

    @declared_attr.directive
    def __table_args__(cls):  # noqa: N805
        return (
            CheckConstraint(
                "(creator IS NULL) <> (secret_hash IS NULL)",
                name=f"ck_{cls.__tablename__}_single_owner",
            ),
        )

    @property
    def owner(self) -> Owner:
        if self.creator is not None:
            return MemberOwner(account_id=self.creator)
        if self.secret_hash is None:
            raise ValueError(f"{type(self).__name__} {self.id} has no owner")
        return AnonymousOwner(secret_hash=self.secret_hash)

    def set_owner(self, owner: Owner) -> None:
        if self.creator is not None or self.secret_hash is not None:
            raise ValueError("Ownership is fixed at creation")
        if isinstance(owner, MemberOwner):
            self.creator = owner.account_id
        else:
            self.secret_hash = owner.secret_hash
