"""Declarative base shared by the board models."""

from sqlalchemy.orm import DeclarativeBase


class Base(DeclarativeBase):
    """Declarative base for accounts, communities, posts, ratings and comments."""

    def __repr__(self) -> str:
        # Only the primary key: rows carry password and secret hashes.
        return f"<{type(self).__name__} id={getattr(self, 'id', None)}>"
