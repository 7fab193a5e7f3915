"""Shared builders for tests: settings on a temporary SQLite file, app, accounts."""

import os
import tempfile
from unittest.mock import MagicMock

from app.core.config import Settings
from app.core.container import ServiceContainer
from app.models import Account, Base, Community, Post
from app.models.ownable import AnonymousOwner, MemberOwner

ACCESS_SECRET = "test-access-secret-0123456789abcdef0123"
REFRESH_SECRET = "test-refresh-secret-0123456789abcdef012"


def make_settings(db_path: str | None = None, **overrides: object) -> Settings:
    values: dict[str, object] = {
        "DATABASE_URL": f"sqlite:///{db_path}" if db_path else "sqlite://",
        "BCRYPT_ROUNDS": 4,
        "JWT_ACCESS_TOKEN_SECRET": ACCESS_SECRET,
        "JWT_REFRESH_TOKEN_SECRET": REFRESH_SECRET,
        "MAIL_ENABLED": False,
    }
    values.update(overrides)
    return Settings(_env_file=None, **values)


class TempDatabase:
    """A container on a fresh SQLite file with all tables created. Call close() in tearDown."""

    def __init__(self, **overrides: object) -> None:
        self._dir = tempfile.TemporaryDirectory()
        self.path = os.path.join(self._dir.name, "board.db")
        self.settings = make_settings(self.path, **overrides)
        self.container = ServiceContainer.build(self.settings)
        self.container.mailer = MagicMock()
        Base.metadata.create_all(self.container.engine)

    def session(self):
        return self.container.session_factory()

    def close(self) -> None:
        self.container.engine.dispose()
        self._dir.cleanup()


def create_account(
    db: TempDatabase,
    username: str,
    password: str = "correct-horse-battery",
    role: str = "user",
    activated: bool = True,
) -> int:
    session = db.session()
    try:
        account = Account(
            username=username,
            email=f"{username}@example.com",
            password_hash=db.container.hasher.hash(password),
            role=role,
            activated=activated,
        )
        session.add(account)
        session.commit()
        return account.id
    finally:
        session.close()


def create_community(db: TempDatabase, title: str = "general") -> int:
    session = db.session()
    try:
        community = Community(title=title, description=f"{title} board")
        session.add(community)
        session.commit()
        return community.id
    finally:
        session.close()


def create_post(
    db: TempDatabase,
    community_id: int,
    creator: int | None = None,
    secret: str | None = None,
    title: str = "hello",
) -> int:
    """Member-owned when creator is given, otherwise anonymous-owned by secret."""
    session = db.session()
    try:
        post = Post(
            community_id=community_id,
            title=title,
            content="first post",
            username="someone",
            view_count=0,
            rate_plus=0,
            rate_minus=0,
            comment_count=0,
        )
        if creator is not None:
            post.set_owner(MemberOwner(account_id=creator))
        else:
            post.set_owner(AnonymousOwner(secret_hash=db.container.hasher.hash(secret or "abcd")))
        session.add(post)
        session.commit()
        return post.id
    finally:
        session.close()
