"""Dependency container: every component built once from one Settings object."""

from dataclasses import dataclass

from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker

from app.core.config import Settings
from app.core.cookies import SessionCookieManager
from app.core.database import build_engine, build_session_factory
from app.core.security import PasswordHasher
from app.core.tokens import TokenService
from app.services.mail import Mailer
from app.services.ownership import OwnershipResolver
from app.services.ratings import RatingLedger


@dataclass(slots=True)
class ServiceContainer:
    settings: Settings
    engine: Engine
    session_factory: sessionmaker[Session]
    hasher: PasswordHasher
    tokens: TokenService
    cookies: SessionCookieManager
    ownership: OwnershipResolver
    ratings: RatingLedger
    mailer: Mailer

    @classmethod
    def build(cls, settings: Settings) -> "ServiceContainer":
        engine = build_engine(settings)
        hasher = PasswordHasher(rounds=settings.BCRYPT_ROUNDS)
        return cls(
            settings=settings,
            engine=engine,
            session_factory=build_session_factory(engine),
            hasher=hasher,
            tokens=TokenService(settings),
            cookies=SessionCookieManager(settings),
            ownership=OwnershipResolver(hasher),
            ratings=RatingLedger(),
            mailer=Mailer(settings),
        )


__all__ = ["ServiceContainer"]
