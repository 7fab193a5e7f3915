"""
Auth guard chain.

Each guard is a plain function that turns request credentials into an
Identity or raises; the FastAPI dependencies below only pull the credentials
out of the request and hand them over. Routes list the guard they need in
their signature, e.g. `identity: Annotated[Identity, Depends(access_guard)]`.
Guards never touch business data.
"""

import logging
from typing import Annotated

from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session

from app.core.container import ServiceContainer
from app.core.database import get_db
from app.core.exceptions import Unauthorized, Unregistered
from app.core.security import PasswordHasher
from app.core.tokens import TokenService
from app.models import Account
from app.schemas.auth import Claims, Identity, LoginRequest
from app.services.accounts import get_account_by_username

logger = logging.getLogger(__name__)

security = HTTPBearer(auto_error=False)


def check_access(token: str | None, tokens: TokenService) -> Identity:
    """No bearer token means anonymous; a bad one is Unauthorized (tagged with the token error)."""
    if not token:
        return Identity.anonymous()
    claims = tokens.verify(token, "access")
    return Identity.from_claims(claims)


def check_refresh(token: str | None, tokens: TokenService) -> Claims:
    """A valid refresh token is mandatory; there is no anonymous fallback."""
    if not token:
        raise Unauthorized("Refresh token missing.")
    return tokens.verify(token, "refresh")


def check_credentials(
    session: Session,
    hasher: PasswordHasher,
    username: str,
    password: str,
) -> Account:
    """Username + password against the credential store. Same message for unknown user and bad password."""
    account = get_account_by_username(session, username)
    if account is None or not hasher.verify(password, account.password_hash):
        logger.debug("Login rejected: bad credentials")
        raise Unauthorized("Invalid username or password.")
    if not account.activated:
        raise Unauthorized("Account is not activated.")
    return account


def get_container(request: Request) -> ServiceContainer:
    return request.app.state.container


def access_guard(
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(security)],
    container: Annotated[ServiceContainer, Depends(get_container)],
) -> Identity:
    token = credentials.credentials if credentials is not None else None
    return check_access(token, container.tokens)


def refresh_guard(
    request: Request,
    container: Annotated[ServiceContainer, Depends(get_container)],
) -> Claims:
    return check_refresh(container.cookies.read_refresh_cookie(request), container.tokens)


def local_guard(
    body: LoginRequest,
    db: Annotated[Session, Depends(get_db)],
    container: Annotated[ServiceContainer, Depends(get_container)],
) -> Account:
    return check_credentials(db, container.hasher, body.username, body.password)


def member_guard(identity: Annotated[Identity, Depends(access_guard)]) -> Identity:
    """Access guard plus: anonymous callers are rejected with Unregistered."""
    if not identity.is_authenticated:
        raise Unregistered()
    return identity


AccessIdentity = Annotated[Identity, Depends(access_guard)]
MemberIdentity = Annotated[Identity, Depends(member_guard)]
Container = Annotated[ServiceContainer, Depends(get_container)]
DbSession = Annotated[Session, Depends(get_db)]
