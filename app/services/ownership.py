"""Ownership resolver: the one authorization decision for posts and comments."""

import logging
from typing import Literal, Protocol

from pydantic import BaseModel, ConfigDict

from app.core.exceptions import InvalidInput, PermissionDenied
from app.core.security import PasswordHasher
from app.models.ownable import AnonymousOwner, MemberOwner, Owner
from app.schemas.auth import Identity

logger = logging.getLogger(__name__)

Action = Literal["read", "mutate", "delete"]

DENY_REASON = "PermissionDenied"


class Ownable(Protocol):
    """Anything with an owner: Post and Comment rows."""

    id: int

    @property
    def owner(self) -> Owner: ...


class Decision(BaseModel):
    """ALLOW, or DENY with a single reason tag that does not say which rule failed."""

    model_config = ConfigDict(frozen=True)

    allowed: bool
    reason: str | None = None


ALLOW = Decision(allowed=True)
DENY = Decision(allowed=False, reason=DENY_REASON)


class OwnershipResolver:
    """
    Decide whether `identity` (possibly anonymous) may act on a resource.

    - read: always allowed.
    - member-owned: only the owning account; a secret never unlocks it.
    - anonymous-owned: only a supplied secret matching the stored hash.
    """

    def __init__(self, hasher: PasswordHasher) -> None:
        self._hasher = hasher

    def authorize(
        self,
        resource: Ownable,
        identity: Identity,
        supplied_secret: str | None,
        action: Action,
    ) -> Decision:
        if action == "read":
            return ALLOW

        owner = resource.owner
        if isinstance(owner, MemberOwner):
            if identity.is_authenticated and identity.account_id == owner.account_id:
                return ALLOW
            return DENY

        if isinstance(owner, AnonymousOwner):
            if supplied_secret and self._hasher.verify(supplied_secret, owner.secret_hash):
                return ALLOW
            return DENY

        return DENY

    def require(
        self,
        resource: Ownable,
        identity: Identity,
        supplied_secret: str | None,
        action: Action,
    ) -> None:
        """Raise PermissionDenied unless authorize() allows."""
        decision = self.authorize(resource, identity, supplied_secret, action)
        if not decision.allowed:
            logger.debug(
                "%s %s denied for %s id=%s",
                action,
                type(resource).__name__,
                "account" if identity.is_authenticated else "anonymous",
                resource.id,
            )
            raise PermissionDenied()


def new_owner(
    identity: Identity,
    display_name: str | None,
    secret: str | None,
    hasher: PasswordHasher,
) -> tuple[Owner, str]:
    """
    Owner and display name for a post or comment being created.

    Members own by account (any supplied secret is ignored); anonymous authors
    need a display name and a secret, hashed here once and never again.
    """
    if identity.is_authenticated:
        return MemberOwner(account_id=identity.account_id), identity.username or ""
    if not display_name or not secret:
        raise InvalidInput("Anonymous authors must provide a username and password.")
    return AnonymousOwner(secret_hash=hasher.hash(secret)), display_name
