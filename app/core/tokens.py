"""JWT issue and verification for the access/refresh token pair."""

import logging
from collections.abc import Callable
from datetime import UTC, datetime, timedelta
from typing import TYPE_CHECKING, Any

import jwt

from app.core.exceptions import TokenExpired, TokenInvalid, TokenTypeMismatch
from app.schemas.auth import Claims, Identity, TokenType

if TYPE_CHECKING:
    from app.core.config import Settings

logger = logging.getLogger(__name__)

# Pending-registration token lifetime (carried in the registration cookie).
ACTIVATION_TOKEN_MINUTES = 30

REQUIRED_CLAIMS = ["sub", "username", "role", "type", "iat", "exp"]


def _utcnow() -> datetime:
    return datetime.now(UTC)


class TokenService:
    """
    Issues and verifies signed tokens.

    Access and refresh tokens are signed with independent secrets and carry a
    `type` claim; a token presented at the wrong use site fails with
    TokenTypeMismatch whether the mismatch shows up in the signature key or in
    the claim itself. Verification is stateless (no store lookups, no locks).
    Refresh tokens are not rotated and there is no revocation list: a refresh
    token stays valid until its own exp.
    """

    def __init__(self, settings: "Settings", now: Callable[[], datetime] = _utcnow) -> None:
        self._algorithm = settings.JWT_ALGORITHM
        access_secret = settings.JWT_ACCESS_TOKEN_SECRET.get_secret_value()
        refresh_secret = settings.JWT_REFRESH_TOKEN_SECRET.get_secret_value()
        self._secrets: dict[str, str] = {
            "access": access_secret,
            "refresh": refresh_secret,
            "activation": access_secret,
        }
        self._ttls: dict[str, timedelta] = {
            "access": timedelta(minutes=settings.JWT_ACCESS_TOKEN_EXPIRE_MINUTES),
            "refresh": timedelta(days=settings.JWT_REFRESH_TOKEN_EXPIRE_DAYS),
            "activation": timedelta(minutes=ACTIVATION_TOKEN_MINUTES),
        }
        self._now = now

    def issue_access_token(self, identity: Identity) -> tuple[str, int]:
        """Return (token, expires_at) with expires_at in unix seconds."""
        return self._issue(identity, "access")

    def issue_refresh_token(self, identity: Identity) -> str:
        token, _ = self._issue(identity, "refresh")
        return token

    def issue_activation_token(self, identity: Identity) -> str:
        """Short-lived token naming a pending (not yet activated) account."""
        token, _ = self._issue(identity, "activation")
        return token

    def verify(self, token: str, expected_type: TokenType) -> Claims:
        """
        Check signature, expiry and type. Raises TokenInvalid, TokenExpired or
        TokenTypeMismatch; all are terminal for the request.
        """
        payload = self._decode(token, expected_type)
        try:
            exp = int(payload["exp"])
            iat = int(payload["iat"])
            account_id = int(payload["sub"])
        except (TypeError, ValueError) as e:
            raise TokenInvalid("Invalid token payload.", cause=e) from e

        if exp <= int(self._now().timestamp()):
            raise TokenExpired()
        if payload["type"] != expected_type:
            logger.debug("Token type mismatch: expected=%s got=%s", expected_type, payload["type"])
            raise TokenTypeMismatch()

        return Claims(
            account_id=account_id,
            username=str(payload["username"]),
            role=str(payload["role"]),
            type=expected_type,
            iat=iat,
            exp=exp,
        )

    def _issue(self, identity: Identity, token_type: TokenType) -> tuple[str, int]:
        if identity.account_id is None:
            raise ValueError("Cannot issue a token for an anonymous identity")
        now = self._now()
        expire = now + self._ttls[token_type]
        payload: dict[str, Any] = {
            "sub": str(identity.account_id),
            "username": identity.username,
            "role": identity.role,
            "type": token_type,
            "iat": int(now.timestamp()),
            "exp": int(expire.timestamp()),
        }
        token = jwt.encode(payload, self._secrets[token_type], algorithm=self._algorithm)
        return token, payload["exp"]

    def _decode(self, token: str, expected_type: TokenType) -> dict[str, Any]:
        try:
            return self._decode_with(token, self._secrets[expected_type])
        except jwt.InvalidSignatureError as e:
            if self._signed_by_other_key(token, expected_type):
                logger.debug("Token signed for another use site (expected=%s)", expected_type)
                raise TokenTypeMismatch(cause=e) from e
            raise TokenInvalid(cause=e) from e
        except jwt.PyJWTError as e:
            raise TokenInvalid(cause=e) from e

    def _decode_with(self, token: str, secret: str) -> dict[str, Any]:
        # exp is checked against the injected clock in verify().
        return jwt.decode(
            token,
            secret,
            algorithms=[self._algorithm],
            options={
                "verify_exp": False,
                "verify_iat": False,
                "verify_nbf": False,
                "require": REQUIRED_CLAIMS,
            },
        )

    def _signed_by_other_key(self, token: str, expected_type: TokenType) -> bool:
        expected_secret = self._secrets[expected_type]
        for secret in set(self._secrets.values()) - {expected_secret}:
            try:
                self._decode_with(token, secret)
                return True
            except jwt.PyJWTError:
                continue
        return False
