"""Request/response schemas for auth endpoints, plus token claims and request identity."""

from typing import Literal

from pydantic import BaseModel, ConfigDict, EmailStr, Field

from app.core.security import (
    PASSWORD_MAX_LEN,
    PASSWORD_MIN_LEN,
    USERNAME_MAX_LEN,
    USERNAME_MIN_LEN,
)

TokenType = Literal["access", "refresh", "activation"]

Role = Literal["user", "admin"]


class Claims(BaseModel):
    """Verified token payload. Not persisted; tokens are stateless."""

    model_config = ConfigDict(frozen=True)

    account_id: int
    username: str
    role: str
    type: TokenType
    iat: int
    exp: int


class Identity(BaseModel):
    """
    Who is making the request. Attached by the auth guards.

    An anonymous visitor has account_id None; downstream code (ownership,
    rating) decides whether anonymous is acceptable.
    """

    model_config = ConfigDict(frozen=True)

    account_id: int | None = None
    username: str | None = None
    role: str | None = None

    @classmethod
    def anonymous(cls) -> "Identity":
        return cls()

    @classmethod
    def from_claims(cls, claims: Claims) -> "Identity":
        return cls(account_id=claims.account_id, username=claims.username, role=claims.role)

    @property
    def is_authenticated(self) -> bool:
        return self.account_id is not None

    @property
    def is_admin(self) -> bool:
        return self.role == "admin"


class RegisterRequest(BaseModel):
    """New account registration."""

    email: EmailStr = Field(..., description="Email address (activation code is sent here)")
    username: str = Field(..., min_length=USERNAME_MIN_LEN, max_length=USERNAME_MAX_LEN)
    password: str = Field(..., min_length=PASSWORD_MIN_LEN, max_length=PASSWORD_MAX_LEN)
    confirm_password: str = Field(..., min_length=PASSWORD_MIN_LEN, max_length=PASSWORD_MAX_LEN)


class RegisterResponse(BaseModel):
    id: int
    username: str
    email: str
    activation_mail_sent: bool = True


class EmailActivateRequest(BaseModel):
    """Activation code from the registration email."""

    code: str = Field(..., min_length=1, max_length=32)


class LoginRequest(BaseModel):
    """Credentials for login."""

    username: str = Field(..., min_length=1, max_length=255, description="Username")
    password: str = Field(..., min_length=1, max_length=PASSWORD_MAX_LEN, description="Password")


class TokenResponse(BaseModel):
    """Access token returned by login, refresh and profile update. The refresh token travels only as a cookie."""

    username: str
    access_token: str = Field(..., description="JWT access token")
    token_type: str = Field(default="bearer", description="Token type")
    access_token_expires: int = Field(..., description="Access token expiry (unix seconds)")


class MessageResponse(BaseModel):
    message: str
