"""Request/response schemas for the /user profile endpoints."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from app.core.security import (
    PASSWORD_MAX_LEN,
    PASSWORD_MIN_LEN,
    USERNAME_MAX_LEN,
    USERNAME_MIN_LEN,
)


class UpdateAccountRequest(BaseModel):
    """Profile change. Omitted fields are left as they are."""

    username: str | None = Field(
        default=None, min_length=USERNAME_MIN_LEN, max_length=USERNAME_MAX_LEN
    )
    prev_password: str | None = Field(default=None, max_length=PASSWORD_MAX_LEN)
    password: str | None = Field(
        default=None, min_length=PASSWORD_MIN_LEN, max_length=PASSWORD_MAX_LEN
    )
    confirm_password: str | None = Field(default=None, max_length=PASSWORD_MAX_LEN)


class AccountResponse(BaseModel):
    """Public view of the caller's own account (no password hash)."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    username: str
    email: str
    role: str
    activated: bool
    created_at: datetime | None = None
