"""Pydantic request/response schemas."""

from app.schemas.auth import (
    Claims,
    Identity,
    LoginRequest,
    RegisterRequest,
    TokenResponse,
)
from app.schemas.boards import (
    CommentCreateRequest,
    CommentListResponse,
    CommunityListResponse,
    PostCreateRequest,
    PostDetail,
    PostListResponse,
)
from app.schemas.health import HealthResponse
from app.schemas.users import AccountResponse, UpdateAccountRequest

__all__ = [
    "AccountResponse",
    "Claims",
    "CommentCreateRequest",
    "CommentListResponse",
    "CommunityListResponse",
    "HealthResponse",
    "Identity",
    "LoginRequest",
    "PostCreateRequest",
    "PostDetail",
    "PostListResponse",
    "RegisterRequest",
    "TokenResponse",
    "UpdateAccountRequest",
]
