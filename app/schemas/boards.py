"""Request/response schemas for communities, posts and comments."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from app.core.security import SECRET_MAX_LEN, SECRET_MIN_LEN

DISPLAY_NAME_MIN_LEN = 2
DISPLAY_NAME_MAX_LEN = 20


class CommunityCreateRequest(BaseModel):
    title: str = Field(..., min_length=1, max_length=255)


class CommunityUpdateRequest(BaseModel):
    title: str | None = Field(default=None, min_length=1, max_length=255)
    description: str | None = None
    thumbnail: str | None = Field(default=None, max_length=2048)


class CommunityItem(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    title: str
    description: str
    thumbnail: str | None = None


class CommunityListResponse(BaseModel):
    items: list[CommunityItem]
    total: int
    page: int
    total_pages: int


class PostCreateRequest(BaseModel):
    """
    New post. Members leave username/password empty; anonymous authors must
    give a display name and a secret for later edits.
    """

    community_id: int
    title: str = Field(..., min_length=1, max_length=255)
    content: str = Field(..., min_length=1)
    username: str | None = Field(
        default=None, min_length=DISPLAY_NAME_MIN_LEN, max_length=DISPLAY_NAME_MAX_LEN
    )
    password: str | None = Field(
        default=None, min_length=SECRET_MIN_LEN, max_length=SECRET_MAX_LEN
    )


class PostUpdateRequest(BaseModel):
    """Title/content change. password is the anonymous secret; ignored for member posts."""

    title: str | None = Field(default=None, min_length=1, max_length=255)
    content: str | None = Field(default=None, min_length=1)
    password: str | None = Field(default=None, max_length=SECRET_MAX_LEN)


class CheckPasswordRequest(BaseModel):
    password: str = Field(..., min_length=SECRET_MIN_LEN, max_length=SECRET_MAX_LEN)


class RateRequest(BaseModel):
    """rate=true is a like (plus), rate=false a dislike (minus)."""

    rate: bool


class PostDetail(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    community_id: int
    title: str
    content: str
    created_at: datetime | None = None
    updated_at: datetime | None = None
    view_count: int
    rate_plus: int
    rate_minus: int
    comment_count: int
    creator: int | None = None
    username: str


class PostListItem(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    title: str
    created_at: datetime | None = None
    view_count: int
    rate_plus: int
    rate_minus: int
    comment_count: int
    username: str


class PostListResponse(BaseModel):
    items: list[PostListItem]
    total: int
    page: int
    total_pages: int


class CommentCreateRequest(BaseModel):
    post_id: int
    content: str = Field(..., min_length=1)
    username: str | None = Field(
        default=None, min_length=DISPLAY_NAME_MIN_LEN, max_length=DISPLAY_NAME_MAX_LEN
    )
    password: str | None = Field(
        default=None, min_length=SECRET_MIN_LEN, max_length=SECRET_MAX_LEN
    )


class CommentUpdateRequest(BaseModel):
    content: str = Field(..., min_length=1)
    password: str | None = Field(default=None, max_length=SECRET_MAX_LEN)


class CommentItem(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    content: str
    created_at: datetime | None = None
    updated_at: datetime | None = None
    creator: int | None = None
    username: str


class CommentListResponse(BaseModel):
    items: list[CommentItem]
    total: int
    page: int
    total_pages: int


class IdResponse(BaseModel):
    id: int
