"""API v1 routes."""

from fastapi import APIRouter

from app.api.v1 import auth, comments, communities, health, posts, users

router = APIRouter()
router.include_router(health.router, prefix="/health", tags=["health"])
router.include_router(auth.router, prefix="/auth", tags=["auth"])
router.include_router(users.router, prefix="/user", tags=["user"])
router.include_router(communities.router, prefix="/community", tags=["community"])
router.include_router(posts.router, prefix="/post", tags=["post"])
router.include_router(comments.router, prefix="/comment", tags=["comment"])
