"""
API routes package.

Aggregates the resource routers into a single router mounted at the root.
"""

from fastapi import APIRouter

from bloggers.api.routes import auth, blogs, comments, posts, testing, users

router = APIRouter()
router.include_router(blogs.router)
router.include_router(posts.router)
router.include_router(comments.router)
router.include_router(users.router)
router.include_router(auth.router)
router.include_router(testing.router)

__all__ = ["router"]
