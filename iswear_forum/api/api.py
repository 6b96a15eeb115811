"""API router aggregator."""

from fastapi import APIRouter

from iswear_forum.api.endpoints import (
    admin,
    auth,
    categories,
    notifications,
    posts,
    profile,
    search,
    stats,
    threads,
    upload,
    users,
)

api_router = APIRouter(prefix="/api")

api_router.include_router(auth.router)
api_router.include_router(categories.router)
api_router.include_router(threads.router)
api_router.include_router(posts.router)
api_router.include_router(users.router)
api_router.include_router(profile.router)
api_router.include_router(admin.router)
api_router.include_router(stats.router)
api_router.include_router(search.router)
api_router.include_router(notifications.router)
api_router.include_router(upload.router)

__all__ = ["api_router"]
