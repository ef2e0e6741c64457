"""API v1 router."""
from fastapi import APIRouter

from benchmap.api.v1 import benches, comments, notifications, profiles, reviews

api_router: APIRouter = APIRouter()
api_router.include_router(benches.router, tags=["benches"])
api_router.include_router(comments.router, tags=["comments"])
api_router.include_router(reviews.router, tags=["reviews"])
api_router.include_router(notifications.router, tags=["notifications"])
api_router.include_router(profiles.router, tags=["profiles"])
