"""API routes."""

from fastapi import APIRouter

from message_api.routes import feed, message, users

api_router = APIRouter()

# Users (placeholders)
api_router.include_router(users.router, prefix="/users", tags=["users"])

# Feeds
api_router.include_router(feed.router, prefix="/feed", tags=["feed"])

# Messages and replies
api_router.include_router(message.router, prefix="/message", tags=["message"])
