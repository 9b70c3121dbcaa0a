"""API router configuration."""

from fastapi import APIRouter

from users_api.api.endpoints import health, users

api_router = APIRouter()

# Include routers
api_router.include_router(health.router)
api_router.include_router(users.router)
