"""API v1 router."""

from fastapi import APIRouter

from marketplace.api.v1.endpoints import assets, health, users

api_router = APIRouter()

api_router.include_router(health.router, tags=["health"])
api_router.include_router(assets.router, prefix="/assets", tags=["assets"])
api_router.include_router(users.router, prefix="/users", tags=["users"])
