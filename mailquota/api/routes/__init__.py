"""API route registration."""

from fastapi import APIRouter

from mailquota.api.routes import health, quota

api_router = APIRouter()

api_router.include_router(health.router, tags=["health"])
api_router.include_router(quota.router, prefix="/quota", tags=["quota"])
