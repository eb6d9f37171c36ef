"""API v1 routes."""

from fastapi import APIRouter

from app.api.v1 import auth, dashboard, health, public_tools

router = APIRouter()
router.include_router(health.router, prefix="/health", tags=["health"])
router.include_router(auth.router, tags=["auth"])
router.include_router(dashboard.router, prefix="/user", tags=["dashboard"])
router.include_router(public_tools.router, prefix="/public-tools", tags=["catalog"])
