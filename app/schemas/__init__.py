"""Pydantic request/response schemas."""

from app.schemas.auth import (
    CreatedUser,
    LoginRequest,
    MessageResponse,
    SignupRequest,
    SignupResponse,
    TokenResponse,
)
from app.schemas.catalog import (
    CatalogEntry,
    DashboardResponse,
    DashboardTool,
    DashboardUser,
    PublicTool,
    ToolCategoryGroup,
)
from app.schemas.health import HealthResponse

__all__ = [
    "CatalogEntry",
    "CreatedUser",
    "DashboardResponse",
    "DashboardTool",
    "DashboardUser",
    "HealthResponse",
    "LoginRequest",
    "MessageResponse",
    "PublicTool",
    "SignupRequest",
    "SignupResponse",
    "TokenResponse",
    "ToolCategoryGroup",
]
