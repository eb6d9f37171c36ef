"""Schemas for the dashboard and the public tool catalog."""

from pydantic import BaseModel, Field


class CatalogEntry(BaseModel):
    """One visible tool joined with its category. category_id None = default bucket."""

    id: int
    name: str
    description: str | None = None
    url: str
    type: str
    category_id: int | None = None
    category_name: str

    class Config:
        from_attributes = True


class DashboardUser(BaseModel):
    """Caller identity as read from the session token."""

    email: str
    role: str
    first_name: str


class DashboardTool(BaseModel):
    id: int
    name: str
    description: str | None = None
    url: str
    type: str
    category_name: str
    has_access: bool = Field(
        default=True,
        description="Always true: every authenticated caller may open every listed tool",
    )


class DashboardResponse(BaseModel):
    """Response for GET /user/dashboard."""

    user: DashboardUser
    tools: list[DashboardTool]


class PublicTool(BaseModel):
    name: str
    url: str
    type: str
    description: str | None = None


class ToolCategoryGroup(BaseModel):
    """One category section of the public catalog."""

    category_name: str
    tools: list[PublicTool]
