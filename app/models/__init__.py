"""SQLAlchemy ORM models."""

from app.models.base import Base
from app.models.tool import Tool, ToolCategory
from app.models.user import User

__all__ = ["Base", "Tool", "ToolCategory", "User"]
