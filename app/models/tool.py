"""ORM models for the tool catalog. Managed out-of-band; the app only reads them."""

from sqlalchemy import CheckConstraint, Column, ForeignKey, Integer, String, Text

from app.models.base import Base

TOOL_TYPES = ("free", "pro", "custom")
# 'custom' is reserved for a tier that is never listed to end users.
VISIBLE_TOOL_TYPES = ("free", "pro")
DEFAULT_CATEGORY_NAME = "General Tools"


class ToolCategory(Base):
    """Named grouping for tools on the dashboard and public catalog."""

    __tablename__ = "tool_categories"

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(255), nullable=False)


class Tool(Base):
    """An external link offered to users. category_id is optional."""

    __tablename__ = "tools"
    __table_args__ = (
        CheckConstraint(
            "type IN (" + ", ".join(f"'{t}'" for t in TOOL_TYPES) + ")",
            name="ck_tools_type",
        ),
    )

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(255), nullable=False)
    description = Column(Text, nullable=True)
    url = Column(String(2048), nullable=False)
    type = Column(String(16), nullable=False, default="free", index=True)
    category_id = Column(
        Integer,
        ForeignKey("tool_categories.id", ondelete="SET NULL"),
        nullable=True,
        index=True,
    )
