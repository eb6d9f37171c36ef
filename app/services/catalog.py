"""Read-only queries over the tool catalog shared by the dashboard and public listing."""

from collections.abc import Sequence

from sqlalchemy import case, func
from sqlalchemy.orm import Session

from app.models import Tool, ToolCategory
from app.models.tool import DEFAULT_CATEGORY_NAME, VISIBLE_TOOL_TYPES
from app.schemas.catalog import CatalogEntry, PublicTool, ToolCategoryGroup


def fetch_visible_tools(db: Session) -> list[CatalogEntry]:
    """
    Return every free/pro tool, ordered by category then tool name.

    Category-less tools fall into the default category, placed after all real
    categories. 'custom' tools are never returned.
    """
    uncategorized_last = case((ToolCategory.id.is_(None), 1), else_=0)
    rows = (
        db.query(
            Tool.id,
            Tool.name,
            Tool.description,
            Tool.url,
            Tool.type,
            ToolCategory.id.label("category_id"),
            func.coalesce(ToolCategory.name, DEFAULT_CATEGORY_NAME).label("category_name"),
        )
        .outerjoin(ToolCategory, Tool.category_id == ToolCategory.id)
        .filter(Tool.type.in_(VISIBLE_TOOL_TYPES))
        .order_by(uncategorized_last, ToolCategory.id, Tool.name)
        .all()
    )
    return [CatalogEntry.model_validate(row) for row in rows]


def group_by_category(entries: Sequence[CatalogEntry]) -> list[ToolCategoryGroup]:
    """Group already-ordered entries into category sections, preserving order."""
    groups: dict[int | None, ToolCategoryGroup] = {}
    for entry in entries:
        group = groups.get(entry.category_id)
        if group is None:
            group = ToolCategoryGroup(category_name=entry.category_name, tools=[])
            groups[entry.category_id] = group
        group.tools.append(
            PublicTool(
                name=entry.name,
                url=entry.url,
                type=entry.type,
                description=entry.description,
            )
        )
    return list(groups.values())
