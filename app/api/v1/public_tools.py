"""Public catalog: the same tools the dashboard lists, grouped by category, no auth."""

import logging
from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.core.database import get_db
from app.schemas.catalog import ToolCategoryGroup
from app.services.catalog import fetch_visible_tools, group_by_category

logger = logging.getLogger(__name__)
router = APIRouter()


@router.get("", response_model=list[ToolCategoryGroup])
def get_public_tools(
    db: Annotated[Session, Depends(get_db)],
) -> list[ToolCategoryGroup]:
    """List free/pro tools by category; uncategorized tools come last under 'General Tools'."""
    try:
        entries = fetch_visible_tools(db)
    except SQLAlchemyError as e:
        logger.exception("Public tools fetch failed")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Server error fetching tools list.",
        ) from e
    return group_by_category(entries)
