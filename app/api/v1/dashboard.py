"""Authenticated dashboard: caller identity plus every listed tool.

Access policy: every authenticated caller may open every free/pro tool, so
has_access is always true and the role claim does not filter the list. The role
is returned only as a UI hint (e.g. whether to show an admin link). Tests assert
this absence of filtering; change both together if tiers ever gate access.
"""

import logging
from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.api.v1.auth import get_current_claims
from app.core.database import get_db
from app.core.security import SessionClaims
from app.schemas.auth import MessageResponse
from app.schemas.catalog import DashboardResponse, DashboardTool, DashboardUser
from app.services.catalog import fetch_visible_tools

logger = logging.getLogger(__name__)
router = APIRouter()


@router.get(
    "/dashboard",
    response_model=DashboardResponse,
    responses={401: {"model": MessageResponse}},
)
def get_dashboard(
    claims: Annotated[SessionClaims, Depends(get_current_claims)],
    db: Annotated[Session, Depends(get_db)],
) -> DashboardResponse:
    """Return the caller (from the token) and all free/pro tools with their category."""
    try:
        entries = fetch_visible_tools(db)
    except SQLAlchemyError as e:
        logger.exception("Dashboard data fetch failed")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Server error fetching dashboard data.",
        ) from e

    tools = [
        DashboardTool(
            id=entry.id,
            name=entry.name,
            description=entry.description,
            url=entry.url,
            type=entry.type,
            category_name=entry.category_name,
            has_access=True,
        )
        for entry in entries
    ]
    return DashboardResponse(
        user=DashboardUser(email=claims.email, role=claims.role, first_name=claims.name),
        tools=tools,
    )
