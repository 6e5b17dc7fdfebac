"""Dashboard endpoints."""

from __future__ import annotations

from datetime import date
from typing import TYPE_CHECKING
from uuid import UUID  # noqa: TC003

from fastapi import APIRouter, Depends, Request

from calorie_tracker.api.auth import current_user_id
from calorie_tracker.api.schemas import DashboardResponse

if TYPE_CHECKING:
    from calorie_tracker.containers import AppContainer

router = APIRouter(prefix="/dashboard", tags=["dashboard"])


@router.get("")
async def today_dashboard(
    request: Request, user_id: UUID = Depends(current_user_id)
) -> DashboardResponse:
    """Return today's dashboard."""
    container: AppContainer = request.app.state.container
    return DashboardResponse.from_domain(
        container.dashboard.summarize(user_id, container.today())
    )


@router.get("/{day}")
async def dashboard_for_date(
    day: date, request: Request, user_id: UUID = Depends(current_user_id)
) -> DashboardResponse:
    """Return the dashboard for a given day."""
    container: AppContainer = request.app.state.container
    return DashboardResponse.from_domain(container.dashboard.summarize(user_id, day))
