"""Weight entry endpoints."""

from __future__ import annotations

from datetime import date
from typing import TYPE_CHECKING
from uuid import UUID  # noqa: TC003

from fastapi import APIRouter, Depends, HTTPException, Request, Response, status

from calorie_tracker.api.auth import current_user_id
from calorie_tracker.api.schemas import WeightEntryRequest, WeightEntryResponse

if TYPE_CHECKING:
    from calorie_tracker.containers import AppContainer

router = APIRouter(prefix="/weight-entries", tags=["weights"])


@router.post("")
async def upsert_weight(
    payload: WeightEntryRequest,
    request: Request,
    user_id: UUID = Depends(current_user_id),
) -> WeightEntryResponse:
    """Record the weight for a date, replacing any existing value."""
    container: AppContainer = request.app.state.container
    entry = container.weight_ledger.upsert(user_id, payload.entry_date, payload.weight)
    return WeightEntryResponse.from_domain(entry)


@router.get("")
async def list_weights(
    request: Request, user_id: UUID = Depends(current_user_id)
) -> list[WeightEntryResponse]:
    """Return the full weight history, oldest first."""
    container: AppContainer = request.app.state.container
    return [
        WeightEntryResponse.from_domain(entry)
        for entry in container.weight_ledger.history(user_id)
    ]


@router.get("/latest")
async def latest_weight(
    request: Request, user_id: UUID = Depends(current_user_id)
) -> WeightEntryResponse:
    """Return the most recent weight entry."""
    container: AppContainer = request.app.state.container
    entry = container.weight_ledger.latest(user_id)
    if entry is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND, detail="No weight entries found"
        )
    return WeightEntryResponse.from_domain(entry)


@router.get("/range")
async def weight_range(
    start: date,
    end: date,
    request: Request,
    user_id: UUID = Depends(current_user_id),
) -> list[WeightEntryResponse]:
    """Return entries between two dates inclusive, for charts."""
    container: AppContainer = request.app.state.container
    return [
        WeightEntryResponse.from_domain(entry)
        for entry in container.weight_ledger.range(user_id, start, end)
    ]


@router.get("/date/{day}")
async def weight_for_date(
    day: date, request: Request, user_id: UUID = Depends(current_user_id)
) -> WeightEntryResponse:
    """Return the entry for a date."""
    container: AppContainer = request.app.state.container
    return WeightEntryResponse.from_domain(
        container.weight_ledger.get_by_date(user_id, day)
    )


@router.get("/{entry_id}")
async def get_weight(
    entry_id: UUID, request: Request, user_id: UUID = Depends(current_user_id)
) -> WeightEntryResponse:
    """Return a single weight entry."""
    container: AppContainer = request.app.state.container
    return WeightEntryResponse.from_domain(
        container.weight_ledger.get(user_id, entry_id)
    )


@router.delete("/{entry_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_weight(
    entry_id: UUID, request: Request, user_id: UUID = Depends(current_user_id)
) -> Response:
    """Delete a weight entry."""
    container: AppContainer = request.app.state.container
    container.weight_ledger.delete(user_id, entry_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
