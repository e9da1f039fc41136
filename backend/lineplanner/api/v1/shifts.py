"""Shifts CRUD API endpoints."""

from fastapi import APIRouter, Depends, HTTPException, status

from lineplanner.api.deps import get_store, planner_errors, read_store
from lineplanner.schemas.shift import Shift, ShiftCreate, ShiftResponse
from lineplanner.services.entity_store import EntityStore
from lineplanner.services.planner_helpers import is_overnight, shift_duration_minutes

router = APIRouter(prefix="/shifts", tags=["shifts"])


def _to_response(shift: Shift) -> ShiftResponse:
    minutes = shift_duration_minutes(shift.start_time, shift.end_time)
    return ShiftResponse(
        **shift.model_dump(),
        duration_hours=round(minutes / 60.0, 2),
        overnight=is_overnight(shift.start_time, shift.end_time),
    )


@router.get("", response_model=list[ShiftResponse])
async def list_shifts(store: EntityStore = Depends(read_store)) -> list[ShiftResponse]:
    """List all shifts."""
    return [_to_response(shift) for shift in store.shifts.values()]


@router.post("", response_model=ShiftResponse, status_code=status.HTTP_201_CREATED)
async def create_shift(
    payload: ShiftCreate,
    store: EntityStore = Depends(get_store),
) -> ShiftResponse:
    """Create a new shift."""
    return _to_response(store.add_shift(payload))


@router.get("/{shift_id}", response_model=ShiftResponse)
async def get_shift(shift_id: str, store: EntityStore = Depends(read_store)) -> ShiftResponse:
    """Get a single shift by ID."""
    shift = store.get_shift(shift_id)
    if shift is None:
        raise HTTPException(status_code=404, detail="Shift not found")
    return _to_response(shift)


@router.put("/{shift_id}", response_model=ShiftResponse)
async def update_shift(
    shift_id: str,
    payload: ShiftCreate,
    store: EntityStore = Depends(get_store),
) -> ShiftResponse:
    """Update an existing shift."""
    with planner_errors():
        shift = store.update_shift(shift_id, payload)
    return _to_response(shift)


@router.delete("/{shift_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_shift(shift_id: str, store: EntityStore = Depends(get_store)) -> None:
    """Delete a shift. Orders referencing it keep the dangling id."""
    with planner_errors():
        store.delete_shift(shift_id)
