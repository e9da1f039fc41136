"""Calendar API endpoints for the per-line month view."""

from datetime import date

from fastapi import APIRouter, Depends, HTTPException, Query

from lineplanner.api.deps import read_store
from lineplanner.schemas.calendar import CalendarMonth
from lineplanner.schemas.schedule import CapacityUsage
from lineplanner.services.calendar_view import month_view, overbooked_slots
from lineplanner.services.entity_store import EntityStore

router = APIRouter(prefix="/calendar", tags=["calendar"])


@router.get("/overbooked", response_model=list[CapacityUsage])
async def list_overbooked(store: EntityStore = Depends(read_store)) -> list[CapacityUsage]:
    """Every (line, date) slot currently flagged as a conflict."""
    return overbooked_slots(store)


@router.get("/{line_id}", response_model=CalendarMonth)
async def get_month(
    line_id: str,
    year: int | None = Query(None, ge=1, le=9999),
    month: int | None = Query(None, ge=1, le=12),
    store: EntityStore = Depends(read_store),
) -> CalendarMonth:
    """Month grid for a line; defaults to the current month."""
    if store.get_line(line_id) is None:
        raise HTTPException(status_code=404, detail="Line not found")
    today = date.today()
    return month_view(store, line_id, year or today.year, month or today.month)
