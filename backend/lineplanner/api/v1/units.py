"""Units CRUD API endpoints."""

from fastapi import APIRouter, Depends, HTTPException, status

from lineplanner.api.deps import get_store, planner_errors, read_store
from lineplanner.schemas.unit import Unit, UnitCreate, UnitResponse
from lineplanner.services.entity_store import EntityStore

router = APIRouter(prefix="/units", tags=["units"])


def _to_response(store: EntityStore, unit: Unit) -> UnitResponse:
    return UnitResponse(**unit.model_dump(), line_count=len(store.lines_for_unit(unit.id)))


@router.get("", response_model=list[UnitResponse])
async def list_units(store: EntityStore = Depends(read_store)) -> list[UnitResponse]:
    """List all units with their line counts."""
    return [_to_response(store, unit) for unit in store.units.values()]


@router.post("", response_model=UnitResponse, status_code=status.HTTP_201_CREATED)
async def create_unit(
    payload: UnitCreate,
    store: EntityStore = Depends(get_store),
) -> UnitResponse:
    """Create a new unit."""
    return _to_response(store, store.add_unit(payload))


@router.get("/{unit_id}", response_model=UnitResponse)
async def get_unit(unit_id: str, store: EntityStore = Depends(read_store)) -> UnitResponse:
    """Get a single unit by ID."""
    unit = store.get_unit(unit_id)
    if unit is None:
        raise HTTPException(status_code=404, detail="Unit not found")
    return _to_response(store, unit)


@router.put("/{unit_id}", response_model=UnitResponse)
async def update_unit(
    unit_id: str,
    payload: UnitCreate,
    store: EntityStore = Depends(get_store),
) -> UnitResponse:
    """Update an existing unit."""
    with planner_errors():
        unit = store.update_unit(unit_id, payload)
    return _to_response(store, unit)


@router.delete("/{unit_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_unit(unit_id: str, store: EntityStore = Depends(get_store)) -> None:
    """Delete a unit together with its lines and their scheduled blocks."""
    with planner_errors():
        store.delete_unit(unit_id)
