"""Production lines CRUD API endpoints."""

from fastapi import APIRouter, Depends, HTTPException, Query, status

from lineplanner.api.deps import get_store, planner_errors, read_store
from lineplanner.schemas.production_line import Line, LineCreate, LineResponse
from lineplanner.services.entity_store import EntityStore

router = APIRouter(prefix="/lines", tags=["lines"])


def _to_response(store: EntityStore, line: Line) -> LineResponse:
    return LineResponse(**line.model_dump(), unit_name=store.unit_name(line.unit_id))


@router.get("", response_model=list[LineResponse])
async def list_lines(
    unit_id: str | None = Query(None),
    store: EntityStore = Depends(read_store),
) -> list[LineResponse]:
    """List production lines, optionally only those of one unit."""
    lines = store.lines_for_unit(unit_id) if unit_id is not None else store.lines.values()
    return [_to_response(store, line) for line in lines]


@router.post("", response_model=LineResponse, status_code=status.HTTP_201_CREATED)
async def create_line(
    payload: LineCreate,
    store: EntityStore = Depends(get_store),
) -> LineResponse:
    """Create a new production line within an existing unit."""
    with planner_errors():
        line = store.add_line(payload)
    return _to_response(store, line)


@router.get("/{line_id}", response_model=LineResponse)
async def get_line(line_id: str, store: EntityStore = Depends(read_store)) -> LineResponse:
    """Get a single production line by ID."""
    line = store.get_line(line_id)
    if line is None:
        raise HTTPException(status_code=404, detail="Line not found")
    return _to_response(store, line)


@router.put("/{line_id}", response_model=LineResponse)
async def update_line(
    line_id: str,
    payload: LineCreate,
    store: EntityStore = Depends(get_store),
) -> LineResponse:
    """Update a production line.

    Capacity changes do not touch blocks that are already scheduled.
    """
    with planner_errors():
        line = store.update_line(line_id, payload)
    return _to_response(store, line)


@router.delete("/{line_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_line(line_id: str, store: EntityStore = Depends(get_store)) -> None:
    """Delete a production line and every block scheduled on it."""
    with planner_errors():
        store.delete_line(line_id)
