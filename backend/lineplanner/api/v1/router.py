"""API v1 router aggregating all sub-routers."""

from fastapi import APIRouter

from lineplanner.api.v1.calendar import router as calendar_router
from lineplanner.api.v1.orders import router as orders_router
from lineplanner.api.v1.production_lines import router as lines_router
from lineplanner.api.v1.schedule import router as schedule_router
from lineplanner.api.v1.shifts import router as shifts_router
from lineplanner.api.v1.snapshot import router as snapshot_router
from lineplanner.api.v1.units import router as units_router

api_v1_router = APIRouter()


@api_v1_router.get("/health")
async def health_check() -> dict[str, str]:
    """Health check endpoint returning 200 OK."""
    return {"status": "ok"}


api_v1_router.include_router(units_router)
api_v1_router.include_router(lines_router)
api_v1_router.include_router(shifts_router)
api_v1_router.include_router(orders_router)
api_v1_router.include_router(schedule_router)
api_v1_router.include_router(calendar_router)
api_v1_router.include_router(snapshot_router)
