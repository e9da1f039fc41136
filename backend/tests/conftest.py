"""Pytest configuration with fixtures for planner tests."""

from datetime import date, timedelta
from typing import Any
from unittest.mock import AsyncMock, MagicMock

import pytest
from sqlalchemy.ext.asyncio import AsyncSession

from lineplanner.schemas.order import Order
from lineplanner.schemas.production_line import Line
from lineplanner.schemas.schedule import ScheduledBlock
from lineplanner.schemas.shift import Shift
from lineplanner.schemas.unit import Unit
from lineplanner.services.entity_store import EntityStore

# Monday, so weekend handling is easy to reason about in tests.
TODAY = date(2026, 3, 2)


# ---------------------------------------------------------------------------
# Test Data Factories
# ---------------------------------------------------------------------------


class UnitFactory:
    """Factory for creating Unit entities for testing."""

    _counter = 0

    @classmethod
    def create(cls, **overrides: Any) -> Unit:
        cls._counter += 1
        defaults = {
            "id": f"unit-{cls._counter}",
            "name": f"Unit {cls._counter}",
            "location": None,
        }
        return Unit(**{**defaults, **overrides})


class LineFactory:
    """Factory for creating Line entities for testing."""

    _counter = 0

    @classmethod
    def create(cls, **overrides: Any) -> Line:
        cls._counter += 1
        defaults = {
            "id": f"line-{cls._counter}",
            "name": f"Line {cls._counter}",
            "unit_id": "unit-1",
            "daily_capacity": 1000,
        }
        return Line(**{**defaults, **overrides})


class ShiftFactory:
    """Factory for creating Shift entities for testing."""

    _counter = 0

    @classmethod
    def create(cls, **overrides: Any) -> Shift:
        cls._counter += 1
        defaults = {
            "id": f"shift-{cls._counter}",
            "name": f"Shift {cls._counter}",
            "start_time": "08:00",
            "end_time": "16:00",
        }
        return Shift(**{**defaults, **overrides})


class OrderFactory:
    """Factory for creating Order entities for testing."""

    _counter = 0

    @classmethod
    def create(cls, **overrides: Any) -> Order:
        cls._counter += 1
        defaults = {
            "id": f"order-{cls._counter}",
            "order_no": f"ORD-{cls._counter:04d}",
            "style_name": f"Style {cls._counter}",
            "quantity": 1000,
            "delivery_date": TODAY + timedelta(days=14),
            "unit_id": "unit-1",
            "assigned_line_ids": ["line-1"],
            "shift_id": "shift-1",
        }
        return Order(**{**defaults, **overrides})


class BlockFactory:
    """Factory for creating ScheduledBlock entities for testing."""

    _counter = 0

    @classmethod
    def create(cls, **overrides: Any) -> ScheduledBlock:
        cls._counter += 1
        defaults = {
            "block_id": f"block-{cls._counter}",
            "order_id": "order-1",
            "line_id": "line-1",
            "date": TODAY,
            "allocated_quantity": 100,
            "style_name": "Style",
            "order_no": "ORD-0001",
            "kind": "split",
        }
        return ScheduledBlock(**{**defaults, **overrides})


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def today() -> date:
    return TODAY


@pytest.fixture
def unit_factory():
    """Provide UnitFactory for tests."""
    UnitFactory._counter = 0
    return UnitFactory


@pytest.fixture
def line_factory():
    """Provide LineFactory for tests."""
    LineFactory._counter = 0
    return LineFactory


@pytest.fixture
def shift_factory():
    """Provide ShiftFactory for tests."""
    ShiftFactory._counter = 0
    return ShiftFactory


@pytest.fixture
def order_factory():
    """Provide OrderFactory for tests."""
    OrderFactory._counter = 0
    return OrderFactory


@pytest.fixture
def block_factory():
    """Provide BlockFactory for tests."""
    BlockFactory._counter = 0
    return BlockFactory


@pytest.fixture
def mock_db():
    """Provide a mock AsyncSession for unit tests."""
    session = AsyncMock(spec=AsyncSession)
    session.add = MagicMock()
    session.flush = AsyncMock()
    session.commit = AsyncMock()
    session.rollback = AsyncMock()
    session.merge = AsyncMock()
    session.execute = AsyncMock()
    return session


@pytest.fixture
def plant(unit_factory, line_factory, shift_factory) -> EntityStore:
    """A store with one unit, two lines (1000 and 800 pcs/day) and a day shift.

    Ids: ``unit-1``, ``line-1`` (A), ``line-2`` (B), ``shift-1``.
    """
    unit = unit_factory.create(name="Knitwear")
    line_a = line_factory.create(name="Line A", unit_id=unit.id, daily_capacity=1000)
    line_b = line_factory.create(name="Line B", unit_id=unit.id, daily_capacity=800)
    shift = shift_factory.create(name="Day")
    return EntityStore(units=[unit], lines=[line_a, line_b], shifts=[shift])
