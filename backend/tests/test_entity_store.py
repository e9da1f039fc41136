"""Tests for the entity store: reference validation, cascades and snapshots."""

from datetime import timedelta

import pytest

from lineplanner.schemas.order import OrderCreate
from lineplanner.schemas.production_line import LineCreate
from lineplanner.schemas.unit import UnitCreate
from lineplanner.services.entity_store import (
    EntityNotFoundError,
    EntityStore,
    PlannerValidationError,
)
from lineplanner.services.scheduler import SchedulerService


def _order_payload(today, **overrides):
    defaults = {
        "style_name": "Hoodie",
        "quantity": 1200,
        "delivery_date": today + timedelta(days=10),
        "unit_id": "unit-1",
        "assigned_line_ids": ["line-1", "line-2"],
        "shift_id": "shift-1",
    }
    return OrderCreate(**{**defaults, **overrides})


class TestReferenceValidation:
    """Creation-time validation of soft foreign keys."""

    def test_line_requires_existing_unit(self, plant):
        with pytest.raises(PlannerValidationError):
            plant.add_line(LineCreate(name="X", unit_id="ghost", daily_capacity=10))

    def test_order_requires_existing_lines(self, plant, today):
        with pytest.raises(PlannerValidationError, match="ghost"):
            plant.add_order(_order_payload(today, assigned_line_ids=["ghost"]))

    def test_order_lines_must_belong_to_unit(self, plant, today):
        other = plant.add_unit(UnitCreate(name="Other"))
        foreign = plant.add_line(LineCreate(name="F", unit_id=other.id, daily_capacity=10))
        with pytest.raises(PlannerValidationError, match="does not belong"):
            plant.add_order(_order_payload(today, assigned_line_ids=[foreign.id]))

    def test_order_requires_existing_shift(self, plant, today):
        with pytest.raises(PlannerValidationError):
            plant.add_order(_order_payload(today, shift_id="ghost"))

    def test_order_no_generated_when_blank(self, plant, today):
        order = plant.add_order(_order_payload(today))
        assert order.order_no.startswith("ORD-")
        assert order.order_no[4:].isdigit()

    def test_order_no_must_be_unique(self, plant, today):
        plant.add_order(_order_payload(today, order_no="ORD-1"))
        with pytest.raises(PlannerValidationError, match="already in use"):
            plant.add_order(_order_payload(today, order_no="ORD-1"))


class TestOrderUpdates:
    """Allocator inputs are frozen while an order is scheduled."""

    def test_quantity_change_rejected_when_scheduled(self, plant, today):
        order = plant.add_order(_order_payload(today, order_no="ORD-1"))
        SchedulerService(plant, today=today).sync()
        with pytest.raises(PlannerValidationError, match="unschedule"):
            plant.update_order(order.id, _order_payload(today, order_no="ORD-1", quantity=50))

    def test_label_change_refreshes_blocks(self, plant, today):
        order = plant.add_order(_order_payload(today, order_no="ORD-1"))
        SchedulerService(plant, today=today).sync()

        plant.update_order(order.id, _order_payload(today, order_no="ORD-9", style_name="Zip Hoodie"))

        blocks = plant.blocks_for_order(order.id)
        assert blocks
        assert {(b.order_no, b.style_name) for b in blocks} == {("ORD-9", "Zip Hoodie")}

    def test_quantity_change_allowed_when_unscheduled(self, plant, today):
        order = plant.add_order(_order_payload(today, order_no="ORD-1"))
        updated = plant.update_order(order.id, _order_payload(today, order_no="ORD-1", quantity=5))
        assert updated.quantity == 5

    def test_update_missing_order(self, plant, today):
        with pytest.raises(EntityNotFoundError):
            plant.update_order("nope", _order_payload(today))


class TestCascades:
    """Deletion cascades."""

    def test_delete_unit_removes_lines_and_their_blocks(self, plant, block_factory):
        plant.add_blocks([block_factory.create(line_id="line-1"), block_factory.create(line_id="line-2")])

        removed = plant.delete_unit("unit-1")

        assert sorted(removed) == ["line-1", "line-2"]
        assert plant.lines == {}
        assert plant.blocks == {}

    def test_delete_line_drops_blocks_and_assignments(self, plant, today):
        order = plant.add_order(_order_payload(today))
        SchedulerService(plant, today=today).sync()

        plant.delete_line("line-1")

        assert plant.blocks_for_line("line-1") == []
        assert plant.get_order(order.id).assigned_line_ids == ["line-2"]

    def test_line_cannot_move_unit_while_assigned(self, plant, today):
        plant.add_order(_order_payload(today))
        other = plant.add_unit(UnitCreate(name="Other"))
        with pytest.raises(PlannerValidationError):
            plant.update_line("line-1", LineCreate(name="A", unit_id=other.id, daily_capacity=1000))

    def test_delete_missing_unit(self, plant):
        with pytest.raises(EntityNotFoundError):
            plant.delete_unit("nope")


class TestLabels:
    """Dangling references resolve to 'Unknown' labels."""

    def test_known_and_unknown_labels(self, plant):
        assert plant.line_name("line-1") == "Line A"
        assert plant.line_name("gone") == "Unknown Line"
        assert plant.unit_name("gone") == "Unknown Unit"
        assert plant.shift_name("gone") == "Unknown Shift"
        assert plant.get_line("gone") is None


class TestCollections:
    """Round trip through the stored JSON shape."""

    def test_collections_use_camel_case_keys(self, plant, block_factory):
        plant.add_blocks([block_factory.create()])
        collections = plant.to_collections()

        assert set(collections) == {
            "units", "lines", "shifts", "orders", "scheduledBlocks", "processedOrderIds"
        }
        assert collections["lines"][0]["dailyCapacity"] == 1000
        assert collections["scheduledBlocks"][0]["allocatedQuantity"] == 100
        assert collections["scheduledBlocks"][0]["date"] == "2026-03-02"

    def test_malformed_collection_loads_empty(self, plant, caplog):
        collections = plant.to_collections()
        collections["lines"] = [{"id": "bad", "dailyCapacity": "lots"}]

        store = EntityStore.from_collections(collections)

        assert store.lines == {}
        assert len(store.units) == 1
        assert "loading it empty" in caplog.text

    def test_missing_collections_load_empty(self):
        store = EntityStore.from_collections({})
        assert store.orders == {}
        assert store.processed_order_ids == set()

    def test_orders_survive_reload_after_line_delete(self, plant, order_factory, today):
        only_a = order_factory.create(assigned_line_ids=["line-1"])
        both = order_factory.create(quantity=2500, assigned_line_ids=["line-1", "line-2"])
        plant.orders[only_a.id] = only_a
        plant.orders[both.id] = both
        SchedulerService(plant, today=today).sync()

        plant.delete_line("line-1")
        reloaded = EntityStore.from_collections(plant.to_collections())

        assert set(reloaded.orders) == {only_a.id, both.id}
        assert reloaded.get_order(only_a.id).assigned_line_ids == []
        assert reloaded.get_order(both.id).assigned_line_ids == ["line-2"]
        assert reloaded.processed_order_ids == {only_a.id, both.id}
