"""Tests for the collection repository."""

import json
from unittest.mock import MagicMock

import pytest

from lineplanner.models.collection import StoredCollection
from lineplanner.services.repository import CollectionRepository, decode_payload


def _rows(mock_db, rows: dict[str, str]):
    stored = []
    for name, payload in rows.items():
        row = MagicMock()
        row.name = name
        row.payload = payload
        stored.append(row)
    mock_result = MagicMock()
    mock_result.scalars.return_value.all.return_value = stored
    mock_db.execute.return_value = mock_result


class TestDecodePayload:
    def test_valid_array(self):
        assert decode_payload("units", '[{"id": "u"}]') == [{"id": "u"}]

    def test_malformed_json(self, caplog):
        assert decode_payload("units", "{not json") is None
        assert "malformed JSON" in caplog.text

    def test_non_array(self):
        assert decode_payload("units", '{"id": "u"}') is None

    def test_missing(self):
        assert decode_payload("units", None) is None


class TestLoad:
    @pytest.mark.asyncio
    async def test_load_builds_store(self, mock_db):
        _rows(
            mock_db,
            {
                "units": json.dumps([{"id": "u1", "name": "Knit"}]),
                "lines": json.dumps([{"id": "l1", "name": "A", "unitId": "u1", "dailyCapacity": 500}]),
                "processedOrderIds": json.dumps(["o1"]),
            },
        )

        store = await CollectionRepository(mock_db).load()

        assert store.get_line("l1").daily_capacity == 500
        assert store.unit_name("u1") == "Knit"
        assert store.processed_order_ids == {"o1"}
        mock_db.execute.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_malformed_collection_is_empty_others_kept(self, mock_db):
        _rows(
            mock_db,
            {
                "units": json.dumps([{"id": "u1", "name": "Knit"}]),
                "orders": "[{broken",
            },
        )

        store = await CollectionRepository(mock_db).load()

        assert store.orders == {}
        assert len(store.units) == 1

    @pytest.mark.asyncio
    async def test_is_empty(self, mock_db):
        _rows(mock_db, {})
        assert await CollectionRepository(mock_db).is_empty()


class TestSave:
    @pytest.mark.asyncio
    async def test_save_overwrites_every_collection(self, mock_db, plant):
        await CollectionRepository(mock_db).save(plant)

        merged = [call.args[0] for call in mock_db.merge.await_args_list]
        assert all(isinstance(row, StoredCollection) for row in merged)
        assert [row.name for row in merged] == [
            "units", "lines", "shifts", "orders", "scheduledBlocks", "processedOrderIds"
        ]
        lines = json.loads(merged[1].payload)
        assert [ln["dailyCapacity"] for ln in lines] == [1000, 800]
        mock_db.flush.assert_awaited_once()
