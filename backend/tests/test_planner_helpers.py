"""Tests for shared planning helpers."""

from datetime import date

import pytest

from lineplanner.services.planner_helpers import (
    block_id_for,
    generate_order_no,
    is_overnight,
    is_weekend,
    parse_clock,
    shift_duration_minutes,
)


class TestShiftDuration:
    """Shift lengths are computed modulo 24h."""

    @pytest.mark.parametrize(
        "start,end,minutes",
        [
            ("08:00", "16:00", 480),
            ("22:00", "06:00", 480),
            ("23:30", "00:15", 45),
            ("06:00", "06:00", 1440),
        ],
    )
    def test_duration(self, start, end, minutes):
        assert shift_duration_minutes(start, end) == minutes

    def test_overnight_detection(self):
        assert is_overnight("22:00", "06:00")
        assert not is_overnight("08:00", "16:00")

    def test_parse_clock(self):
        assert parse_clock("00:00") == 0
        assert parse_clock("23:59") == 23 * 60 + 59


class TestIdentifiers:
    def test_order_no_uses_prefix(self):
        assert generate_order_no("PO-").startswith("PO-")

    def test_block_ids_differ_for_same_slot(self):
        day = date(2026, 3, 2)
        first = block_id_for("o", "l", day)
        assert first.startswith("o-l-2026-03-02-")
        assert first != block_id_for("o", "l", day)


def test_is_weekend():
    assert is_weekend(date(2026, 3, 7))
    assert is_weekend(date(2026, 3, 8))
    assert not is_weekend(date(2026, 3, 9))
