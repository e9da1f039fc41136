"""Shared planning helpers.

Provides common utilities used by the entity store, scheduler and calendar:
- Id and order-number generation
- Shift duration across midnight
- Weekend detection
- Display labels for dangling references
"""

import secrets
import time
import uuid
from datetime import date

from lineplanner.core.config import settings

MINUTES_PER_DAY = 24 * 60

UNKNOWN_UNIT = "Unknown Unit"
UNKNOWN_LINE = "Unknown Line"
UNKNOWN_SHIFT = "Unknown Shift"


def new_id() -> str:
    """Return a fresh entity id."""
    return uuid.uuid4().hex


def generate_order_no(prefix: str | None = None) -> str:
    """Build a display order number from the current epoch milliseconds."""
    if prefix is None:
        prefix = settings.ORDER_NO_PREFIX
    return f"{prefix}{int(time.time() * 1000)}"


def block_id_for(order_id: str, line_id: str, day: date) -> str:
    """Build a unique block id; the random suffix keeps it unique across re-allocations."""
    return f"{order_id}-{line_id}-{day.isoformat()}-{secrets.token_hex(5)}"


def parse_clock(value: str) -> int:
    """Convert an ``HH:MM`` string to minutes after midnight."""
    hours, minutes = value.split(":")
    return int(hours) * 60 + int(minutes)


def shift_duration_minutes(start_time: str, end_time: str) -> int:
    """Length of a shift in minutes, wrapping past midnight.

    Equal start and end times denote a full 24h shift.
    """
    delta = (parse_clock(end_time) - parse_clock(start_time)) % MINUTES_PER_DAY
    return delta or MINUTES_PER_DAY


def is_overnight(start_time: str, end_time: str) -> bool:
    """True when the shift ends on the following calendar day."""
    return parse_clock(end_time) <= parse_clock(start_time)


def is_weekend(day: date) -> bool:
    return day.weekday() >= 5
