"""
Identifier and timestamp helpers.

Entity identifiers are UUIDv7 strings: a 48-bit Unix millisecond timestamp
followed by a 12-bit sequence and 62 random bits. Identifiers generated in
one process are strictly increasing, so sorting them sorts by creation time.
"""

import os
import threading
import time
import uuid
from datetime import datetime, timezone

_lock = threading.Lock()
_last_ms = 0
_sequence = 0

_SEQUENCE_MAX = 0xFFF


def generate_uuid() -> str:
    """Generate a time-ordered UUIDv7 string."""
    global _last_ms, _sequence

    with _lock:
        now_ms = time.time_ns() // 1_000_000
        if now_ms > _last_ms:
            _last_ms = now_ms
            # Random start leaves room for increments within the same ms
            _sequence = int.from_bytes(os.urandom(2), "big") & 0x7FF
        else:
            _sequence += 1
            if _sequence > _SEQUENCE_MAX:
                _last_ms += 1
                _sequence = 0
        timestamp_ms = _last_ms
        sequence = _sequence

    random_bits = int.from_bytes(os.urandom(8), "big") & ((1 << 62) - 1)

    value = (timestamp_ms & ((1 << 48) - 1)) << 80
    value |= 0x7 << 76
    value |= sequence << 64
    value |= 0b10 << 62
    value |= random_bits

    return str(uuid.UUID(int=value))


def utc_now() -> datetime:
    """Get the current time as a timezone-aware UTC datetime."""
    return datetime.now(timezone.utc)


def to_iso(value: datetime) -> str:
    """Serialize a datetime to ISO-8601."""
    return value.isoformat()


def from_iso(value: str) -> datetime:
    """
    Parse an ISO-8601 timestamp.

    A trailing "Z" is accepted, and naive values are taken as UTC.
    """
    if value.endswith("Z"):
        value = value[:-1] + "+00:00"
    parsed = datetime.fromisoformat(value)
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed
