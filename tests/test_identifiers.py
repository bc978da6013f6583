"""
Tests for identifier and timestamp helpers.
"""

import uuid
from datetime import datetime, timedelta, timezone

from diff_voyager.infra.identifiers import (
    from_iso,
    generate_uuid,
    to_iso,
    utc_now,
)


class TestGenerateUuid:

    def test_version_and_variant(self):
        value = uuid.UUID(generate_uuid())
        assert value.version == 7
        assert value.variant == uuid.RFC_4122

    def test_strictly_increasing(self):
        ids = [generate_uuid() for _ in range(2000)]
        assert ids == sorted(ids)
        assert len(set(ids)) == len(ids)

    def test_embeds_creation_time(self):
        before = utc_now() - timedelta(seconds=1)
        timestamp_ms = uuid.UUID(generate_uuid()).int >> 80
        stamp = datetime.fromtimestamp(timestamp_ms / 1000, tz=timezone.utc)
        after = utc_now() + timedelta(seconds=1)

        assert before <= stamp <= after


class TestTimestamps:

    def test_utc_now_is_aware(self):
        assert utc_now().tzinfo is not None

    def test_iso_round_trip(self):
        now = utc_now()
        assert from_iso(to_iso(now)) == now

    def test_from_iso_accepts_z_suffix(self):
        parsed = from_iso("2026-01-01T00:00:00Z")
        assert parsed == datetime(2026, 1, 1, tzinfo=timezone.utc)

    def test_from_iso_treats_naive_as_utc(self):
        parsed = from_iso("2026-01-01T12:30:00")
        assert parsed.tzinfo is not None
        assert parsed.utcoffset() == timedelta(0)
