"""Tests for report metadata."""

import time
from datetime import datetime, timedelta, timezone

from osintkit.models.findings import SourceResult
from osintkit.models.report import CacheStatus, Freshness, ScanMode
from osintkit.osint.metadata import build_metadata, freshness_at

NOW = datetime(2025, 6, 1, 12, 0, tzinfo=timezone.utc)


def test_fresh_miss_without_cached_results():
    results = [
        SourceResult(source_name="hibp", success=True, data=[]),
        SourceResult(source_name="emailrep", success=False, error="HTTP 500"),
    ]
    meta = build_metadata(time.monotonic(), 7200, results, mode=ScanMode.LIVE, now=NOW)

    assert meta.cache_status == CacheStatus.MISS
    assert meta.data_freshness == Freshness.FRESH
    assert meta.expires_at == NOW + timedelta(hours=2)
    assert meta.sources_queried == ["hibp", "emailrep"]
    assert meta.sources_failed == ["emailrep"]
    assert meta.scan_duration_ms >= 0


def test_cached_result_is_a_hit():
    results = [SourceResult(source_name="whoisxml", success=True, data={}, cached=True, cached_at=10_000)]
    meta = build_metadata(time.monotonic(), 7200, results, now=NOW, wall_clock=10_100)
    assert meta.cache_status == CacheStatus.HIT
    assert meta.data_freshness == Freshness.FRESH


def test_old_cache_entry_makes_report_stale():
    results = [SourceResult(source_name="whoisxml", success=True, data={}, cached=True, cached_at=10_000)]
    meta = build_metadata(time.monotonic(), 7200, results, now=NOW, wall_clock=10_000 + 3601)
    assert meta.data_freshness == Freshness.STALE


def test_freshness_expires():
    meta = build_metadata(time.monotonic(), 3600, now=NOW)
    assert freshness_at(meta, NOW + timedelta(minutes=59)) == Freshness.FRESH
    assert freshness_at(meta, NOW + timedelta(hours=1)) == Freshness.EXPIRED
