"""Report metadata: generation/expiry stamps, cache and freshness status."""

import time
from datetime import datetime, timedelta, timezone
from typing import Iterable, Optional

from osintkit.models.findings import SourceResult
from osintkit.models.report import CacheStatus, Freshness, ReportMetadata, ScanMode


def build_metadata(
    started_at: float,
    ttl_seconds: float,
    results: Iterable[SourceResult] = (),
    mode: ScanMode = ScanMode.SIMULATED,
    now: Optional[datetime] = None,
    wall_clock: Optional[float] = None,
) -> ReportMetadata:
    """
    Stamp a finished scan.

    ``started_at`` is a ``time.monotonic()`` reading taken when the scan
    began. Cached results older than half the TTL make the report stale.
    """
    results = list(results)
    now = now or datetime.now(timezone.utc)
    wall_clock = time.time() if wall_clock is None else wall_clock

    cached = [r for r in results if r.cached]
    freshness = Freshness.FRESH
    for result in cached:
        if result.cached_at is not None and wall_clock - result.cached_at > ttl_seconds / 2:
            freshness = Freshness.STALE

    return ReportMetadata(
        generated_at=now,
        expires_at=now + timedelta(seconds=ttl_seconds),
        data_freshness=freshness,
        cache_status=CacheStatus.HIT if cached else CacheStatus.MISS,
        scan_duration_ms=int((time.monotonic() - started_at) * 1000),
        mode=mode,
        sources_queried=[r.source_name for r in results],
        sources_failed=[r.source_name for r in results if not r.success],
    )


def freshness_at(metadata: ReportMetadata, when: Optional[datetime] = None) -> Freshness:
    when = when or datetime.now(timezone.utc)
    if when >= metadata.expires_at:
        return Freshness.EXPIRED
    return metadata.data_freshness
