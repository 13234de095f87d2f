"""
Username presence across social platforms.

Most platforms block unauthenticated automated lookups, so live checks are
not performed: every platform is reported as not found. The adapter exists
so username scans go through the same aggregation path as other targets.
"""

import logging

from osintkit.models.findings import SourceResult
from ..catalogs import USERNAME_PLATFORMS

logger = logging.getLogger(__name__)


class UsernameChecker:
    name = "Username Check"
    description = "Platform presence (degraded: no live checks)"
    source = "username"

    def __init__(self, platforms: list[str] | None = None):
        self.platforms = platforms or USERNAME_PLATFORMS

    async def fetch(self, username: str) -> SourceResult:
        logger.info("Username checks are limited by platform restrictions; reporting defaults for %d platforms", len(self.platforms))
        return SourceResult(
            source_name=self.source,
            success=True,
            data=[{"name": p, "found": False} for p in self.platforms],
        )
