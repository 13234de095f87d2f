"""Base class for intelligence source adapters."""

import asyncio
import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any, Optional

import httpx

from osintkit import __version__
from osintkit.config import SourceConfig
from osintkit.models.findings import UNKNOWN, SourceResult
from osintkit.services.cache import ResultCache
from osintkit.services.rate_limit import SourceRateLimiter
from osintkit.errors import ConfigurationError, TransportError

logger = logging.getLogger(__name__)

USER_AGENT = f"osintkit/{__version__}"


def as_int(value: Any, default: int = 0) -> int:
    """Integer from a loosely typed payload field; ``default`` when it is not one."""
    try:
        return int(value)
    except (TypeError, ValueError, OverflowError):
        return default


def as_text(value: Any, default: Optional[str] = UNKNOWN) -> Optional[str]:
    """Scalar payload field as a string; ``default`` when missing, empty or nested."""
    if value is None or value == "" or isinstance(value, (dict, list)):
        return default
    return str(value)


@dataclass
class SourceRequest:
    url: str
    method: str = "GET"
    params: dict[str, Any] = field(default_factory=dict)
    headers: dict[str, str] = field(default_factory=dict)
    # Statuses that carry a meaningful "nothing found" answer.
    empty_statuses: tuple[int, ...] = ()


class SourceAdapter(ABC):
    """
    Base interface for all source adapters.

    Each adapter:
    - Looks in the shared cache before touching the network
    - Waits on the shared rate limiter for its source, inside the deadline
    - Turns every network or payload problem into a failed SourceResult
    - Normalizes the raw payload into the internal schema

    RateLimitExceeded is the one error allowed out of ``fetch``.
    """

    name: str = "Base Source"
    description: str = "Base intelligence source"
    requires_credential: bool = True

    def __init__(
        self,
        config: SourceConfig,
        client: httpx.AsyncClient,
        rate_limiter: SourceRateLimiter,
        cache: Optional[ResultCache] = None,
        timeout: float = 10.0,
    ):
        self.config = config
        self.client = client
        self.rate_limiter = rate_limiter
        self.cache = cache
        self.timeout = timeout

    @property
    def source(self) -> str:
        return self.config.name

    @abstractmethod
    def build_request(self, **params: Any) -> SourceRequest:
        """Describe the HTTP call for the given parameters."""

    @abstractmethod
    def normalize(self, payload: Any) -> Any:
        """Map the raw response body to the internal schema."""

    def empty_result(self) -> Any:
        """Normalized value for an authoritative "no data" response."""
        return self.normalize({})

    def _require_credential(self):
        if self.requires_credential and not self.config.credential:
            raise ConfigurationError(f"{self.name} credential not configured")

    def _fail(self, message: str) -> SourceResult:
        logger.warning("[%s] %s", self.name, message)
        return SourceResult(source_name=self.source, success=False, error=message)

    async def fetch(self, **params: Any) -> SourceResult:
        key = ResultCache.generate_key(self.source, params)

        if self.cache is not None:
            entry = self.cache.entry(key)
            if entry is not None:
                logger.debug("[%s] cache hit", self.name)
                return SourceResult(
                    source_name=self.source,
                    success=True,
                    data=entry.value,
                    cached=True,
                    cached_at=entry.inserted_at,
                )

        try:
            self._require_credential()
        except ConfigurationError as e:
            return self._fail(str(e))

        # The deadline covers the limiter wait as well as the request.
        try:
            request = self.build_request(**params)
            payload = await asyncio.wait_for(self._throttled_send(request), timeout=self.timeout)
        except TransportError as e:
            return self._fail(str(e))
        except asyncio.TimeoutError:
            return self._fail(f"timed out after {self.timeout:g}s")

        try:
            data = self.normalize(payload) if payload is not None else self.empty_result()
        except (ValueError, TypeError, AttributeError, KeyError) as e:
            return self._fail(f"malformed response: {type(e).__name__}: {e}")

        if self.cache is not None:
            self.cache.set(key, data)

        return SourceResult(source_name=self.source, success=True, data=data)

    async def _throttled_send(self, request: SourceRequest) -> Any:
        await self.rate_limiter.wait(self.source, self.config.rate_limit_ms)
        return await self._send(request)

    async def _send(self, request: SourceRequest) -> Any:
        """Perform the request; returns parsed JSON, or None for an empty status."""
        headers = {"User-Agent": USER_AGENT, "Accept": "application/json", **request.headers}
        try:
            resp = await self.client.request(
                request.method,
                request.url,
                params=request.params or None,
                headers=headers,
                timeout=self.timeout,
            )
        except httpx.TimeoutException as e:
            raise TransportError(f"request timed out: {type(e).__name__}") from e
        except httpx.HTTPError as e:
            raise TransportError(f"transport error: {type(e).__name__}") from e

        if resp.status_code in request.empty_statuses:
            return None
        if not resp.is_success:
            raise TransportError(f"HTTP {resp.status_code}: {resp.reason_phrase}")

        try:
            return resp.json()
        except ValueError as e:
            raise TransportError("response was not valid JSON") from e
