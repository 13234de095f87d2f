from .cache import ResultCache, CacheEntry
from .rate_limit import SourceRateLimiter, RateLimitEntry

__all__ = [
    "ResultCache",
    "CacheEntry",
    "SourceRateLimiter",
    "RateLimitEntry",
]
