"""Rate limiting adapters.

The dispatcher depends on ``AbstractRateLimiter`` only, so the interval
gate can be replaced (e.g. by a limiter shared with other processes)
without touching the request path.
"""

from fut_client.adapters.rate_limit.base import AbstractRateLimiter
from fut_client.adapters.rate_limit.interval import IntervalRateLimiter

__all__ = ["AbstractRateLimiter", "IntervalRateLimiter"]
