"""Per-client request rate limiting using slowapi."""

import logging
from typing import Optional

from fastapi import FastAPI
from slowapi import Limiter, _rate_limit_exceeded_handler
from slowapi.errors import RateLimitExceeded
from slowapi.middleware import SlowAPIMiddleware
from slowapi.util import get_remote_address

logger = logging.getLogger(__name__)


def setup_rate_limiter(app: FastAPI, rate_limit: Optional[str]) -> None:
    """
    Attach a slowapi limiter that applies rate_limit to every route.

    Clients are keyed by remote address. Each app gets its own in-memory
    counters. An empty rate_limit leaves the app unlimited.

    Args:
        app: FastAPI application
        rate_limit: slowapi limit string, e.g. "100/minute"
    """
    if not rate_limit:
        logger.info("Rate limiting disabled")
        return

    limiter = Limiter(key_func=get_remote_address, default_limits=[rate_limit])
    app.state.limiter = limiter
    app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)
    app.add_middleware(SlowAPIMiddleware)
    logger.info(f"Rate limiter configured ({rate_limit} per client)")
