"""
Per-client request rate limiting

Every route gets the default limit through ``SlowAPIMiddleware``; clients are
told apart by their remote address.
"""

from slowapi import Limiter
from slowapi.util import get_remote_address

from bistro.core.config import get_settings

settings = get_settings()

limiter = Limiter(
    key_func=get_remote_address,
    default_limits=[settings.RATE_LIMIT],
    enabled=settings.RATE_LIMIT_ENABLED,
)
