"""
Rate limiter configuration.

Keyed on client IP. Every RSVP route shares one global quota; submissions
carry an extra, tighter quota. Quotas are read from settings per request.
"""
import math
import time

from fastapi import Request
from slowapi import Limiter
from slowapi.util import get_remote_address

from rsvp_api.config import settings

GLOBAL_SCOPE = "rsvp"


def global_limit() -> str:
    return f"{settings.RATE_LIMIT_GLOBAL}/{settings.RATE_LIMIT_GLOBAL_PERIOD_SECONDS} seconds"


def submit_limit() -> str:
    return f"{settings.RATE_LIMIT_SUBMIT}/{settings.RATE_LIMIT_SUBMIT_PERIOD_SECONDS} seconds"


limiter = Limiter(key_func=get_remote_address, enabled=settings.RATE_LIMIT_ENABLED)

# Applied to every RSVP route; one bucket per client across all of them
global_quota = limiter.shared_limit(global_limit, scope=GLOBAL_SCOPE)


def retry_after_seconds(request: Request) -> int:
    """Seconds until the window that rejected ``request`` resets."""
    view_limit = getattr(request.state, "view_rate_limit", None)
    if view_limit is None:
        return 1
    item, identifiers = view_limit
    reset_at, _ = limiter.limiter.get_window_stats(item, *identifiers)
    return max(1, math.ceil(reset_at - time.time()))
