"""Origin admission gate, run as a route dependency before any handler work."""
import logging
from fastapi import Request

from rsvp_api.config import settings
from rsvp_api.exceptions import NotAllowedError

logger = logging.getLogger(__name__)


def require_allowed_origin(request: Request) -> None:
    """Reject cross-origin requests from origins outside CORS_ORIGINS.

    Requests without an Origin header (curl, server-to-server) pass.
    """
    origin = request.headers.get("origin")
    if origin and origin not in settings.allowed_origins:
        logger.warning("Rejected request from origin %s", origin)
        raise NotAllowedError(origin)
