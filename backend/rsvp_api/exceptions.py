"""Error taxonomy for the RSVP service.

Every error carries the HTTP status it is surfaced with, so a single
exception handler in ``rsvp_api.main`` can translate all of them into
``{"error": ..., "details": ...}`` bodies.
"""
from typing import Optional


class RSVPServiceError(Exception):
    """Base exception for all RSVP service errors."""

    status_code: int = 500

    def __init__(
        self,
        message: str,
        error_code: str = "RSVP_ERROR",
        details: Optional[dict] = None,
        status_code: Optional[int] = None,
    ):
        self.message = message
        self.error_code = error_code
        self.details = details or {}
        if status_code is not None:
            self.status_code = status_code
        super().__init__(self.message)


class ValidationError(RSVPServiceError):
    """Missing or invalid input fields. Never retried."""

    status_code = 400

    def __init__(self, message: str, details: Optional[dict] = None):
        super().__init__(message, error_code="VALIDATION_ERROR", details=details)


class PersistenceError(RSVPServiceError):
    """Store unavailable or write rejected.

    Raised with 400 on the write path and 500 on the read path; the
    underlying cause is logged, never returned to the client.
    """

    def __init__(self, message: str, status_code: int = 500):
        super().__init__(message, error_code="PERSISTENCE_ERROR", status_code=status_code)


class NotAllowedError(RSVPServiceError):
    """Request origin is not on the allowlist."""

    status_code = 403

    def __init__(self, origin: str):
        self.origin = origin
        super().__init__("Not allowed by CORS", error_code="ORIGIN_NOT_ALLOWED")


class RateLimitError(RSVPServiceError):
    """Request quota exceeded for this client."""

    status_code = 429

    def __init__(self, limit: str, retry_after_seconds: int):
        self.limit = limit
        self.retry_after_seconds = retry_after_seconds
        super().__init__(
            "Too many requests, please try again later.",
            error_code="RATE_LIMITED",
            details={"retry_after_seconds": retry_after_seconds},
        )
