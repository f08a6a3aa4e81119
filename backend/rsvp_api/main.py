"""FastAPI application entry point."""
import logging
from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from slowapi.errors import RateLimitExceeded

from rsvp_api.config import settings
from rsvp_api.database import Base, engine
from rsvp_api.exceptions import RSVPServiceError, RateLimitError
from rsvp_api.logging_config import setup_logging
from rsvp_api.rate_limiter import limiter, retry_after_seconds
from rsvp_api.routers import rsvps

# Import all models so Base.metadata knows about them
from rsvp_api.models.rsvp import RSVP  # noqa: F401

logger = logging.getLogger(__name__)

app = FastAPI(
    title="RSVP Service",
    description="Collects guest RSVPs per event and reports attendance counts",
    version="0.1.0",
)
app.state.limiter = limiter

# CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.allowed_origins,
    allow_methods=["GET", "POST"],
    allow_headers=["*"],
)

app.include_router(rsvps.router, prefix="/api/rsvp", tags=["RSVP"])


def _error_body(message: str, details=None) -> dict:
    body = {"error": message}
    if details:
        body["details"] = details
    return body


@app.exception_handler(RSVPServiceError)
def handle_service_error(request: Request, exc: RSVPServiceError):
    headers = None
    if isinstance(exc, RateLimitError):
        headers = {"Retry-After": str(exc.retry_after_seconds)}
    return JSONResponse(
        status_code=exc.status_code,
        content=_error_body(exc.message, exc.details),
        headers=headers,
    )


@app.exception_handler(RateLimitExceeded)
def handle_rate_limit_exceeded(request: Request, exc: RateLimitExceeded):
    logger.warning("Rate limit %s exceeded for %s", exc.detail, request.client.host if request.client else "unknown")
    return handle_service_error(request, RateLimitError(str(exc.detail), retry_after_seconds(request)))


@app.exception_handler(RequestValidationError)
def handle_request_validation_error(request: Request, exc: RequestValidationError):
    details = [
        {"field": ".".join(str(part) for part in err["loc"][1:]), "message": err["msg"]}
        for err in exc.errors()
    ]
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content=_error_body("Invalid request body", details),
    )


@app.exception_handler(Exception)
def handle_unexpected_error(request: Request, exc: Exception):
    """Send a generic 500 body.

    Starlette runs this from ServerErrorMiddleware, which re-raises the
    exception after the response is sent; the server logs the traceback.
    """
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=_error_body("Internal server error"),
    )


@app.on_event("startup")
def on_startup():
    """Configure logging and create tables (no migrations are shipped)."""
    setup_logging(settings.LOG_LEVEL)
    Base.metadata.create_all(bind=engine)
    logger.info("RSVP service ready (database: %s)", engine.url.render_as_string(hide_password=True))


@app.get("/api/health")
def health_check():
    return {"status": "ok"}
