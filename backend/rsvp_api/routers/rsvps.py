"""RSVP API routes — submission, listings and counts."""
import logging
from fastapi import APIRouter, Depends, Request, status
from sqlalchemy.orm import Session

from rsvp_api.cache import ResponseCache, get_response_cache, rsvp_detail_key
from rsvp_api.database import get_db
from rsvp_api.dependencies import require_allowed_origin
from rsvp_api.exceptions import PersistenceError, ValidationError
from rsvp_api.rate_limiter import global_quota, limiter, submit_limit
from rsvp_api.schemas.rsvp import RSVPCreate, RSVPOut, RSVPSubmitted, RSVPListOut, RSVPCountOut
from rsvp_api.services import aggregation_service, rsvp_service

logger = logging.getLogger(__name__)
router = APIRouter(dependencies=[Depends(require_allowed_origin)])


def _dump(records) -> list[dict]:
    return [RSVPOut.model_validate(r).model_dump(mode="json", by_alias=True) for r in records]


@router.post(
    "",
    response_model=RSVPSubmitted,
    status_code=status.HTTP_201_CREATED,
)
@global_quota
@limiter.limit(submit_limit)
def submit_rsvp(
    request: Request,
    payload: RSVPCreate,
    db: Session = Depends(get_db),
    cache: ResponseCache = Depends(get_response_cache),
):
    """Store a guest's RSVP and drop the cached view of its event."""
    required = {"eventId": payload.event_id, "name": payload.name, "confirmation": payload.confirmation}
    missing = [field for field, value in required.items() if not value or not value.strip()]
    if missing:
        raise ValidationError("Required fields are missing", details={"missing": missing})

    rsvp = rsvp_service.create_rsvp(
        db,
        event_id=payload.event_id,
        name=payload.name,
        message=payload.message,
        confirmation=payload.confirmation,
    )
    cache.invalidate(rsvp_detail_key(rsvp.event_id))
    return {"payload": RSVPOut.model_validate(rsvp), "message": "RSVP submitted successfully"}


@router.get("", response_model=RSVPListOut)
@global_quota
def list_rsvps(request: Request, db: Session = Depends(get_db)):
    """Every RSVP with counts aggregated across all events."""
    try:
        totals = aggregation_service.aggregate_all(db)
        records = rsvp_service.list_all(db)
    except PersistenceError as exc:
        raise PersistenceError(rsvp_service.FETCH_ERROR) from exc
    return {**totals.to_dict(), "data": _dump(records)}


@router.get("/{event_id}", response_model=RSVPListOut)
@global_quota
def list_event_rsvps(
    request: Request,
    event_id: str,
    db: Session = Depends(get_db),
    cache: ResponseCache = Depends(get_response_cache),
):
    """One event's RSVPs with counts, served from cache when fresh."""
    key = rsvp_detail_key(event_id)
    cached = cache.get(key)
    if cached is not None:
        logger.debug("Cache hit for %s", key)
        return cached

    try:
        totals = aggregation_service.aggregate(db, event_id)
        records = rsvp_service.list_by_event(db, event_id)
    except PersistenceError as exc:
        raise PersistenceError(rsvp_service.FETCH_ERROR) from exc
    body = {**totals.to_dict(), "data": _dump(records)}
    cache.set(key, body)
    logger.debug("Cached %s (%d records)", key, len(records))
    return body


@router.get("/{event_id}/count", response_model=RSVPCountOut)
@global_quota
def count_event_rsvps(request: Request, event_id: str, db: Session = Depends(get_db)):
    """Counts only, no record list."""
    return aggregation_service.aggregate(db, event_id).to_dict()
