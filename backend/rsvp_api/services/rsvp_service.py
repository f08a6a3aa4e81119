"""RSVP record store — append-only persistence and count queries.

Responsibilities:
- Validate submissions before anything is written
- Assign identity and creation timestamp on insert
- List records newest-first, globally or per event
- Count records per event and per confirmation status

No update or delete operation exists; records are immutable once stored.
Database failures surface as ``PersistenceError`` with a generic message.
"""
import logging
from typing import Optional

from sqlalchemy import func
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from rsvp_api.exceptions import PersistenceError, ValidationError
from rsvp_api.models.rsvp import RSVP, Confirmation

logger = logging.getLogger(__name__)

FETCH_ERROR = "Error fetching RSVPs"
COUNT_ERROR = "Error counting RSVPs"
SUBMIT_ERROR = "Error submitting RSVP"


def _is_blank(value: Optional[str]) -> bool:
    return value is None or not str(value).strip()


def parse_confirmation(value: Optional[str]) -> Confirmation:
    """Map a raw confirmation string onto the closed ``Confirmation`` set."""
    try:
        return Confirmation(value)
    except ValueError:
        raise ValidationError(
            SUBMIT_ERROR,
            details={
                "confirmation": f"'{value}' is not one of "
                + ", ".join(c.value for c in Confirmation),
            },
        )


def validate_submission(
    event_id: Optional[str],
    name: Optional[str],
    message: Optional[str],
    confirmation: Optional[str],
) -> Confirmation:
    """Check every field a stored record needs; return the parsed status."""
    fields = {"eventId": event_id, "name": name, "message": message, "confirmation": confirmation}
    missing = [field for field, value in fields.items() if _is_blank(value)]
    if missing:
        raise ValidationError(SUBMIT_ERROR, details={"missing": missing})
    return parse_confirmation(confirmation)


def create_rsvp(
    db: Session,
    event_id: Optional[str],
    name: Optional[str],
    message: Optional[str],
    confirmation: Optional[str],
) -> RSVP:
    """Validate and persist one RSVP, returning it with id and createdAt set."""
    status = validate_submission(event_id, name, message, confirmation)

    rsvp = RSVP(event_id=event_id, name=name, message=message, confirmation=status)
    try:
        db.add(rsvp)
        db.commit()
        db.refresh(rsvp)
    except SQLAlchemyError as exc:
        db.rollback()
        logger.exception("Failed to store RSVP for event %s", event_id)
        raise PersistenceError(SUBMIT_ERROR, status_code=400) from exc

    logger.info("Stored RSVP %s for event %s (%s)", rsvp.id, event_id, status.value)
    return rsvp


def _newest_first(query):
    return query.order_by(RSVP.created_at.desc(), RSVP.seq.desc())


def list_all(db: Session) -> list[RSVP]:
    """Every record across all events, most recent first."""
    try:
        return _newest_first(db.query(RSVP)).all()
    except SQLAlchemyError as exc:
        logger.exception("Failed to list RSVPs")
        raise PersistenceError(FETCH_ERROR) from exc


def list_by_event(db: Session, event_id: str) -> list[RSVP]:
    """Records for one event, most recent first."""
    try:
        return _newest_first(db.query(RSVP).filter(RSVP.event_id == event_id)).all()
    except SQLAlchemyError as exc:
        logger.exception("Failed to list RSVPs for event %s", event_id)
        raise PersistenceError(FETCH_ERROR) from exc


def _count(db: Session, *criteria) -> int:
    try:
        return db.query(func.count(RSVP.seq)).filter(*criteria).scalar() or 0
    except SQLAlchemyError as exc:
        logger.exception("Failed to count RSVPs")
        raise PersistenceError(COUNT_ERROR) from exc


def count_by_event(db: Session, event_id: str) -> int:
    return _count(db, RSVP.event_id == event_id)


def count_by_event_and_status(db: Session, event_id: str, status: Confirmation) -> int:
    return _count(db, RSVP.event_id == event_id, RSVP.confirmation == status)


def count_all(db: Session) -> int:
    return _count(db)


def count_by_status(db: Session, status: Confirmation) -> int:
    return _count(db, RSVP.confirmation == status)
