"""Aggregate counts by confirmation status.

Each aggregate is one total count plus one count per status, issued as
separate queries without a surrounding transaction. A write landing
between them can leave the four numbers momentarily inconsistent.
"""
from dataclasses import dataclass, field

from sqlalchemy.orm import Session

from rsvp_api.models.rsvp import Confirmation
from rsvp_api.services import rsvp_service


@dataclass
class Aggregate:
    total: int = 0
    counts: dict[str, int] = field(default_factory=lambda: {c.value: 0 for c in Confirmation})

    def to_dict(self) -> dict:
        return {"totalRSVP": self.total, "counts": dict(self.counts)}


def aggregate(db: Session, event_id: str) -> Aggregate:
    """Total and per-status counts for one event."""
    result = Aggregate(total=rsvp_service.count_by_event(db, event_id))
    for status in Confirmation:
        result.counts[status.value] = rsvp_service.count_by_event_and_status(db, event_id, status)
    return result


def aggregate_all(db: Session) -> Aggregate:
    """Total and per-status counts across every event."""
    result = Aggregate(total=rsvp_service.count_all(db))
    for status in Confirmation:
        result.counts[status.value] = rsvp_service.count_by_status(db, status)
    return result
