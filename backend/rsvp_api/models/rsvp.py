"""RSVP ORM model — append-only guest responses grouped by event."""
import enum
import uuid
from datetime import datetime, timezone

from sqlalchemy import Column, DateTime, Integer, String, Text, Enum as SAEnum

from rsvp_api.database import Base


class Confirmation(str, enum.Enum):
    attending = "attending"
    not_attending = "not_attending"
    undecided = "undecided"


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class RSVP(Base):
    __tablename__ = "rsvps"

    # seq orders rows written within the same clock tick
    seq = Column(Integer, primary_key=True, autoincrement=True)
    id = Column(String(36), nullable=False, unique=True, index=True, default=lambda: str(uuid.uuid4()))
    event_id = Column(String(255), nullable=False, index=True)
    name = Column(String(255), nullable=False)
    message = Column(Text, nullable=False)
    confirmation = Column(SAEnum(Confirmation), nullable=False)
    created_at = Column(DateTime(timezone=True), nullable=False, default=_utcnow)
