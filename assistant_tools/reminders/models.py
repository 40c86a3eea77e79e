"""
Reminder persistence model - one row per stored reminder
"""
from datetime import datetime, timezone
from sqlalchemy import Column, String, DateTime
import uuid

from assistant_tools.db.base import Base


def _new_reminder_id() -> str:
    return str(uuid.uuid4())


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Reminder(Base):
    """A reminder created through the StoreUserReminder tool call"""
    __tablename__ = "reminders"

    id = Column(String, primary_key=True, default=_new_reminder_id)
    message = Column(String, nullable=False)
    remind_at = Column(String, nullable=False)  # RFC 3339, stored verbatim
    created_at = Column(DateTime(timezone=True), default=_utcnow, nullable=False)
