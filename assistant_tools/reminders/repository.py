from typing import List
from sqlalchemy.orm import Session
from sqlalchemy import select, delete

from .models import Reminder


def create_reminder(db: Session, message: str, remind_at: str) -> Reminder:
    reminder = Reminder(message=message, remind_at=remind_at)
    db.add(reminder)
    db.commit()
    db.refresh(reminder)
    return reminder


def list_reminders(db: Session) -> List[Reminder]:
    stmt = select(Reminder).order_by(Reminder.created_at.asc())
    return list(db.execute(stmt).scalars())


def delete_all_reminders(db: Session) -> int:
    result = db.execute(delete(Reminder))
    db.commit()
    return result.rowcount or 0
