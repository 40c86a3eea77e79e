"""Lock-guarded access to the reminder table.

The store owns one session factory bound to a single-connection engine and a
process-wide lock, so at most one reminder operation runs at any time. Each
operation is its own transaction.
"""
import logging
import threading
from contextlib import contextmanager
from typing import Generator, List

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, sessionmaker

from assistant_tools.core.exceptions import PersistenceError
from assistant_tools.metrics import reminders_created_total, reminders_deleted_total
from . import repository
from .schemas import ReminderRead

logger = logging.getLogger(__name__)


# Shared by every ReminderStore in the process
_STORE_LOCK = threading.Lock()


class ReminderStore:
    def __init__(self, session_factory: sessionmaker):
        self._session_factory = session_factory
        self._lock = _STORE_LOCK

    @contextmanager
    def _session(self, operation: str) -> Generator[Session, None, None]:
        with self._lock:
            db = self._session_factory()
            try:
                yield db
            except SQLAlchemyError as e:
                db.rollback()
                logger.error(f"Reminder store {operation} failed: {e}")
                raise PersistenceError(str(e)) from e
            finally:
                db.close()

    def create(self, message: str, remind_at: str) -> ReminderRead:
        logger.info(f"Creating reminder remind_at={remind_at!r}")
        with self._session("create") as db:
            reminder = repository.create_reminder(db, message, remind_at)
            created = ReminderRead.model_validate(reminder)
        reminders_created_total.inc()
        logger.info(f"Created reminder {created.id}")
        return created

    def list_all(self) -> List[ReminderRead]:
        with self._session("list") as db:
            reminders = [ReminderRead.model_validate(r) for r in repository.list_reminders(db)]
        logger.debug(f"Listed {len(reminders)} reminders")
        return reminders

    def delete_all(self) -> int:
        with self._session("delete") as db:
            deleted = repository.delete_all_reminders(db)
        reminders_deleted_total.inc(deleted)
        logger.info(f"Deleted {deleted} reminders")
        return deleted
