from datetime import datetime, timezone
from pydantic import BaseModel, ConfigDict


class ReminderRead(BaseModel):
    """Wire shape of a stored reminder"""
    model_config = ConfigDict(from_attributes=True)

    id: str
    message: str
    remind_at: str

    def due_at(self) -> datetime:
        """Parse ``remind_at`` as RFC 3339 and return it as a UTC-aware datetime.

        The store accepts any string, so callers that need a real timestamp
        must be prepared for ``ValueError``.
        """
        return parse_rfc3339(self.remind_at)


def parse_rfc3339(value: str) -> datetime:
    text = value.strip()
    # fromisoformat only learned the "Z" suffix in 3.11
    if text.endswith(("Z", "z")):
        text = text[:-1] + "+00:00"
    dt = datetime.fromisoformat(text)
    if dt.tzinfo is None:
        raise ValueError(f"RFC 3339 timestamp requires an offset: {value!r}")
    return dt.astimezone(timezone.utc)
