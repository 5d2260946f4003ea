"""Key-value entry model"""

from sqlalchemy import Column, String, Text, DateTime
from datetime import datetime, timezone
from task_priority.core.database import Base


def _utcnow():
    return datetime.now(timezone.utc)


class KVEntry(Base):
    __tablename__ = "kv_entries"

    key = Column(String, primary_key=True)
    value = Column(Text, nullable=False)  # document JSON brut
    updated_at = Column(DateTime, default=_utcnow, onupdate=_utcnow)
