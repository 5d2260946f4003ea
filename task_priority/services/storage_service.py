"""Storage service

Key-value façade: each key holds one whole JSON document, read and
replaced wholesale. No partial updates, no merge.
"""

import json
import logging
from sqlalchemy.orm import Session
from typing import Any, List

from task_priority.models.kv_entry import KVEntry

logger = logging.getLogger(__name__)


class CorruptDocumentError(ValueError):
    def __init__(self, key: str):
        super().__init__(f"Stored document '{key}' is corrupt")
        self.key = key


def get_document(db: Session, key: str) -> List[Any]:
    """Retourne le document stocké sous `key`, ou [] s'il n'existe pas."""
    entry = db.query(KVEntry).filter(KVEntry.key == key).first()
    if entry is None:
        logger.debug("No document stored under %s", key)
        return []

    logger.debug("Raw %s: %s", key, entry.value)
    try:
        document = json.loads(entry.value)
    except json.JSONDecodeError as exc:
        raise CorruptDocumentError(key) from exc

    if not isinstance(document, list):
        raise CorruptDocumentError(key)
    return document


def put_document(db: Session, key: str, payload: List[Any]) -> None:
    """Écrase le document `key` (upsert inconditionnel)."""
    raw = json.dumps(payload)

    entry = db.query(KVEntry).filter(KVEntry.key == key).first()
    if entry is None:
        db.add(KVEntry(key=key, value=raw))
    else:
        entry.value = raw

    db.commit()
    logger.info("Stored %s (%d items, %d bytes)", key, len(payload), len(raw))
