"""HTTP client for the task priority API.

Every call is best effort: failures are logged and reported through the
return value (None / False), never raised to the caller.
"""

import logging
from typing import List, Optional

import httpx
from pydantic import TypeAdapter, ValidationError

from task_priority.core.config import settings
from task_priority.schemas.task import Task, CompletedTask

logger = logging.getLogger(__name__)

_task_list = TypeAdapter(List[Task])
_history = TypeAdapter(List[CompletedTask])


class TaskPriorityAPI:
    def __init__(self, base_url: Optional[str] = None, client: Optional[httpx.Client] = None):
        self._owns_client = client is None
        self._client = client or httpx.Client(
            base_url=base_url or settings.API_BASE_URL,
            timeout=settings.API_TIMEOUT_SECONDS
        )

    def close(self) -> None:
        if self._owns_client:
            self._client.close()

    def __enter__(self):
        return self

    def __exit__(self, *exc_info):
        self.close()

    # ---- lecture ----

    def _get(self, path: str, adapter: TypeAdapter):
        response = self._client.get(path)
        response.raise_for_status()
        return adapter.validate_python(response.json())

    def _fetch(self, path: str, adapter: TypeAdapter):
        try:
            return self._get(path, adapter)
        except httpx.HTTPStatusError as e:
            logger.error("Fetch %s failed: %s", path, e.response.status_code)
        except httpx.RequestError as e:
            logger.error("Fetch %s connection error: %s", path, e)
        except (ValueError, ValidationError) as e:
            logger.error("Fetch %s returned an unreadable document: %s", path, e)
        return None

    def fetch_tasks(self) -> Optional[List[Task]]:
        return self._fetch("/tasks", _task_list)

    def fetch_history(self) -> Optional[List[CompletedTask]]:
        return self._fetch("/history", _history)

    def fetch_history_for_update(self) -> Optional[List[CompletedTask]]:
        """
        Historique à compléter avant réécriture.

        Une réponse non-2xx vaut historique vide; une erreur réseau ou un
        document illisible renvoie None et l'appelant ne doit rien écrire.
        """
        try:
            return self._get("/history", _history)
        except httpx.HTTPStatusError as e:
            logger.warning("Fetch /history failed: %s, starting from an empty history", e.response.status_code)
            return []
        except httpx.RequestError as e:
            logger.error("Fetch /history connection error: %s", e)
        except (ValueError, ValidationError) as e:
            logger.error("Fetch /history returned an unreadable document: %s", e)
        return None

    # ---- écriture (liste complète) ----

    def _save(self, path: str, items) -> bool:
        payload = [item.to_json() for item in items]
        try:
            response = self._client.post(path, json=payload)
            response.raise_for_status()
        except httpx.HTTPStatusError as e:
            logger.error("Save %s failed: %s", path, e.response.status_code)
            return False
        except httpx.RequestError as e:
            logger.error("Save %s connection error: %s", path, e)
            return False
        return True

    def save_tasks(self, tasks: List[Task]) -> bool:
        return self._save("/tasks", tasks)

    def save_history(self, history: List[CompletedTask]) -> bool:
        return self._save("/history", history)
