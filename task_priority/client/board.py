"""Client state manager.

Holds the active task list and the completed history in memory. Each
mutation is applied locally first (optimistic), then the whole list is
pushed to the API. A failed push is only logged: local and server state
may diverge until the next successful write.
"""

import logging
from datetime import datetime
from typing import List, Optional

from task_priority.client.api import TaskPriorityAPI
from task_priority.schemas.task import Task, CompletedTask
from task_priority.services import task_service
from task_priority.services.task_service import TaskNotFoundError

logger = logging.getLogger(__name__)


class TaskBoard:
    def __init__(self, api: TaskPriorityAPI):
        self.api = api
        self.tasks: List[Task] = []
        self.history: List[CompletedTask] = []

    def load(self) -> None:
        tasks = self.api.fetch_tasks()
        if tasks is not None:
            self.tasks = sorted(tasks, key=lambda task: task.order)

        history = self.api.fetch_history()
        if history is not None:
            self.history = history

    @property
    def top_priority(self) -> Optional[Task]:
        return task_service.current_top_priority(self.tasks)

    def history_by_completion(self) -> List[CompletedTask]:
        return task_service.sort_history(self.history)

    def _commit(self, tasks: List[Task]) -> None:
        self.tasks = tasks
        self.api.save_tasks(tasks)

    def add_task(self, description: str, target_date: Optional[datetime] = None) -> Optional[Task]:
        if not description or not description.strip():
            return None

        tasks, new_task = task_service.insert_task(self.tasks, description, target_date)
        self._commit(tasks)
        return new_task

    def move_task(self, active_id: str, over_id: Optional[str]) -> None:
        # drop hors liste ou sur elle-même: rien à faire
        if not over_id or active_id == over_id:
            return
        try:
            tasks = task_service.move_task(self.tasks, active_id, over_id)
        except TaskNotFoundError as e:
            logger.warning("Ignoring move: %s", e)
            return
        self._commit(tasks)

    def _apply_priority(self, operation, task_id: str) -> None:
        try:
            tasks = operation(self.tasks, task_id)
        except TaskNotFoundError as e:
            logger.warning("Ignoring priority change: %s", e)
            return
        self._commit(tasks)

    def set_top_priority(self, task_id: str) -> None:
        self._apply_priority(task_service.set_top_priority, task_id)

    def unset_top_priority(self, task_id: str) -> None:
        self._apply_priority(task_service.unset_top_priority, task_id)

    def toggle_top_priority(self, task_id: str) -> None:
        self._apply_priority(task_service.toggle_top_priority, task_id)

    def complete_task(self, task_id: str) -> Optional[CompletedTask]:
        """
        Termine une tâche: la liste active est poussée d'abord, puis
        l'historique serveur est relu, complété en tête et réécrit.
        Si l'historique ne peut pas être relu, il n'est pas réécrit.
        """
        try:
            tasks, completed = task_service.complete_task(self.tasks, task_id)
        except TaskNotFoundError as e:
            logger.warning("Ignoring completion: %s", e)
            return None

        self._commit(tasks)

        existing = self.api.fetch_history_for_update()
        if existing is None:
            # historique serveur inconnu: ne pas l'écraser
            logger.error("Skipping history update for %s: server history unreadable", task_id)
            return completed
        history = task_service.prepend_history(existing, completed)
        if self.api.save_history(history):
            self.history = history
        else:
            logger.error("Failed to update task history for %s", task_id)
        return completed
