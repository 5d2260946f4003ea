"""Task service

Ordering / priority state machine for the active task list. Every function
returns a new list and leaves its input untouched; `order` always ends up
as the position of the task in the returned list (0..n-1).
"""

import uuid
from datetime import datetime, timezone
from typing import List, Optional, Tuple

from task_priority.schemas.task import Task, CompletedTask


class TaskNotFoundError(LookupError):
    def __init__(self, task_id: str):
        super().__init__(f"Task not found: {task_id}")
        self.task_id = task_id


class InvalidMoveError(ValueError):
    pass


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def _as_utc(value: datetime) -> datetime:
    # les dates sans fuseau sont considérées UTC
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


def _renumber(tasks: List[Task]) -> List[Task]:
    return [task.model_copy(update={"order": index}) for index, task in enumerate(tasks)]


def _index_of(tasks: List[Task], task_id: str) -> int:
    for index, task in enumerate(tasks):
        if task.id == task_id:
            return index
    raise TaskNotFoundError(task_id)


def _by_order(tasks: List[Task]) -> List[Task]:
    # sort stable: à order égal on garde la position actuelle
    return sorted(tasks, key=lambda task: task.order)


def insert_task(
    tasks: List[Task],
    description: str,
    target_date: Optional[datetime] = None,
    now: Optional[datetime] = None
) -> Tuple[List[Task], Task]:
    """Ajoute une nouvelle tâche en fin de liste (order = longueur actuelle)."""
    if not description or not description.strip():
        raise ValueError("Task description must not be empty")

    new_task = Task(
        id=str(uuid.uuid4()),
        description=description,
        is_complete=False,
        created_date=now or _utcnow(),
        target_date=target_date,
        order=len(tasks),
        is_top_priority=False
    )
    return _renumber(_by_order(tasks)) + [new_task], new_task


def reorder_tasks(tasks: List[Task], source_index: int, target_index: int) -> List[Task]:
    """Déplace la tâche `source_index` vers `target_index` puis renumérote."""
    ordered = _by_order(tasks)
    size = len(ordered)
    if not 0 <= source_index < size or not 0 <= target_index < size:
        raise InvalidMoveError(
            f"Cannot move task {source_index} -> {target_index} in a list of {size}"
        )

    moved = ordered.pop(source_index)
    ordered.insert(target_index, moved)
    return _renumber(ordered)


def move_task(tasks: List[Task], active_id: str, over_id: str) -> List[Task]:
    """Glisser-déposer: la tâche `active_id` prend la place de `over_id`."""
    ordered = _by_order(tasks)
    source_index = _index_of(ordered, active_id)
    target_index = _index_of(ordered, over_id)
    return reorder_tasks(ordered, source_index, target_index)


def set_top_priority(tasks: List[Task], task_id: str) -> List[Task]:
    """
    Marque une tâche comme top priorité et la place en tête (order 0).

    - s'il y avait déjà une top priorité, elle est rétrogradée et prend
      la place laissée libre par la nouvelle
    - sinon toutes les tâches devant la nouvelle reculent d'un rang
    Une seule tâche garde le flag. Si la tâche est déjà la top priorité,
    les positions ne bougent pas.
    """
    ordered = _by_order(tasks)
    target_index = _index_of(ordered, task_id)
    target = ordered[target_index]

    if target.is_top_priority:
        return [
            task.model_copy(update={"order": index, "is_top_priority": task.id == task_id})
            for index, task in enumerate(ordered)
        ]

    previous_index = next(
        (index for index, task in enumerate(ordered) if task.is_top_priority and task.id != task_id),
        None
    )

    if previous_index is not None:
        # échange: l'ancienne top priorité prend la place libérée
        ordered[target_index], ordered[previous_index] = ordered[previous_index], ordered[target_index]
        target_index = previous_index

    ordered.pop(target_index)
    ordered.insert(0, target)

    result = []
    for index, task in enumerate(ordered):
        result.append(task.model_copy(update={
            "order": index,
            "is_top_priority": task.id == task_id
        }))
    return result


def unset_top_priority(tasks: List[Task], task_id: str) -> List[Task]:
    """Retire le flag; les orders redeviennent les positions, sans décalage."""
    ordered = _by_order(tasks)
    _index_of(ordered, task_id)

    return [
        task.model_copy(update={
            "order": index,
            "is_top_priority": task.is_top_priority and task.id != task_id
        })
        for index, task in enumerate(ordered)
    ]


def toggle_top_priority(tasks: List[Task], task_id: str) -> List[Task]:
    ordered = _by_order(tasks)
    task = ordered[_index_of(ordered, task_id)]
    if task.is_top_priority:
        return unset_top_priority(ordered, task_id)
    return set_top_priority(ordered, task_id)


def complete_task(
    tasks: List[Task],
    task_id: str,
    now: Optional[datetime] = None
) -> Tuple[List[Task], CompletedTask]:
    """Retire la tâche de la liste active et construit l'entrée d'historique."""
    ordered = _by_order(tasks)
    task = ordered.pop(_index_of(ordered, task_id))

    completed_date = _as_utc(now or _utcnow())
    if completed_date < _as_utc(task.created_date):
        completed_date = _as_utc(task.created_date)

    completed = CompletedTask(
        id=task.id,
        description=task.description,
        is_complete=True,
        created_date=task.created_date,
        completed_date=completed_date,
        order=0
    )
    return _renumber(ordered), completed


def prepend_history(history: List[CompletedTask], completed: CompletedTask) -> List[CompletedTask]:
    return [completed] + list(history)


def current_top_priority(tasks: List[Task]) -> Optional[Task]:
    """La tâche flaguée, sinon la première de la liste, sinon None."""
    ordered = _by_order(tasks)
    for task in ordered:
        if task.is_top_priority:
            return task
    return ordered[0] if ordered else None


def sort_history(history: List[CompletedTask]) -> List[CompletedTask]:
    # plus récentes d'abord
    return sorted(history, key=lambda entry: _as_utc(entry.completed_date), reverse=True)
