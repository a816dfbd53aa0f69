"""In-memory task store: ordered records, id allocation and mutations.

Nothing here touches the disk; persisting the store is an explicit step
handled by ``taskmanager.storage``.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable, Iterator
from datetime import datetime

from taskmanager.enums import Priority, SortOrder, TaskStatus
from taskmanager.models.task import TaskModel

logger = logging.getLogger(__name__)

TaskPredicate = Callable[[TaskModel], bool]

# Undated tasks sort after every dated one.
_NO_DUE = datetime.max


def _due_key(task: TaskModel) -> datetime:
    # Compare aware and naive due dates on the same footing.
    return task.due_date.replace(tzinfo=None) if task.due_date else _NO_DUE


_SORT_KEYS: dict[SortOrder, Callable[[TaskModel], tuple]] = {
    SortOrder.PRIORITY: lambda t: (-t.priority.severity, _due_key(t), t.id),
    SortOrder.DUE: lambda t: (_due_key(t), t.id),
    SortOrder.CREATED: lambda t: (t.created_date.replace(tzinfo=None), t.id),
}


class TaskStore:
    """Ordered collection of task records owned by a single caller.

    Identifiers start at ``max(existing) + 1`` (or 1) and only grow, so an id
    freed by ``remove`` is never handed out again in the same session.
    """

    def __init__(self, tasks: Iterable[TaskModel] | None = None):
        self._tasks: list[TaskModel] = []
        self._next_id: int = 1
        if tasks:
            self.replace_all(tasks)

    # -------------------- bulk --------------------
    def replace_all(self, tasks: Iterable[TaskModel]) -> None:
        """Replace the whole collection, e.g. after loading from disk."""
        collected = list(tasks)
        ids = [t.id for t in collected]
        if len(ids) != len(set(ids)):
            raise ValueError("Duplicate task ids in collection")
        self._tasks = collected
        self._next_id = max(ids) + 1 if ids else 1
        logger.debug("Store replaced with %d task(s); next id %d", len(collected), self._next_id)

    def snapshot(self) -> list[TaskModel]:
        return list(self._tasks)

    @property
    def next_id(self) -> int:
        return self._next_id

    def __len__(self) -> int:
        return len(self._tasks)

    def __contains__(self, task_id: object) -> bool:
        return any(t.id == task_id for t in self._tasks)

    # -------------------- queries --------------------
    def find(self, task_id: int) -> TaskModel | None:
        for task in self._tasks:
            if task.id == task_id:
                return task
        return None

    def list(
        self,
        predicate: TaskPredicate | None = None,
        sort: SortOrder = SortOrder.INSERTION,
    ) -> Iterator[TaskModel]:
        """
        Iterate over a snapshot of the records.

        Args:
            predicate: Optional filter; only records it accepts are yielded
            sort: Ordering to apply; insertion order by default

        Returns:
            A one-shot iterator; later mutations do not affect it
        """
        tasks = [t for t in self._tasks if predicate is None or predicate(t)]
        if sort != SortOrder.INSERTION:
            tasks.sort(key=_SORT_KEYS[sort])
        return iter(tasks)

    def search(self, keyword: str) -> list[TaskModel]:
        """Case-insensitive substring match on title or description."""
        needle = keyword.casefold()
        return [t for t in self._tasks if needle in t.title.casefold() or needle in t.description.casefold()]

    def pending(self) -> list[TaskModel]:
        """Tasks that are neither completed nor cancelled."""
        return [t for t in self._tasks if t.status.is_open]

    # -------------------- mutations --------------------
    def add(
        self,
        title: str,
        description: str = "",
        priority: Priority = Priority.MEDIUM,
        due_date: datetime | None = None,
    ) -> TaskModel:
        """
        Create and append a task with the next free id.

        Raises:
            pydantic.ValidationError: If the title is empty; no id is consumed
        """
        task = TaskModel(
            id=self._next_id,
            title=title,
            description=description,
            priority=priority,
            due_date=due_date,
        )
        self._next_id += 1
        self._tasks.append(task)
        logger.debug("Added task %d '%s'", task.id, task.title)
        return task

    def remove(self, task_id: int) -> bool:
        task = self.find(task_id)
        if task is None:
            return False
        self._tasks.remove(task)
        logger.debug("Removed task %d", task_id)
        return True

    def set_status(self, task_id: int, status: TaskStatus) -> TaskModel | None:
        task = self.find(task_id)
        if task is None:
            return None
        task.status = status
        logger.debug("Task %d status -> %s", task_id, status.value)
        return task

    def complete(self, task_id: int) -> TaskModel | None:
        return self.set_status(task_id, TaskStatus.COMPLETED)

    def toggle_completion(self, task_id: int) -> TaskModel | None:
        """Completed goes back to Pending; any other status becomes Completed."""
        task = self.find(task_id)
        if task is None:
            return None
        new_status = TaskStatus.PENDING if task.completed else TaskStatus.COMPLETED
        return self.set_status(task_id, new_status)

    def update(
        self,
        task_id: int,
        *,
        title: str | None = None,
        description: str | None = None,
        priority: Priority | None = None,
        due_date: datetime | None = None,
        clear_due: bool = False,
    ) -> TaskModel | None:
        """
        Edit the given fields of a task in place; None leaves a field unchanged.

        The record is validated as a whole before any field is written, so a
        rejected edit leaves the task untouched.

        Raises:
            pydantic.ValidationError: If the resulting record is invalid
        """
        task = self.find(task_id)
        if task is None:
            return None

        changes: dict = {}
        if title is not None:
            changes["title"] = title
        if description is not None:
            changes["description"] = description
        if priority is not None:
            changes["priority"] = priority
        if clear_due:
            changes["due_date"] = None
        elif due_date is not None:
            changes["due_date"] = due_date

        if changes:
            candidate = TaskModel.model_validate({**task.model_dump(), **changes})
            for field in changes:
                setattr(task, field, getattr(candidate, field))
            logger.debug("Task %d updated: %s", task_id, ", ".join(changes))
        return task
