"""
TaskListing: the user's prioritized list of tasks and operation handling.

Order encodes priority (index 0 is the next thing to do). Operations address
tasks by their current position, so indices renumber after every Reorder.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import datetime
from typing import Iterator, Protocol

from chain.errors import TaskError, TaskErrorKind
from chain.models import Task, local_now
from chain.operations import Add, AddRemark, MarkComplete, Reorder, TaskOperation

logger = logging.getLogger(__name__)


class ListingStore(Protocol):
    """Protocol for persisting a listing."""

    def store(self, listing: "TaskListing") -> None:
        """Write the listing; raise TaskError(STORE_FAILED) on failure."""
        ...


@dataclass
class TaskListing:
    """Ordered collection of tasks."""

    tasks: list[Task] = field(default_factory=list)

    def __iter__(self) -> Iterator[Task]:
        return iter(self.tasks)

    def __len__(self) -> int:
        return len(self.tasks)

    def total_tasks(self) -> int:
        return len(self.tasks)

    def push(self, task: Task) -> None:
        self.tasks.append(task)

    def task_from_index(self, index: int) -> Task | None:
        if index < 0 or index >= len(self.tasks):
            return None
        return self.tasks[index]

    def _require(self, index: int) -> Task:
        task = self.task_from_index(index)
        if task is None:
            raise TaskError(TaskErrorKind.NOT_FOUND, f"no task at index {index}")
        return task

    # -------------------- operation handling --------------------

    def handle_operation(self, op: TaskOperation, now: datetime | None = None) -> None:
        """Apply ``op`` in memory.

        Raises TaskError and leaves the listing untouched when the operation is
        rejected. Persisting the result is the caller's responsibility.
        """
        now = now or local_now()
        logger.debug("Handling %r", op)

        if isinstance(op, Add):
            if len(op.description) == 0:
                raise TaskError(TaskErrorKind.MISSING_DESCRIPTION)
            self.push(Task.new(op.description, now))
        elif isinstance(op, MarkComplete):
            self._require(op.task_index).mark_complete(op.remark, now)
        elif isinstance(op, AddRemark):
            self._require(op.task_index).add_remark(op.remark, now)
        elif isinstance(op, Reorder):
            self.move_task(op.from_index, op.to_index)
        else:
            raise TypeError(f"Unknown task operation: {op!r}")

    def handle_and_store(
        self,
        op: TaskOperation,
        store: ListingStore,
        now: datetime | None = None,
    ) -> None:
        """Apply an operation and immediately persist the listing."""
        self.handle_operation(op, now)
        store.store(self)

    def move_task(self, from_index: int, to_index: int) -> None:
        """Move a task, shifting the tasks in between toward ``from_index``."""
        count = len(self.tasks)
        if not (0 <= from_index < count) or not (0 <= to_index < count):
            raise TaskError(
                TaskErrorKind.NOT_FOUND,
                f"indexes should be between 0 and {count - 1}" if count else "listing is empty",
            )
        if from_index == to_index:
            raise TaskError(TaskErrorKind.REDUNDANT_MOVE)

        task = self.tasks.pop(from_index)
        self.tasks.insert(to_index, task)

    # -------------------- queries --------------------

    def next_index(self, now: datetime | None = None) -> int | None:
        """Index of the first task not yet completed today."""
        now = now or local_now()
        for n, task in enumerate(self.tasks):
            if not task.is_completed_today(now):
                return n
        return None
