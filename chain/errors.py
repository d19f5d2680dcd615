"""Error taxonomy for task and listing operations."""

from __future__ import annotations

from enum import Enum


class TaskErrorKind(Enum):
    """Tag identifying why an operation was rejected."""

    MISSING_DESCRIPTION = "MissingDescription"
    NOT_FOUND = "NotFound"
    ALREADY_COMPLETED = "AlreadyCompleted"
    REDUNDANT_MOVE = "RedundantMove"
    STORE_FAILED = "StoreFailed"


MESSAGES = {
    TaskErrorKind.MISSING_DESCRIPTION: "Task description can't be empty",
    TaskErrorKind.NOT_FOUND: "Couldn't find task",
    TaskErrorKind.ALREADY_COMPLETED: "Task was already completed",
    TaskErrorKind.REDUNDANT_MOVE: "Can't move task to its own index",
    TaskErrorKind.STORE_FAILED: "Can't store task data to disk",
}


class TaskError(Exception):
    """Raised when an operation cannot be applied to a listing.

    The listing is left unchanged whenever this is raised by
    ``TaskListing.handle_operation``.
    """

    def __init__(self, kind: TaskErrorKind, detail: str | None = None) -> None:
        self.kind = kind
        self.detail = detail
        message = MESSAGES[kind]
        if detail:
            message = f"{message}: {detail}"
        super().__init__(message)
