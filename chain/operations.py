"""Operations that can be applied to a TaskListing.

The same values are produced by the command line and by the interactive
session, so intent stays separate from execution.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Union


@dataclass(frozen=True)
class Add:
    """Append a new task."""

    description: str


@dataclass(frozen=True)
class MarkComplete:
    """Mark the task at ``task_index`` complete for today."""

    task_index: int
    remark: str | None = None


@dataclass(frozen=True)
class AddRemark:
    """Attach a standalone remark to the task at ``task_index``."""

    task_index: int
    remark: str


@dataclass(frozen=True)
class Reorder:
    """Move the task at ``from_index`` so it ends up at ``to_index``.

    Tasks in between shift by one toward the old position (list splice, not
    swap).
    """

    from_index: int
    to_index: int


TaskOperation = Union[Add, MarkComplete, AddRemark, Reorder]
