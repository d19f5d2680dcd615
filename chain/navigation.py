"""
Interactive navigation state machine.

Selection and scrolling live in an immutable ListingState. ``transition``
maps (state, input) to (new state, optional operation); drawing is left to
the shell, which derives everything it shows from the state.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Union

from chain.operations import Add, AddRemark, MarkComplete, TaskOperation


@dataclass(frozen=True)
class ListingState:
    """Listing mode.

    Fields:
        selected_index: Highlighted task, None when the listing is empty.
        previous_index: Row whose highlight must be cleared on next repaint.
        scroll_offset: Index of the first visible task.
    """

    selected_index: int | None = None
    previous_index: int | None = None
    scroll_offset: int = 0


@dataclass(frozen=True)
class MoveUp:
    pass


@dataclass(frozen=True)
class MoveDown:
    pass


@dataclass(frozen=True)
class Complete:
    remark: str | None = None


@dataclass(frozen=True)
class Remark:
    text: str


@dataclass(frozen=True)
class NewTask:
    description: str


NavInput = Union[MoveUp, MoveDown, Complete, Remark, NewTask]


def initial_state(task_count: int) -> ListingState:
    return ListingState(selected_index=0 if task_count > 0 else None)


def sync(state: ListingState, task_count: int) -> ListingState:
    """Reconcile the selection with the current number of tasks."""
    if task_count == 0:
        return ListingState(previous_index=state.selected_index)
    if state.selected_index is None:
        return replace(state, selected_index=0)
    if state.selected_index >= task_count:
        return replace(
            state,
            selected_index=task_count - 1,
            previous_index=state.selected_index,
        )
    return state


def scroll_into_view(state: ListingState, visible_rows: int) -> ListingState:
    """Adjust scroll_offset by exactly enough to keep the selection visible."""
    if state.selected_index is None:
        return replace(state, scroll_offset=0)
    visible_rows = max(1, visible_rows)
    offset = state.scroll_offset
    if state.selected_index < offset:
        offset = state.selected_index
    elif state.selected_index >= offset + visible_rows:
        offset = state.selected_index - visible_rows + 1
    return replace(state, scroll_offset=offset)


def _move(state: ListingState, delta: int, task_count: int) -> ListingState:
    if state.selected_index is None or task_count == 0:
        return state
    target = min(max(state.selected_index + delta, 0), task_count - 1)
    if target == state.selected_index:
        return state
    return replace(state, selected_index=target, previous_index=state.selected_index)


def transition(
    state: ListingState,
    event: NavInput,
    task_count: int,
    visible_rows: int,
) -> tuple[ListingState, TaskOperation | None]:
    """Apply one input; returns the next state and any operation it produced."""
    op: TaskOperation | None = None

    if isinstance(event, MoveUp):
        state = _move(state, -1, task_count)
    elif isinstance(event, MoveDown):
        state = _move(state, 1, task_count)
    elif isinstance(event, Complete):
        if state.selected_index is not None:
            op = MarkComplete(task_index=state.selected_index, remark=event.remark)
    elif isinstance(event, Remark):
        if state.selected_index is not None:
            op = AddRemark(task_index=state.selected_index, remark=event.text)
    elif isinstance(event, NewTask):
        op = Add(description=event.description)
    else:
        raise TypeError(f"Unknown navigation input: {event!r}")

    return scroll_into_view(state, visible_rows), op


def hints(selected_completed: bool, has_selection: bool = True) -> list[str]:
    """Keyboard hints for the currently highlighted task."""
    parts = ["[n] new task", "[r] add remark"]
    if has_selection and not selected_completed:
        parts.append("[space] complete")
        parts.append("[enter] complete with remark")
    return parts
