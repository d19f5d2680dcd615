"""
History view: a calendar grid of per-day status symbols for every task.

Each row is walked left to right carrying two pieces of state: whether any
day so far in the window was completed, and whether the last day was. That
state decides between "missed" and "not started yet" for past days, and
draws streak connectors between consecutive completed days.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime, timedelta
from enum import Enum

from chain.listing import TaskListing
from chain.models import Task, local_now
from chain.today import INDENT_SIZE, description_width, index_width


class DayStatus(Enum):
    DONE = "o"
    PENDING = "?"
    MISSED = "x"
    BLANK = " "
    FUTURE = ""


STREAK_CONNECTOR = "-o-"
NO_CONNECTOR = "   "
CELL_SEPARATOR = "|"


@dataclass(frozen=True)
class DayCell:
    """Status of one task on one day.

    ``connector`` says whether a streak line joins this day to the next
    column; it is always False for the last column.
    """

    day: date
    status: DayStatus
    connector: bool = False


@dataclass(frozen=True)
class HistoryRow:
    index: int
    description: str
    cells: tuple[DayCell, ...]


@dataclass(frozen=True)
class HistoryGrid:
    days: tuple[date, ...]
    rows: tuple[HistoryRow, ...]
    today: date


def date_range(start: date, end: date) -> list[date]:
    """Every calendar day from ``start`` to ``end`` inclusive."""
    days = []
    day = start
    while day <= end:
        days.append(day)
        day += timedelta(days=1)
    return days


def task_cells(task: Task, days: list[date], now: datetime) -> tuple[DayCell, ...]:
    """Derive the status symbol and connector for each day of one task."""
    today = now.date()
    tz = now.tzinfo
    any_done_so_far = False
    was_last_day_complete = False
    cells = []

    for n, day in enumerate(days):
        if day > today:
            cells.append(DayCell(day, DayStatus.FUTURE))
            continue

        if task.completed_on(day, tz):
            status = DayStatus.DONE
            was_last_day_complete = True
            any_done_so_far = True
        elif day == today:
            status = DayStatus.PENDING
        elif any_done_so_far:
            status = DayStatus.MISSED
            was_last_day_complete = False
        else:
            status = DayStatus.BLANK

        is_last = n == len(days) - 1
        connector = not is_last and was_last_day_complete and day != today
        cells.append(DayCell(day, status, connector))

    return tuple(cells)


def build_history(
    listing: TaskListing,
    start: date,
    end: date,
    now: datetime | None = None,
) -> HistoryGrid:
    """Build the grid for ``[start, end]`` (local calendar days, inclusive)."""
    now = now or local_now()
    days = date_range(start, end)
    rows = tuple(
        HistoryRow(n, task.description, task_cells(task, days, now))
        for n, task in enumerate(listing)
    )
    return HistoryGrid(days=tuple(days), rows=rows, today=now.date())


# -------------------- plain text rendering --------------------


def format_cell(cell: DayCell, is_last: bool) -> str:
    if cell.status is DayStatus.FUTURE:
        return CELL_SEPARATOR + " " * INDENT_SIZE
    text = CELL_SEPARATOR + cell.status.value
    if not is_last:
        text += STREAK_CONNECTOR if cell.connector else NO_CONNECTOR
    return text


def render_history(
    listing: TaskListing,
    start: date,
    end: date,
    now: datetime | None = None,
) -> str:
    """Render the history grid as plain text, one line per task plus a header."""
    grid = build_history(listing, start, end, now)
    id_width = index_width(listing)
    desc_width = description_width(listing)

    header = " " * (id_width + desc_width) + "".join(
        f"{CELL_SEPARATOR}{day.day:02}".ljust(INDENT_SIZE + 1) for day in grid.days
    )
    lines = [header.rstrip()]

    for row in grid.rows:
        last = len(row.cells) - 1
        cells = "".join(format_cell(cell, n == last) for n, cell in enumerate(row.cells))
        lines.append(f"{row.index:<{id_width}}{row.description:<{desc_width}}{cells}".rstrip())

    return "\n".join(lines)


# -------------------- interactive calendar --------------------

CALENDAR_CELL_WIDTH = 4
CALENDAR_STREAK = "---"


def calendar_cell(cell: DayCell) -> str:
    """Four-character cell used by the interactive calendar."""
    if cell.status is DayStatus.FUTURE:
        return " " * CALENDAR_CELL_WIDTH
    fill = CALENDAR_STREAK if cell.connector else " " * (CALENDAR_CELL_WIDTH - 1)
    return cell.status.value + fill


def month_line(days: list[date] | tuple[date, ...]) -> str:
    """Month names above the first column and every first-of-month, dashes elsewhere."""
    parts = []
    for n, day in enumerate(days):
        if n == 0 or day.day == 1:
            parts.append(day.strftime("%b").ljust(CALENDAR_CELL_WIDTH))
        else:
            parts.append("-" * CALENDAR_CELL_WIDTH)
    return "".join(parts)


def day_line(days: list[date] | tuple[date, ...]) -> str:
    return "".join(f"{day.day:02}".ljust(CALENDAR_CELL_WIDTH) for day in days)


def calendar_window(available_width: int, today: date, min_days: int = 5) -> list[date]:
    """Days (ending today) that fit in ``available_width`` columns."""
    n_days = max(min_days, available_width // CALENDAR_CELL_WIDTH)
    return date_range(today - timedelta(days=n_days - 1), today)


def truncate(text: str, width: int) -> str:
    if len(text) <= width:
        return text
    if width <= 3:
        return text[:width]
    return text[: width - 3] + "..."
