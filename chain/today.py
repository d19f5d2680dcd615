"""
Today view: one checklist row per task in priority order.

Usage:
    rows = today_rows(listing, now)
    print(render_today(rows))
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime

from chain.listing import TaskListing
from chain.models import local_now

INDENT_SIZE = 4

CHECKED = "[x]"
UNCHECKED = "[ ]"
NO_TIME = "--:--"
NEXT_MARKER = "(next)"


def column_width(longest: int, indent: int = INDENT_SIZE) -> int:
    """Smallest multiple of ``indent`` strictly wider than ``longest``."""
    return (longest // indent + 1) * indent


def description_width(listing: TaskListing) -> int:
    longest = max((len(task.description) for task in listing), default=0)
    return column_width(longest)


def index_width(listing: TaskListing) -> int:
    return column_width(len(str(listing.total_tasks())))


@dataclass(frozen=True)
class TodayRow:
    """Immutable snapshot of one task's status for today."""

    index: int
    description: str
    completed_at: datetime | None
    is_next: bool

    @property
    def done(self) -> bool:
        return self.completed_at is not None

    @property
    def time_display(self) -> str:
        if self.completed_at is None:
            return NO_TIME
        return f"{self.completed_at.hour:02}:{self.completed_at.minute:02}"


def today_rows(listing: TaskListing, now: datetime | None = None) -> list[TodayRow]:
    """Build today's rows; only the first incomplete task is marked next."""
    now = now or local_now()
    next_index = listing.next_index(now)
    return [
        TodayRow(n, task.description, task.completed_today(now), n == next_index)
        for n, task in enumerate(listing)
    ]


def render_today(listing: TaskListing, now: datetime | None = None) -> str:
    """Render the today checklist as aligned plain text."""
    rows = today_rows(listing, now)
    id_width = index_width(listing)
    desc_width = description_width(listing)

    lines = []
    for row in rows:
        time_display = row.time_display
        line = (
            f"{CHECKED if row.done else UNCHECKED:<{INDENT_SIZE}}"
            f"{row.index:<{id_width}}"
            f"{row.description:<{desc_width}}"
            f"{time_display:<{column_width(len(time_display))}}"
        )
        if row.is_next:
            line += NEXT_MARKER
        lines.append(line.rstrip())
    return "\n".join(lines)


def render_today_header(now: datetime | None = None) -> str:
    now = now or local_now()
    return f"Task status for {now.date().isoformat()}"
