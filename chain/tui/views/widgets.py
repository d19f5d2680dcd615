"""Reusable widgets for the interactive listing."""

from __future__ import annotations

from datetime import date

from rich.text import Text
from textual.app import ComposeResult
from textual.containers import Vertical
from textual.screen import ModalScreen
from textual.widgets import Input, Label, Static

from chain.history import (
    CALENDAR_CELL_WIDTH,
    DayStatus,
    HistoryRow,
    calendar_cell,
    day_line,
    month_line,
    truncate,
)

CALENDAR_PAD = 2
MIN_DAYS_HISTORY = 5

STATUS_STYLES = {
    DayStatus.DONE: "green",
    DayStatus.MISSED: "red",
    DayStatus.PENDING: "yellow",
}


def description_column_width(total_width: int, longest_description: int) -> int:
    """Width left for descriptions once the minimum calendar is reserved."""
    reserved = MIN_DAYS_HISTORY * CALENDAR_CELL_WIDTH + CALENDAR_PAD
    if total_width < longest_description + reserved:
        return max(1, total_width - reserved)
    return longest_description


def calendar_width(total_width: int, desc_width: int) -> int:
    return total_width - (desc_width + CALENDAR_PAD)


def task_line(row: HistoryRow, desc_width: int, selected: bool) -> Text:
    """One task's description followed by its calendar cells."""
    base_style = "underline" if selected else ""
    line = Text(style=base_style)
    line.append(truncate(row.description, desc_width).ljust(desc_width + CALENDAR_PAD))
    for cell in row.cells:
        line.append(calendar_cell(cell), style=STATUS_STYLES.get(cell.status, ""))
    return line


class CalendarHeader(Static):
    """Month names and day numbers above the calendar."""

    DEFAULT_CSS = """
    CalendarHeader {
        height: 2;
    }
    """

    def show(self, days: tuple[date, ...], desc_width: int) -> None:
        pad = " " * (desc_width + CALENDAR_PAD)
        header = Text()
        header.append(pad + month_line(days) + "\n", style="dim")
        header.append("Task".ljust(desc_width), style="bold underline")
        header.append(" " * CALENDAR_PAD + day_line(days), style="bold")
        self.update(header)


class TaskCalendar(Static):
    """Visible slice of the task listing."""

    DEFAULT_CSS = """
    TaskCalendar {
        height: 1fr;
    }

    TaskCalendar.empty {
        color: $warning;
    }
    """

    def show(
        self,
        rows: tuple[HistoryRow, ...],
        desc_width: int,
        selected_index: int | None,
        scroll_offset: int,
        visible_rows: int,
    ) -> None:
        if not rows:
            self.add_class("empty")
            self.update(Text("No tasks yet. Press [n] to add one."))
            return
        self.remove_class("empty")

        body = Text()
        for row in rows[scroll_offset : scroll_offset + visible_rows]:
            body.append_text(task_line(row, desc_width, row.index == selected_index))
            body.append("\n")
        self.update(body)


class HintBar(Static):
    """Keyboard hints for the highlighted task."""

    DEFAULT_CSS = """
    HintBar {
        height: 1;
        color: $text-muted;
    }
    """

    def show(self, hints: list[str]) -> None:
        self.update(Text(" - ".join(hints)))


class PromptScreen(ModalScreen[str | None]):
    """Single-line text prompt; dismisses with the entered text or None."""

    DEFAULT_CSS = """
    PromptScreen {
        align: center middle;
    }

    PromptScreen #prompt-box {
        width: 60;
        height: auto;
        border: solid $primary;
        padding: 1;
        background: $surface;
    }

    PromptScreen .title {
        text-style: bold;
        margin-bottom: 1;
    }
    """

    BINDINGS = [("escape", "cancel", "Cancel")]

    def __init__(self, prompt: str, **kwargs) -> None:
        super().__init__(**kwargs)
        self._prompt = prompt

    def compose(self) -> ComposeResult:
        with Vertical(id="prompt-box"):
            yield Label(self._prompt, classes="title")
            yield Input(id="prompt-input")

    def on_mount(self) -> None:
        self.query_one("#prompt-input", Input).focus()

    def on_input_submitted(self, event: Input.Submitted) -> None:
        self.dismiss(event.value)

    def action_cancel(self) -> None:
        self.dismiss(None)

