"""Listing screen: task calendar with keyboard navigation."""

from __future__ import annotations

import logging

from textual.app import ComposeResult
from textual.binding import Binding
from textual.screen import Screen
from textual.widgets import Footer, Header

from chain.errors import TaskError
from chain.history import build_history, calendar_window
from chain.listing import ListingStore, TaskListing
from chain.models import local_now
from chain.navigation import (
    Complete,
    MoveDown,
    MoveUp,
    NavInput,
    NewTask,
    Remark,
    hints,
    initial_state,
    scroll_into_view,
    sync,
    transition,
)
from chain.operations import TaskOperation
from chain.tui.views.widgets import (
    CalendarHeader,
    HintBar,
    PromptScreen,
    TaskCalendar,
    calendar_width,
    description_column_width,
)

logger = logging.getLogger(__name__)

# Header, calendar header (2 lines), hint bar and footer
CHROME_ROWS = 5


class ListingScreen(Screen):
    """Main interactive screen."""

    BINDINGS = [
        Binding("up", "move_up", "Up", show=False),
        Binding("down", "move_down", "Down", show=False),
        Binding("space", "complete", "Complete"),
        Binding("enter", "complete_with_remark", "Complete w/ remark"),
        Binding("r", "remark", "Remark"),
        Binding("n", "new_task", "New task"),
        Binding("q", "quit", "Quit"),
    ]

    def __init__(self, listing: TaskListing, store: ListingStore, **kwargs) -> None:
        super().__init__(**kwargs)
        self._listing = listing
        self._store = store
        self._state = initial_state(len(listing))

    def compose(self) -> ComposeResult:
        yield Header()
        yield CalendarHeader(id="calendar-header")
        yield TaskCalendar(id="task-calendar")
        yield HintBar(id="hints")
        yield Footer()

    def on_mount(self) -> None:
        self.refresh_listing()

    def on_resize(self) -> None:
        self._state = scroll_into_view(self._state, self.visible_rows)
        self.refresh_listing()

    @property
    def visible_rows(self) -> int:
        return max(1, self.size.height - CHROME_ROWS)

    # -------------------- input handling --------------------

    def handle_input(self, event: NavInput) -> None:
        self._state, op = transition(
            self._state, event, len(self._listing), self.visible_rows
        )
        if op is not None:
            self.apply(op)
        self.refresh_listing()

    def apply(self, op: TaskOperation) -> None:
        """Apply and persist an operation; rejections are reported, not fatal."""
        try:
            self._listing.handle_and_store(op, self._store)
        except TaskError as e:
            logger.info("Operation %r failed: %s", op, e)
            self.notify(str(e), severity="warning")
        self._state = scroll_into_view(
            sync(self._state, len(self._listing)), self.visible_rows
        )

    def action_move_up(self) -> None:
        self.handle_input(MoveUp())

    def action_move_down(self) -> None:
        self.handle_input(MoveDown())

    def action_complete(self) -> None:
        self.handle_input(Complete())

    def action_complete_with_remark(self) -> None:
        if self._state.selected_index is None:
            return

        def done(remark: str | None) -> None:
            if remark is not None:
                self.handle_input(Complete(remark=remark))

        self.app.push_screen(PromptScreen("Completion remark"), done)

    def action_remark(self) -> None:
        if self._state.selected_index is None:
            return

        def done(text: str | None) -> None:
            if text is not None:
                self.handle_input(Remark(text=text))

        self.app.push_screen(PromptScreen("Remark"), done)

    def action_new_task(self) -> None:
        def done(description: str | None) -> None:
            if description is not None:
                self.handle_input(NewTask(description=description))

        self.app.push_screen(PromptScreen("New task description"), done)

    def action_quit(self) -> None:
        self.app.exit()

    # -------------------- rendering --------------------

    def refresh_listing(self) -> None:
        """Redraw every widget from the listing and navigation state."""
        now = local_now()
        total_width = self.size.width
        longest = max((len(t.description) for t in self._listing), default=len("Task"))
        desc_width = description_column_width(total_width, max(longest, len("Task")))
        days = calendar_window(calendar_width(total_width, desc_width), now.date())
        grid = build_history(self._listing, days[0], days[-1], now)

        state = self._state
        self.query_one(CalendarHeader).show(grid.days, desc_width)
        self.query_one(TaskCalendar).show(
            grid.rows,
            desc_width,
            state.selected_index,
            state.scroll_offset,
            self.visible_rows,
        )

        selected = (
            self._listing.task_from_index(state.selected_index)
            if state.selected_index is not None
            else None
        )
        selected_completed = selected is not None and selected.is_completed_today(now)
        self.query_one(HintBar).show(
            hints(selected_completed, has_selection=selected is not None)
        )
