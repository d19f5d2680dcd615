"""Tests for the today view."""

from datetime import timedelta, timezone

from chain.listing import TaskListing
from chain.operations import Add, MarkComplete
from chain.today import (
    column_width,
    description_width,
    index_width,
    render_today,
    render_today_header,
    today_rows,
)

from conftest import NOW, days_ago


class TestColumnWidth:
    """Tests for column width rounding."""

    def test_rounds_up_to_next_indent(self) -> None:
        assert column_width(0) == 4
        assert column_width(3) == 4
        assert column_width(4) == 8
        assert column_width(5) == 8
        assert column_width(11) == 12

    def test_description_width_counts_characters(self) -> None:
        tasks = TaskListing()
        tasks.handle_operation(Add(description="日本語の練習"), now=NOW)

        # six characters, not eighteen bytes
        assert description_width(tasks) == 8

    def test_index_width_uses_task_count(self, listing: TaskListing) -> None:
        assert index_width(listing) == 4
        assert index_width(TaskListing()) == 4


class TestTodayRows:
    """Tests for today_rows."""

    def test_one_row_per_task_in_order(self, listing: TaskListing) -> None:
        rows = today_rows(listing, NOW)

        assert [r.index for r in rows] == [0, 1, 2, 3]
        assert [r.description for r in rows] == ["A", "B", "C", "D"]

    def test_next_is_first_incomplete(self, listing: TaskListing) -> None:
        listing.handle_operation(MarkComplete(task_index=0), now=NOW)
        rows = today_rows(listing, NOW)

        assert [r.is_next for r in rows] == [False, True, False, False]

    def test_no_next_when_all_done(self, listing: TaskListing) -> None:
        for n in range(len(listing)):
            listing.handle_operation(MarkComplete(task_index=n), now=NOW)

        assert not any(r.is_next for r in today_rows(listing, NOW))

    def test_yesterday_does_not_count(self, listing: TaskListing) -> None:
        listing.handle_operation(MarkComplete(task_index=0), now=days_ago(1))
        rows = today_rows(listing, NOW)

        assert not rows[0].done
        assert rows[0].is_next

    def test_time_display(self, listing: TaskListing) -> None:
        listing.handle_operation(MarkComplete(task_index=2), now=NOW)
        rows = today_rows(listing, NOW)

        assert rows[2].time_display == "09:30"
        assert rows[0].time_display == "--:--"

    def test_time_display_is_local(self, listing: TaskListing) -> None:
        listing.handle_operation(MarkComplete(task_index=0), now=NOW)
        eastern = timezone(timedelta(hours=-5))
        rows = today_rows(listing, NOW.astimezone(eastern))

        assert rows[0].time_display == "04:30"


class TestRenderToday:
    """Tests for render_today."""

    def test_renders_aligned_columns(self, listing: TaskListing) -> None:
        listing.handle_operation(MarkComplete(task_index=1), now=NOW)

        result = render_today(listing, NOW)

        assert result.splitlines() == [
            "[ ] 0   A   --:--   (next)",
            "[x] 1   B   09:30",
            "[ ] 2   C   --:--",
            "[ ] 3   D   --:--",
        ]

    def test_description_column_fits_longest(self) -> None:
        tasks = TaskListing()
        tasks.handle_operation(Add(description="Walk"), now=NOW)
        tasks.handle_operation(Add(description="Practice piano"), now=NOW)

        lines = render_today(tasks, NOW).splitlines()

        assert lines[0] == "[ ] 0   Walk            --:--   (next)"
        assert lines[1] == "[ ] 1   Practice piano  --:--"

    def test_empty_listing(self) -> None:
        assert render_today(TaskListing(), NOW) == ""

    def test_header(self) -> None:
        assert render_today_header(NOW) == "Task status for 2026-03-14"
