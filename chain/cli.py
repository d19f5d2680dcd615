#!/usr/bin/env python3
"""
chain - daily task tracking

Usage:
    chain new <description>              Create a new task
    chain today                          View task status for today
    chain move <from> <to>               Move a task from some position to another
    chain done <index> [--remark TEXT]   Mark a task as complete for today
    chain remark <index> <text>          Add a remark to a task
    chain history [start] [end]          Show completion history between two dates
    chain interactive                    Live view with keyboard navigation
"""

from __future__ import annotations

import argparse
import logging
import sys
from dataclasses import replace
from datetime import date, timedelta
from pathlib import Path

from chain.config import Settings
from chain.errors import TaskError
from chain.history import render_history
from chain.listing import TaskListing
from chain.logging_setup import setup_logging
from chain.models import local_now
from chain.operations import Add, AddRemark, MarkComplete, Reorder, TaskOperation
from chain.storage import JSONTaskStore, LoadError
from chain.today import render_today, render_today_header

logger = logging.getLogger(__name__)


def print_today(listing: TaskListing) -> None:
    now = local_now()
    print()
    print(render_today_header(now))
    print()
    print(render_today(listing, now))


def apply(listing: TaskListing, op: TaskOperation) -> bool:
    """Apply an operation, printing the error if it was rejected."""
    try:
        listing.handle_operation(op)
    except TaskError as e:
        logger.debug("Rejected %r: %s", op, e)
        print(f"error: {e}")
        return False
    return True


def cmd_new(args: argparse.Namespace, listing: TaskListing, settings: Settings) -> int:
    if not apply(listing, Add(description=args.description)):
        return 1
    print(f"new task: {args.description}")
    return 0


def cmd_today(args: argparse.Namespace, listing: TaskListing, settings: Settings) -> int:
    print_today(listing)
    return 0


def cmd_move(args: argparse.Namespace, listing: TaskListing, settings: Settings) -> int:
    task = listing.task_from_index(args.from_index)
    if not apply(listing, Reorder(from_index=args.from_index, to_index=args.to_index)):
        return 1
    print()
    print(f'Bumping "{task.description}" to position {args.to_index}')
    print_today(listing)
    return 0


def cmd_done(args: argparse.Namespace, listing: TaskListing, settings: Settings) -> int:
    if not apply(listing, MarkComplete(task_index=args.index, remark=args.remark)):
        return 1
    print()
    print(f'Completed "{listing.task_from_index(args.index).description}"')
    print_today(listing)
    return 0


def cmd_remark(args: argparse.Namespace, listing: TaskListing, settings: Settings) -> int:
    if not apply(listing, AddRemark(task_index=args.index, remark=args.text)):
        return 1
    print(f'Remark added to "{listing.task_from_index(args.index).description}"')
    return 0


def history_range(args: argparse.Namespace, settings: Settings) -> tuple[date, date]:
    end = args.end or local_now().date()
    start = args.start or end - timedelta(days=settings.history_days - 1)
    return start, end


def cmd_history(args: argparse.Namespace, listing: TaskListing, settings: Settings) -> int:
    start, end = history_range(args, settings)
    print(render_history(listing, start, end))
    return 0


def _iso_date(value: str) -> date:
    try:
        return date.fromisoformat(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"not a YYYY-MM-DD date: {value!r}")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="chain", description="daily task tracking")
    parser.add_argument("--data-dir", type=Path, help="Directory holding task data")
    subparsers = parser.add_subparsers(dest="command", required=True)

    new_parser = subparsers.add_parser("new", help="create a new task")
    new_parser.add_argument("description", help="Description of the task")
    new_parser.set_defaults(func=cmd_new, mutates=True)

    today_parser = subparsers.add_parser("today", help="view task status for today")
    today_parser.set_defaults(func=cmd_today, mutates=False)

    move_parser = subparsers.add_parser("move", help="move a task from some position to another")
    move_parser.add_argument("from_index", type=int, metavar="from")
    move_parser.add_argument("to_index", type=int, metavar="to")
    move_parser.set_defaults(func=cmd_move, mutates=True)

    done_parser = subparsers.add_parser("done", help="mark a task as complete for today")
    done_parser.add_argument("index", type=int)
    done_parser.add_argument("--remark", help="Remark on this completion")
    done_parser.set_defaults(func=cmd_done, mutates=True)

    remark_parser = subparsers.add_parser("remark", help="add a remark to a task")
    remark_parser.add_argument("index", type=int)
    remark_parser.add_argument("text")
    remark_parser.set_defaults(func=cmd_remark, mutates=True)

    history_parser = subparsers.add_parser("history", help="show completion history")
    history_parser.add_argument("start", nargs="?", type=_iso_date, help="First day (YYYY-MM-DD)")
    history_parser.add_argument("end", nargs="?", type=_iso_date, help="Last day (default: today)")
    history_parser.set_defaults(func=cmd_history, mutates=False)

    interactive_parser = subparsers.add_parser("interactive", help="live view with keyboard navigation")
    interactive_parser.set_defaults(func=None, mutates=False)

    return parser


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    settings = Settings.from_env()
    if args.data_dir:
        settings = replace(settings, data_dir=args.data_dir)

    if args.command == "history":
        start, end = history_range(args, settings)
        if start > end:
            parser.error(f"start date {start} is after end date {end}")

    # The full-screen UI owns the terminal, so it only logs to file
    setup_logging(
        log_dir=settings.log_dir,
        console_level=settings.log_level,
        console=args.command != "interactive",
    )

    store = JSONTaskStore(settings.task_path)
    try:
        listing = store.load()
    except LoadError as e:
        logger.debug("Load failed: %s", e)
        print(f"error: {e}")
        return 1

    if args.command == "interactive":
        from chain.tui.app import run

        run(listing, store)
        return 0

    code = args.func(args, listing, settings)
    if code != 0 or not args.mutates:
        return code

    try:
        store.store(listing)
    except TaskError as e:
        print(f"error: {e}")
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
