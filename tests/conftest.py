"""Shared fixtures: a fixed clock and small listings."""

from datetime import datetime, timedelta, timezone

import pytest

from chain.listing import TaskListing
from chain.operations import Add

# Saturday morning, UTC. Every time-dependent test runs against this clock.
NOW = datetime(2026, 3, 14, 9, 30, tzinfo=timezone.utc)


def days_ago(n: int, hour: int = 8) -> datetime:
    """A timestamp ``n`` days before NOW at the given hour (UTC)."""
    return (NOW - timedelta(days=n)).replace(hour=hour, minute=0)


@pytest.fixture
def now() -> datetime:
    return NOW


@pytest.fixture
def listing() -> TaskListing:
    """Listing with four tasks A, B, C, D created a week ago."""
    tasks = TaskListing()
    for name in "ABCD":
        tasks.handle_operation(Add(description=name), now=days_ago(7))
    return tasks


def descriptions(listing: TaskListing) -> list[str]:
    return [task.description for task in listing]
