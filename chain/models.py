"""
Task data model.

A Task keeps its description revisions (newest first), the days it was
completed on, and freeform remarks. All stored timestamps are UTC; calendar
days are always computed in the viewer's zone, which callers pass in as the
tzinfo of ``now`` (or ``tz``).
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime, time, timezone, tzinfo

from chain.errors import TaskError, TaskErrorKind


def local_now() -> datetime:
    """Current time in the system's local zone (timezone aware)."""
    return datetime.now().astimezone()


def to_utc(dt: datetime) -> datetime:
    return dt.astimezone(timezone.utc)


def local_date(dt: datetime, tz: tzinfo | None = None) -> date:
    """Calendar date of ``dt`` in ``tz`` (system local zone when None)."""
    return dt.astimezone(tz).date()


@dataclass
class Remark:
    """A freeform note, either standalone on a Task or attached to a Completion."""

    datetime: datetime
    text: str


@dataclass
class Completion:
    """A Task being done on a particular day."""

    datetime: datetime
    remark: Remark | None = None


@dataclass
class TaskDetails:
    """One revision of a task's description.

    Fields:
        revised: When these details started describing the task.
        revision_id: Monotonically increasing per task, starting at 0.
        description: Non-empty description text.
        sync_time: Time of day the task should be done by (None => any time).
    """

    revised: datetime
    revision_id: int
    description: str
    sync_time: time | None = None


@dataclass
class Task:
    """A recurring task with revision history, completions and remarks."""

    detail_history: list[TaskDetails] = field(default_factory=list)
    completions: list[Completion] = field(default_factory=list)
    remarks: list[Remark] = field(default_factory=list)

    @classmethod
    def new(cls, description: str, now: datetime | None = None) -> Task:
        now = now or local_now()
        details = TaskDetails(revised=to_utc(now), revision_id=0, description=description)
        return cls(detail_history=[details])

    @property
    def details(self) -> TaskDetails:
        """Current details (the most recently pushed revision)."""
        return self.detail_history[0]

    @property
    def description(self) -> str:
        return self.details.description

    @property
    def created(self) -> datetime:
        """Timestamp of the oldest revision."""
        return self.detail_history[-1].revised

    def revise(self, description: str, now: datetime | None = None) -> TaskDetails:
        """Push a new current revision of the task details."""
        if not description:
            raise TaskError(TaskErrorKind.MISSING_DESCRIPTION)
        now = now or local_now()
        current = self.details
        details = TaskDetails(
            revised=to_utc(now),
            revision_id=current.revision_id + 1,
            description=description,
            sync_time=current.sync_time,
        )
        self.detail_history.insert(0, details)
        return details

    def existed_on(self, day: date, tz: tzinfo | None = None) -> bool:
        """True unless ``day`` falls before the day the task was created."""
        return day >= local_date(self.created, tz)

    def completed_on(self, day: date, tz: tzinfo | None = None) -> bool:
        return any(local_date(c.datetime, tz) == day for c in self.completions)

    def completed_today(self, now: datetime | None = None) -> datetime | None:
        """Local completion time for today, or None if not completed today."""
        now = now or local_now()
        today = now.date()
        for completion in self.completions:
            completed_at = completion.datetime.astimezone(now.tzinfo)
            if completed_at.date() == today:
                return completed_at
        return None

    def is_completed_today(self, now: datetime | None = None) -> bool:
        return self.completed_today(now) is not None

    def mark_complete(self, remark: str | None = None, now: datetime | None = None) -> Completion:
        """Record a completion for today.

        Raises TaskError(ALREADY_COMPLETED) if a completion already exists for
        the local date of ``now``.
        """
        now = now or local_now()
        if self.is_completed_today(now):
            raise TaskError(TaskErrorKind.ALREADY_COMPLETED)

        stamp = to_utc(now)
        completion = Completion(
            datetime=stamp,
            remark=Remark(datetime=stamp, text=remark) if remark is not None else None,
        )
        self.completions.append(completion)
        return completion

    def add_remark(self, text: str, now: datetime | None = None) -> Remark:
        # Remarks are not validated; an empty remark is stored as-is.
        now = now or local_now()
        remark = Remark(datetime=to_utc(now), text=text)
        self.remarks.append(remark)
        return remark
