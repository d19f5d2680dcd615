"""
JSON persistence for TaskListing.

The file is validated against schemas/task-listing.schema.json on load. A
missing or empty file is a first run and loads as an empty listing; anything
else that cannot be read is a LoadError.
"""

from __future__ import annotations

import json
import logging
import os
from datetime import datetime, time, timezone
from pathlib import Path

from jsonschema import SchemaError, ValidationError, validate

from chain.errors import TaskError, TaskErrorKind
from chain.listing import TaskListing
from chain.models import Completion, Remark, Task, TaskDetails

logger = logging.getLogger(__name__)

FORMAT_VERSION = 1
SCHEMA_PATH = Path(__file__).resolve().parent / "schemas" / "task-listing.schema.json"


class LoadError(Exception):
    """Persisted task data exists but could not be read or understood."""


def _parse_datetime(s: str) -> datetime:
    """Parse ISO datetime string; naive values are taken as UTC."""
    dt = datetime.fromisoformat(s.replace("Z", "+00:00"))
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    return dt.astimezone(timezone.utc)


def _format_datetime(dt: datetime) -> str:
    return dt.astimezone(timezone.utc).isoformat()


# -------------------- dict conversion --------------------


def _remark_to_dict(remark: Remark) -> dict:
    return {"datetime": _format_datetime(remark.datetime), "remark": remark.text}


def _remark_from_dict(data: dict) -> Remark:
    return Remark(datetime=_parse_datetime(data["datetime"]), text=data["remark"])


def _details_to_dict(details: TaskDetails) -> dict:
    return {
        "revised": _format_datetime(details.revised),
        "revision_id": details.revision_id,
        "description": details.description,
        "sync_time": details.sync_time.isoformat() if details.sync_time else None,
    }


def _details_from_dict(data: dict) -> TaskDetails:
    sync_time = data.get("sync_time")
    return TaskDetails(
        revised=_parse_datetime(data["revised"]),
        revision_id=data["revision_id"],
        description=data["description"],
        sync_time=time.fromisoformat(sync_time) if sync_time else None,
    )


def _completion_to_dict(completion: Completion) -> dict:
    return {
        "datetime": _format_datetime(completion.datetime),
        "remark": _remark_to_dict(completion.remark) if completion.remark else None,
    }


def _completion_from_dict(data: dict) -> Completion:
    remark = data.get("remark")
    return Completion(
        datetime=_parse_datetime(data["datetime"]),
        remark=_remark_from_dict(remark) if remark else None,
    )


def task_to_dict(task: Task) -> dict:
    return {
        "detail_history": [_details_to_dict(d) for d in task.detail_history],
        "completions": [_completion_to_dict(c) for c in task.completions],
        "remarks": [_remark_to_dict(r) for r in task.remarks],
    }


def task_from_dict(data: dict) -> Task:
    return Task(
        detail_history=[_details_from_dict(d) for d in data["detail_history"]],
        completions=[_completion_from_dict(c) for c in data["completions"]],
        remarks=[_remark_from_dict(r) for r in data.get("remarks", [])],
    )


def listing_to_dict(listing: TaskListing) -> dict:
    return {
        "version": FORMAT_VERSION,
        "tasks": [task_to_dict(task) for task in listing],
    }


def validate_listing_data(data: dict) -> tuple[bool, str]:
    """Validate raw listing data against the schema. Returns (valid, error_message)."""
    try:
        schema = json.loads(SCHEMA_PATH.read_text())
        validate(instance=data, schema=schema)
        return True, ""
    except SchemaError as e:
        return False, f"Invalid schema: {e.message}"
    except ValidationError as e:
        path = " -> ".join(str(p) for p in e.absolute_path) if e.absolute_path else "root"
        return False, f"Validation error at '{path}': {e.message}"


def listing_from_dict(data: dict) -> TaskListing:
    valid, msg = validate_listing_data(data)
    if not valid:
        raise LoadError(msg)
    try:
        return TaskListing(tasks=[task_from_dict(t) for t in data["tasks"]])
    except (ValueError, TypeError, OverflowError) as e:
        raise LoadError(f"Malformed task data: {e}") from e


# -------------------- gateway --------------------


class JSONTaskStore:
    """Loads and stores a TaskListing as a JSON file."""

    def __init__(self, path: Path):
        self._path = Path(path)

    @property
    def path(self) -> Path:
        return self._path

    def load(self) -> TaskListing:
        """Load the listing, or an empty one if nothing was stored yet."""
        if not self._path.exists():
            logger.info("No task data at %s, starting empty", self._path)
            return TaskListing()

        try:
            text = self._path.read_text(encoding="utf-8")
        except OSError as e:
            raise LoadError(f"Couldn't read {self._path}: {e}") from e

        if not text.strip():
            return TaskListing()

        try:
            data = json.loads(text)
        except json.JSONDecodeError as e:
            raise LoadError(f"Couldn't parse {self._path}: {e}") from e

        listing = listing_from_dict(data)
        logger.debug("Loaded %d task(s) from %s", len(listing), self._path)
        return listing

    def store(self, listing: TaskListing) -> None:
        """Write the listing; raises TaskError(STORE_FAILED) on I/O failure."""
        # The live file is only ever replaced whole
        tmp_path = self._path.with_name(self._path.name + ".tmp")
        try:
            if not self._path.parent.exists():
                logger.info("%s doesn't exist, creating", self._path.parent)
                self._path.parent.mkdir(parents=True, exist_ok=True)
            tmp_path.write_text(json.dumps(listing_to_dict(listing), indent=2), encoding="utf-8")
            os.replace(tmp_path, self._path)
        except OSError as e:
            if tmp_path.exists():
                tmp_path.unlink()
            logger.error("Failed to store task data to %s: %s", self._path, e)
            raise TaskError(TaskErrorKind.STORE_FAILED, str(e)) from e
        logger.debug("Stored %d task(s) to %s", len(listing), self._path)
