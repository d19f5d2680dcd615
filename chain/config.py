"""Settings loaded from environment variables.

One Settings object is built at startup and passed to whatever needs it;
nothing below reads the environment on its own.
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from pathlib import Path

ENV_PREFIX = "CHAIN"

DEFAULT_TASK_FILE = "taskdata.json"
DEFAULT_HISTORY_DAYS = 7


def _k(suffix: str) -> str:
    """Build env var name with the project prefix."""
    return f"{ENV_PREFIX}_{suffix}"


def _env(name: str, default: str = "") -> str:
    v = os.getenv(name)
    return default if v is None else v


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return int(raw)
    except ValueError:
        return default


def _env_path(name: str, default: Path) -> Path:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    return Path(raw).expanduser()


def _env_log_level(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    level = logging.getLevelName(raw.strip().upper())
    return level if isinstance(level, int) else default


def default_data_dir() -> Path:
    xdg = os.getenv("XDG_DATA_HOME")
    base = Path(xdg).expanduser() if xdg else Path.home() / ".local" / "share"
    return base / "chain"


@dataclass(frozen=True)
class Settings:
    data_dir: Path
    task_file: str = DEFAULT_TASK_FILE
    log_level: int = logging.WARNING
    history_days: int = DEFAULT_HISTORY_DAYS

    @property
    def task_path(self) -> Path:
        return self.data_dir / self.task_file

    @property
    def log_dir(self) -> Path:
        return self.data_dir

    @classmethod
    def from_env(cls) -> Settings:
        return cls(
            data_dir=_env_path(_k("DATA_DIR"), default_data_dir()),
            task_file=_env(_k("TASK_FILE"), DEFAULT_TASK_FILE) or DEFAULT_TASK_FILE,
            log_level=_env_log_level(_k("LOG_LEVEL"), logging.WARNING),
            history_days=max(1, _env_int(_k("HISTORY_DAYS"), DEFAULT_HISTORY_DAYS)),
        )
