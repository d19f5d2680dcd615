from __future__ import annotations

import logging
import sys
from pathlib import Path

LOG_FILE = "chain.log"


class _ConsoleNoiseFilter(logging.Filter):
    """
    Keep the terminal readable:
    - allow chain logs at the configured level
    - suppress third-party noise (textual, asyncio, ...) unless ERROR+
    """

    def filter(self, record: logging.LogRecord) -> bool:
        if record.name == "chain" or record.name.startswith("chain."):
            return True
        return record.levelno >= logging.ERROR


def setup_logging(
    *,
    log_dir: str | Path,
    console_level: int = logging.WARNING,
    file_level: int = logging.DEBUG,
    console: bool = True,
) -> None:
    """
    Configure logging with:
    - Console handler on stderr (filtered, off while a full-screen UI runs)
    - File handler with everything for debugging

    Call this ONCE, before the first log call.
    """
    log_dir = Path(log_dir)
    log_dir.mkdir(parents=True, exist_ok=True)

    root = logging.getLogger()
    root.setLevel(logging.DEBUG)

    for h in list(root.handlers):
        root.removeHandler(h)

    fmt = logging.Formatter(
        fmt="%(asctime)s.%(msecs)03d %(levelname)s %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )

    if console:
        ch = logging.StreamHandler(sys.stderr)
        ch.setLevel(console_level)
        ch.setFormatter(fmt)
        ch.addFilter(_ConsoleNoiseFilter())
        root.addHandler(ch)

    fh = logging.FileHandler(str(log_dir / LOG_FILE), encoding="utf-8")
    fh.setLevel(file_level)
    fh.setFormatter(fmt)
    root.addHandler(fh)

    logging.captureWarnings(True)
