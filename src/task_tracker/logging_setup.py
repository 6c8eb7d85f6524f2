# src/task_tracker/logging_setup.py

from __future__ import annotations

import logging
import sys
from pathlib import Path

AUDIT_LOGGER = "task_tracker.audit"


class _ConsoleNoiseFilter(logging.Filter):
    """
    Keep the interactive menu readable:
    - the audit trail never goes to the console (it has its own file)
    - our own logs pass through at the configured level
    - third-party noise only at ERROR+
    """

    def filter(self, record: logging.LogRecord) -> bool:
        name = record.name

        if name == AUDIT_LOGGER or name.startswith(AUDIT_LOGGER + "."):
            return False

        if name.startswith("task_tracker."):
            return True

        return record.levelno >= logging.ERROR


def audit_handler(audit_log_path: str | Path) -> logging.Handler:
    """
    Append-only audit file: one "<message> at <timestamp>" line per action.

    The timestamp uses a ctime-like layout, e.g. "Mon Jun  3 14:02:11 2024".
    """
    path = Path(audit_log_path)
    path.parent.mkdir(parents=True, exist_ok=True)
    handler = logging.FileHandler(str(path), mode="a", encoding="utf-8")
    handler.setLevel(logging.INFO)
    handler.setFormatter(
        logging.Formatter(fmt="%(message)s at %(asctime)s", datefmt="%a %b %d %H:%M:%S %Y")
    )
    return handler


def setup_audit_log(audit_log_path: str | Path) -> logging.Handler:
    """Attach the audit file handler. Returns it so callers (tests) can remove it."""
    audit = logging.getLogger(AUDIT_LOGGER)
    audit.setLevel(logging.INFO)
    handler = audit_handler(audit_log_path)
    audit.addHandler(handler)
    return handler


def setup_logging(
    *,
    log_dir: str | Path = ".local/task_tracker",
    audit_log_path: str | Path | None = None,
    console_level: int = logging.WARNING,
    file_level: int = logging.DEBUG,
) -> None:
    """
    Configure logging with:
    - Console handler: filtered, quiet by default so it does not fight the menu
    - File handler: full logs for debugging
    - Audit handler: the human-readable action trail

    Call this ONCE, very early (before first logger.info).
    """
    log_dir = Path(log_dir)
    log_dir.mkdir(parents=True, exist_ok=True)
    log_file = log_dir / "task_tracker.log"

    root = logging.getLogger()
    root.setLevel(logging.DEBUG)

    # Remove any pre-existing handlers to avoid duplicates.
    for h in list(root.handlers):
        root.removeHandler(h)

    fmt = logging.Formatter(
        fmt="%(asctime)s.%(msecs)03d %(levelname)s %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )

    # Console (interactive)
    ch = logging.StreamHandler(sys.stderr)
    ch.setLevel(console_level)
    ch.setFormatter(fmt)
    ch.addFilter(_ConsoleNoiseFilter())
    root.addHandler(ch)

    # File (everything)
    fh = logging.FileHandler(str(log_file), encoding="utf-8")
    fh.setLevel(file_level)
    fh.setFormatter(fmt)
    root.addHandler(fh)

    audit = logging.getLogger(AUDIT_LOGGER)
    for h in list(audit.handlers):
        audit.removeHandler(h)
    if audit_log_path is not None:
        setup_audit_log(audit_log_path)

    # Route warnings.warn(...) into logging as 'py.warnings'
    logging.captureWarnings(True)
