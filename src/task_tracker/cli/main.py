# src/task_tracker/cli/main.py

"""
CLI entrypoint.

Initializes logging, builds AppState, then runs:
- the reminder loop in a background thread (optional),
- the interactive menu in the main thread.

Any error escaping startup or the menu is logged, printed, and turned into exit status 1.
"""

from __future__ import annotations

import logging
import sys

from ..cli.bootstrap import create_initial_state
from ..config import get_settings
from ..core.errors import StoreError
from ..core.state import AppState
from ..logging_setup import setup_logging
from ..tasks.task_reminders import ConsoleNotifier, ReminderRunner, start_reminders_in_background
from .shell import run_menu_loop

logger = logging.getLogger(__name__)


def main() -> int:
    state: AppState | None = None
    runner: ReminderRunner | None = None

    try:
        settings = get_settings()

        level_name = str(getattr(settings, "log_level", "WARNING")).upper()
        console_level = getattr(logging, level_name, logging.WARNING)

        setup_logging(
            log_dir=settings.data_dir,
            audit_log_path=settings.audit_log_path,
            console_level=console_level,
        )

        logger.info("Starting %s...", settings.app_name)

        try:
            state = create_initial_state(settings=settings)
        except StoreError as e:
            logger.critical("Cannot open task database: %s", e)
            print(f"Database error: {e}", file=sys.stderr)
            return 1

        if settings.reminders_enabled:
            runner = start_reminders_in_background(
                state.service,
                ConsoleNotifier(),
                interval_seconds=settings.reminder_interval_seconds,
            )

        run_menu_loop(state)

    except Exception as e:
        logger.exception("Unhandled error, exiting.")
        print(f"Error: {e}", file=sys.stderr)
        return 1

    finally:
        if runner is not None:
            runner.stop()
            runner.join(timeout=5.0)
        if state is not None:
            state.task_store.close()
        logger.info("Bye.")

    return 0


if __name__ == "__main__":
    sys.exit(main())
