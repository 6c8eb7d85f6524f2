# src/task_tracker/cli/shell.py

from __future__ import annotations

import logging
from collections.abc import Callable

from ..core.errors import AccessDeniedError, NotFoundError, StoreError, ValidationError
from ..core.state import AppState
from .menu import InvalidInput, MenuRegistry, build_registry

logger = logging.getLogger(__name__)

Reader = Callable[[str], str]
Writer = Callable[[str], None]


class ConsolePrompter:
    """
    Field prompts on top of an input()-like callable.

    Free-text answers are passed through exactly as typed; only numeric
    answers are stripped before parsing.
    """

    def __init__(self, read: Reader) -> None:
        self._read = read

    def text(self, label: str) -> str:
        return self._read(label)

    def number(self, label: str) -> int:
        raw = self.text(label).strip()
        try:
            return int(raw)
        except ValueError:
            raise InvalidInput(raw) from None

    def optional_text(self, label: str) -> str | None:
        # Only an empty answer means "keep".
        return self.text(label) or None

    def optional_number(self, label: str) -> int | None:
        raw = self.text(label).strip()
        if not raw:
            return None
        try:
            return int(raw)
        except ValueError:
            raise InvalidInput(raw) from None


def run_menu_loop(
    state: AppState,
    *,
    read: Reader = input,
    write: Writer = print,
    registry: MenuRegistry | None = None,
) -> None:
    """
    Interactive menu until the exit option, EOF or Ctrl+C.

    Domain errors abort only the current action; the menu keeps going.
    """
    if registry is None:
        registry = build_registry(str(getattr(state.settings, "app_name", "Task Manager CLI")))
    prompt = ConsolePrompter(read)

    logger.info("Menu started (acting user id=%s).", state.acting_user_id)

    while True:
        write(registry.render())
        try:
            raw = read("Enter choice: ").strip()
        except (EOFError, KeyboardInterrupt):
            logger.info("Console input closed, exiting.")
            write("")
            break

        try:
            choice = int(raw)
        except ValueError:
            write("Invalid input.")
            continue

        if choice == registry.exit_choice:
            logger.info("Exit option selected.")
            break

        try:
            reply = registry.handle(state, choice, prompt)
        except (EOFError, KeyboardInterrupt):
            logger.info("Console input closed during an action, exiting.")
            write("")
            break
        except InvalidInput:
            write("Invalid input.")
            continue
        except (ValidationError, NotFoundError, AccessDeniedError) as e:
            logger.info("Action rejected: %s", e)
            write(f"Error: {e}")
            continue
        except StoreError as e:
            logger.error("Store error during menu action: %s", e)
            write(f"Storage error: {e}")
            continue

        if reply:
            write(reply)

    logger.info("Menu finished.")
