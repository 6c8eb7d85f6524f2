# src/task_tracker/tasks/task_reminders.py

from __future__ import annotations

"""
Due-today reminders.

A small polling loop that, every interval:
- takes a snapshot of the cached tasks,
- picks pending tasks whose due date equals today's date,
- hands each one to the injected notifier and writes an audit line.

There is no "already reminded" state: a matching task is reminded on every
tick of its due day, and stops matching once the day has passed.
"""

import asyncio
import contextlib
import logging
import threading
from dataclasses import dataclass
from datetime import date

from ..core.models import Task
from ..core.ports import ReminderNotifier
from .task_service import TaskService

logger = logging.getLogger(__name__)
audit = logging.getLogger("task_tracker.audit")


def today_str() -> str:
    return date.today().strftime("%Y-%m-%d")


class ConsoleNotifier:
    def remind(self, task: Task) -> None:
        print(f"Reminder: Task '{task.description}' is due today!", flush=True)


def due_today(tasks: list[Task], today: str) -> list[Task]:
    return [t for t in tasks if not t.completed and t.due_date == today]


def check_due_tasks(
    service: TaskService,
    notifier: ReminderNotifier,
    *,
    today: str | None = None,
) -> list[Task]:
    """One reminder tick. Returns the tasks that were reminded."""
    if today is None:
        today = today_str()

    matches = due_today(service.list_tasks(), today)
    for task in matches:
        try:
            notifier.remind(task)
        except Exception:
            logger.exception("Reminder notifier failed task_id=%s", task.id)
            continue
        audit.info("Reminder sent for task %s", task.id)
    return matches


async def run_reminder_loop(
        service: TaskService,
        notifier: ReminderNotifier,
        *,
        interval_seconds: float = 60.0,
        stop_event: asyncio.Event | None = None,
) -> None:
    """
    Tick, then sleep interval_seconds, forever.

    To stop the loop, cancel the coroutine/task or set stop_event.
    """
    sleep_s = max(0.01, float(interval_seconds))

    while stop_event is None or not stop_event.is_set():
        try:
            check_due_tasks(service, notifier)
        except Exception:
            logger.exception("Reminder tick failed")

        if stop_event is None:
            await asyncio.sleep(sleep_s)
            continue

        with contextlib.suppress(asyncio.TimeoutError):
            await asyncio.wait_for(stop_event.wait(), timeout=sleep_s)


@dataclass(slots=True)
class ReminderRunner:
    thread: threading.Thread
    loop: asyncio.AbstractEventLoop
    stop_event: asyncio.Event

    def stop(self) -> None:
        try:
            self.loop.call_soon_threadsafe(self.stop_event.set)
        except RuntimeError:
            logger.debug("Reminder loop already closed.", exc_info=True)

    def join(self, timeout: float | None = None) -> None:
        self.thread.join(timeout=timeout)


def start_reminders_in_background(
    service: TaskService,
    notifier: ReminderNotifier,
    *,
    interval_seconds: float = 60.0,
) -> ReminderRunner | None:
    """
    Start the reminder loop in a background thread with its own event loop.

    The console menu blocks on input(), so reminders need their own thread.
    Call stop() and join() on the returned runner at shutdown.

    Returns None if the thread could not set up its event loop; in that case
    the thread has already exited and been joined.
    """
    ready = threading.Event()
    holder: dict[str, object] = {}

    def runner() -> None:
        try:
            loop = asyncio.new_event_loop()
            asyncio.set_event_loop(loop)
            stop_event = asyncio.Event()
            holder["loop"] = loop
            holder["stop_event"] = stop_event
        except Exception:
            logger.exception("Reminder thread failed to set up its event loop.")
            return
        finally:
            ready.set()

        try:
            loop.run_until_complete(
                run_reminder_loop(
                    service,
                    notifier,
                    interval_seconds=interval_seconds,
                    stop_event=stop_event,
                )
            )
        finally:
            with contextlib.suppress(Exception):
                loop.close()
            logger.info("Reminder thread finished.")

    t = threading.Thread(target=runner, name="reminders", daemon=True)
    t.start()

    # Set on every path out of the setup block, so this cannot hang.
    ready.wait()
    loop = holder.get("loop")
    stop_event = holder.get("stop_event")

    if not isinstance(loop, asyncio.AbstractEventLoop) or not isinstance(stop_event, asyncio.Event):
        logger.error("Reminder thread did not initialize properly.")
        t.join()
        return None

    logger.info("Reminder thread started (interval=%ss).", interval_seconds)
    return ReminderRunner(thread=t, loop=loop, stop_event=stop_event)
