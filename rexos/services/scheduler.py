"""
Cooperative Scheduler
Delayed callbacks without threads.

RexOS is single-threaded: nothing runs in the background. Delayed work (the
debounced note save, save retries) is registered on a CooperativeScheduler
and executed when the host calls `run_due()`, e.g. from its event loop tick.
The clock is injectable so tests can move time by hand.

Usage:
    scheduler = CooperativeScheduler()
    debouncer = Debouncer(scheduler, 1.0, save_note)
    debouncer.trigger("2024-01-15", "First draft")
    debouncer.trigger("2024-01-15", "First draft, edited")  # replaces the first call
    ...
    scheduler.run_due()  # after 1s of inactivity: save_note("2024-01-15", "First draft, edited")
"""

import itertools
import logging
import time
from typing import Any, Callable, List, Optional

from rexos.core.config import settings
from rexos.core.calendar import now_iso
from rexos.schemas.actions import LogNote
from rexos.schemas.note import DailyNote
from rexos.services.error_logging import error_logger


logger = logging.getLogger(__name__)


class ScheduledTask:
    """A callback due at `deadline`. Cancelled tasks are skipped."""

    def __init__(self, deadline: float, sequence: int, callback: Callable, args: tuple):
        self.deadline = deadline
        self.sequence = sequence
        self.callback = callback
        self.args = args
        self.cancelled = False
        self.done = False

    def cancel(self):
        self.cancelled = True

    @property
    def active(self) -> bool:
        return not (self.cancelled or self.done)


class CooperativeScheduler:
    """
    Runs delayed callbacks when asked to.

    Tasks due at the same time run in scheduling order. A callback may
    schedule new tasks; those run on a later `run_due()` call.
    """

    def __init__(self, clock: Callable[[], float] = time.monotonic):
        self._clock = clock
        self._tasks: List[ScheduledTask] = []
        self._counter = itertools.count()

    def now(self) -> float:
        return self._clock()

    def call_later(self, delay: float, callback: Callable, *args: Any) -> ScheduledTask:
        """Schedule `callback(*args)` to run `delay` seconds from now."""
        task = ScheduledTask(self.now() + delay, next(self._counter), callback, args)
        self._tasks.append(task)
        return task

    def pending(self) -> List[ScheduledTask]:
        """Active tasks, earliest first."""
        return sorted(
            (t for t in self._tasks if t.active),
            key=lambda t: (t.deadline, t.sequence),
        )

    def run_due(self, now: Optional[float] = None) -> int:
        """
        Run every active task whose deadline has passed.

        A callback that raises is logged and the remaining due tasks still run.

        Returns:
            Number of callbacks executed (failed ones included)
        """
        now = self.now() if now is None else now
        due = [t for t in self.pending() if t.deadline <= now]
        self._tasks = [t for t in self._tasks if t.active and t not in due]

        executed = 0
        for task in due:
            if task.cancelled:
                # Cancelled by an earlier callback in this same batch
                continue
            task.done = True
            try:
                task.callback(*task.args)
            except Exception as e:
                # Log and keep running the rest of the batch
                error_logger.log_error(
                    e,
                    severity="error",
                    context={"operation": "scheduled_task", "callback": getattr(task.callback, "__qualname__", repr(task.callback))},
                )
            executed += 1
        return executed


class Debouncer:
    """
    Run `callback` once after `delay` seconds without new triggers.

    Every `trigger()` cancels the pending call and schedules a new one with
    the latest arguments.
    """

    def __init__(self, scheduler: CooperativeScheduler, delay: float, callback: Callable):
        self._scheduler = scheduler
        self._delay = delay
        self._callback = callback
        self._task: Optional[ScheduledTask] = None

    @property
    def pending(self) -> bool:
        return self._task is not None and self._task.active

    def trigger(self, *args: Any):
        self.cancel()
        self._task = self._scheduler.call_later(self._delay, self._callback, *args)

    def cancel(self):
        if self._task is not None:
            self._task.cancel()
            self._task = None

    def flush(self):
        """Run the pending call now, if there is one."""
        if not self.pending:
            return
        task = self._task
        task.cancel()
        self._task = None
        self._callback(*task.args)


class NoteAutoSaver:
    """
    Debounced note saving.

    Edits are collected and only the latest content is dispatched as a
    LogNote after the inactivity delay. Empty content is not saved for a
    date that has no note yet.
    """

    def __init__(self, store, scheduler: CooperativeScheduler, delay: Optional[float] = None):
        self._store = store
        delay = settings.NOTE_SAVE_DELAY_SECONDS if delay is None else delay
        self._debouncer = Debouncer(scheduler, delay, self._save)
        self._pending_date: Optional[str] = None

    @property
    def pending(self) -> bool:
        return self._debouncer.pending

    def edit(self, date: str, content: str):
        # Moving to another date saves the pending edit of the previous one first
        if self.pending and self._pending_date != date:
            self.flush()
        self._pending_date = date
        self._debouncer.trigger(date, content)

    def flush(self):
        self._debouncer.flush()

    def cancel(self):
        self._debouncer.cancel()

    def _save(self, date: str, content: str):
        if not content.strip() and self._store.state.note_for(date) is None:
            logger.debug(f"Skipping empty note for {date}")
            return
        self._store.dispatch(LogNote(note=DailyNote(date=date, content=content, updated_at=now_iso())))
