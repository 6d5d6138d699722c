"""Single-threaded scheduler for notification timers.

All timers (initial delay, auto-close, exit animation) are one-shot
callbacks on one queue; nothing runs in parallel. Tasks can be cancelled
by identity and cancellation is idempotent.
"""

from __future__ import annotations

import itertools
import logging
import sched
from collections.abc import Callable
from typing import Final

from socialproof.scheduling.models import ScheduledTask, TaskState
from socialproof.utils.time import Clock, ManualClock, SystemClock

logger: Final = logging.getLogger(__name__)

__all__ = ["ScheduledTask", "TaskScheduler", "TaskState"]


class TaskScheduler:
    """Deferred-callback queue built on the standard library ``sched`` module.

    Driven by a ``Clock``: with ``SystemClock`` ``run()`` really waits,
    with ``ManualClock`` time only moves through ``advance()`` or ``run()``,
    which makes whole lifecycles deterministic.
    """

    def __init__(self, clock: Clock | None = None) -> None:
        self.clock = clock or SystemClock()
        self._queue = sched.scheduler(self.clock.monotonic, self.clock.sleep)
        self._ids = itertools.count(1)
        self._tasks: list[ScheduledTask] = []

    def call_later(
        self, delay: float, callback: Callable[[], None], name: str = "task"
    ) -> ScheduledTask:
        """Schedule ``callback`` to run once after ``delay`` seconds.

        Args:
            delay: Seconds to wait (negative values run as soon as possible)
            callback: Zero-argument callable
            name: Label used in logs and for inspection

        Returns:
            The task, usable with ``cancel``
        """
        delay = max(0.0, delay)
        task = ScheduledTask(
            task_id=next(self._ids),
            name=name,
            due=self.clock.monotonic() + delay,
            callback=callback,
        )
        task.event = self._queue.enter(delay, task.task_id, self._fire, argument=(task,))
        self._tasks.append(task)
        logger.debug("Scheduled %s #%d in %.3fs", name, task.task_id, delay)
        return task

    def cancel(self, task: ScheduledTask | None) -> bool:
        """Cancel a pending task.

        Returns:
            True if the task was pending and is now cancelled
        """
        if task is None or not task.pending:
            return False
        task.state = TaskState.CANCELLED
        if task.event is not None:
            try:
                self._queue.cancel(task.event)
            except ValueError:
                pass  # already popped from the queue
        self._forget(task)
        logger.debug("Cancelled %s #%d", task.name, task.task_id)
        return True

    def pending(self) -> list[ScheduledTask]:
        """Return live tasks ordered by due time."""
        return sorted(self._tasks, key=lambda t: (t.due, t.task_id))

    def run_pending(self) -> None:
        """Run every task that is due now without waiting."""
        self._queue.run(blocking=False)

    def run(self) -> None:
        """Run tasks, waiting as needed, until the queue is empty."""
        self._queue.run(blocking=True)

    def advance(self, seconds: float) -> None:
        """Move a ``ManualClock`` forward, firing due tasks in order.

        Args:
            seconds: How far to move the clock

        Raises:
            TypeError: If the scheduler is not driven by a ManualClock
        """
        if not isinstance(self.clock, ManualClock):
            raise TypeError("advance() requires a ManualClock")

        target = self.clock.monotonic() + seconds
        self.run_pending()
        while self._tasks:
            next_due = self.pending()[0].due
            if next_due > target:
                break
            self.clock.advance_to(next_due)
            self.run_pending()
        self.clock.advance_to(target)
        self.run_pending()

    def _fire(self, task: ScheduledTask) -> None:
        if not task.pending:
            return
        task.state = TaskState.FIRED
        self._forget(task)
        task.callback()

    def _forget(self, task: ScheduledTask) -> None:
        if task in self._tasks:
            self._tasks.remove(task)
