"""Data models for scheduled callbacks."""

from __future__ import annotations

import sched
from collections.abc import Callable
from dataclasses import dataclass, field
from enum import Enum


class TaskState(Enum):
    """Lifecycle of a scheduled callback."""

    PENDING = "pending"
    FIRED = "fired"
    CANCELLED = "cancelled"


@dataclass(eq=False)
class ScheduledTask:
    """A one-shot deferred callback with identity.

    Compared by identity, so a task can be cancelled or checked even after
    a newer task with the same name was scheduled.
    """

    task_id: int
    name: str
    due: float
    callback: Callable[[], None] = field(repr=False)
    state: TaskState = TaskState.PENDING
    event: sched.Event | None = field(default=None, repr=False)

    @property
    def pending(self) -> bool:
        return self.state is TaskState.PENDING
