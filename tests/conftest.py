from __future__ import annotations

from collections.abc import Callable
from datetime import UTC, datetime
from typing import Any

import pytest

from socialproof.content.resolver import ContentResolver
from socialproof.controller import NotificationController
from socialproof.rendering.protocols import RecordingRenderer
from socialproof.scheduling import TaskScheduler
from socialproof.settings import NotificationSettings
from socialproof.storage import InMemoryStore
from socialproof.utils.time import ManualClock

START = datetime(2025, 5, 3, 12, 0, tzinfo=UTC)


@pytest.fixture
def clock() -> ManualClock:
    return ManualClock(START)


@pytest.fixture
def scheduler(clock: ManualClock) -> TaskScheduler:
    return TaskScheduler(clock)


@pytest.fixture
def store() -> InMemoryStore:
    return InMemoryStore()


@pytest.fixture
def renderer() -> RecordingRenderer:
    return RecordingRenderer()


@pytest.fixture
def settings() -> NotificationSettings:
    return NotificationSettings(
        initialDelay=1000,
        autoCloseTimeout=5000,
        animationDuration=300,
        localData=[{"message": "Ten people signed up", "timestamp": "2 minutes ago"}],
    )


@pytest.fixture
def make_controller(
    scheduler: TaskScheduler,
    store: InMemoryStore,
    renderer: RecordingRenderer,
) -> Callable[..., NotificationController]:
    """Build controllers sharing the test clock, store and renderer."""

    def _make(**options: Any) -> NotificationController:
        base: dict[str, Any] = {
            "initialDelay": 1000,
            "autoCloseTimeout": 5000,
            "animationDuration": 300,
            "localData": [{"message": "Ten people signed up", "timestamp": "2 minutes ago"}],
        }
        base.update(options)
        return NotificationController(
            NotificationSettings.model_validate(base),
            renderer=renderer,
            store=store,
            resolver=ContentResolver(),
            scheduler=scheduler,
        )

    return _make
