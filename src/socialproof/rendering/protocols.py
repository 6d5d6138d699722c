# src/socialproof/rendering/protocols.py
from __future__ import annotations

import itertools
from collections.abc import Callable
from dataclasses import dataclass, field
from enum import Enum
from typing import Protocol, runtime_checkable

from socialproof.content.models import NotificationPayload
from socialproof.settings.user import NotificationSettings

Callback = Callable[[], None]

_handle_ids = itertools.count(1)


class InteractionEvent(Enum):
    """User interactions a rendered notification can report."""

    CLOSE = "close"
    POINTER_ENTER = "pointerenter"
    POINTER_LEAVE = "pointerleave"


@dataclass(eq=False)
class RenderHandle:
    """Opaque reference to one materialized notification.

    The controller only ever passes handles back to the backend that
    created them; it never inspects theme-specific markup.
    """

    payload: NotificationPayload
    handle_id: int = field(default_factory=lambda: next(_handle_ids))
    exiting: bool = False
    attached: bool = True


@runtime_checkable
class RenderingBackend(Protocol):
    """Protocol defining the interface for notification renderers.

    Implementations turn a payload into something visible on the host
    page under a theme chosen at construction time, and report user
    interactions through the registered hooks.
    """

    def materialize(
        self, payload: NotificationPayload, settings: NotificationSettings
    ) -> RenderHandle:
        """Create the visual notification and attach it to the page."""
        ...

    def play_exit(self, handle: RenderHandle) -> None:
        """Begin the exit transition of an attached notification."""
        ...

    def detach(self, handle: RenderHandle) -> None:
        """Remove the notification from the page."""
        ...

    def on_close_requested(self, handle: RenderHandle, callback: Callback) -> None:
        """Register a callback for the close button."""
        ...

    def on_pointer_enter(self, handle: RenderHandle, callback: Callback) -> None:
        """Register a callback for the pointer entering the notification."""
        ...

    def on_pointer_leave(self, handle: RenderHandle, callback: Callback) -> None:
        """Register a callback for the pointer leaving the notification."""
        ...


class InteractiveBackend:
    """Hook bookkeeping shared by concrete backends.

    Hosts (or tests) report user input with ``dispatch``.
    """

    def __init__(self) -> None:
        self._hooks: dict[tuple[int, InteractionEvent], list[Callback]] = {}

    def on_close_requested(self, handle: RenderHandle, callback: Callback) -> None:
        self._register(handle, InteractionEvent.CLOSE, callback)

    def on_pointer_enter(self, handle: RenderHandle, callback: Callback) -> None:
        self._register(handle, InteractionEvent.POINTER_ENTER, callback)

    def on_pointer_leave(self, handle: RenderHandle, callback: Callback) -> None:
        self._register(handle, InteractionEvent.POINTER_LEAVE, callback)

    def dispatch(self, handle: RenderHandle, event: InteractionEvent) -> int:
        """Deliver an interaction to every hook registered for it.

        Returns:
            Number of callbacks invoked (0 once the handle is detached)
        """
        if not handle.attached:
            return 0
        callbacks = list(self._hooks.get((handle.handle_id, event), []))
        for callback in callbacks:
            callback()
        return len(callbacks)

    def _register(self, handle: RenderHandle, event: InteractionEvent, callback: Callback) -> None:
        self._hooks.setdefault((handle.handle_id, event), []).append(callback)

    def _drop_hooks(self, handle: RenderHandle) -> None:
        for event in InteractionEvent:
            self._hooks.pop((handle.handle_id, event), None)


class RecordingRenderer(InteractiveBackend):
    """Mock implementation of RenderingBackend for testing."""

    def __init__(self) -> None:
        super().__init__()
        self.materialize_calls: list[dict[str, object]] = []
        self.exit_calls: list[RenderHandle] = []
        self.detach_calls: list[RenderHandle] = []

    def materialize(
        self, payload: NotificationPayload, settings: NotificationSettings
    ) -> RenderHandle:
        """Record the call and hand out a fresh handle."""
        handle = RenderHandle(payload=payload)
        self.materialize_calls.append({"payload": payload, "settings": settings, "handle": handle})
        return handle

    def play_exit(self, handle: RenderHandle) -> None:
        handle.exiting = True
        self.exit_calls.append(handle)

    def detach(self, handle: RenderHandle) -> None:
        handle.attached = False
        self._drop_hooks(handle)
        self.detach_calls.append(handle)

    @property
    def attached(self) -> list[RenderHandle]:
        """Handles materialized and not yet detached."""
        return [
            call["handle"]  # type: ignore[misc]
            for call in self.materialize_calls
            if call["handle"].attached  # type: ignore[attr-defined]
        ]

    @property
    def last_handle(self) -> RenderHandle:
        assert self.materialize_calls, "Renderer was not called"
        return self.materialize_calls[-1]["handle"]  # type: ignore[return-value]

    def reset_call_history(self) -> None:
        """Reset the call history for testing."""
        self.materialize_calls = []
        self.exit_calls = []
        self.detach_calls = []


class ErrorSimulatingRenderer(RecordingRenderer):
    """Renderer mock that can simulate failures."""

    def __init__(self, fail_on_methods: list[str] | None = None) -> None:
        """Initialize with optional methods that should fail.

        Args:
            fail_on_methods: List of method names that should raise exceptions
        """
        super().__init__()
        self.fail_on_methods = fail_on_methods or []

    def materialize(
        self, payload: NotificationPayload, settings: NotificationSettings
    ) -> RenderHandle:
        if "materialize" in self.fail_on_methods:
            raise RuntimeError("Simulated rendering failure")
        return super().materialize(payload, settings)


def assert_rendered_message(renderer: RecordingRenderer, expected_message: str) -> bool:
    """Assert that the last materialized payload carried the expected message.

    Returns:
        True if the assertion passes, raises AssertionError otherwise
    """
    assert renderer.materialize_calls, "Renderer was not called"
    payload = renderer.materialize_calls[-1]["payload"]
    assert payload.message == expected_message, (  # type: ignore[attr-defined]
        f"Expected {expected_message!r}, got {payload.message!r}"  # type: ignore[attr-defined]
    )
    return True
