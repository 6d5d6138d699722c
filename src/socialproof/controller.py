# filepath: src/socialproof/controller.py
"""Lifecycle controller for social proof notifications."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Final

from socialproof.content.resolver import ContentResolver
from socialproof.errors import AdmissionReason, AdmissionRejected
from socialproof.rendering.html import create_renderer
from socialproof.rendering.protocols import RenderHandle, RenderingBackend
from socialproof.scheduling import ScheduledTask, TaskScheduler
from socialproof.settings.user import NotificationSettings
from socialproof.storage.protocols import InMemoryStore, KeyValueStore
from socialproof.throttle import ThrottleGate
from socialproof.utils.time import Clock

logger: Final = logging.getLogger(__name__)


class DisplayState(Enum):
    """Where the notification is in its show/hide cycle."""

    IDLE = "idle"
    SCHEDULED = "scheduled"
    VISIBLE = "visible"
    DISMISSING = "dismissing"


@dataclass
class DisplaySession:
    """Ephemeral display state owned by one controller."""

    shown_count: int = 0
    visible: bool = False
    state: DisplayState = DisplayState.IDLE
    handle: RenderHandle | None = None
    delay_timer: ScheduledTask | None = None
    auto_close_timer: ScheduledTask | None = None
    removal_timer: ScheduledTask | None = None

    def timers(self) -> list[ScheduledTask]:
        """Timers of this session that have not fired or been cancelled."""
        return [
            task
            for task in (self.delay_timer, self.auto_close_timer, self.removal_timer)
            if task is not None and task.pending
        ]


class NotificationController:
    """Main controller class for the notification lifecycle.

    This class orchestrates the whole show/hide cycle:
    - Consulting the throttle gate before anything is scheduled
    - Waiting for the initial delay
    - Resolving content and handing it to the rendering backend
    - Auto-closing, pausing on hover and closing on request
    - Recording the last-shown time after a successful display

    States run Idle → Scheduled → Visible → Dismissing → Idle. Requests
    that fail an admission check (already visible, maximum reached) are
    silent no-ops.
    """

    def __init__(
        self,
        settings: NotificationSettings,
        renderer: RenderingBackend | None = None,
        store: KeyValueStore | None = None,
        resolver: ContentResolver | None = None,
        scheduler: TaskScheduler | None = None,
        clock: Clock | None = None,
    ) -> None:
        """Initialize the controller.

        Args:
            settings: Immutable notification settings
            renderer: Optional rendering backend (default: HTML for the configured theme)
            store: Optional persistent store for throttle state (default: in memory)
            resolver: Optional content resolver
            scheduler: Optional timer queue (default: one driven by ``clock``)
            clock: Optional clock shared by the scheduler and throttle gate
        """
        self.settings = settings
        self.scheduler = scheduler or TaskScheduler(clock)
        self.clock = clock or self.scheduler.clock
        self.renderer = renderer or create_renderer(settings)
        self.store = store or InMemoryStore()
        self.resolver = resolver or ContentResolver()
        self.gate = ThrottleGate(settings, self.store, self.clock)
        self.session = DisplaySession()

    # ---- read-only views of the session ----
    @property
    def state(self) -> DisplayState:
        return self.session.state

    @property
    def visible(self) -> bool:
        return self.session.visible

    @property
    def shown_count(self) -> int:
        return self.session.shown_count

    def pending_timers(self) -> list[ScheduledTask]:
        return self.session.timers()

    # ---- lifecycle ----
    def init(self) -> bool:
        """Schedule the first notification if the throttle gate allows it.

        Returns:
            True if the initial-delay timer is armed
        """
        if not self.gate.may_show():
            return False

        session = self.session
        if session.delay_timer is not None and session.delay_timer.pending:
            logger.debug("Initial delay already scheduled")
            return True

        session.delay_timer = self.scheduler.call_later(
            self.settings.initial_delay_seconds, self._on_initial_delay, "initial-delay"
        )
        if session.state is DisplayState.IDLE:
            session.state = DisplayState.SCHEDULED
        return True

    def show(self) -> bool:
        """Resolve content and display a notification.

        Returns:
            True if a notification was displayed, False if the request was
            turned away by an admission check
        """
        try:
            self._admit()
        except AdmissionRejected as exc:
            logger.debug("Show skipped: %s", exc)
            if self.session.state is DisplayState.SCHEDULED:
                self.session.state = DisplayState.IDLE
            return False

        payload = self.resolver.resolve(self.settings)
        try:
            handle = self.renderer.materialize(payload, self.settings)
        except Exception:
            if self.session.state is DisplayState.SCHEDULED:
                self.session.state = DisplayState.IDLE
            raise
        self._register_hooks(handle)

        session = self.session
        session.handle = handle
        session.shown_count += 1
        session.visible = True
        session.state = DisplayState.VISIBLE
        logger.info("Showing notification %d: %s", session.shown_count, payload.message)

        self.gate.mark_shown()

        if self.settings.auto_close:
            self._arm_auto_close()
        return True

    def hide(self) -> bool:
        """Start dismissing the visible notification.

        The auto-close timer is cancelled right away; the element is
        detached once the exit animation has had time to play.

        Returns:
            True if a dismissal was started
        """
        session = self.session
        if not session.visible or session.state is not DisplayState.VISIBLE:
            return False

        self.scheduler.cancel(session.auto_close_timer)
        session.auto_close_timer = None
        session.state = DisplayState.DISMISSING

        if session.handle is not None:
            self.renderer.play_exit(session.handle)
        session.removal_timer = self.scheduler.call_later(
            self.settings.animation_seconds, self._finish_hide, "remove"
        )
        return True

    def destroy(self) -> None:
        """Tear down immediately and reset the shown counter.

        Leaves no pending timers; the instance can be reused as if newly
        constructed, apart from persisted throttle state.
        """
        session = self.session
        self.scheduler.cancel(session.delay_timer)
        session.delay_timer = None

        self.hide()
        if self.scheduler.cancel(session.removal_timer) or session.handle is not None:
            self._finish_hide()

        session.shown_count = 0
        session.state = DisplayState.IDLE

    # ---- internals ----
    def _admit(self) -> None:
        session = self.session
        if session.shown_count >= self.settings.max_notifications:
            raise AdmissionRejected(AdmissionReason.MAX_REACHED)
        if session.visible:
            raise AdmissionRejected(AdmissionReason.ALREADY_VISIBLE)

    def _register_hooks(self, handle: RenderHandle) -> None:
        if self.settings.close_button:
            self.renderer.on_close_requested(handle, self.hide)
        if self.settings.pause_on_hover:
            self.renderer.on_pointer_enter(handle, self._pause_auto_close)
            self.renderer.on_pointer_leave(handle, self._resume_auto_close)

    def _arm_auto_close(self) -> None:
        session = self.session
        self.scheduler.cancel(session.auto_close_timer)
        session.auto_close_timer = self.scheduler.call_later(
            self.settings.auto_close_seconds, self._on_auto_close, "auto-close"
        )

    def _pause_auto_close(self) -> None:
        if self.scheduler.cancel(self.session.auto_close_timer):
            logger.debug("Auto-close paused on hover")
        self.session.auto_close_timer = None

    def _resume_auto_close(self) -> None:
        # Restarts the full timeout, not the remaining time
        if self.settings.auto_close and self.session.state is DisplayState.VISIBLE:
            self._arm_auto_close()

    def _on_initial_delay(self) -> None:
        self.session.delay_timer = None
        self.show()

    def _on_auto_close(self) -> None:
        self.session.auto_close_timer = None
        if not self.session.visible:
            return
        self.hide()

    def _finish_hide(self) -> None:
        session = self.session
        session.removal_timer = None
        if session.handle is not None:
            self.renderer.detach(session.handle)
        session.handle = None
        session.visible = False
        session.state = DisplayState.IDLE
