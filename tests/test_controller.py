from __future__ import annotations

from collections.abc import Callable
from pathlib import Path

import pytest

from socialproof import create
from socialproof.constants import STORAGE_KEY
from socialproof.controller import DisplayState, NotificationController
from socialproof.rendering.protocols import (
    ErrorSimulatingRenderer,
    InteractionEvent,
    RecordingRenderer,
    assert_rendered_message,
)
from socialproof.scheduling import TaskScheduler
from socialproof.settings import NotificationSettings
from socialproof.storage import InMemoryStore, JsonFileStore
from socialproof.utils.time import ManualClock, TimeUtils

MakeController = Callable[..., NotificationController]


def _timer_names(controller: NotificationController) -> list[str]:
    return [task.name for task in controller.pending_timers()]


# ---------------------------------------------------------------------------
# scheduling and gate


def test_init_arms_initial_delay(
    make_controller: MakeController, scheduler: TaskScheduler, renderer: RecordingRenderer
) -> None:
    controller = make_controller()

    assert controller.init() is True
    assert controller.state is DisplayState.SCHEDULED
    assert _timer_names(controller) == ["initial-delay"]

    scheduler.advance(0.5)
    assert renderer.materialize_calls == []

    scheduler.advance(0.5)
    assert controller.state is DisplayState.VISIBLE
    assert_rendered_message(renderer, "Ten people signed up")


def test_init_refused_by_gate_stays_idle(
    make_controller: MakeController,
    scheduler: TaskScheduler,
    store: InMemoryStore,
    clock: ManualClock,
    renderer: RecordingRenderer,
) -> None:
    store.data[STORAGE_KEY] = TimeUtils.to_iso(clock.now())
    controller = make_controller()

    assert controller.init() is False
    assert controller.state is DisplayState.IDLE
    assert controller.pending_timers() == []

    scheduler.advance(60)
    assert renderer.materialize_calls == []


def test_init_twice_does_not_double_schedule(make_controller: MakeController) -> None:
    controller = make_controller()
    controller.init()
    controller.init()

    assert _timer_names(controller) == ["initial-delay"]


def test_throttle_survives_new_instance(
    make_controller: MakeController, scheduler: TaskScheduler, clock: ManualClock
) -> None:
    first = make_controller(minTimeBetween=9)
    first.init()
    scheduler.advance(60)
    assert first.shown_count == 1

    second = make_controller(minTimeBetween=9)
    assert second.init() is False

    clock.advance(9 * 3600)
    assert second.init() is True


# ---------------------------------------------------------------------------
# show


def test_show_records_throttle_after_render(
    make_controller: MakeController, store: InMemoryStore, clock: ManualClock
) -> None:
    controller = make_controller()

    assert controller.show() is True
    assert controller.visible is True
    assert controller.shown_count == 1
    assert store.data[STORAGE_KEY] == TimeUtils.to_iso(clock.now())


def test_failed_render_does_not_record_throttle(
    scheduler: TaskScheduler, store: InMemoryStore
) -> None:
    controller = NotificationController(
        NotificationSettings(),
        renderer=ErrorSimulatingRenderer(["materialize"]),
        store=store,
        scheduler=scheduler,
    )

    with pytest.raises(RuntimeError):
        controller.show()

    assert store.set_calls == []
    assert controller.shown_count == 0
    assert controller.visible is False


def test_failed_render_after_delay_returns_to_idle(
    scheduler: TaskScheduler, store: InMemoryStore
) -> None:
    controller = NotificationController(
        NotificationSettings(initialDelay=1000),
        renderer=ErrorSimulatingRenderer(["materialize"]),
        store=store,
        scheduler=scheduler,
    )
    assert controller.init() is True

    with pytest.raises(RuntimeError):
        scheduler.advance(1)

    assert controller.state is DisplayState.IDLE
    assert controller.pending_timers() == []


def test_init_fails_open_on_undecodable_state_file(
    tmp_path: Path, scheduler: TaskScheduler, renderer: RecordingRenderer
) -> None:
    path = tmp_path / "state.json"
    path.write_bytes(b"\xff\xfe garbage")
    controller = NotificationController(
        NotificationSettings(initialDelay=0),
        renderer=renderer,
        store=JsonFileStore(path),
        scheduler=scheduler,
    )

    assert controller.init() is True
    scheduler.advance(0)
    assert controller.visible is True


def test_show_while_visible_is_noop(
    make_controller: MakeController, store: InMemoryStore, renderer: RecordingRenderer
) -> None:
    controller = make_controller(maxNotifications=5)

    assert controller.show() is True
    assert controller.show() is False

    assert len(renderer.materialize_calls) == 1
    assert len(store.set_calls) == 1
    assert controller.shown_count == 1


def test_shown_count_never_exceeds_maximum(
    make_controller: MakeController, scheduler: TaskScheduler, renderer: RecordingRenderer
) -> None:
    controller = make_controller(maxNotifications=2)

    for _ in range(5):
        controller.show()
        controller.hide()
        scheduler.advance(1)
        assert controller.shown_count <= 2

    assert controller.shown_count == 2
    assert len(renderer.materialize_calls) == 2


def test_zero_maximum_never_shows(
    make_controller: MakeController, scheduler: TaskScheduler, renderer: RecordingRenderer
) -> None:
    controller = make_controller(maxNotifications=0)

    controller.init()
    scheduler.advance(5)

    assert renderer.materialize_calls == []
    assert controller.state is DisplayState.IDLE


def test_direct_show_before_delay_suppresses_timer_show(
    make_controller: MakeController, scheduler: TaskScheduler, renderer: RecordingRenderer
) -> None:
    controller = make_controller(maxNotifications=3, autoClose=False)
    controller.init()
    controller.show()

    scheduler.advance(5)

    assert len(renderer.materialize_calls) == 1
    assert controller.state is DisplayState.VISIBLE


def test_hooks_follow_settings(make_controller: MakeController, renderer: RecordingRenderer) -> None:
    controller = make_controller(closeButton=False, pauseOnHover=False)
    controller.show()
    handle = renderer.last_handle

    assert renderer.dispatch(handle, InteractionEvent.CLOSE) == 0
    assert renderer.dispatch(handle, InteractionEvent.POINTER_ENTER) == 0
    assert controller.visible is True


# ---------------------------------------------------------------------------
# auto-close and hover


def test_auto_close_hides_then_detaches(
    make_controller: MakeController, scheduler: TaskScheduler, renderer: RecordingRenderer
) -> None:
    controller = make_controller()
    controller.show()
    handle = renderer.last_handle

    scheduler.advance(5)
    assert controller.state is DisplayState.DISMISSING
    assert renderer.exit_calls == [handle]
    assert controller.visible is True

    scheduler.advance(0.3)
    assert renderer.detach_calls == [handle]
    assert controller.visible is False
    assert controller.state is DisplayState.IDLE
    assert controller.pending_timers() == []


def test_auto_close_disabled_keeps_notification(
    make_controller: MakeController, scheduler: TaskScheduler
) -> None:
    controller = make_controller(autoClose=False)
    controller.show()

    scheduler.advance(3600)
    assert controller.visible is True
    assert controller.pending_timers() == []


def test_hover_pauses_and_leave_restarts_full_timeout(
    make_controller: MakeController, scheduler: TaskScheduler, renderer: RecordingRenderer
) -> None:
    controller = make_controller(pauseOnHover=True)
    controller.show()
    handle = renderer.last_handle

    scheduler.advance(4)
    renderer.dispatch(handle, InteractionEvent.POINTER_ENTER)
    assert controller.pending_timers() == []

    scheduler.advance(30)
    assert controller.state is DisplayState.VISIBLE

    renderer.dispatch(handle, InteractionEvent.POINTER_LEAVE)
    scheduler.advance(4)
    assert controller.state is DisplayState.VISIBLE

    scheduler.advance(1)
    assert controller.state is DisplayState.DISMISSING


def test_repeated_leave_keeps_single_auto_close(
    make_controller: MakeController, renderer: RecordingRenderer
) -> None:
    controller = make_controller(pauseOnHover=True)
    controller.show()
    handle = renderer.last_handle

    renderer.dispatch(handle, InteractionEvent.POINTER_LEAVE)
    renderer.dispatch(handle, InteractionEvent.POINTER_LEAVE)

    assert _timer_names(controller) == ["auto-close"]


def test_leave_without_auto_close_arms_nothing(
    make_controller: MakeController, renderer: RecordingRenderer
) -> None:
    controller = make_controller(pauseOnHover=True, autoClose=False)
    controller.show()
    handle = renderer.last_handle

    renderer.dispatch(handle, InteractionEvent.POINTER_ENTER)
    renderer.dispatch(handle, InteractionEvent.POINTER_LEAVE)

    assert controller.pending_timers() == []


def test_leave_during_exit_does_not_rearm(
    make_controller: MakeController, scheduler: TaskScheduler, renderer: RecordingRenderer
) -> None:
    controller = make_controller(pauseOnHover=True)
    controller.show()
    handle = renderer.last_handle

    controller.hide()
    renderer.dispatch(handle, InteractionEvent.POINTER_LEAVE)

    assert _timer_names(controller) == ["remove"]
    scheduler.advance(10)
    assert len(renderer.exit_calls) == 1


# ---------------------------------------------------------------------------
# hide and destroy


def test_close_button_hides(
    make_controller: MakeController, scheduler: TaskScheduler, renderer: RecordingRenderer
) -> None:
    controller = make_controller()
    controller.show()

    renderer.dispatch(renderer.last_handle, InteractionEvent.CLOSE)
    assert controller.state is DisplayState.DISMISSING

    scheduler.advance(0.3)
    assert controller.visible is False


def test_hide_when_not_visible_is_noop(
    make_controller: MakeController, renderer: RecordingRenderer
) -> None:
    controller = make_controller()

    assert controller.hide() is False
    assert renderer.exit_calls == []


def test_hide_cancels_auto_close_immediately(
    make_controller: MakeController, scheduler: TaskScheduler, renderer: RecordingRenderer
) -> None:
    controller = make_controller()
    controller.show()

    controller.hide()
    assert _timer_names(controller) == ["remove"]

    scheduler.advance(10)
    assert len(renderer.exit_calls) == 1
    assert len(renderer.detach_calls) == 1


def test_second_hide_during_exit_is_noop(
    make_controller: MakeController, renderer: RecordingRenderer
) -> None:
    controller = make_controller()
    controller.show()

    assert controller.hide() is True
    assert controller.hide() is False
    assert len(renderer.exit_calls) == 1


def test_show_rejected_while_exit_animation_plays(
    make_controller: MakeController, scheduler: TaskScheduler, renderer: RecordingRenderer
) -> None:
    controller = make_controller(maxNotifications=2)
    controller.show()
    controller.hide()

    assert controller.show() is False
    scheduler.advance(0.3)
    assert controller.show() is True
    assert len(renderer.materialize_calls) == 2


def test_hide_then_destroy_leaves_clean_state(
    make_controller: MakeController, renderer: RecordingRenderer
) -> None:
    controller = make_controller()
    controller.show()

    controller.hide()
    controller.destroy()

    assert controller.shown_count == 0
    assert controller.pending_timers() == []
    assert controller.visible is False
    assert renderer.attached == []


def test_destroy_while_visible_detaches_now(
    make_controller: MakeController, renderer: RecordingRenderer
) -> None:
    controller = make_controller()
    controller.show()

    controller.destroy()

    assert len(renderer.exit_calls) == 1
    assert len(renderer.detach_calls) == 1
    assert controller.state is DisplayState.IDLE


def test_destroy_cancels_scheduled_show(
    make_controller: MakeController, scheduler: TaskScheduler, renderer: RecordingRenderer
) -> None:
    controller = make_controller()
    controller.init()

    controller.destroy()
    scheduler.advance(60)

    assert renderer.materialize_calls == []
    assert controller.state is DisplayState.IDLE


def test_destroy_makes_instance_reusable(
    make_controller: MakeController, renderer: RecordingRenderer
) -> None:
    controller = make_controller(maxNotifications=1)
    controller.show()
    controller.destroy()

    assert controller.show() is True
    assert len(renderer.materialize_calls) == 2


def test_create_accepts_public_option_names() -> None:
    controller = create(autoClose=False, maxNotifications=3, theme="tailwind")

    assert controller.settings.max_notifications == 3
    assert controller.settings.auto_close is False
    assert controller.renderer.theme.name == "tailwind"  # type: ignore[attr-defined]
