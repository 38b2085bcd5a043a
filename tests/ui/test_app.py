"""Tests for the App controller: routing, intents and the run loop.

Keys are fed straight into ``handle_key``; the store is a real TaskStore in
*tmp_path* and save failures are injected with ``mocker``.
"""

from __future__ import annotations

import sys
from datetime import timedelta
from unittest.mock import MagicMock

import pytest
from rich.console import Console

from focus_tui.models.config_models import AppConfig
from focus_tui.models.countdown import Phase
from focus_tui.models.exceptions import TaskWriteError
from focus_tui.models.task import Task, TaskStatus
from focus_tui.ui.app import App
from focus_tui.ui.intents import AddTask, ClosePopup, DeleteTask, OpenPopup, Quit, SetDurations
from focus_tui.ui.keyboard import Key
from focus_tui.ui.popups import AddTaskPopup, ErrorPopup, TaskListPopup
from focus_tui.ui.screens import CountdownScreen, WelcomeScreen
from focus_tui.utils.constants import MAX_DURATION_MINUTES


@pytest.fixture()
def app(store, notifier, clock) -> App:
    return App(
        store,
        notifier=notifier,
        work_minutes=1,
        break_minutes=2,
        console=Console(width=100, height=30, record=True, color_system=None),
        clock=clock,
    )


def _type(app: App, keys) -> None:
    for key in keys:
        app.handle_key(key)


def _fail_saves(mocker, store):
    return mocker.patch.object(
        store,
        "save",
        side_effect=TaskWriteError(store.path, PermissionError(13, "denied")),
    )


class TestInitialState:
    def test_starts_on_welcome_without_popup(self, app):
        assert isinstance(app.screen, WelcomeScreen)
        assert app.popup is None
        assert app.exit is False

    def test_welcome_seeded_with_configured_durations(self, app):
        assert (app.screen.work_minutes, app.screen.break_minutes) == (1, 2)


class TestApply:
    def test_quit(self, app):
        app.apply(Quit())
        assert app.exit is True

    def test_set_durations_swaps_to_countdown(self, app):
        app.apply(SetDurations(25, 5))

        assert isinstance(app.screen, CountdownScreen)
        assert (app.work_minutes, app.break_minutes) == (25, 5)
        assert app.screen.engine.phase is Phase.WORK

    def test_open_popup_replaces_existing(self, app):
        first, second = ErrorPopup("one"), ErrorPopup("two")
        app.apply(OpenPopup(first))
        app.apply(OpenPopup(second))
        assert app.popup is second

    def test_close_popup_clears_slot(self, app):
        app.apply(OpenPopup(ErrorPopup("x")))
        app.apply(ClosePopup())
        assert app.popup is None

    def test_add_task_opens_list_on_new_task(self, app, store):
        store.add(Task.create("first"))
        app.apply(AddTask(Task.create("second")))

        assert isinstance(app.popup, TaskListPopup)
        assert app.popup.selected_idx == 1
        assert [t.title for t in store.tasks] == ["first", "second"]

    def test_add_task_failure_opens_error(self, app, store, mocker):
        _fail_saves(mocker, store)
        app.apply(AddTask(Task.create("lost")))

        assert isinstance(app.popup, ErrorPopup)
        assert "Permission denied" in app.popup.message
        assert store.tasks == ()

    def test_delete_task_reopens_list_with_clamped_selection(self, app, store):
        tasks = [Task.create(t) for t in ("a", "b")]
        for task in tasks:
            store.add(task)

        app.apply(DeleteTask(tasks[1].uuid, 1))

        assert isinstance(app.popup, TaskListPopup)
        assert app.popup.selected_idx == 0
        assert store.tasks == (tasks[0],)

    def test_delete_last_task_leaves_no_selection(self, app, store):
        task = Task.create("only")
        store.add(task)
        app.apply(DeleteTask(task.uuid, 0))
        assert app.popup.selected_idx is None

    def test_delete_failure_opens_error(self, app, store, mocker):
        task = Task.create("keep")
        store.add(task)
        _fail_saves(mocker, store)

        app.apply(DeleteTask(task.uuid, 0))

        assert isinstance(app.popup, ErrorPopup)
        assert store.tasks == (task,)

    def test_unknown_intent_raises(self, app):
        with pytest.raises(TypeError):
            app.apply(object())


class TestRouting:
    def test_q_quits_from_screen(self, app):
        app.handle_key("q")
        assert app.exit is True

    def test_q_quits_from_task_list(self, app):
        app.handle_key("t")
        app.handle_key("q")
        assert app.exit is True

    def test_t_opens_task_list(self, app):
        app.handle_key("t")
        assert isinstance(app.popup, TaskListPopup)

    def test_t_closes_open_task_list(self, app):
        app.handle_key("t")
        app.handle_key("t")
        assert app.popup is None

    def test_t_does_not_replace_error_popup(self, app):
        app.apply(OpenPopup(ErrorPopup("x")))
        app.handle_key("t")
        assert isinstance(app.popup, ErrorPopup)

    def test_popup_gets_keys_before_screen(self, app):
        app.handle_key("t")
        app.handle_key(Key.ENTER)
        assert isinstance(app.screen, WelcomeScreen)

    def test_screen_gets_keys_without_popup(self, app):
        app.handle_key(Key.ENTER)
        assert isinstance(app.screen, CountdownScreen)

    def test_typing_q_and_t_into_title(self, app):
        """Shortcut letters are text while the title field has focus."""
        _type(app, ["t", "a"])
        assert isinstance(app.popup, AddTaskPopup)

        _type(app, "quit it")

        assert app.exit is False
        assert isinstance(app.popup, AddTaskPopup)
        assert app.popup.title == "quit it"

    def test_q_quits_when_status_field_focused(self, app):
        _type(app, ["t", "a", Key.TAB, "q"])
        assert app.exit is True

    def test_escape_from_error_returns_to_screen(self, app):
        app.apply(OpenPopup(ErrorPopup("x")))
        app.handle_key(Key.ESCAPE)
        assert app.popup is None
        assert isinstance(app.screen, WelcomeScreen)


class TestTaskFlow:
    def test_add_task_end_to_end(self, app, store, tasks_path):
        _type(app, ["t", "a", *"Write report", Key.TAB, Key.DOWN, Key.ENTER])

        assert isinstance(app.popup, TaskListPopup)
        assert app.popup.selected_idx == 0
        assert store.tasks[0].title == "Write report"
        assert store.tasks[0].status is TaskStatus.ONGOING
        assert tasks_path.exists()

    def test_delete_task_end_to_end(self, app, store):
        store.add(Task.create("a"))
        store.add(Task.create("b"))

        _type(app, ["t", Key.DOWN, "d"])

        assert [t.title for t in store.tasks] == ["a"]
        assert app.popup.selected_idx == 0

    def test_escape_from_add_returns_to_list(self, app):
        _type(app, ["t", "a", Key.ESCAPE])
        assert isinstance(app.popup, TaskListPopup)


class TestLoadTasks:
    def test_missing_file_no_popup(self, app):
        app.load_tasks()
        assert app.popup is None

    def test_parse_error_shows_popup_and_keeps_running(self, app, tasks_path):
        tasks_path.write_text("[{")
        app.load_tasks()

        assert isinstance(app.popup, ErrorPopup)
        assert "JSON parsing error" in app.popup.message
        assert app.exit is False
        assert app.store.tasks == ()


class TestTick:
    def test_tick_advances_countdown(self, app, clock, notifier):
        app.apply(SetDurations(1, 2))
        clock.advance(61)

        app.tick()

        assert app.screen.engine.phase is Phase.BREAK
        assert len(notifier.sent) == 1

    def test_popup_does_not_stop_screen_tick(self, app, clock):
        app.apply(SetDurations(1, 2))
        app.handle_key("t")
        clock.advance(61)
        app.tick()
        assert app.screen.engine.phase is Phase.BREAK

    def test_tick_redraws_live(self, app):
        app.live = MagicMock()
        app.tick()
        app.live.update.assert_called_once()

    def test_render_draws_popup_over_screen(self, app):
        app.apply(OpenPopup(ErrorPopup("disk full")))
        app.console.print(app.render())
        text = app.console.export_text()
        assert "disk full" in text
        assert "Focus TUI" in text

    def test_popup_takes_countdown_body_but_keeps_footer(self, app):
        app.apply(SetDurations(1, 2))
        app.apply(OpenPopup(ErrorPopup("disk full")))

        app.console.print(app.render())
        text = app.console.export_text()

        assert "disk full" in text
        assert "Work countdown" not in text
        assert "Space to pause" in text


class TestPollAndRun:
    def test_poll_routes_key(self, app):
        app.keyboard = MagicMock()
        app.keyboard.read_key.return_value = "q"

        app.poll_and_handle(0.05)

        app.keyboard.read_key.assert_called_once_with(0.05)
        assert app.exit is True

    def test_poll_timeout_does_nothing(self, app):
        app.keyboard = MagicMock()
        app.keyboard.read_key.return_value = None
        app.poll_and_handle(0.05)
        assert app.exit is False

    def test_run_until_quit(self, app, mocker):
        mocker.patch("focus_tui.ui.app.Live")
        app.keyboard = MagicMock()
        app.keyboard.read_key.side_effect = [None, Key.ENTER, " ", "q"]

        app.run()

        assert app.exit is True
        assert isinstance(app.screen, CountdownScreen)
        assert app.screen.engine.paused is True
        app.keyboard.stop.assert_called_once()

    def test_run_handles_ctrl_c(self, app, mocker):
        mocker.patch("focus_tui.ui.app.Live")
        app.keyboard = MagicMock()
        app.keyboard.read_key.side_effect = KeyboardInterrupt

        app.run()

        app.keyboard.stop.assert_called_once()
        assert app.live is None


class TestMaximumDurations:
    @pytest.mark.parametrize("minutes", [MAX_DURATION_MINUTES, sys.maxsize])
    def test_enter_at_saturated_maximum_starts_countdown(self, store, clock, minutes):
        app = App(
            store,
            work_minutes=minutes,
            break_minutes=minutes,
            console=Console(width=100, height=30, record=True, color_system=None),
            clock=clock,
        )

        _type(app, [Key.RIGHT, Key.ENTER])

        assert isinstance(app.screen, CountdownScreen)
        assert app.screen.engine.work_duration == timedelta(minutes=MAX_DURATION_MINUTES)
        clock.advance(60)
        app.tick()
        app.console.print(app.render())
        assert app.screen.engine.phase is Phase.WORK
        assert "Work countdown" in app.console.export_text()

    def test_config_maximum_starts_countdown(self, store, clock):
        config = AppConfig.model_validate(
            {"timer": {"work_minutes": MAX_DURATION_MINUTES, "break_minutes": 1}}
        )
        app = App(
            store,
            work_minutes=config.timer.work_minutes,
            break_minutes=config.timer.break_minutes,
            clock=clock,
        )

        app.handle_key(Key.ENTER)

        assert isinstance(app.screen, CountdownScreen)
