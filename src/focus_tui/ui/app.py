"""Application controller: owns the screen, the popup slot and the task store.

One cooperative loop drives everything::

    while not app.exit:
        app.tick()                   # redraw, then advance the screen
        app.poll_and_handle(timeout) # wait briefly for one key and apply it

Input routing: while the open popup has a focused text field every key goes
to that popup, so ``q`` and ``t`` can be typed into a task title. Otherwise
``q`` quits and ``t`` opens the task list (when no popup is open), and all
other keys go to the popup if there is one, else to the screen.

Rendering: an open popup takes the place of the screen's ``body`` region
while the header and footer stay visible. The countdown is hidden for as long
as a popup is open but keeps ticking underneath.
"""

from __future__ import annotations

from rich.align import Align
from rich.console import Console
from rich.layout import Layout
from rich.live import Live

from focus_tui.models.countdown import Clock, NotificationSink
from focus_tui.models.exceptions import TaskLoadError, TaskSaveError
from focus_tui.services.task_store import TaskStore
from focus_tui.utils.constants import (
    DEFAULT_BREAK_DURATION_MINUTES,
    DEFAULT_WORK_DURATION_MINUTES,
)
from focus_tui.utils.logger import get_logger

from .intents import (
    AddTask,
    ClosePopup,
    DeleteTask,
    Intent,
    OpenPopup,
    Quit,
    SetDurations,
)
from .keyboard import KeyboardHandler
from .popups import TOGGLE_TASKS_KEY, Popup, PopupFactory, clamp_selection
from .screens import CountdownScreen, Screen, WelcomeScreen
from .theme import THEMES, Theme

QUIT_KEY = "q"
DEFAULT_TICK_SECONDS = 0.05


class App:
    """The dispatch hub between input, screens, popups and the task store."""

    def __init__(
        self,
        store: TaskStore,
        theme: Theme | None = None,
        notifier: NotificationSink | None = None,
        work_minutes: int = DEFAULT_WORK_DURATION_MINUTES,
        break_minutes: int = DEFAULT_BREAK_DURATION_MINUTES,
        tick_seconds: float = DEFAULT_TICK_SECONDS,
        console: Console | None = None,
        keyboard: KeyboardHandler | None = None,
        clock: Clock | None = None,
    ):
        self.store = store
        self.theme = theme or THEMES["mocha"]
        self.notifier = notifier
        self.work_minutes = work_minutes
        self.break_minutes = break_minutes
        self.tick_seconds = tick_seconds
        self.console = console or Console()
        self.keyboard = keyboard
        self.clock = clock

        self.popups = PopupFactory(store)
        self.screen: Screen = WelcomeScreen(work_minutes, break_minutes)
        self.popup: Popup | None = None
        self.exit = False
        self.live: Live | None = None

        self.log = get_logger("app")

    # -------------------- startup --------------------

    def load_tasks(self) -> None:
        """Load the task list; a failure is shown but never fatal."""
        try:
            self.store.load()
        except TaskLoadError as e:
            self.log.error("Task load failed: %s", e)
            self.popup = self.popups.error(str(e))

    # -------------------- loop --------------------

    def render(self) -> Layout:
        """Draw the screen, with the popup (if any) in place of its body."""
        layout = self.screen.render(self.theme)
        if self.popup is not None:
            layout["body"].update(
                Align.center(
                    self.popup.render(self.theme),
                    vertical="middle",
                    style=self.theme.background_style,
                )
            )
        return layout

    def tick(self) -> None:
        if self.live is not None:
            self.live.update(self.render(), refresh=True)
        self.screen.tick()

    def poll_and_handle(self, timeout: float) -> None:
        """Wait up to *timeout* seconds for a key and apply its outcome."""
        if self.keyboard is None:
            return
        key = self.keyboard.read_key(timeout)
        if key is not None:
            self.handle_key(key)

    def handle_key(self, key: str) -> None:
        intent = self.route(key)
        if intent is not None:
            self.apply(intent)

    def route(self, key: str) -> Intent | None:
        """Decide who handles *key* and return the resulting intent."""
        if self.popup is not None and self.popup.captures_text:
            return self.popup.handle_input(key)

        if key == QUIT_KEY:
            return Quit()
        if key == TOGGLE_TASKS_KEY and self.popup is None:
            return OpenPopup(self.popups.task_list())

        if self.popup is not None:
            return self.popup.handle_input(key)
        return self.screen.handle_input(key)

    def apply(self, intent: Intent) -> None:
        """Apply an intent to controller state."""
        if isinstance(intent, Quit):
            self.exit = True

        elif isinstance(intent, SetDurations):
            self.work_minutes = intent.work_minutes
            self.break_minutes = intent.break_minutes
            self.screen = CountdownScreen(
                intent.work_minutes,
                intent.break_minutes,
                notifier=self.notifier,
                clock=self.clock,
            )
            self.log.info(
                "Countdown started: work=%dmin break=%dmin",
                intent.work_minutes,
                intent.break_minutes,
            )

        elif isinstance(intent, AddTask):
            try:
                idx = self.store.add(intent.task)
            except TaskSaveError as e:
                self.log.error("Adding task failed: %s", e)
                self.popup = self.popups.error(str(e))
            else:
                self.popup = self.popups.task_list(idx)

        elif isinstance(intent, DeleteTask):
            try:
                self.store.delete(intent.task_uuid)
            except TaskSaveError as e:
                self.log.error("Deleting task failed: %s", e)
                self.popup = self.popups.error(str(e))
            else:
                self.popup = self.popups.task_list(
                    clamp_selection(intent.selected_idx, len(self.store))
                )

        elif isinstance(intent, OpenPopup):
            self.popup = intent.popup

        elif isinstance(intent, ClosePopup):
            self.popup = None

        else:
            raise TypeError(f"Unknown intent: {intent!r}")

    def run(self) -> None:
        """Run the interactive loop until quit or Ctrl+C."""
        if self.keyboard is None:
            self.keyboard = KeyboardHandler()

        try:
            with Live(
                self.render(),
                console=self.console,
                auto_refresh=False,
                screen=True,
            ) as live:
                self.live = live
                while not self.exit:
                    self.tick()
                    self.poll_and_handle(self.tick_seconds)
        except KeyboardInterrupt:
            self.log.info("Interrupted")
        finally:
            self.live = None
            self.keyboard.stop()
