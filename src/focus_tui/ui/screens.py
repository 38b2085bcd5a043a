"""Full-page screens: welcome/configuration and the countdown.

Screens form a closed set. The controller always holds exactly one of them;
Welcome is the initial screen and Countdown replaces it once durations are
confirmed. There is no way back to Welcome.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from datetime import timedelta
from enum import Enum

from rich.align import Align
from rich.console import Group, RenderableType
from rich.layout import Layout
from rich.panel import Panel
from rich.progress_bar import ProgressBar
from rich.text import Text

from focus_tui.models.countdown import Clock, CountdownEngine, NotificationSink
from focus_tui.utils.constants import (
    DEFAULT_BREAK_DURATION_MINUTES,
    DEFAULT_WORK_DURATION_MINUTES,
    MAX_DURATION_MINUTES,
)

from .intents import Intent, SetDurations
from .keyboard import Key
from .theme import Theme


class Screen(ABC):
    """A full-page view with its own input handling and per-tick update."""

    @abstractmethod
    def render(self, theme: Theme) -> Layout:
        """Build the page. The layout must expose a ``body`` region."""

    @abstractmethod
    def handle_input(self, key: str) -> Intent | None:
        """React to one key and optionally return an intent."""

    def tick(self) -> None:
        """Advance time-dependent state. Called once per loop iteration."""


def _page(theme: Theme, title: str, body: RenderableType, hints: str) -> Layout:
    layout = Layout()
    layout.split_column(
        Layout(name="header", size=3),
        Layout(name="body"),
        Layout(name="footer", size=1),
    )
    layout["header"].update(
        Align.center(
            Text(title, style=f"bold {theme.text}", justify="center"),
            vertical="middle",
            style=theme.background_style,
        )
    )
    layout["body"].update(
        Align.center(body, vertical="middle", style=theme.background_style)
    )
    layout["footer"].update(
        Align.center(
            Text(hints, style=f"dim {theme.text}", justify="center"),
            style=theme.background_style,
        )
    )
    return layout


class SelectedDuration(str, Enum):
    WORK = "work"
    BREAK = "break"


class WelcomeScreen(Screen):
    """Lets the user pick work and break durations before starting."""

    def __init__(
        self,
        work_minutes: int = DEFAULT_WORK_DURATION_MINUTES,
        break_minutes: int = DEFAULT_BREAK_DURATION_MINUTES,
    ):
        self.work_minutes = _clamp_minutes(work_minutes)
        self.break_minutes = _clamp_minutes(break_minutes)
        self.selected = SelectedDuration.WORK

    def _adjust(self, delta: int) -> None:
        if self.selected is SelectedDuration.WORK:
            self.work_minutes = _clamp_minutes(self.work_minutes + delta)
        else:
            self.break_minutes = _clamp_minutes(self.break_minutes + delta)

    def handle_input(self, key: str) -> Intent | None:
        if key == Key.ENTER:
            return SetDurations(self.work_minutes, self.break_minutes)

        if key in (Key.TAB, Key.BACKTAB, Key.UP, Key.DOWN):
            self.selected = (
                SelectedDuration.BREAK
                if self.selected is SelectedDuration.WORK
                else SelectedDuration.WORK
            )
        elif key == Key.LEFT:
            self._adjust(-1)
        elif key == Key.RIGHT:
            self._adjust(1)
        return None

    def render(self, theme: Theme) -> Layout:
        def field(label: str, minutes: int, selected: bool) -> Text:
            style = f"bold {theme.text}" if selected else theme.text
            marker = "> " if selected else "  "
            return Text(f"{marker}{label}: {minutes} min", style=style, justify="center")

        body = Group(
            Text("Welcome to Focus TUI!", style=f"bold {theme.work_accent}", justify="center"),
            Text(""),
            field("Work duration", self.work_minutes, self.selected is SelectedDuration.WORK),
            field("Break duration", self.break_minutes, self.selected is SelectedDuration.BREAK),
        )
        return _page(
            theme,
            "Focus TUI",
            body,
            "Tab/Up/Down to select duration, Left/Right to change value, "
            "Enter to start, T for tasks, Q to quit",
        )


def _clamp_minutes(minutes: int) -> int:
    return max(1, min(MAX_DURATION_MINUTES, minutes))


def format_duration(duration: timedelta) -> str:
    """Format as ``HH:MM:SS``, truncating sub-second remainders."""
    total = int(duration.total_seconds())
    hours, rest = divmod(total, 3600)
    minutes, seconds = divmod(rest, 60)
    return f"{hours:02d}:{minutes:02d}:{seconds:02d}"


class CountdownScreen(Screen):
    """Runs the alternating work/break countdown."""

    def __init__(
        self,
        work_minutes: int,
        break_minutes: int,
        notifier: NotificationSink | None = None,
        clock: Clock | None = None,
    ):
        kwargs = {"clock": clock} if clock is not None else {}
        self.engine = CountdownEngine(work_minutes, break_minutes, notifier, **kwargs)

    def handle_input(self, key: str) -> Intent | None:
        if key == " ":
            self.engine.toggle_pause()
        return None

    def tick(self) -> None:
        self.engine.update()

    def render(self, theme: Theme) -> Layout:
        engine = self.engine
        accent = theme.accent(engine.phase)
        percent = engine.percent_complete()

        gauge = Group(
            Text(engine.phase.label, style=f"bold {accent}", justify="center"),
            ProgressBar(
                total=100,
                completed=percent,
                width=40,
                complete_style=accent,
                finished_style=accent,
                style=theme.border,
            ),
            Text(f"{percent}%", style=f"dim {theme.text}", justify="center"),
        )

        remaining = Text(
            format_duration(engine.remaining_duration()),
            style=f"bold {accent}",
            justify="center",
        )

        components: list[RenderableType] = [
            Align.center(gauge),
            Text(""),
            Panel(remaining, border_style=accent, expand=False, padding=(1, 6)),
        ]
        if engine.paused:
            components.append(Text(""))
            components.append(
                Panel(
                    Text("The countdown is paused!", style=theme.text_style, justify="center"),
                    border_style=theme.border,
                    expand=False,
                )
            )

        hints = "Space to resume" if engine.paused else "Space to pause"
        return _page(
            theme,
            "Focus TUI",
            Group(*[Align.center(c) for c in components]),
            f"{hints}, T for tasks, Q to quit",
        )
