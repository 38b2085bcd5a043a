"""Work/break countdown engine with pause/resume.

The engine anchors the active phase on a monotonic ``start_instant``. Pausing
freezes a snapshot of the remaining time; resuming moves the anchor forward so
that the paused interval never counts as elapsed.
"""

from __future__ import annotations

import time
from collections.abc import Callable
from datetime import timedelta
from enum import Enum
from typing import Protocol

from focus_tui.utils.constants import MAX_DURATION_MINUTES
from focus_tui.utils.logger import get_logger

Clock = Callable[[], float]

ZERO = timedelta(0)


class Phase(str, Enum):
    """Countdown phase."""

    WORK = "work"
    BREAK = "break"

    def flipped(self) -> "Phase":
        return Phase.BREAK if self is Phase.WORK else Phase.WORK

    @property
    def label(self) -> str:
        return "Work countdown" if self is Phase.WORK else "Break countdown"


PHASE_NOTIFICATIONS: dict[Phase, tuple[str, str]] = {
    Phase.WORK: (
        "Work time started",
        "The work countdown has started, please focus!",
    ),
    Phase.BREAK: (
        "Break time started",
        "The break countdown has started, please take some time to relax!",
    ),
}


class NotificationSink(Protocol):
    """Anything that can deliver a desktop notification."""

    def notify(self, title: str, message: str) -> None: ...


def saturating_sub(total: timedelta, elapsed: timedelta) -> timedelta:
    """Return ``total - elapsed`` floored at zero."""
    if elapsed >= total:
        return ZERO
    return total - elapsed


class CountdownEngine:
    """Alternating work/break countdown.

    Invariant: ``paused == (paused_remaining is not None)``.
    """

    def __init__(
        self,
        work_minutes: int,
        break_minutes: int,
        notifier: NotificationSink | None = None,
        clock: Clock = time.monotonic,
    ):
        if work_minutes < 1 or break_minutes < 1:
            raise ValueError(
                "Countdown durations must be at least 1 minute "
                f"(got work={work_minutes}, break={break_minutes})"
            )
        if max(work_minutes, break_minutes) > MAX_DURATION_MINUTES:
            raise ValueError(
                f"Countdown durations must be at most {MAX_DURATION_MINUTES} minutes "
                f"(got work={work_minutes}, break={break_minutes})"
            )

        self.work_duration = timedelta(minutes=work_minutes)
        self.break_duration = timedelta(minutes=break_minutes)
        self.notifier = notifier
        self._clock = clock

        self.phase = Phase.WORK
        self.total_duration = self.work_duration
        self.start_instant = clock()
        self.paused = False
        self.paused_remaining: timedelta | None = None

    def _elapsed(self) -> timedelta:
        seconds = self._clock() - self.start_instant
        if seconds <= 0:
            return ZERO
        try:
            return timedelta(seconds=seconds)
        except OverflowError:
            return timedelta.max

    def remaining_duration(self) -> timedelta:
        """Time left in the current phase, never negative."""
        if self.paused_remaining is not None:
            return self.paused_remaining
        return saturating_sub(self.total_duration, self._elapsed())

    def percent_complete(self) -> int:
        """Whole-second progress through the current phase, in [0, 100]."""
        total = int(self.total_duration.total_seconds())
        remaining = int(self.remaining_duration().total_seconds())
        percent = (total - remaining) * 100 // total
        return max(0, min(100, percent))

    def pause(self) -> None:
        if self.paused:
            return
        self.paused_remaining = saturating_sub(self.total_duration, self._elapsed())
        self.paused = True

    def resume(self) -> None:
        if not self.paused:
            return
        if self.paused_remaining is not None:
            already_elapsed = self.total_duration - self.paused_remaining
            self.start_instant = self._clock() - already_elapsed.total_seconds()
        self.paused_remaining = None
        self.paused = False

    def toggle_pause(self) -> None:
        if self.paused:
            self.resume()
        else:
            self.pause()

    def duration_for(self, phase: Phase) -> timedelta:
        return self.work_duration if phase is Phase.WORK else self.break_duration

    def update(self) -> bool:
        """Advance to the next phase once the current one has run out.

        Returns True when the phase flipped on this call.
        """
        if self.paused or self.remaining_duration() > ZERO:
            return False

        self.phase = self.phase.flipped()
        self.total_duration = self.duration_for(self.phase)
        self._notify(self.phase)
        self.start_instant = self._clock()
        self.paused_remaining = None
        return True

    def _notify(self, phase: Phase) -> None:
        if self.notifier is None:
            return
        title, message = PHASE_NOTIFICATIONS[phase]
        try:
            self.notifier.notify(title, message)
        except Exception as e:
            get_logger("countdown").warning("Failed to show notification: %s", e)
