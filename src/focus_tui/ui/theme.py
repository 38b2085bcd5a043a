"""Color themes (Catppuccin Mocha and Latte)."""

from __future__ import annotations

from dataclasses import dataclass

from focus_tui.models.countdown import Phase


@dataclass(frozen=True)
class Theme:
    background: str
    border: str
    text: str
    work_accent: str
    break_accent: str
    error: str

    @property
    def background_style(self) -> str:
        return f"on {self.background}"

    @property
    def text_style(self) -> str:
        return f"{self.text} on {self.background}"

    @property
    def error_text_style(self) -> str:
        return f"bold {self.error} on {self.background}"

    def accent(self, phase: Phase) -> str:
        return self.work_accent if phase is Phase.WORK else self.break_accent


THEMES: dict[str, Theme] = {
    "mocha": Theme(
        background="#1e1e2e",
        border="#cdd6f4",
        text="#cdd6f4",
        work_accent="#a6e3a1",
        break_accent="#89b4fa",
        error="#f38ba8",
    ),
    "latte": Theme(
        background="#eff1f5",
        border="#4c4f69",
        text="#4c4f69",
        work_accent="#40a02b",
        break_accent="#1e66f5",
        error="#d20f39",
    ),
}


def get_theme(name: str) -> Theme:
    try:
        return THEMES[name]
    except KeyError:
        raise ValueError(
            f"Unknown theme '{name}'. Choose from: {', '.join(THEMES)}"
        ) from None
