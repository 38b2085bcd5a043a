"""Non-blocking keyboard input for the terminal UI."""

from __future__ import annotations

import codecs
import os
import select
import sys
import termios
import tty
from collections import deque


class Key:
    """Names for non-character keys.

    Printable characters are delivered as themselves (a one-character
    string); everything here is longer than one character.
    """

    UP = "up"
    DOWN = "down"
    LEFT = "left"
    RIGHT = "right"
    ENTER = "enter"
    TAB = "tab"
    BACKTAB = "backtab"
    ESCAPE = "esc"
    BACKSPACE = "backspace"


_ESCAPE_SEQUENCES = {
    "[A": Key.UP,
    "[B": Key.DOWN,
    "[C": Key.RIGHT,
    "[D": Key.LEFT,
    "OA": Key.UP,
    "OB": Key.DOWN,
    "OC": Key.RIGHT,
    "OD": Key.LEFT,
    "[Z": Key.BACKTAB,
}

# A read ending in one of these is held back for the rest of the sequence.
_ESCAPE_PREFIXES = ("\x1b[", "\x1bO")

_CONTROL_KEYS = {
    "\r": Key.ENTER,
    "\n": Key.ENTER,
    "\t": Key.TAB,
    "\x7f": Key.BACKSPACE,
    "\x08": Key.BACKSPACE,
}


def is_char(key: str) -> bool:
    """True when *key* is a printable character rather than a named key."""
    return len(key) == 1 and key.isprintable()


def decode_keys(data: str) -> list[str]:
    """Split raw terminal input into key names and characters."""
    keys: list[str] = []
    i = 0
    while i < len(data):
        ch = data[i]
        if ch == "\x1b":
            seq = data[i + 1 : i + 3]
            if seq in _ESCAPE_SEQUENCES:
                keys.append(_ESCAPE_SEQUENCES[seq])
                i += 3
                continue
            if seq.startswith("["):
                # Unknown CSI sequence (e.g. F-keys, "\x1b[3~"): skip to its final byte.
                j = i + 2
                while j < len(data) and not ("@" <= data[j] <= "~"):
                    j += 1
                i = j + 1
                continue
            keys.append(Key.ESCAPE)
            i += 1
            continue
        if ch in _CONTROL_KEYS:
            keys.append(_CONTROL_KEYS[ch])
        elif ch.isprintable():
            keys.append(ch)
        i += 1
    return keys


class KeyboardHandler:
    """Cbreak-mode keyboard reader with a bounded wait.

    Ctrl+C keeps raising ``KeyboardInterrupt`` because cbreak mode leaves
    signal generation enabled.
    """

    def __init__(self):
        self.fd = sys.stdin.fileno()
        self.old_settings = None
        self._pending: deque[str] = deque()
        # Keeps a multibyte character split across reads until it is complete.
        self._decoder = codecs.getincrementaldecoder("utf-8")(errors="ignore")
        self._carry = ""
        self._setup()

    def _setup(self):
        """Setup terminal for non-blocking input."""
        try:
            self.old_settings = termios.tcgetattr(self.fd)
            tty.setcbreak(self.fd)
        except termios.error:
            # Not a TTY (piped stdin); reads still work, just line-buffered.
            self.old_settings = None

    def read_key(self, timeout: float) -> str | None:
        """Wait up to *timeout* seconds for one key.

        Returns the key or None if nothing was pressed in time.
        """
        if self._pending:
            return self._pending.popleft()

        ready, _, _ = select.select([self.fd], [], [], timeout)
        if not ready:
            return None

        data = os.read(self.fd, 64)
        if not data:
            return None

        text = self._carry + self._decoder.decode(data)
        self._carry = ""
        if text.endswith(_ESCAPE_PREFIXES):
            text, self._carry = text[:-2], text[-2:]

        self._pending.extend(decode_keys(text))
        if self._pending:
            return self._pending.popleft()
        return None

    def stop(self):
        """Restore terminal settings."""
        if self.old_settings:
            try:
                termios.tcsetattr(self.fd, termios.TCSADRAIN, self.old_settings)
            except termios.error:
                pass
