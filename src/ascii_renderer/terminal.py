"""Small helper for driving an ANSI terminal as a display and key source."""

from __future__ import annotations

import logging
import os
import select
import sys
import termios
import tty
from typing import Iterable, List, Optional, Sequence, Tuple

from .errors import DisplayWriteError, TerminalSetupError

TermiosAttr = List[int | List[bytes | int]]

logger = logging.getLogger(__name__)

CLEAR_SCREEN = "\033[2J"
CURSOR_HOME = "\033[H"
HIDE_CURSOR = "\033[?25l"
SHOW_CURSOR = "\033[?25h"
RESET = "\033[0m"

# Final byte of a cursor-key escape sequence.
ARROW_KEYS = {"A": "UP", "B": "DOWN", "C": "RIGHT", "D": "LEFT"}


def compose_frame(lines: Iterable[str], spacer: str = " ", status: Sequence[str] = ()) -> str:
    """Build the text written for one frame.

    Every grid character is followed by ``spacer`` so that a cell is roughly
    square on terminals whose glyphs are twice as tall as they are wide.
    The last status line has no trailing newline, so a frame of exactly the
    terminal height does not scroll.
    """
    parts: List[str] = [CLEAR_SCREEN, CURSOR_HOME]
    for line in lines:
        parts.append(spacer.join(line) + spacer + "\n")
    parts.append("\n".join(status))
    return "".join(parts)


class TerminalController:
    """Context manager that puts the terminal in cbreak mode for interactive rendering.

    With ``require_input`` set, entering fails with :class:`TerminalSetupError`
    when stdin is not a terminal or cannot be switched to cbreak mode.
    Whatever was acquired is released again by ``restore()``, which
    ``__exit__`` always calls.
    """

    def __init__(self, *, spacer: str = " ", require_input: bool = True) -> None:
        self._spacer = spacer
        self._require_input = require_input
        self._cursor_hidden = False
        self._stdin_fd: Optional[int] = None
        self._termios_before: Optional[TermiosAttr] = None
        self._input_enabled = False

    @property
    def input_enabled(self) -> bool:
        return self._input_enabled

    def __enter__(self) -> "TerminalController":
        sys.stdout.write(CLEAR_SCREEN)
        sys.stdout.write(CURSOR_HOME)
        sys.stdout.write(HIDE_CURSOR)
        sys.stdout.flush()
        self._cursor_hidden = True

        if sys.stdin.isatty():
            fd = sys.stdin.fileno()
            self._stdin_fd = fd
            try:
                self._termios_before = termios.tcgetattr(fd)
                tty.setcbreak(fd)
                self._input_enabled = True
                logger.debug("terminal switched to cbreak mode")
            except termios.error as exc:
                self._termios_before = None
                self._stdin_fd = None
                self._input_enabled = False
                if self._require_input:
                    self.restore()
                    raise TerminalSetupError(f"Unable to enter cbreak mode: {exc}") from exc
        else:
            self._stdin_fd = None
            self._termios_before = None
            self._input_enabled = False
            if self._require_input:
                self.restore()
                raise TerminalSetupError("stdin is not a terminal; interactive mode needs a TTY")
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.restore()

    def restore(self) -> None:
        if self._cursor_hidden:
            sys.stdout.write(RESET)
            sys.stdout.write(SHOW_CURSOR)
            sys.stdout.flush()
            self._cursor_hidden = False

        if self._input_enabled and self._stdin_fd is not None and self._termios_before is not None:
            try:
                termios.tcsetattr(self._stdin_fd, termios.TCSADRAIN, self._termios_before)
                logger.debug("terminal mode restored")
            except termios.error as exc:
                logger.warning("failed to restore terminal mode: %s", exc)
        self._input_enabled = False
        self._stdin_fd = None
        self._termios_before = None

    def draw_lines(self, lines: Iterable[str], status: Sequence[str] = ()) -> None:
        """Clear the screen and write the rows top to bottom."""
        try:
            sys.stdout.write(compose_frame(lines, self._spacer, status))
            sys.stdout.flush()
        except OSError as exc:
            raise DisplayWriteError(f"Failed to write frame: {exc}") from exc

    def get_size(self) -> os.terminal_size:
        try:
            return os.get_terminal_size(sys.stdout.fileno())
        except (OSError, ValueError) as exc:
            raise TerminalSetupError(f"Unable to query terminal size: {exc}") from exc

    def size_tuple(self) -> Tuple[int, int]:
        size = self.get_size()
        return size.columns, size.lines

    def poll_keys(self, timeout: float = 0.0) -> List[str]:
        """Wait at most ``timeout`` seconds for input, then drain what is buffered."""
        if not self._input_enabled or self._stdin_fd is None:
            return []

        keys: List[str] = []
        wait = max(0.0, timeout)
        try:
            while True:
                readable, _, _ = select.select([sys.stdin], [], [], wait)
                wait = 0.0
                if not readable:
                    break

                data = os.read(self._stdin_fd, 1)
                if not data:
                    break

                char = data.decode("utf-8", errors="ignore")
                if not char:
                    continue

                if char == "\x03":
                    raise KeyboardInterrupt

                if char == "\x1b":
                    sequence = self._read_escape_sequence()
                    key = self._map_escape_sequence(sequence)
                    if key is not None:
                        keys.append(key)
                    continue

                keys.append(char)
        except OSError as exc:
            logger.warning("reading keyboard input failed: %s", exc)
            return keys

        return keys

    def _read_escape_sequence(self) -> str:
        sequence = "\x1b"
        if self._stdin_fd is None:
            return sequence

        while True:
            readable, _, _ = select.select([sys.stdin], [], [], 0)
            if not readable:
                break
            data = os.read(self._stdin_fd, 1)
            if not data:
                break
            char = data.decode("utf-8", errors="ignore")
            if not char:
                continue
            sequence += char
            # The introducer ("[" or "O") is never the final byte.
            if len(sequence) > 2 and (char.isalpha() or char == "~"):
                break
        return sequence

    @staticmethod
    def _map_escape_sequence(sequence: str) -> Optional[str]:
        # ESC [ A in normal cursor mode, ESC O A in application cursor mode.
        if len(sequence) != 3 or sequence[1] not in "[O":
            return None
        return ARROW_KEYS.get(sequence[2])
