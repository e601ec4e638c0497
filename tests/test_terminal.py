import io
import unittest
from typing import List
from unittest.mock import MagicMock, patch

from src.ascii_renderer import terminal
from src.ascii_renderer.errors import DisplayWriteError, TerminalSetupError
from src.ascii_renderer.terminal import TerminalController, compose_frame


class _FakeTty:
    """Byte source standing in for stdin, served through patched select/os.read."""

    def __init__(self, data: bytes) -> None:
        self.pending: List[bytes] = [data[i:i + 1] for i in range(len(data))]
        self.timeouts: List[float] = []

    def isatty(self) -> bool:
        return True

    def fileno(self) -> int:
        return 0

    def select(self, rlist, wlist, xlist, timeout):
        self.timeouts.append(timeout)
        return (rlist if self.pending else [], [], [])

    def read(self, fd: int, count: int) -> bytes:
        return self.pending.pop(0) if self.pending else b""


class ComposeFrameTests(unittest.TestCase):
    def test_clears_then_writes_rows_with_spacer(self) -> None:
        frame = compose_frame(["ab", "c "], spacer=" ")
        self.assertEqual(frame, "\033[2J\033[Ha b \nc   \n")

    def test_status_lines_follow_grid(self) -> None:
        frame = compose_frame(["#"], spacer=".", status=("Position: (0, 0)",))
        self.assertTrue(frame.endswith("#.\nPosition: (0, 0)"))

    def test_frame_of_terminal_height_has_one_newline_less(self) -> None:
        frame = compose_frame(["ab", "cd"], status=("one", "two"))
        self.assertEqual(frame.count("\n"), 3)
        self.assertFalse(frame.endswith("\n"))

    def test_empty_spacer(self) -> None:
        self.assertEqual(compose_frame(["ab"], spacer=""), "\033[2J\033[Hab\n")


class TerminalControllerTests(unittest.TestCase):
    def test_draw_lines_writes_and_flushes(self) -> None:
        controller = TerminalController()
        with patch("sys.stdout", new_callable=io.StringIO) as out:
            controller.draw_lines(["# ", " #"], status=("status",))
        self.assertEqual(out.getvalue(), "\033[2J\033[H#   \n  # \nstatus")

    def test_write_failure_raises_display_write_error(self) -> None:
        controller = TerminalController()
        stdout = MagicMock()
        stdout.write.side_effect = BrokenPipeError("closed")
        with patch("sys.stdout", stdout):
            with self.assertRaises(DisplayWriteError) as caught:
                controller.draw_lines(["#"])
        self.assertIsInstance(caught.exception.__cause__, BrokenPipeError)

    def test_interactive_mode_requires_tty(self) -> None:
        with patch("sys.stdout", new_callable=io.StringIO) as out, patch("sys.stdin", io.StringIO("")):
            with self.assertRaises(TerminalSetupError):
                with TerminalController():
                    self.fail("context body should not run")
        self.assertIn(terminal.SHOW_CURSOR, out.getvalue())

    def test_non_interactive_mode_without_tty(self) -> None:
        with patch("sys.stdout", new_callable=io.StringIO), patch("sys.stdin", io.StringIO("")):
            with TerminalController(require_input=False) as controller:
                self.assertFalse(controller.input_enabled)
                self.assertEqual(controller.poll_keys(0.0), [])

    def test_cbreak_failure_raises_setup_error(self) -> None:
        fake = _FakeTty(b"")
        with patch("sys.stdout", new_callable=io.StringIO), patch("sys.stdin", fake), patch.object(
            terminal.termios, "tcgetattr", side_effect=terminal.termios.error("nope")
        ):
            with self.assertRaises(TerminalSetupError):
                TerminalController().__enter__()

    def test_terminal_mode_restored_after_error(self) -> None:
        fake = _FakeTty(b"")
        saved = [1, 2, 3]
        with patch("sys.stdout", new_callable=io.StringIO) as out, patch("sys.stdin", fake), patch.object(
            terminal.termios, "tcgetattr", return_value=saved
        ), patch.object(terminal.tty, "setcbreak") as setcbreak, patch.object(
            terminal.termios, "tcsetattr"
        ) as tcsetattr:
            with self.assertRaises(RuntimeError):
                with TerminalController() as controller:
                    self.assertTrue(controller.input_enabled)
                    raise RuntimeError("boom")

        setcbreak.assert_called_once_with(0)
        tcsetattr.assert_called_once_with(0, terminal.termios.TCSADRAIN, saved)
        self.assertTrue(out.getvalue().endswith(terminal.RESET + terminal.SHOW_CURSOR))
        self.assertFalse(controller.input_enabled)

    def _poll(self, data: bytes, timeout: float = 0.1):
        fake = _FakeTty(data)
        with patch("sys.stdout", new_callable=io.StringIO), patch("sys.stdin", fake), patch.object(
            terminal.termios, "tcgetattr", return_value=[]
        ), patch.object(terminal.tty, "setcbreak"), patch.object(terminal.termios, "tcsetattr"), patch.object(
            terminal.select, "select", side_effect=fake.select
        ), patch.object(terminal.os, "read", side_effect=fake.read):
            with TerminalController() as controller:
                keys = controller.poll_keys(timeout)
        return keys, fake

    def test_poll_keys_decodes_arrows_and_characters(self) -> None:
        keys, _ = self._poll(b"\x1b[A\x1b[Dq\x1bOB")
        self.assertEqual(keys, ["UP", "LEFT", "q", "DOWN"])

    def test_poll_keys_waits_only_for_first_read(self) -> None:
        keys, fake = self._poll(b"", timeout=0.25)
        self.assertEqual(keys, [])
        self.assertEqual(fake.timeouts, [0.25])

    def test_poll_keys_ctrl_c_interrupts(self) -> None:
        with self.assertRaises(KeyboardInterrupt):
            self._poll(b"\x03")

    def test_unknown_escape_sequence_ignored(self) -> None:
        keys, _ = self._poll(b"\x1b[5~x")
        self.assertEqual(keys, ["x"])

    def test_escape_sequence_table(self) -> None:
        decode = TerminalController._map_escape_sequence
        self.assertEqual(decode("\x1b[C"), "RIGHT")
        self.assertEqual(decode("\x1bOD"), "LEFT")
        self.assertIsNone(decode("\x1b[E"))
        self.assertIsNone(decode("\x1b[1;5A"))
        self.assertIsNone(decode("\x1b"))

    def test_size_query_failure_raises_setup_error(self) -> None:
        controller = TerminalController()
        stdout = MagicMock()
        stdout.fileno.return_value = 99
        with patch("sys.stdout", stdout), patch.object(terminal.os, "get_terminal_size", side_effect=OSError("no tty")):
            with self.assertRaises(TerminalSetupError):
                controller.size_tuple()

    def test_size_tuple(self) -> None:
        controller = TerminalController()
        stdout = MagicMock()
        stdout.fileno.return_value = 1
        with patch("sys.stdout", stdout), patch.object(
            terminal.os, "get_terminal_size", return_value=terminal.os.terminal_size((80, 24))
        ):
            self.assertEqual(controller.size_tuple(), (80, 24))


if __name__ == "__main__":
    unittest.main()
