"""Terminal interface using Blessed for display and Curtsies for input."""

import logging
import sys
from typing import NamedTuple, Optional

import blessed

from .constants import EditorConstants
from .keyboard import KeyboardHandler, KeyEvent
from .model import Position

logger = logging.getLogger(__name__)


class Size(NamedTuple):
    width: int
    height: int


class TerminalInterface:
    """Handles terminal I/O using Blessed.

    Use as a context manager: entering switches to the fullscreen buffer and
    raw input, leaving restores the terminal on every exit path.
    """

    def __init__(self, terminal: Optional[blessed.Terminal] = None):
        """Initialize with a terminal instance (or create one)."""
        self.term = terminal or blessed.Terminal()
        self.keyboard = KeyboardHandler(self)
        self.is_fullscreen = False
        self._curtsies_input: Optional[object] = None
        self._saved_termios = None
        # Output for the current frame, written on flush()
        self._pending: list[str] = []

    def __enter__(self) -> "TerminalInterface":
        self.setup()
        return self

    def __exit__(self, exc_type, exc, tb):
        self.cleanup()
        return False

    def setup(self):
        """Enter fullscreen mode and raw keyboard input.

        Raises:
            OSError: if raw input cannot be initialized.
        """
        import termios
        from curtsies import Input

        self.write(self.term.enter_fullscreen + self.term.clear)
        self.flush()
        self.is_fullscreen = True
        try:
            self._curtsies_input = Input(keynames='curtsies')
            self._curtsies_input.__enter__()
        except termios.error as e:
            # __exit__ never runs when __enter__ raises
            self._curtsies_input = None
            self.cleanup()
            raise OSError(f"could not enter raw mode: {e}") from e
        except BaseException:
            self._curtsies_input = None
            self.cleanup()
            raise
        self._disable_flow_control()
        logger.debug("Terminal entered raw mode")

    def _disable_flow_control(self):
        """Let Ctrl-S and Ctrl-Q through instead of XOFF/XON."""
        import termios
        try:
            self._saved_termios = termios.tcgetattr(sys.stdin)
            new_settings = list(self._saved_termios)
            new_settings[0] &= ~(termios.IXON | termios.IXOFF)
            termios.tcsetattr(sys.stdin, termios.TCSANOW, new_settings)
        except (termios.error, OSError) as e:
            logger.warning(f"Could not disable flow control: {e}")
            self._saved_termios = None

    def cleanup(self):
        """Exit fullscreen mode and restore terminal."""
        if self._saved_termios is not None:
            import termios
            try:
                termios.tcsetattr(sys.stdin, termios.TCSANOW, self._saved_termios)
            except (termios.error, OSError) as e:
                logger.warning(f"Could not restore terminal settings: {e}")
            self._saved_termios = None
        if self._curtsies_input is not None:
            try:
                self._curtsies_input.__exit__(None, None, None)
            finally:
                self._curtsies_input = None
        if self.is_fullscreen:
            self._pending.clear()
            self.write(self.term.exit_fullscreen + self.term.normal_cursor)
            self.flush()
            self.is_fullscreen = False
        logger.debug("Terminal restored")

    def get_key(self) -> Optional[str]:
        """Block for the next keypress and return its curtsies name.

        Raises:
            OSError: if raw input has not been set up.
        """
        if self._curtsies_input is None:
            raise OSError("terminal input is not initialized")
        return str(next(self._curtsies_input))

    def read_key(self) -> KeyEvent:
        """Block until a key event arrives."""
        while True:
            event = self.keyboard.get_key_event()
            if event is not None:
                return event

    def size(self) -> Size:
        """Size of the text area; the bottom rows hold the status and message bars."""
        return Size(self.term.width, max(0, self.term.height - EditorConstants.RESERVED_ROWS))

    def write(self, text: str):
        self._pending.append(text)

    def write_line(self, text: str):
        """Write text and move to the start of the next row."""
        self.write(text + '\r\n')

    def clear_screen(self):
        self.write(self.term.clear)

    def clear_current_line(self):
        self.write(self.term.clear_eol)

    def cursor_position(self, position: Position):
        self.write(self.term.move_xy(position.x, position.y))

    def cursor_hide(self):
        self.write(self.term.hide_cursor)

    def cursor_show(self):
        self.write(self.term.normal_cursor)

    def set_bg_color(self, rgb: tuple[int, int, int]):
        self.write(self.term.on_color_rgb(*rgb))

    def set_fg_color(self, rgb: tuple[int, int, int]):
        self.write(self.term.color_rgb(*rgb))

    def reset_colors(self):
        self.write(self.term.normal)

    def flush(self):
        """Write the buffered frame to the terminal."""
        stream = self.term.stream or sys.__stdout__
        stream.write(''.join(self._pending))
        stream.flush()
        self._pending.clear()
