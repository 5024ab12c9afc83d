"""Main editor controller: key dispatch, cursor and viewport, rendering."""

import logging
import time
from typing import Optional

from .commands import CommandRegistry
from .config import EditorConfig
from .constants import EditorConstants
from .model import Document, Position, Row, saturating_sub
from .prompt import NoopCallback, PromptCallback, SearchCallback
from .terminal import TerminalInterface
from .version import get_version

logger = logging.getLogger(__name__)


class StatusMessage:
    """Message bar text, shown until it is older than the status timeout."""

    def __init__(self, text: str, timestamp: Optional[float] = None):
        self.text = text
        self.time = time.monotonic() if timestamp is None else timestamp

    def is_fresh(self, timeout: float, now: Optional[float] = None) -> bool:
        now = time.monotonic() if now is None else now
        return now - self.time < timeout


class Editor:
    """Text editor application controller.

    Owns the document, the cursor (document coordinates) and the viewport
    offset (the document coordinate shown in the top-left cell).
    """

    def __init__(self, config: Optional[EditorConfig] = None,
                 terminal: Optional[TerminalInterface] = None):
        """Initialize the editor and load the startup file, if any."""
        self.config = config or EditorConfig()
        self.terminal = terminal or TerminalInterface()
        self.command_registry = CommandRegistry()
        self.should_quit = False
        self.cursor_position = Position()
        self.offset = Position()
        self.quit_times = self.config.quit_times
        self.version = get_version()

        status = EditorConstants.HELP_MESSAGE
        self.document = Document()
        if self.config.file_name:
            try:
                self.document = Document.open(self.config.file_name)
            except OSError as e:
                logger.warning(f"Could not open {self.config.file_name}: {e}")
                status = EditorConstants.OPEN_FAILED_MESSAGE.format(self.config.file_name)
        self.status_message = StatusMessage(status)

    def set_status(self, text: str):
        self.status_message = StatusMessage(text)

    def run(self):
        """Run the main editor loop until the user quits.

        Raises:
            OSError: on terminal failure; the terminal is restored first.
        """
        with self.terminal:
            while True:
                self.refresh_screen()
                if self.should_quit:
                    break
                self.process_key()
        logger.info("Editor quit")

    def process_key(self):
        """Read one key, dispatch it, then keep the cursor in view."""
        key_event = self.terminal.read_key()
        self.command_registry.execute(self, key_event)
        self.scroll()

    def request_quit(self):
        """Handle Ctrl-Q.

        With unsaved changes each press counts down; the editor quits once
        the countdown reaches zero. The countdown is never refilled.
        """
        if self.document.is_dirty() and self.quit_times > 0:
            self.quit_times -= 1
            if self.quit_times > 0:
                self.set_status(EditorConstants.QUIT_WARNING_MESSAGE.format(self.quit_times))
                return
        self.should_quit = True

    def save(self):
        """Handle Ctrl-S, asking for a file name if the document has none."""
        if not self.document.file_name:
            new_name = self.prompt(EditorConstants.SAVE_AS_PROMPT, NoopCallback())
            if new_name is None:
                self.set_status(EditorConstants.SAVE_ABORTED_MESSAGE)
                return
            self.document.file_name = new_name

        try:
            self.document.save()
        except OSError as e:
            logger.warning(f"Could not save {self.document.file_name}: {e}")
            self.set_status(EditorConstants.SAVE_FAILED_MESSAGE)
            return
        logger.info(f"Saved {self.document.file_name}")
        self.set_status(EditorConstants.SAVE_OK_MESSAGE)

    def search(self):
        """Handle Ctrl-F: incremental search forward from the cursor."""
        origin = Position(self.cursor_position.x, self.cursor_position.y)
        query = self.prompt(EditorConstants.SEARCH_PROMPT, SearchCallback(origin))
        if query is None:
            self.cursor_position = origin
            self.scroll()
            return

        position = self.document.find(query, origin)
        if position is None:
            self.set_status(EditorConstants.SEARCH_FAILED_MESSAGE.format(query))
        else:
            self.cursor_position = position
            self.scroll()

    def prompt(self, label: str, callback: PromptCallback) -> Optional[str]:
        """Read a line of input in the message bar.

        Enter commits, Escape cancels. The callback sees every keystroke
        that doesn't end the prompt.

        Returns:
            The entered text, or None if it is empty or was cancelled
        """
        result = ""
        while True:
            self.set_status(f"{label}{result}")
            self.refresh_screen()
            key_event = self.terminal.read_key()
            if key_event.is_special('backspace'):
                result = result[:-1]
            elif key_event.is_special('enter'):
                break
            elif key_event.is_special('escape'):
                result = ""
                break
            elif key_event.is_printable():
                result += key_event.value
            callback.on_keystroke(self, key_event, result)

        self.set_status("")
        return result or None

    def _row_width(self, y: int) -> int:
        row = self.document.row(y)
        return len(row) if row is not None else 0

    def move_cursor(self, direction: str):
        """Move the cursor without touching the document.

        The cursor may sit one row past the end of the document, where
        typing appends a new row.
        """
        terminal_height = self.terminal.size().height
        x, y = self.cursor_position.x, self.cursor_position.y
        height = len(self.document)
        width = self._row_width(y)

        if direction == 'up':
            y = saturating_sub(y, 1)
        elif direction == 'down':
            if y < height:
                y += 1
        elif direction == 'left':
            if x > 0:
                x -= 1
            elif y > 0:
                y -= 1
                x = self._row_width(y)
        elif direction == 'right':
            if x < width:
                x += 1
            elif y < height:
                y += 1
                x = 0
        elif direction == 'page_up':
            y = saturating_sub(y, terminal_height)
        elif direction == 'page_down':
            y = min(y + terminal_height, height)
        elif direction == 'home':
            x = 0
        elif direction == 'end':
            x = width

        # Snap to the end of a shorter row after a vertical move
        x = min(x, self._row_width(y))
        self.cursor_position = Position(x, y)

    def scroll(self):
        """Shift the viewport just enough to contain the cursor."""
        width, height = self.terminal.size()
        x, y = self.cursor_position.x, self.cursor_position.y
        offset = self.offset
        if y < offset.y:
            offset.y = y
        elif y >= offset.y + height:
            offset.y = saturating_sub(y, height) + 1
        if x < offset.x:
            offset.x = x
        elif x >= offset.x + width:
            offset.x = saturating_sub(x, width) + 1

    # Rendering

    def refresh_screen(self):
        """Redraw the whole frame and flush it to the terminal."""
        terminal = self.terminal
        terminal.cursor_hide()
        terminal.cursor_position(Position())
        if self.should_quit:
            terminal.clear_screen()
            terminal.write_line(EditorConstants.FAREWELL_MESSAGE)
        else:
            self.draw_rows()
            self.draw_status_bar()
            self.draw_message_bar()
            terminal.cursor_position(self.cursor_position - self.offset)
        terminal.cursor_show()
        terminal.flush()

    def render_row(self, row: Row) -> str:
        width = self.terminal.size().width
        return row.render(self.offset.x, self.offset.x + width)

    def welcome_message(self) -> str:
        width = self.terminal.size().width
        message = EditorConstants.WELCOME_MESSAGE.format(self.version)
        padding = saturating_sub(width, len(message)) // 2
        spaces = " " * saturating_sub(padding, 1)
        return f"{EditorConstants.FILLER}{spaces}{message}"[:width]

    def draw_rows(self):
        height = self.terminal.size().height
        for terminal_row in range(height):
            self.terminal.clear_current_line()
            row = self.document.row(terminal_row + self.offset.y)
            if row is not None:
                self.terminal.write_line(self.render_row(row))
            elif self.document.is_empty() and terminal_row == height // 3:
                self.terminal.write_line(self.welcome_message())
            else:
                self.terminal.write_line(EditorConstants.FILLER)

    def status_bar_text(self) -> str:
        """File name, line count, modified flag and a right-aligned row:col."""
        width = self.terminal.size().width
        file_name = EditorConstants.NO_NAME
        if self.document.file_name:
            file_name = self.document.file_name[:EditorConstants.FILE_NAME_WIDTH]
        modified = " (modified)" if self.document.is_dirty() else ""
        status = f"{file_name} - {len(self.document)} lines{modified}"
        line_indicator = f"{self.cursor_position.y + 1}:{self.cursor_position.x + 1}"
        padding = " " * saturating_sub(width, len(status) + len(line_indicator))
        return f"{status}{padding}{line_indicator}"[:width]

    def draw_status_bar(self):
        terminal = self.terminal
        terminal.clear_current_line()
        terminal.set_bg_color(EditorConstants.STATUS_BG_COLOR)
        terminal.set_fg_color(EditorConstants.STATUS_FG_COLOR)
        terminal.write(self.status_bar_text())
        terminal.reset_colors()
        terminal.write_line("")

    def message_bar_text(self) -> str:
        if not self.status_message.is_fresh(self.config.status_timeout):
            return ""
        return self.status_message.text[:self.terminal.size().width]

    def draw_message_bar(self):
        self.terminal.clear_current_line()
        self.terminal.write(self.message_bar_text())
