import io

import blessed
import pytest

from typotamer.config import EditorConfig
from typotamer.editor import Editor
from typotamer.keyboard import KeyEvent
from typotamer.model import Document, Row
from typotamer.terminal import Size, TerminalInterface


class FakeTerminal(TerminalInterface):
    """Terminal with a fixed size and scripted key events.

    Output goes through the real drawing code into an unstyled blessed
    terminal writing to a StringIO.
    """

    def __init__(self, width=80, height=24, keys=()):
        super().__init__(blessed.Terminal(stream=io.StringIO(), force_styling=None))
        self._width = width
        self._height = height
        self.keys = list(keys)
        self.setup_calls = 0
        self.cleanup_calls = 0
        self.frames = 0

    def setup(self):
        self.setup_calls += 1

    def cleanup(self):
        self.cleanup_calls += 1

    def size(self):
        return Size(self._width, max(0, self._height - 2))

    def read_key(self):
        if not self.keys:
            raise OSError("no more scripted input")
        return self.keys.pop(0)

    def flush(self):
        self.frames += 1
        super().flush()

    @property
    def output(self):
        return self.term.stream.getvalue()


def _keys_for(text):
    return [KeyEvent.special('enter') if ch == '\n' else KeyEvent.char(ch) for ch in text]


@pytest.fixture
def keys_for():
    """Key events for typing text, with a newline as Enter."""
    return _keys_for


@pytest.fixture
def make_editor():
    """Factory for editors over an in-memory document and a fake terminal."""

    def factory(rows=None, keys=(), width=80, height=24, file_name=None, config=None):
        terminal = FakeTerminal(width=width, height=height, keys=keys)
        editor = Editor(config or EditorConfig(), terminal=terminal)
        if rows is not None:
            editor.document = Document([Row(r) for r in rows], file_name=file_name)
        return editor

    return factory
