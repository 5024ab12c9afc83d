"""Per-keystroke callbacks for the editor's prompt loop."""

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

from .model import Position

if TYPE_CHECKING:
    from .editor import Editor
    from .keyboard import KeyEvent


class PromptCallback(ABC):
    """Observes the prompt input after every keystroke that doesn't end it."""

    @abstractmethod
    def on_keystroke(self, editor: 'Editor', key_event: 'KeyEvent', query: str) -> None:
        """Handle one keystroke.

        Args:
            editor: Editor running the prompt
            key_event: The key just pressed
            query: The prompt input so far
        """
        pass


class NoopCallback(PromptCallback):
    """Used by save-as, which only needs the final answer."""

    def on_keystroke(self, editor, key_event, query):
        pass


class SearchCallback(PromptCallback):
    """Moves the cursor to the first match as the query is typed."""

    def __init__(self, origin: Position):
        self.origin = Position(origin.x, origin.y)

    def on_keystroke(self, editor, key_event, query):
        position = editor.document.find(query, self.origin)
        if position is not None:
            editor.cursor_position = position
            editor.scroll()
