"""Command pattern implementation for editor actions."""

from abc import ABC, abstractmethod
from typing import Dict, Tuple, Optional, TYPE_CHECKING
from .keyboard import KeyType

if TYPE_CHECKING:
    from .editor import Editor
    from .keyboard import KeyEvent


class EditorCommand(ABC):
    """Base class for editor commands."""

    @abstractmethod
    def execute(self, editor: 'Editor', key_event: 'KeyEvent') -> None:
        """Execute the command.

        Args:
            editor: Editor instance
            key_event: The key event that triggered this command
        """
        pass


class MoveCursorCommand(EditorCommand):
    """Cursor movement; never touches the document."""

    def execute(self, editor, key_event):
        editor.move_cursor(key_event.value)


class InsertCharCommand(EditorCommand):
    def execute(self, editor, key_event):
        char = key_event.value
        # Filter out control characters other than tab
        if key_event.is_printable() or char == '\t':
            editor.document.insert(editor.cursor_position, char)
            editor.move_cursor('right')


class InsertNewlineCommand(EditorCommand):
    def execute(self, editor, key_event):
        editor.document.insert(editor.cursor_position, '\n')
        editor.move_cursor('right')


class DeleteCharCommand(EditorCommand):
    def execute(self, editor, key_event):
        editor.document.delete(editor.cursor_position)


class BackspaceCommand(EditorCommand):
    """Delete the character before the cursor by stepping left, then deleting."""

    def execute(self, editor, key_event):
        position = editor.cursor_position
        if position.x > 0 or position.y > 0:
            editor.move_cursor('left')
            editor.document.delete(editor.cursor_position)


class QuitCommand(EditorCommand):
    def execute(self, editor, key_event):
        editor.request_quit()


class SaveCommand(EditorCommand):
    def execute(self, editor, key_event):
        editor.save()


class FindCommand(EditorCommand):
    def execute(self, editor, key_event):
        editor.search()


class CommandRegistry:
    """Registry mapping key combinations to commands."""

    def __init__(self):
        self._commands: Dict[Tuple[KeyType, str], EditorCommand] = {}
        self._insert_char = InsertCharCommand()
        self._setup_default_commands()

    def _setup_default_commands(self):
        """Set up the default command mappings."""
        # Movement commands
        move = MoveCursorCommand()
        for name in ('left', 'right', 'up', 'down', 'home', 'end', 'page_up', 'page_down'):
            self.register((KeyType.SPECIAL, name), move)

        # Editing commands
        self.register((KeyType.SPECIAL, 'backspace'), BackspaceCommand())
        self.register((KeyType.SPECIAL, 'delete'), DeleteCharCommand())
        self.register((KeyType.SPECIAL, 'enter'), InsertNewlineCommand())

        # System commands
        self.register((KeyType.CTRL, 'q'), QuitCommand())
        self.register((KeyType.CTRL, 's'), SaveCommand())
        self.register((KeyType.CTRL, 'f'), FindCommand())

    def register(self, key: Tuple[KeyType, str], command: EditorCommand):
        """Register a command for a key combination."""
        self._commands[key] = command

    def get_command(self, key_type: KeyType, value: str) -> Optional[EditorCommand]:
        """Get the command for a key combination."""
        command = self._commands.get((key_type, value))
        if command is None and key_type == KeyType.REGULAR:
            return self._insert_char
        return command

    def execute(self, editor: 'Editor', key_event: 'KeyEvent') -> bool:
        """Execute the command bound to a key event.

        Returns:
            True if a command was found; unbound keys are ignored
        """
        command = self.get_command(key_event.key_type, key_event.value)
        if command is None:
            return False
        command.execute(editor, key_event)
        return True
