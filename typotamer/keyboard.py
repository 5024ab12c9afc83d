"""Keyboard input handling using curtsies-style tokens."""

from typing import Optional
from dataclasses import dataclass
from enum import Enum


class KeyType(Enum):
    """Types of key events."""
    REGULAR = "regular"
    CTRL = "ctrl"
    SPECIAL = "special"


@dataclass
class KeyEvent:
    """Represents a parsed keyboard event."""
    key_type: KeyType
    value: str  # The base key (e.g., 'a', 'left', 'backspace')
    raw: str  # The raw key string from curtsies
    is_ctrl: bool = False

    @classmethod
    def char(cls, ch: str) -> "KeyEvent":
        return cls(key_type=KeyType.REGULAR, value=ch, raw=ch)

    @classmethod
    def ctrl(cls, letter: str) -> "KeyEvent":
        return cls(key_type=KeyType.CTRL, value=letter, raw=f"<Ctrl-{letter}>", is_ctrl=True)

    @classmethod
    def special(cls, name: str) -> "KeyEvent":
        return cls(key_type=KeyType.SPECIAL, value=name, raw=f"<{name.upper()}>")

    def is_special(self, name: str) -> bool:
        return self.key_type == KeyType.SPECIAL and self.value == name

    def is_printable(self) -> bool:
        """True for a single non-control character."""
        return (self.key_type == KeyType.REGULAR and len(self.value) == 1
                and self.value.isprintable())


# Named keys the editor understands; anything else is passed through as-is
SPECIAL_KEYS = {
    'left', 'right', 'up', 'down', 'home', 'end', 'enter', 'backspace',
    'delete', 'page_up', 'page_down', 'insert', 'escape',
}


class KeyboardHandler:
    """Turns curtsies key names into KeyEvent objects."""

    def __init__(self, terminal_interface):
        self.terminal = terminal_interface

    def get_key_event(self) -> Optional[KeyEvent]:
        """Block for the next key and parse it."""
        key = self.terminal.get_key()
        if not key:
            return None
        return self.parse_key(key)

    def parse_key(self, key) -> KeyEvent:
        """Parse a curtsies key name (or a raw character) into a KeyEvent.

        Args:
            key: curtsies event or string, e.g. '<LEFT>', '<Ctrl-q>', 'a'

        Returns:
            Parsed KeyEvent
        """
        key_str = str(key)

        if key_str.startswith('<') and key_str.endswith('>') and len(key_str) > 2:
            name = key_str[1:-1]
            lower = name.lower().replace('+', '-')
            parts = lower.split('-') if '-' in lower else [lower]
            mods = set(parts[:-1])
            base = parts[-1]
            # '<Ctrl-->' style tokens leave an empty base
            if not base and len(parts) > 1:
                base = '-'

            if base in ('pageup', 'page_up', 'ppage'):
                base = 'page_up'
            elif base in ('pagedown', 'page_down', 'npage'):
                base = 'page_down'
            elif base in ('esc', 'escape'):
                base = 'escape'
            elif base in ('del', 'delete'):
                base = 'delete'

            if not mods:
                if base in ('space', 'spacebar', 'spc'):
                    return KeyEvent.char(' ')
                if base == 'tab':
                    return KeyEvent.char('\t')
            if 'ctrl' in mods and len(base) == 1:
                # Ctrl-J / Ctrl-M are what the terminal sends for Enter
                if base in ('j', 'm'):
                    return KeyEvent(key_type=KeyType.SPECIAL, value='enter', raw=key_str)
                # Ctrl-H is the BS control code some terminals send for Backspace
                if base == 'h':
                    return KeyEvent(key_type=KeyType.SPECIAL, value='backspace', raw=key_str)
                return KeyEvent(key_type=KeyType.CTRL, value=base, raw=key_str, is_ctrl=True)
            if base in SPECIAL_KEYS:
                return KeyEvent(key_type=KeyType.SPECIAL, value=base, raw=key_str)
            return KeyEvent(key_type=KeyType.SPECIAL, value=lower, raw=key_str)

        if len(key_str) == 1:
            o = ord(key_str)
            if o in (10, 13):
                return KeyEvent(key_type=KeyType.SPECIAL, value='enter', raw=key_str)
            if o in (8, 127):
                return KeyEvent(key_type=KeyType.SPECIAL, value='backspace', raw=key_str)
            if o == 9:
                return KeyEvent.char('\t')
            if o == 27:
                return KeyEvent(key_type=KeyType.SPECIAL, value='escape', raw=key_str)
            if 1 <= o <= 26:  # Ctrl-A .. Ctrl-Z
                ch = chr(ord('a') + o - 1)
                return KeyEvent(key_type=KeyType.CTRL, value=ch, raw=key_str, is_ctrl=True)

        return KeyEvent(key_type=KeyType.REGULAR, value=key_str, raw=key_str)
