"""Text buffer: positions, rows and the document that owns them."""

from __future__ import annotations

import logging
import os
import shutil
import tempfile
from dataclasses import dataclass
from typing import Iterator, Optional

from .constants import EditorConstants

logger = logging.getLogger(__name__)


def saturating_sub(a: int, b: int) -> int:
    """Subtract without going below zero."""
    return a - b if a > b else 0


def _match_permissions(temp_filename: str, filename: str):
    """Give the temp file the mode the saved file should end up with.

    An existing file keeps its mode; a new one gets the umask default.
    """
    if os.path.exists(filename):
        shutil.copymode(filename, temp_filename)
    else:
        umask = os.umask(0)
        os.umask(umask)
        os.chmod(temp_filename, 0o666 & ~umask)


@dataclass
class Position:
    """A (column, row) coordinate in document or screen space."""
    x: int = 0
    y: int = 0

    def __sub__(self, other: "Position") -> "Position":
        return Position(saturating_sub(self.x, other.x), saturating_sub(self.y, other.y))


class MissingFileNameError(OSError):
    """Raised when saving a document that has no file name."""


class Row:
    """A single line of text addressed by character offsets."""

    def __init__(self, string: str = ""):
        self._string = string

    def __len__(self) -> int:
        return len(self._string)

    def __eq__(self, other):
        if isinstance(other, Row):
            return self._string == other._string
        return NotImplemented

    __hash__ = None

    def __repr__(self):
        return f"Row({self._string!r})"

    @property
    def string(self) -> str:
        return self._string

    def render(self, start: int, end: int) -> str:
        """Return the characters in [start, end), clamped to the row."""
        end = min(end, len(self._string))
        start = min(start, end)
        return self._string[start:end]

    def insert(self, index: int, ch: str) -> None:
        index = min(max(index, 0), len(self._string))
        self._string = self._string[:index] + ch + self._string[index:]

    def delete(self, index: int) -> bool:
        if index < 0 or index >= len(self._string):
            return False
        self._string = self._string[:index] + self._string[index + 1:]
        return True

    def append(self, other: "Row") -> None:
        self._string += other._string

    def split(self, index: int) -> "Row":
        """Truncate this row at index and return the tail as a new row."""
        index = min(max(index, 0), len(self._string))
        tail = Row(self._string[index:])
        self._string = self._string[:index]
        return tail

    def find(self, query: str, start: int = 0) -> Optional[int]:
        if not query or start > len(self._string):
            return None
        index = self._string.find(query, max(start, 0))
        return index if index >= 0 else None


class Document:
    """Ordered rows of text plus the file they belong to.

    The dirty flag is raised by insert and delete and lowered only by a
    successful save.
    """

    def __init__(self, rows: Optional[list[Row]] = None, file_name: Optional[str] = None):
        self.rows: list[Row] = rows if rows is not None else []
        self.file_name = file_name
        self._dirty = False

    @classmethod
    def open(cls, path: str) -> "Document":
        """Load a UTF-8 file, one row per line.

        Raises:
            OSError: if the file cannot be read.
        """
        rows = []
        with open(path, 'r', encoding='utf-8') as f:
            for line in f:
                rows.append(Row(line.rstrip('\n')))
        logger.debug(f"Opened {path} with {len(rows)} rows")
        return cls(rows, file_name=path)

    def __len__(self) -> int:
        return len(self.rows)

    def __iter__(self) -> Iterator[Row]:
        return iter(self.rows)

    def len(self) -> int:
        return len(self.rows)

    def is_empty(self) -> bool:
        return not self.rows

    def is_dirty(self) -> bool:
        return self._dirty

    def row(self, index: int) -> Optional[Row]:
        if 0 <= index < len(self.rows):
            return self.rows[index]
        return None

    def insert(self, at: Position, ch: str) -> None:
        if at.y > len(self.rows):
            return
        self._dirty = True
        if ch == '\n':
            self._insert_newline(at)
            return
        if at.y == len(self.rows):
            self.rows.append(Row())
        self.rows[at.y].insert(at.x, ch)

    def _insert_newline(self, at: Position) -> None:
        if at.y == len(self.rows):
            self.rows.append(Row())
            return
        tail = self.rows[at.y].split(at.x)
        self.rows.insert(at.y + 1, tail)

    def delete(self, at: Position) -> None:
        if at.y >= len(self.rows):
            return
        row = self.rows[at.y]
        if at.x >= len(row):
            if at.y + 1 < len(self.rows):
                row.append(self.rows.pop(at.y + 1))
                self._dirty = True
        elif row.delete(at.x):
            self._dirty = True

    def find(self, query: str, at: Optional[Position] = None) -> Optional[Position]:
        """Return the first match of query at or after ``at``.

        Search runs forward only and stops at the end of the document.
        """
        if not query:
            return None
        at = at or Position()
        for y in range(at.y, len(self.rows)):
            start = at.x if y == at.y else 0
            x = self.rows[y].find(query, start)
            if x is not None:
                return Position(x, y)
        return None

    def save(self) -> None:
        """Write all rows to file_name atomically.

        Raises:
            MissingFileNameError: if no file name is set.
            OSError: if the file cannot be written.
        """
        if not self.file_name:
            raise MissingFileNameError("document has no file name")

        filename = self.file_name
        # Temp file in the target directory keeps os.replace on one filesystem
        dir_name = os.path.dirname(filename) or '.'
        temp_filename = None
        try:
            with tempfile.NamedTemporaryFile(mode='w', encoding='utf-8', newline='\n',
                                             dir=dir_name, prefix=EditorConstants.ATOMIC_SAVE_PREFIX,
                                             suffix=EditorConstants.ATOMIC_SAVE_SUFFIX,
                                             delete=False) as temp_file:
                temp_filename = temp_file.name
                for row in self.rows:
                    temp_file.write(row.string)
                    temp_file.write('\n')
                temp_file.flush()
                os.fsync(temp_file.fileno())
            _match_permissions(temp_filename, filename)
            os.replace(temp_filename, filename)
        except OSError:
            if temp_filename and os.path.exists(temp_filename):
                os.remove(temp_filename)
            raise

        self._dirty = False
        logger.debug(f"Saved {len(self.rows)} rows to {filename}")
