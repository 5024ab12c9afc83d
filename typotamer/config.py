"""Startup configuration passed into the editor."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Sequence

from .constants import EditorConstants


@dataclass
class EditorConfig:
    """Everything the editor needs to know at startup.

    Built once from the command line; the editor never reads sys.argv or
    the environment itself.
    """

    file_name: Optional[str] = None
    quit_times: int = EditorConstants.QUIT_TIMES
    status_timeout: float = EditorConstants.STATUS_MESSAGE_TIMEOUT

    @classmethod
    def from_args(cls, args: Sequence[str]) -> "EditorConfig":
        """Build a config from positional arguments (program name excluded).

        The first argument, if any, is the file to open; extra arguments
        are ignored.
        """
        return cls(file_name=args[0] if args else None)
