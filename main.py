#!/usr/bin/env python3
"""TypoTamer - a small terminal text editor.

Usage:
    python main.py [filename]

Controls:
    Arrow keys, Home/End, PageUp/PageDown: Navigate
    Ctrl-S: Save file (prompts for a name if needed)
    Ctrl-F: Incremental search
    Ctrl-Q: Quit (press repeatedly to discard unsaved changes)
    Type to insert text
    Backspace/Delete: Delete character
    Enter: Split line
"""

import sys
from typotamer.__main__ import main


if __name__ == "__main__":
    sys.exit(main())
