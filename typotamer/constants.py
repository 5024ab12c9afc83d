"""Constants and configuration defaults for the typotamer editor."""

class EditorConstants:
    """Central configuration constants for the editor."""

    # Quit confirmation
    QUIT_TIMES = 3  # Ctrl-Q presses needed to quit with unsaved changes

    # Status messages
    STATUS_MESSAGE_TIMEOUT = 5.0  # Seconds a status message stays on screen
    HELP_MESSAGE = "HELP: Ctrl-S = save | Ctrl-Q = quit | Ctrl-F = find"
    OPEN_FAILED_MESSAGE = "ERR: Could not open file: {}"
    QUIT_WARNING_MESSAGE = "WARNING!!! File has unsaved changes. Press Ctrl-Q {} more times to quit."
    SAVE_ABORTED_MESSAGE = "Save aborted."
    SAVE_OK_MESSAGE = "File saved successfully."
    SAVE_FAILED_MESSAGE = "Error writing file!"
    SEARCH_FAILED_MESSAGE = "Search for '{}' failed"

    # Prompts
    SAVE_AS_PROMPT = "Save as: "
    SEARCH_PROMPT = "Search: "

    # Screen layout
    RESERVED_ROWS = 2  # Status bar and message bar
    FILE_NAME_WIDTH = 20  # File name is truncated to this in the status bar
    NO_NAME = "[No Name]"
    FILLER = "~"
    WELCOME_MESSAGE = "TypoTamer -- version {}"
    FAREWELL_MESSAGE = "Goodbye!"

    # Status bar colors (RGB)
    STATUS_BG_COLOR = (239, 239, 0)
    STATUS_FG_COLOR = (63, 63, 63)

    # File operations
    ATOMIC_SAVE_PREFIX = "."  # Prefix for temporary save files
    ATOMIC_SAVE_SUFFIX = ".tmp"  # Suffix for temporary save files
