"""TypoTamer CLI entry point.

Allows running via `python -m typotamer` and provides the console script
defined in `pyproject.toml`.
"""

from __future__ import annotations

import logging
import os
import sys
from typing import Mapping, Optional

from .version import get_version_string

logger = logging.getLogger(__name__)

LOG_FILE_ENV = "TYPOTAMER_LOG_FILE"
LOG_LEVEL_ENV = "TYPOTAMER_LOG_LEVEL"


def configure_logging(environ: Optional[Mapping[str, str]] = None) -> None:
    """Send log records to a file when TYPOTAMER_LOG_FILE is set.

    The editor owns the screen, so nothing is ever logged to the console.
    """
    environ = os.environ if environ is None else environ
    package_logger = logging.getLogger("typotamer")
    log_file = environ.get(LOG_FILE_ENV)
    if not log_file:
        package_logger.addHandler(logging.NullHandler())
        return
    handler = logging.FileHandler(log_file, encoding="utf-8")
    handler.setFormatter(logging.Formatter("%(asctime)s %(levelname)s %(name)s: %(message)s"))
    package_logger.addHandler(handler)
    level = environ.get(LOG_LEVEL_ENV, "INFO").upper()
    package_logger.setLevel(getattr(logging, level, logging.INFO))


def main(argv: Optional[list[str]] = None) -> int:
    # Very small arg parsing: --version, or an optional filename
    args = sys.argv[1:] if argv is None else argv
    if args and args[0] in ("--version", "-V"):
        print(get_version_string())
        return 0

    configure_logging()

    # Lazy import to avoid importing UI deps for --version
    from .config import EditorConfig
    from .editor import Editor

    editor = Editor(EditorConfig.from_args(args))
    try:
        editor.run()
    except KeyboardInterrupt:
        return 130
    except OSError as e:
        # Terminal has already been restored by the editor's context manager
        logger.exception("Fatal terminal error")
        print(f"typotamer: {e}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":  # pragma: no cover
    sys.exit(main())
