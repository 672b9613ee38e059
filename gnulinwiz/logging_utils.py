from __future__ import annotations

import logging
from pathlib import Path
from typing import List, Optional

from .lib.env import PATHS

DEFAULT_LOG_PATH = PATHS.log_default
FALLBACK_LOG_NAME = "gnulinwiz.log"

FILE_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"
CONSOLE_FORMAT = "%(levelname)s: %(message)s"

_CONFIGURED_ATTR = "_gnulinwiz_log_path"


def _open_log_file(candidates: List[Path]) -> Optional[logging.FileHandler]:
    for path in candidates:
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            return logging.FileHandler(path)
        except OSError:
            continue
    return None


def configure_logging(
    log_path: str = DEFAULT_LOG_PATH,
    *,
    verbose: bool = False,
    also_console: bool = True,
) -> Optional[str]:
    """Send wizard logs to a file and, optionally, the console.

    The file gets every command line and, with ``verbose``, the captured
    stdout/stderr of each command (DEBUG). The console stays at INFO so the
    operator sees progress without command output.

    A normal user usually cannot write to /var/log; the log then goes to
    ./gnulinwiz.log. If neither is writable, logging is console-only.

    Returns the log file in use, or None when there is none.
    """

    root = logging.getLogger()
    if hasattr(root, _CONFIGURED_ATTR):
        return getattr(root, _CONFIGURED_ATTR)

    file_level = logging.DEBUG if verbose else logging.INFO
    root.setLevel(file_level)

    requested = Path(log_path)
    file_handler = _open_log_file([requested, Path.cwd() / FALLBACK_LOG_NAME])
    chosen: Optional[str] = None
    if file_handler is not None:
        file_handler.setLevel(file_level)
        file_handler.setFormatter(logging.Formatter(fmt=FILE_FORMAT, datefmt="%Y-%m-%dT%H:%M:%S%z"))
        root.addHandler(file_handler)
        chosen = file_handler.baseFilename

    if also_console or file_handler is None:
        console = logging.StreamHandler()
        console.setLevel(logging.INFO)
        console.setFormatter(logging.Formatter(fmt=CONSOLE_FORMAT))
        root.addHandler(console)

    setattr(root, _CONFIGURED_ATTR, chosen)

    log = logging.getLogger(__name__)
    if chosen is None:
        log.warning("No writable log file (tried %s and ./%s); logging to console only", log_path, FALLBACK_LOG_NAME)
    else:
        log.info("Logging initialized (requested=%s, actual=%s, verbose=%s)", log_path, chosen, verbose)
    return chosen
