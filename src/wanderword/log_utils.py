"""Logging setup shared by the CLI and the relay.

Logs are written to ~/.wanderword/debug.log for bug reports; a console
handler shows INFO and above.
"""

import logging
from pathlib import Path
from typing import Optional

from wanderword.settings import get_home_dir

LOG_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def get_log_file() -> Path:
    return get_home_dir() / "debug.log"


def configure_logging(
    log_file: Optional[Path] = None,
    console_level: int = logging.INFO,
) -> Path:
    """Configure the root logger with a debug file handler and a console handler.

    Existing root handlers are removed so repeated calls do not duplicate output.

    Args:
        log_file: Where to write the debug log (default: get_log_file())
        console_level: Minimum level shown on the console

    Returns:
        Path of the debug log file
    """
    log_file = Path(log_file) if log_file else get_log_file()
    log_file.parent.mkdir(parents=True, exist_ok=True)

    # Set up file handler with detailed format
    file_handler = logging.FileHandler(log_file, mode="a", encoding="utf-8")
    file_handler.setLevel(logging.DEBUG)
    file_handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT))

    # Configure root logger directly (basicConfig is a no-op if already configured)
    root_logger = logging.getLogger()
    root_logger.setLevel(logging.DEBUG)
    for h in root_logger.handlers[:]:
        root_logger.removeHandler(h)
        h.close()
    root_logger.addHandler(file_handler)

    console_handler = logging.StreamHandler()
    console_handler.setLevel(console_level)
    console_handler.setFormatter(logging.Formatter("%(message)s"))
    root_logger.addHandler(console_handler)

    # Keep HTTP client chatter out of the console
    for noisy in ("urllib3", "httpx", "httpcore"):
        logging.getLogger(noisy).setLevel(logging.WARNING)

    return log_file


def tail_log(log_file: Optional[Path] = None, lines: int = 20) -> list[str]:
    """Last ``lines`` lines of the debug log, or [] if it does not exist."""
    log_file = Path(log_file) if log_file else get_log_file()
    if not log_file.exists():
        return []
    with open(log_file, encoding="utf-8", errors="replace") as f:
        return f.readlines()[-lines:]
