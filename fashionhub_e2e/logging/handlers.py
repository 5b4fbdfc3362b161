"""Logging handler setup for console and log files."""

import logging
import os
import sys
from pathlib import Path

from fashionhub_e2e.constants import TEST_RESULTS_DIR
from fashionhub_e2e.logging.formatters import LevelRoutingFilter, MarkerFormatter

LOG_FILE_NAME = "playwright.log"

ERROR_LOG_FILE_NAME = "errors.log"

_HANDLER_NAME_PREFIX = "fashionhub_e2e"

NOISY_LOGGERS = ["asyncio", "urllib3"]


def resolve_level(level: str | int | None = None) -> int:
    """Resolve a log level name, falling back to LOG_LEVEL then INFO.

    Parameters
    ----------
    level : str | int | None
        Level name ("debug", "INFO") or number

    Returns
    -------
    int
        Numeric logging level
    """
    if level is None:
        level = os.environ.get("LOG_LEVEL", "INFO")

    if isinstance(level, int):
        return level

    resolved = logging.getLevelName(level.strip().upper())
    return resolved if isinstance(resolved, int) else logging.INFO


def configure_logging(
    level: str | int | None = None, log_dir: Path | str = TEST_RESULTS_DIR
) -> logging.Logger:
    """Attach console and file handlers to the root logger.

    Parameters
    ----------
    level : str | int | None
        Root level; defaults to the LOG_LEVEL environment variable
    log_dir : Path | str
        Directory for playwright.log and errors.log

    Returns
    -------
    logging.Logger
        The configured root logger

    Notes
    -----
    Records below WARNING go to stdout, the rest to stderr. errors.log only
    receives ERROR and above. Handlers installed by an earlier call are
    replaced, so calling this twice does not duplicate output.
    """
    root = logging.getLogger()
    root.setLevel(resolve_level(level))

    for handler in list(root.handlers):
        if handler.get_name() and handler.get_name().startswith(_HANDLER_NAME_PREFIX):
            root.removeHandler(handler)
            handler.close()

    log_path = Path(log_dir)
    log_path.mkdir(parents=True, exist_ok=True)

    stdout_handler = logging.StreamHandler(sys.stdout)
    stdout_handler.addFilter(LevelRoutingFilter("stdout"))

    stderr_handler = logging.StreamHandler(sys.stderr)
    stderr_handler.addFilter(LevelRoutingFilter("stderr"))

    file_handler = logging.FileHandler(log_path / LOG_FILE_NAME, encoding="utf-8")

    error_handler = logging.FileHandler(log_path / ERROR_LOG_FILE_NAME, encoding="utf-8")
    error_handler.setLevel(logging.ERROR)

    handlers = {
        "stdout": stdout_handler,
        "stderr": stderr_handler,
        "file": file_handler,
        "errors": error_handler,
    }

    for name, handler in handlers.items():
        handler.set_name(f"{_HANDLER_NAME_PREFIX}.{name}")
        handler.setFormatter(MarkerFormatter())
        root.addHandler(handler)

    for noisy in NOISY_LOGGERS:
        logging.getLogger(noisy).setLevel(logging.WARNING)

    return root
