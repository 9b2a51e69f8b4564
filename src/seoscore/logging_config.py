"""Logging setup for seoscore.

Library modules only create ``logging.getLogger(__name__)`` loggers; an
application calls ``setup_logging`` once to attach handlers.
"""

import logging
import sys
from pathlib import Path
from typing import List, Optional

DEFAULT_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

# Third-party loggers that are chatty at INFO/DEBUG
NOISY_LOGGERS = ("urllib3", "playwright", "asyncio")


def setup_logging(
    level: Optional[str] = None,
    log_file: Optional[str] = None,
    format_string: Optional[str] = None
) -> None:
    """Configure the root logger for an analysis run.

    Args:
        level: Log level name; falls back to LOG_LEVEL from the environment
        log_file: Optional path; parent directories are created
        format_string: Optional custom format string
    """
    if level is None:
        from seoscore.config import settings
        level = settings.LOG_LEVEL

    handlers: List[logging.Handler] = [logging.StreamHandler(sys.stdout)]

    if log_file:
        Path(log_file).parent.mkdir(parents=True, exist_ok=True)
        handlers.append(logging.FileHandler(log_file))

    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format=format_string or DEFAULT_FORMAT,
        handlers=handlers,
        force=True,
    )

    for name in NOISY_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)


def get_logger(name: str) -> logging.Logger:
    """Return the logger for ``name`` (usually ``__name__``)."""
    return logging.getLogger(name)
