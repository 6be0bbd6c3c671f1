"""
Logging Configuration
=====================
Console and file logging setup for scripts that drive the engine.
Library modules only create loggers; they never configure handlers.
"""

import io
import logging
import sys
from typing import Optional

LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'


class UTF8StreamHandler(logging.StreamHandler):
    """Custom handler with UTF-8 encoding for Windows compatibility."""
    def __init__(self):
        if sys.platform == 'win32':
            sys.stdout = io.TextIOWrapper(
                sys.stdout.buffer,
                encoding='utf-8',
                errors='replace',
                line_buffering=True
            )
        super().__init__(sys.stdout)


def configure_logging(level: str = "INFO", log_file: Optional[str] = None) -> None:
    """
    Install the console handler and, when requested, a UTF-8 file handler.

    Args:
        level: Logging level name (DEBUG, INFO, WARNING...)
        log_file: Optional path of the log file
    """
    handlers = [UTF8StreamHandler()]
    if log_file:
        handlers.append(logging.FileHandler(log_file, encoding='utf-8'))

    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format=LOG_FORMAT,
        handlers=handlers,
        force=True
    )
