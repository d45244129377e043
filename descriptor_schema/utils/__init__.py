"""
Utility functions and helpers.

Components:
    - setup_logging: Route the package's log records through Rich

Example:
    ```python
    from descriptor_schema.utils import setup_logging

    setup_logging(level="DEBUG")
    ```
"""

import logging
from typing import Union

from rich.logging import RichHandler

PACKAGE_LOGGER = "descriptor_schema"


def setup_logging(level: Union[int, str] = logging.WARNING) -> logging.Logger:
    """
    Configure the package logger with a Rich handler.

    Calling this again replaces the handler instead of adding a second one.

    Args:
        level: Logging level name or number

    Returns:
        logging.Logger: The configured package logger
    """
    logger = logging.getLogger(PACKAGE_LOGGER)
    for handler in list(logger.handlers):
        if isinstance(handler, RichHandler):
            logger.removeHandler(handler)

    handler = RichHandler(show_path=False, rich_tracebacks=True)
    handler.setFormatter(logging.Formatter("%(name)s: %(message)s"))
    logger.addHandler(handler)
    logger.setLevel(level)
    return logger


__all__ = ["setup_logging", "PACKAGE_LOGGER"]
