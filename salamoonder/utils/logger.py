"""
Logging Utilities
Handler setup for applications embedding the client.

The library only creates module loggers under "salamoonder" and never
installs handlers itself; call setup_logging() from your entry point.
"""

import logging
import sys
from pathlib import Path
from typing import Optional

LIBRARY_LOGGER = "salamoonder"

_FORMATS = {
    "json": (
        '{"time": "%(asctime)s", "level": "%(levelname)s", '
        '"logger": "%(name)s", "message": "%(message)s"}',
        None,
    ),
    "standard": (
        '%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        '%Y-%m-%d %H:%M:%S',
    ),
}


def setup_logging(
    level: str = "INFO",
    log_file: Optional[str] = None,
    format_type: str = "standard",
    logger_name: Optional[str] = None,
) -> logging.Logger:
    """
    Replace the handlers of a logger with a console handler and an
    optional file handler.

    Args:
        level: Log level (DEBUG, INFO, WARNING, ERROR)
        log_file: Optional file path for logging
        format_type: 'standard' or 'json'
        logger_name: Logger to configure; the root logger by default.
            Pass LIBRARY_LOGGER to touch only this client's records.

    Returns:
        The configured logger
    """
    log_level = getattr(logging, level.upper(), logging.INFO)
    fmt, datefmt = _FORMATS.get(format_type, _FORMATS["standard"])
    formatter = logging.Formatter(fmt, datefmt=datefmt)

    target = logging.getLogger(logger_name)
    target.setLevel(log_level)
    target.handlers = []

    handlers = [logging.StreamHandler(sys.stdout)]
    if log_file:
        Path(log_file).parent.mkdir(parents=True, exist_ok=True)
        handlers.append(logging.FileHandler(log_file))

    for handler in handlers:
        handler.setLevel(log_level)
        handler.setFormatter(formatter)
        target.addHandler(handler)

    # aiohttp access/client logs are noisy at DEBUG
    logging.getLogger('aiohttp').setLevel(logging.WARNING)
    logging.getLogger('asyncio').setLevel(logging.WARNING)

    return target


def setup_logging_from_config(config) -> logging.Logger:
    """Apply a LoggingConfig (see salamoonder.core.config)"""
    return setup_logging(
        level=config.level,
        log_file=config.file,
        format_type=config.format,
    )
