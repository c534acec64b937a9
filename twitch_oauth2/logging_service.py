# -*- coding: utf-8 -*-
"""Location: ./twitch_oauth2/logging_service.py
Copyright 2026
SPDX-License-Identifier: Apache-2.0

Logging setup.

Library modules only create module loggers (``logging.getLogger(__name__)``)
and never configure handlers themselves. Applications and the CLI call
:func:`configure_logging` to attach a console handler with a text or JSON
formatter, and optionally a rotating JSON file handler.
"""

# Standard
import logging
from logging.handlers import RotatingFileHandler
import os
from typing import Optional

# Third-Party
from pythonjsonlogger import jsonlogger

# First-Party
from twitch_oauth2.config import get_settings, Settings

LOGGER_NAME = "twitch_oauth2"

# Create a text formatter
text_formatter = logging.Formatter("%(asctime)s - %(name)s - %(levelname)s - %(message)s")

# Create a JSON formatter
json_formatter = jsonlogger.JsonFormatter("%(asctime)s %(name)s %(levelname)s %(message)s")

logging.getLogger(LOGGER_NAME).addHandler(logging.NullHandler())

# Handlers installed by configure_logging, replaced on reconfiguration
_handlers: list[logging.Handler] = []


def _get_file_handler(log_file: str) -> RotatingFileHandler:
    """Create the rotating JSON file handler.

    Args:
        log_file: Path of the log file. Its folder is created if needed.

    Returns:
        RotatingFileHandler: The file handler for JSON logging.
    """
    folder = os.path.dirname(log_file)
    if folder:
        os.makedirs(folder, exist_ok=True)
    handler = RotatingFileHandler(log_file, maxBytes=1024 * 1024, backupCount=5)
    handler.setFormatter(json_formatter)
    return handler


def configure_logging(settings: Optional[Settings] = None) -> logging.Logger:
    """Configure the library logger from settings.

    Calling this again replaces the handlers installed by a previous call.

    Args:
        settings: Settings to use, defaults to :func:`get_settings`.

    Returns:
        logging.Logger: The configured ``twitch_oauth2`` logger.

    Examples:
        >>> from twitch_oauth2.config import Settings
        >>> logger = configure_logging(Settings(log_level="DEBUG"))
        >>> logger.level == logging.DEBUG
        True
    """
    settings = settings or get_settings()
    logger = logging.getLogger(LOGGER_NAME)

    for handler in _handlers:
        logger.removeHandler(handler)
        handler.close()
    _handlers.clear()

    console = logging.StreamHandler()
    console.setFormatter(json_formatter if settings.log_format == "json" else text_formatter)
    _handlers.append(console)

    if settings.log_file:
        try:
            _handlers.append(_get_file_handler(settings.log_file))
        except OSError as e:
            logger.warning(f"Failed to initialize file logging: {e}")

    for handler in _handlers:
        logger.addHandler(handler)
    logger.setLevel(getattr(logging, settings.log_level))
    logger.propagate = False

    logger.debug(f"Logging configured: level={settings.log_level} format={settings.log_format}")
    return logger
