"""Application logger construction.

The server writes log lines to standard output, to a file, or to both.  Rather
than patching ``print`` or ``sys.stdout``, a single named logger is configured
here with one handler per sink and handed to the request handlers.

Module loggers created with ``logging.getLogger(__name__)`` inside the
``hairstudio`` package are children of this logger, so their records reach
the same sinks.

Usage
-----
::

    from hairstudio.core.config import config
    from hairstudio.core.logging_setup import build_logger

    logger = build_logger(config)
    logger.info(f"Server running on port {config.server_port}")
"""

from __future__ import annotations

import logging
import sys

from hairstudio.core.config import HairStudioConfig

LOGGER_NAME = "hairstudio"
LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def build_logger(config: HairStudioConfig, name: str = LOGGER_NAME) -> logging.Logger:
    """Configure and return the application logger.

    Calling this again replaces the handlers installed by the previous call,
    so the function is safe to use once per application instance (tests
    build several apps in one process).

    Args:
        config: Configuration providing ``log_level``, ``log_to_stdout``
            and ``log_file``.
        name: Logger name.  Defaults to the package root so module loggers
            propagate into it.

    Returns:
        The configured :class:`logging.Logger`.
    """
    logger = logging.getLogger(name)
    logger.setLevel(config.log_level)

    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    formatter = logging.Formatter(LOG_FORMAT)

    if config.log_to_stdout:
        stream_handler = logging.StreamHandler(sys.stdout)
        stream_handler.setFormatter(formatter)
        logger.addHandler(stream_handler)

    if config.log_file is not None:
        config.log_file.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(config.log_file, mode="a", encoding="utf-8")
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

    # No sink configured: keep records from falling through to the root logger.
    if not logger.handlers:
        logger.addHandler(logging.NullHandler())

    logger.propagate = False
    return logger
