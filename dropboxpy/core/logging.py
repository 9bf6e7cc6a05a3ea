"""Logging utilities for dropboxpy modules."""

import logging
from typing import Optional

ROOT_LOGGER = 'dropboxpy'

DEFAULT_FORMAT = '%(asctime)s %(levelname)-8s %(name)s: %(message)s'
DEBUG_FORMAT = '%(asctime)s %(levelname)-8s %(name)s [%(filename)s:%(lineno)d]: %(message)s'


def get_logger(name: Optional[str] = None) -> logging.Logger:
    """Get a logger in the dropboxpy namespace.

    'upload.chunk' and 'dropboxpy.upload.chunk' name the same logger.
    Loggers propagate to the root logger, so basicConfig() is enough to
    see their output. Until the root logger has handlers the package
    logger only lets warnings through.

    Args:
        name: Logger name, with or without the 'dropboxpy.' prefix

    Returns:
        Logger instance
    """
    if not name:
        name = ROOT_LOGGER
    elif name != ROOT_LOGGER and not name.startswith(ROOT_LOGGER + '.'):
        name = f"{ROOT_LOGGER}.{name}"

    package_logger = logging.getLogger(ROOT_LOGGER)
    if not logging.getLogger().handlers and package_logger.level == logging.NOTSET:
        package_logger.setLevel(logging.WARNING)

    logger = logging.getLogger(name)
    logger.propagate = True
    return logger


def configure_logging(
    level: int = logging.INFO,
    log_file: Optional[str] = None,
    enable_console: bool = True
) -> logging.Logger:
    """
    Attach handlers to the package logger.

    Handlers added by a previous call are replaced. At DEBUG level records
    include the source file and line.

    Args:
        level: Logging level for all dropboxpy loggers
        log_file: Also append records to this file
        enable_console: Write records to stderr

    Returns:
        The package logger
    """
    logger = logging.getLogger(ROOT_LOGGER)
    for handler in list(logger.handlers):
        if getattr(handler, '_dropboxpy', False):
            logger.removeHandler(handler)
            handler.close()

    formatter = logging.Formatter(DEBUG_FORMAT if level <= logging.DEBUG else DEFAULT_FORMAT)
    handlers = []
    if enable_console:
        handlers.append(logging.StreamHandler())
    if log_file:
        handlers.append(logging.FileHandler(log_file, encoding='utf-8'))

    for handler in handlers:
        handler._dropboxpy = True
        handler.setFormatter(formatter)
        logger.addHandler(handler)

    logger.setLevel(level)
    return logger
