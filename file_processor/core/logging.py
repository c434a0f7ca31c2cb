import logging
import sys

ROOT_LOGGER = "file_processor"


def setup_logger(log_level: str = "INFO", name: str = ROOT_LOGGER) -> logging.Logger:
    """
    Configure and return the application logger.

    Component loggers obtained through get_component_logger are children of
    this logger and write through its handler.

    Args:
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        name: Name of the logger to configure

    Returns:
        Configured logger instance
    """
    level = getattr(logging, log_level.upper())

    logger = logging.getLogger(name)
    logger.setLevel(level)

    # Calling setup twice must not duplicate output
    logger.handlers.clear()

    handler = logging.StreamHandler(sys.stdout)
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter(
        fmt="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S"
    ))
    logger.addHandler(handler)

    return logger


def get_component_logger(component: str) -> logging.Logger:
    """Logger for one pipeline component, e.g. ``ingestion`` or ``api``."""
    return logging.getLogger(f"{ROOT_LOGGER}.{component}")
