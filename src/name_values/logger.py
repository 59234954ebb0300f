import logging
from pathlib import Path

FORMAT = "%(asctime)s.%(msecs)03d - [%(levelname)s] %(module)s.%(funcName)s(%(lineno)d): %(message)s"
LOG_FORMATTER = logging.Formatter(datefmt="%Y-%m-%d %H:%M:%S", fmt=FORMAT)


def set_logging_level(level):
    """
    Set the logging level for name_values.

    Args:
        level (str | int): The logging level to set, e.g. 'DEBUG' or 'WARNING'.

    """
    logger.setLevel(level)


def enable_logging(filename: str | Path | None = None) -> logging.Handler:
    """
    Send name_values records to stderr, or to *filename*, in the package format.

    Nothing is emitted until this is called; the application's own logging
    configuration still receives records through propagation.

    Args:
        filename (str | Path | None): Log file. ``None`` logs to stderr.

    Returns:
        logging.Handler: The attached handler, so it can be removed again.

    """
    handler = logging.StreamHandler() if filename is None else logging.FileHandler(filename)
    handler.setFormatter(LOG_FORMATTER)
    logger.addHandler(handler)
    return handler


def _create_logger(name: str):
    new_logger = logging.getLogger(name)
    new_logger.addHandler(logging.NullHandler())
    return new_logger


logger = _create_logger("name_values")
set_logging_level("WARNING")
