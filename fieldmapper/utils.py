import logging

from fieldmapper.core import config

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def get_logger(name: str) -> logging.Logger:
    """
    Get a module logger configured from LOG_LEVEL.

    The stream handler is attached once, to the top-level package logger
    ("fieldmapper" for "fieldmapper.features.mapping.engine"), which stops
    propagation so records are not emitted again by root handlers.

    Usage:
        log = get_logger(__name__)
    """
    package = logging.getLogger(name.split(".")[0])
    if not package.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        package.addHandler(handler)
        package.setLevel(config.LOG_LEVEL.upper())
        package.propagate = False
    return logging.getLogger(name)
