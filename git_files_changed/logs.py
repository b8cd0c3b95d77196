from __future__ import annotations

import logging

LOGGER_NAME = "git_files_changed"


def get_logger() -> logging.Logger:
    return logging.getLogger(LOGGER_NAME)


def configure_logging(verbose: bool = False) -> logging.Logger:
    """Attach a stderr handler once; stdout is reserved for the file list."""
    logger = get_logger()
    if not logger.handlers:
        handler = logging.StreamHandler()
        formatter = logging.Formatter("[%(levelname)s] %(message)s")
        handler.setFormatter(formatter)
        logger.addHandler(handler)
    logger.setLevel(logging.DEBUG if verbose else logging.WARNING)
    return logger
