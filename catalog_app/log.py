# catalog_app/log.py
import logging

from rich.logging import RichHandler

LOGGER_NAME = "catalog_browser"


def setup_logger(level: str = "WARNING", console=None) -> logging.Logger:
    """
    Configure the catalog_browser logger once, rendering through rich.

    Calling it again only updates the level; handlers are never duplicated.
    """
    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(level.upper())

    if logger.handlers:
        return logger

    handler = RichHandler(console=console, show_path=False, rich_tracebacks=True)
    handler.setFormatter(logging.Formatter("%(name)s: %(message)s", datefmt="[%X]"))
    logger.addHandler(handler)
    logger.propagate = False

    logger.debug("Logger initialized")
    return logger
