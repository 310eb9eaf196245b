"""Package-wide logger."""
import logging

LOGGER_NAME = "postfix_calculator"
LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

logger = logging.getLogger(LOGGER_NAME)


def configure_logging(level: int = logging.WARNING) -> None:
    """
    Attach a stderr handler to the package logger and set its level.

    Calling it more than once only updates the level.

    :param int level: Logging level, e.g. ``logging.DEBUG``
    """
    if not logger.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        logger.addHandler(handler)
    logger.setLevel(level)
