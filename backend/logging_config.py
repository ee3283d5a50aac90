"""Logging setup for the backend package."""

import logging

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"

_HANDLER_NAME = "backend-stream"


def configure_logging(level: str = "INFO") -> logging.Logger:
    """Attach a single stream handler to the ``backend`` logger.

    Calling this more than once only updates the level.
    """
    logger = logging.getLogger("backend")
    logger.setLevel(level)

    if not any(h.get_name() == _HANDLER_NAME for h in logger.handlers):
        handler = logging.StreamHandler()
        handler.set_name(_HANDLER_NAME)
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        logger.addHandler(handler)

    return logger
