import logging
import os
import sys

LEVELS = {
    "debug": logging.DEBUG,
    "info": logging.INFO,
    "warning": logging.WARNING,
    "error": logging.ERROR,
    "critical": logging.CRITICAL,
}


def setup_logger(level: int = logging.WARNING, name: str = "iproc") -> logging.Logger:
    """Create or update the project logger.

    - IPROC_LOG_LEVEL overrides the level on every call.
    - Exactly one stderr StreamHandler is attached; stdout carries the JSON result.
    """
    logger = logging.getLogger(name)

    env_level = (os.getenv("IPROC_LOG_LEVEL") or "").strip().lower()
    if env_level:
        level = LEVELS.get(env_level, level)
    logger.setLevel(level)

    stream_handler: logging.StreamHandler | None = None
    for h in logger.handlers:
        if isinstance(h, logging.StreamHandler):
            stream_handler = h
            break

    if stream_handler is None:
        stream_handler = logging.StreamHandler(stream=sys.stderr)
        logger.addHandler(stream_handler)

    stream_handler.setFormatter(
        logging.Formatter(
            fmt="[%(asctime)s] %(levelname)s: %(message)s",
            datefmt="%H:%M:%S",
        )
    )

    logger.propagate = False
    return logger


def get_logger(name: str | None = None) -> logging.Logger:
    base = setup_logger()
    return base if not name else base.getChild(name)
