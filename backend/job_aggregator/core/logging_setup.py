"""Console logging for the aggregator entry points."""

from __future__ import annotations
import logging


def setup_logging(log_level: str = "INFO") -> logging.Logger:
    """Configure and return the ``job_aggregator`` logger.

    Safe to call more than once; handlers are only attached the first time.
    """
    logger = logging.getLogger("job_aggregator")
    if logger.handlers:
        return logger

    logger.setLevel(getattr(logging, log_level.upper(), logging.INFO))

    handler = logging.StreamHandler()
    handler.setFormatter(
        logging.Formatter(
            "%(asctime)s [%(levelname)s] %(name)s: %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        )
    )
    logger.addHandler(handler)
    return logger
