"""
Logging utilities for the RSVP backend.

Provides a consistent logging format for the API process and helper scripts.
"""

import logging
import sys

_NOISY_LOGGERS = ("googleapiclient.discovery_cache", "httpx")


def configure_logging(level: str = "INFO") -> None:
    """Configure root logging with a sensible default format."""
    logging.basicConfig(
        level=level.upper(),
        format="%(asctime)s | %(levelname)s | %(name)s | %(message)s",
        stream=sys.stdout,
    )
    # Token endpoint URLs and discovery cache chatter stay out of INFO logs.
    for name in _NOISY_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)


__all__ = ["configure_logging"]
