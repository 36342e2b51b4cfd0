"""Logging setup."""

import logging


def configure_logging(level: str = "INFO") -> None:
    """Configure root logging for the service."""
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s %(message)s",
    )
