"""Process-wide logging setup."""

import logging

from src.config.settings import get_settings

LOG_FORMAT = "%(asctime)s | %(levelname)-7s | %(name)s | %(message)s"


def configure_logging(level: str | None = None) -> None:
    """Configure root logging once for the API or MCP process."""

    resolved = (level or get_settings().log_level).upper()
    logging.basicConfig(
        format=LOG_FORMAT,
        level=getattr(logging, resolved, logging.INFO),
    )
