"""Logging configuration for the bot and CLI processes."""

from __future__ import annotations

import logging
import os

_QUIET_LOGGERS = ("aiogram.event", "spacy")


def configure_logging(level: str | None = None) -> None:
    """Configure Python logging for the process.

    Parsed message text only appears in DEBUG logs and is never echoed back to the Telegram user.
    spaCy model-compatibility warnings are routed through logging instead of stderr.
    """

    log_level = (level or os.getenv("LOG_LEVEL") or "INFO").upper()
    logging.basicConfig(
        level=log_level,
        format="%(asctime)s %(levelname)s %(name)s %(message)s",
    )
    logging.captureWarnings(True)

    for name in _QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)
