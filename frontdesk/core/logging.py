"""Logging setup for the front desk package."""
from __future__ import annotations

import logging
import os
from logging.handlers import RotatingFileHandler

from .config import Settings, get_settings

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
PACKAGE_LOGGER = "frontdesk"


def setup_logging(settings: Settings | None = None) -> logging.Logger:
    """Attach handlers to the package logger; repeated calls only add a missing log file."""
    settings = settings or get_settings()
    logger = logging.getLogger(PACKAGE_LOGGER)
    logger.setLevel(getattr(logging, settings.log_level, logging.INFO))

    formatter = logging.Formatter(LOG_FORMAT)

    if not getattr(logger, "_frontdesk_configured", False):
        stream = logging.StreamHandler()
        stream.setFormatter(formatter)
        logger.addHandler(stream)

    # one rotating file per distinct log_file, even when configured later
    file_names = {h.baseFilename for h in logger.handlers if isinstance(h, RotatingFileHandler)}
    if settings.log_file is not None and os.path.abspath(settings.log_file) not in file_names:
        settings.log_file.parent.mkdir(parents=True, exist_ok=True)
        handler = RotatingFileHandler(
            settings.log_file,
            maxBytes=5 * 1024 * 1024,
            backupCount=3,
            encoding="utf-8",
        )
        handler.setFormatter(formatter)
        logger.addHandler(handler)

    logger._frontdesk_configured = True  # type: ignore[attr-defined]
    return logger
