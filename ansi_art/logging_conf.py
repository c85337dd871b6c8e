#!/usr/bin/env python3
# ansi_art/logging_conf.py
"""
Central logging setup for ansi-art.
Logs go to stderr so they never mix with rendered output on stdout,
plus an optional rotating file.
"""

import logging
import sys
from logging.handlers import RotatingFileHandler

from ansi_art.config import Config

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"


def setup_logging(cfg: Config, verbose: bool = False) -> None:
    level_name = "DEBUG" if verbose else cfg["logging"].get("level", "WARNING").upper()
    level = getattr(logging, level_name, logging.WARNING)
    logging.basicConfig(level=level, format=LOG_FORMAT, stream=sys.stderr)

    log_file = cfg["logging"].get("file")
    if log_file:
        handler = RotatingFileHandler(
            log_file,
            maxBytes=int(cfg["logging"].get("rotate_bytes", 5 * 1024 * 1024)),
            backupCount=int(cfg["logging"].get("rotate_keep", 3)),
            encoding="utf-8",
        )
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        logging.getLogger().addHandler(handler)

    # Pillow's plugin loader is chatty at DEBUG
    logging.getLogger("PIL").setLevel(max(level, logging.INFO))
