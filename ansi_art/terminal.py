#!/usr/bin/env python3
# ansi_art/terminal.py
"""Terminal size lookup for fullscreen rendering."""

from __future__ import annotations

import logging
import sys
from typing import Optional, Tuple

from prompt_toolkit.output import create_output

log = logging.getLogger(__name__)


def get_terminal_size() -> Optional[Tuple[int, int]]:
    """Return (columns, rows) of the attached terminal, or None if unknown."""
    if not sys.stdout.isatty():
        return None
    try:
        size = create_output(stdout=sys.stdout).get_size()
    except (OSError, ValueError) as e:
        log.debug("terminal size unavailable: %s", e)
        return None
    if size.columns <= 0 or size.rows <= 0:
        return None
    return size.columns, size.rows
