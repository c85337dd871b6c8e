#!/usr/bin/env python3
# ansi_art/version.py
"""
Version and build metadata for ansi-art.
"""

__version__ = "0.3.0"
__build__ = "2026-10-17"
__license__ = "MIT"

def version_info() -> str:
    """Return human-readable version string."""
    return f"ansi-art v{__version__} (build {__build__})"
