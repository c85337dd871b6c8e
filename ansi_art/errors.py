#!/usr/bin/env python3
# ansi_art/errors.py
"""
Errors that end a conversion.

There is no retry or partial result: a conversion either yields a complete
RenderResult or raises one of these. The underlying exception is kept as
both `.cause` and `__cause__`.
"""

from __future__ import annotations

from typing import Optional

__all__ = ["AnsiArtError", "ImageDecodeError", "FileCreateError", "FileWriteError"]


class AnsiArtError(Exception):
    """Base class for conversion failures."""

    template = "{cause}"

    def __init__(self, path: str, cause: Optional[BaseException] = None):
        self.path = path
        self.cause = cause
        super().__init__(self.template.format(path=path, cause=cause if cause is not None else path))


class ImageDecodeError(AnsiArtError):
    template = 'Error opening image: "{cause}"'


class FileCreateError(AnsiArtError):
    template = 'Error creating save file "{cause}"'


class FileWriteError(AnsiArtError):
    template = 'Error writing to save file "{cause}"'
