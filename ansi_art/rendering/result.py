#!/usr/bin/env python3
# ansi_art/rendering/result.py
"""
Ordered sequence of styled cells produced by one conversion.

Cells are appended row-major, each row closed by a "\\n" cell. The renderer
seals the result before handing it out; after that it is read-only and can
be printed, saved, or exported as prompt_toolkit FormattedText.
"""

from __future__ import annotations

import logging
import sys
from dataclasses import dataclass
from typing import IO, Iterator, List, Optional, Tuple

from prompt_toolkit.formatted_text import FormattedText

from ansi_art.errors import FileCreateError, FileWriteError
from ansi_art.styles import PLAIN, RESET, CellStyle

log = logging.getLogger(__name__)

StyleRun = Tuple[str, str]   # (prompt_toolkit style, text)

__all__ = ["StyledCell", "RenderResult", "StyleRun"]


@dataclass(frozen=True)
class StyledCell:
    text: str
    style: CellStyle = PLAIN

    @property
    def is_terminator(self) -> bool:
        return self.text == "\n"


class RenderResult:
    def __init__(self) -> None:
        self._cells: List[StyledCell] = []
        self._sealed = False

    # --- building

    def append(self, text: str, style: CellStyle = PLAIN) -> None:
        if self._sealed:
            raise RuntimeError("RenderResult is sealed")
        self._cells.append(StyledCell(text, style))

    def end_row(self) -> None:
        self.append("\n", PLAIN)

    def seal(self) -> "RenderResult":
        self._sealed = True
        return self

    @property
    def sealed(self) -> bool:
        return self._sealed

    # --- reading

    @property
    def cells(self) -> Tuple[StyledCell, ...]:
        return tuple(self._cells)

    def __len__(self) -> int:
        return len(self._cells)

    def __iter__(self) -> Iterator[StyledCell]:
        return iter(self._cells)

    def glyphs(self) -> Iterator[StyledCell]:
        """Cells other than row terminators."""
        return (c for c in self._cells if not c.is_terminator)

    def lines(self) -> List[str]:
        """Unstyled text of each row, without the terminator."""
        rows: List[str] = []
        buf: List[str] = []
        for cell in self._cells:
            if cell.is_terminator:
                rows.append("".join(buf))
                buf = []
            else:
                buf.append(cell.text)
        if buf:
            rows.append("".join(buf))
        return rows

    @property
    def text(self) -> str:
        return "".join(c.text for c in self._cells)

    def to_ansi(self) -> str:
        out: List[str] = []
        last = PLAIN
        for cell in self._cells:
            if cell.style != last:
                if not last.is_plain:
                    out.append(RESET)
                out.append(cell.style.sgr_prefix())
                last = cell.style
            out.append(cell.text)
        if not last.is_plain:
            out.append(RESET)
        return "".join(out)

    def __str__(self) -> str:
        return self.to_ansi()

    def formatted_text(self) -> FormattedText:
        """Style runs with adjacent equal styles merged."""
        runs: List[StyleRun] = []
        run_style: Optional[str] = None
        run_text: List[str] = []
        for cell in self._cells:
            style = cell.style.pt_style()
            if style != run_style and run_text:
                runs.append((run_style, "".join(run_text)))
                run_text = []
            run_style = style
            run_text.append(cell.text)
        if run_text:
            runs.append((run_style, "".join(run_text)))
        return FormattedText(runs)

    # --- sinks

    def print(self, file: Optional[IO[str]] = None) -> None:
        out = file if file is not None else sys.stdout
        print(self.to_ansi(), file=out)

    def save(self, path: str) -> None:
        """Write the escape-sequence text to path."""
        try:
            fh = open(path, "w", encoding="utf-8")
        except OSError as e:
            raise FileCreateError(path, e) from e
        # flush on close can fail too (e.g. disk full)
        try:
            with fh:
                fh.write(self.to_ansi())
        except OSError as e:
            raise FileWriteError(path, e) from e
        log.debug("saved %d cells to %s", len(self._cells), path)
