#!/usr/bin/env python3
# ansi_art/rendering/renderer.py
"""
Rendering dispatcher.

- Common API: Renderer.render(img, cfg) and Renderer.convert(path, cfg)
- Backends are keyed by render family (ascii | braille | sextant | block)
  and may be replaced via Renderer.register(family, backend)
- Output is a sealed RenderResult; print it, save it, or hand its
  formatted_text() to prompt_toolkit.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Dict, Optional

from PIL import Image

from ansi_art.preprocess import open_image, prepare
from ansi_art.rendering.ascii_mode import AsciiRenderer
from ansi_art.rendering.backend import RenderBackend
from ansi_art.rendering.block_mode import BlockRenderer
from ansi_art.rendering.braille_mode import BrailleRenderer
from ansi_art.rendering.render_config import RenderConfig, RenderMode
from ansi_art.rendering.result import RenderResult
from ansi_art.rendering.sextant_mode import SextantRenderer

log = logging.getLogger(__name__)

__all__ = ["Renderer", "RenderConfig", "RenderMode", "render", "convert"]


def default_backends() -> Dict[str, RenderBackend]:
    return {
        "ascii": AsciiRenderer(),
        "braille": BrailleRenderer(),
        "sextant": SextantRenderer(),
        "block": BlockRenderer(),
    }


@dataclass
class Renderer:
    """Rendering strategy holder."""
    backends: Dict[str, RenderBackend] = field(default_factory=default_backends)

    def register(self, family: str, backend: RenderBackend) -> None:
        self.backends[family] = backend

    def backend_for(self, cfg: RenderConfig) -> RenderBackend:
        family = cfg.mode.family
        backend = self.backends.get(family)
        if backend is None:
            raise KeyError(f"no backend registered for {family!r}")
        return backend

    def render(self, img: Image.Image, cfg: RenderConfig) -> RenderResult:
        backend = self.backend_for(cfg)
        prepared = prepare(img, cfg)
        log.debug("rendering %s with %s at %s", cfg.mode.value, backend.name, prepared.size)
        return backend.render(prepared, cfg)

    def convert(self, path: str, cfg: RenderConfig) -> RenderResult:
        """Decode the image at path and render it."""
        return self.render(open_image(path), cfg)


_default: Optional[Renderer] = None


def _renderer() -> Renderer:
    global _default
    if _default is None:
        _default = Renderer()
    return _default


def render(img: Image.Image, cfg: Optional[RenderConfig] = None) -> RenderResult:
    return _renderer().render(img, cfg or RenderConfig())


def convert(path: str, cfg: Optional[RenderConfig] = None) -> RenderResult:
    return _renderer().convert(path, cfg or RenderConfig())
