#!/usr/bin/env python3
# ansi_art/config.py
"""
Config loader/saver and defaults for the ansi-art command line.

Goals:
- Single JSON file per user.
- Safe atomic writes.
- Deep-merge of user config over defaults.
- Basic validation with sane fallbacks.

Usage:
    from ansi_art.config import Config, DEFAULT_CONFIG
    cfg = Config.load()                 # ~/.config/ansi_art/ansi_art.json or OS-specific
    charset = cfg["render"]["charset"]
    cfg["render"]["filter"] = "LANCZOS"
    cfg.save()

Command line flags always win over these values; the file only supplies
defaults for flags that were not given.
"""

from __future__ import annotations

import json
import logging
import os
import platform
import shutil
import tempfile
from dataclasses import dataclass, field
from typing import Any, Dict, Optional, Tuple

from ansi_art.preprocess import FILTERS
from ansi_art.rendering.render_config import DEFAULT_CHARSET

log = logging.getLogger(__name__)

ASCII_MODES = ("GRADIENT", "PATTERN_QUADRANCE", "PATTERN_SSIM")
BLOCK_MODES = ("HALF", "WHOLE")
LOG_LEVELS = ("CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG", "NOTSET")

# ----------------------------
# Defaults
# ----------------------------

DEFAULT_CONFIG: Dict[str, Any] = {
    "render": {
        "charset": DEFAULT_CHARSET,       # candidate glyphs for ascii modes
        "ascii_mode": "PATTERN_QUADRANCE",
        "block_mode": "HALF",
        "filter": "LANCZOS",              # NEAREST | TRIANGLE | CATMULLROM | GAUSSIAN | LANCZOS
        "block_filter": "NEAREST",        # block mode only
        "contrast": 0.0,
        "brightness": 0,
    },
    "output": {
        "echo": True,                     # print to stdout unless --noecho
    },
    "logging": {
        "level": "WARNING",
        "file": None,                     # path or None
        "rotate_bytes": 5 * 1024 * 1024,
        "rotate_keep": 3,
    },
}

# ----------------------------
# Helpers
# ----------------------------

def _os_config_home() -> str:
    """Return per-OS config base directory."""
    if platform.system() == "Windows":
        base = os.environ.get("APPDATA") or os.path.expanduser("~\\AppData\\Roaming")
        return os.path.join(base, "AnsiArt")
    # macOS: ~/Library/Application Support/AnsiArt
    if platform.system() == "Darwin":
        return os.path.join(os.path.expanduser("~/Library/Application Support"), "AnsiArt")
    # Linux and others: ~/.config/ansi_art
    return os.path.join(os.path.expanduser("~/.config"), "ansi_art")

def _default_config_path() -> str:
    """Resolve default config path, honoring ANSI_ART_CONFIG env override."""
    env = os.environ.get("ANSI_ART_CONFIG")
    if env:
        return os.path.expanduser(env)
    return os.path.join(_os_config_home(), "ansi_art.json")

def _deep_merge(a: Dict[str, Any], b: Dict[str, Any]) -> Dict[str, Any]:
    """Return deep-merged copy of dicts: values in b override a."""
    out = dict(a)
    for k, v in b.items():
        if isinstance(v, dict) and isinstance(out.get(k), dict):
            out[k] = _deep_merge(out[k], v)
        else:
            out[k] = v
    return out

def _atomic_write_json(path: str, data: Dict[str, Any]) -> None:
    folder = os.path.dirname(path) or "."
    os.makedirs(folder, exist_ok=True)
    fd, tmp = tempfile.mkstemp(prefix=".tmp_cfg_", dir=folder)
    try:
        with os.fdopen(fd, "w", encoding="utf-8") as f:
            json.dump(data, f, indent=2, sort_keys=True, ensure_ascii=False)
            f.write("\n")
        os.replace(tmp, path)
    except BaseException:
        # Clean temp on error
        if os.path.exists(tmp):
            os.remove(tmp)
        raise

def _coerce_num(v: Any, default: float, minmax: Optional[Tuple[float, float]] = None) -> float:
    try:
        x = float(v)
    except (TypeError, ValueError):
        return float(default)
    if minmax:
        lo, hi = minmax
        x = min(hi, max(lo, x))
    return x

def _coerce_int(v: Any, default: int, minmax: Optional[Tuple[int, int]] = None) -> int:
    try:
        x = int(v)
    except (TypeError, ValueError):
        return int(default)
    if minmax:
        lo, hi = minmax
        x = min(hi, max(lo, x))
    return x

def _coerce_bool(v: Any, default: bool) -> bool:
    if isinstance(v, bool):
        return v
    if isinstance(v, str):
        s = v.strip().lower()
        if s in ("1", "true", "yes", "on"): return True
        if s in ("0", "false", "no", "off"): return False
    return default

def _coerce_choice(v: Any, choices: Tuple[str, ...], default: str) -> str:
    s = str(v).upper() if v is not None else ""
    return s if s in choices else default

# ----------------------------
# Validation
# ----------------------------

def _validate(cfg: Dict[str, Any]) -> Dict[str, Any]:
    """Return validated copy with fallbacks applied."""
    c = _deep_merge(DEFAULT_CONFIG, cfg or {})
    c = json.loads(json.dumps(c))   # detach nested dicts from DEFAULT_CONFIG

    # render
    r = c["render"]
    cs = r.get("charset")
    r["charset"] = cs if isinstance(cs, str) else DEFAULT_CONFIG["render"]["charset"]
    r["ascii_mode"] = _coerce_choice(r.get("ascii_mode"), ASCII_MODES, DEFAULT_CONFIG["render"]["ascii_mode"])
    r["block_mode"] = _coerce_choice(r.get("block_mode"), BLOCK_MODES, DEFAULT_CONFIG["render"]["block_mode"])
    r["filter"] = _coerce_choice(r.get("filter"), tuple(FILTERS), DEFAULT_CONFIG["render"]["filter"])
    r["block_filter"] = _coerce_choice(r.get("block_filter"), tuple(FILTERS), DEFAULT_CONFIG["render"]["block_filter"])
    r["contrast"] = _coerce_num(r.get("contrast"), 0.0, (-100.0, 100.0))
    r["brightness"] = _coerce_int(r.get("brightness"), 0, (-255, 255))

    # output
    o = c["output"]
    o["echo"] = _coerce_bool(o.get("echo"), DEFAULT_CONFIG["output"]["echo"])

    # logging
    lg = c["logging"]
    lg["level"] = _coerce_choice(lg.get("level"), LOG_LEVELS, DEFAULT_CONFIG["logging"]["level"])
    lf = lg.get("file")
    lg["file"] = str(lf) if lf else None
    lg["rotate_bytes"] = _coerce_int(lg.get("rotate_bytes"), DEFAULT_CONFIG["logging"]["rotate_bytes"], (256 * 1024, 50 * 1024 * 1024))
    lg["rotate_keep"]  = _coerce_int(lg.get("rotate_keep"), DEFAULT_CONFIG["logging"]["rotate_keep"], (0, 50))

    return c

# ----------------------------
# Public API
# ----------------------------

@dataclass
class Config:
    """Thin wrapper around a nested dict with load/save/merge."""
    data: Dict[str, Any] = field(default_factory=lambda: _validate({}))
    path: str = field(default_factory=_default_config_path)

    # --- Mapping-style access
    def __getitem__(self, k: str) -> Any:
        return self.data[k]

    def __setitem__(self, k: str, v: Any) -> None:
        self.data[k] = v

    def get(self, k: str, default: Any = None) -> Any:
        return self.data.get(k, default)

    # --- Ops
    @classmethod
    def load(cls, path: Optional[str] = None, create_if_missing: bool = False) -> "Config":
        cfg_path = os.path.expanduser(path) if path else _default_config_path()
        if not os.path.exists(cfg_path):
            cfg = _validate({})
            if create_if_missing:
                _atomic_write_json(cfg_path, cfg)
            return cls(cfg, cfg_path)

        try:
            with open(cfg_path, "r", encoding="utf-8") as f:
                user_cfg = json.load(f)
        except (OSError, ValueError) as e:
            # Corrupt file. Keep a backup and fall back to defaults.
            log.warning("unreadable config %s (%s); using defaults", cfg_path, e)
            backup = cfg_path + ".corrupt.bak"
            try:
                shutil.copyfile(cfg_path, backup)
            except OSError as copy_err:
                log.warning("could not back up %s: %s", cfg_path, copy_err)
            user_cfg = {}
        if not isinstance(user_cfg, dict):
            log.warning("config %s is not a JSON object; using defaults", cfg_path)
            user_cfg = {}

        return cls(_validate(user_cfg), cfg_path)

    def save(self) -> None:
        """Persist to JSON atomically."""
        # Write validated data (defaults + diff) so file is complete and readable
        diff = _diff(DEFAULT_CONFIG, self.data)
        full = _validate(diff)
        _atomic_write_json(self.path, full)
        self.data = full  # sync in-memory with normalized values

    def update(self, partial: Dict[str, Any]) -> None:
        """Deep-merge a partial config then validate."""
        merged = _deep_merge(self.data, partial)
        self.data = _validate(merged)

    # Convenience getters
    @property
    def echo(self) -> bool:
        return self.data["output"]["echo"]


def _diff(base: Dict[str, Any], cur: Dict[str, Any]) -> Dict[str, Any]:
    """Return nested dictionary of keys where cur differs from base."""
    out: Dict[str, Any] = {}
    for k in cur.keys() | base.keys():
        if k not in base:
            out[k] = cur[k]
            continue
        if k not in cur:
            continue
        vb = base[k]
        vc = cur[k]
        if isinstance(vb, dict) and isinstance(vc, dict):
            d = _diff(vb, vc)
            if d:
                out[k] = d
        elif vb != vc:
            out[k] = vc
    return out

__all__ = [
    "Config",
    "DEFAULT_CONFIG",
    "_default_config_path",
]
