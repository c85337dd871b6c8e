#!/usr/bin/env python3
# ansi_art/cli.py
"""
Entry point for ansi-art.
Loads configuration, builds a RenderConfig from the sub-command flags and
converts one image.

    ansi-art ascii photo.png -W 80 -m PATTERN_SSIM -r
    ansi-art braile logo.png -t 120 -o logo.ans
    ansi-art block photo.png -m HALF -t
    ansi-art config --init
"""

import argparse
import json
import logging
import sys
from typing import List, Optional

from ansi_art.config import ASCII_MODES, BLOCK_MODES, Config
from ansi_art.errors import AnsiArtError
from ansi_art.logging_conf import setup_logging
from ansi_art.preprocess import FILTERS
from ansi_art.rendering.render_config import RenderConfig, RenderMode
from ansi_art.rendering.renderer import convert
from ansi_art.version import version_info

log = logging.getLogger(__name__)

ASCII_MODE_MAP = {
    "GRADIENT": RenderMode.ASCII_GRADIENT,
    "PATTERN_QUADRANCE": RenderMode.ASCII_QUADRANCE,
    "PATTERN_SSIM": RenderMode.ASCII_SSIM,
}
BLOCK_MODE_MAP = {
    "HALF": RenderMode.BLOCK_HALF,
    "WHOLE": RenderMode.BLOCK_WHOLE,
}
# sub-command (and aliases) -> render family
COMMANDS = {
    "ascii": "ascii",
    "block": "block",
    "braile": "braille",
    "braille": "braille",
    "uniblock": "sextant",
    "sextant": "sextant",
}


def _byte(value: str) -> int:
    n = int(value)
    if not 0 <= n <= 255:
        raise argparse.ArgumentTypeError(f"{value} is not in 0-255")
    return n


def _upper(value: str) -> str:
    return value.upper()


def _common_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(add_help=False)
    p.add_argument("image", help="input image")
    p.add_argument("-o", "--output", metavar="OUTPUT FILE", action="append", default=[],
                   help="save conversion to file (repeatable)")
    p.add_argument("-n", "--noecho", action="store_true", help="do not print the conversion to stdout")
    p.add_argument("-b", "--bold", action="store_true", help="use bold style")
    p.add_argument("-k", "--blink", action="store_true", help="use blink style")
    p.add_argument("-u", "--underline", action="store_true", help="use underline style")
    p.add_argument("-i", "--invert", action="store_true", help="invert image colors")
    p.add_argument("-C", "--set-contrast", dest="contrast", type=float, default=None,
                   help="adjust contrast; negative lowers, positive raises")
    p.add_argument("-S", "--set-brightness", dest="brightness", type=int, default=None,
                   help="add to every channel; negative darkens")
    p.add_argument("-f", "--fullscreen", action="store_true", help="fit the current terminal")
    p.add_argument("-W", "--width", type=int, default=0, help="output width in cells (0 keeps aspect ratio)")
    p.add_argument("-H", "--height", type=int, default=0, help="output height in cells (0 keeps aspect ratio)")
    p.add_argument("-R", "--filter", type=_upper, choices=sorted(FILTERS), default=None,
                   help="resampling filter")
    return p


def _add_fixed_colors(p: argparse.ArgumentParser) -> None:
    p.add_argument("-F", "--frgdcolor", nargs=3, type=_byte, metavar=("R", "G", "B"),
                   help="foreground color RGB [0-255 each channel]")
    p.add_argument("-B", "--bkgdcolor", nargs=3, type=_byte, metavar=("R", "G", "B"),
                   help="background color RGB [0-255 each channel]")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="ansi-art",
        description="Convert images to text using ANSI escape sequences.",
    )
    parser.add_argument("--version", action="version", version=version_info())
    parser.add_argument("--config", default=None, help="config file (default: per-user JSON)")
    parser.add_argument("-v", "--verbose", action="store_true", help="debug logging")
    sub = parser.add_subparsers(dest="command", metavar="COMMAND")
    sub.required = True
    common = _common_parser()

    ascii_p = sub.add_parser("ascii", parents=[common], help="convert image to ascii")
    ascii_p.add_argument("-c", "--char-set", dest="charset", default=None,
                         help="candidate characters (non printable ones render as space)")
    ascii_p.add_argument("-m", "--mode", type=_upper, choices=ASCII_MODES, default=None)
    _add_fixed_colors(ascii_p)
    color = ascii_p.add_mutually_exclusive_group()
    color.add_argument("-r", "--rgbcolor", action="store_true", help="true color (24-bit)")
    color.add_argument("-t", "--termcolor", action="store_true", help="256 terminal colors (8-bit)")

    block_p = sub.add_parser("block", parents=[common], help="convert image to colored blocks")
    block_p.add_argument("-m", "--mode", type=_upper, choices=BLOCK_MODES, default=None)
    block_p.add_argument("-w", "--wholeblock", action="store_true", help="same as --mode WHOLE")
    block_p.add_argument("-t", "--termcolor", action="store_true", help="256 terminal colors (8-bit)")

    for name, aliases, helptext in (
        ("braile", ["braille"], "convert image to braille 8-dot cells"),
        ("uniblock", ["sextant"], "convert image to unicode sextant blocks"),
    ):
        p = sub.add_parser(name, aliases=aliases, parents=[common], help=helptext)
        p.add_argument("-t", "--set-threshold", dest="threshold", type=_byte, default=None,
                       help="manual threshold [0-255]; Otsu when omitted")
        _add_fixed_colors(p)
        color = p.add_mutually_exclusive_group()
        color.add_argument("--rgbcolor", action="store_true", help="true color (24-bit)")
        color.add_argument("--termcolor", action="store_true", help="256 terminal colors (8-bit)")

    cfg_p = sub.add_parser("config", help="show the effective configuration")
    cfg_p.add_argument("--init", action="store_true", help="write the configuration file")
    return parser


def _check_colors(parser: argparse.ArgumentParser, args: argparse.Namespace) -> None:
    fixed = getattr(args, "frgdcolor", None) or getattr(args, "bkgdcolor", None)
    sampled = getattr(args, "rgbcolor", False) or getattr(args, "termcolor", False)
    if fixed and sampled:
        parser.error("-F/-B cannot be combined with --rgbcolor/--termcolor")


def build_render_config(args: argparse.Namespace, cfg: Config) -> RenderConfig:
    """Flags first, config file for anything not given."""
    r = cfg["render"]
    family = COMMANDS[args.command]
    rc = RenderConfig()

    if family == "ascii":
        rc = rc.set_mode(ASCII_MODE_MAP[args.mode or r["ascii_mode"]])
        rc = rc.set_charset(r["charset"] if args.charset is None else args.charset)
    elif family == "block":
        mode = "WHOLE" if args.wholeblock else (args.mode or r["block_mode"])
        rc = rc.set_mode(BLOCK_MODE_MAP[mode])
    elif family == "braille":
        rc = rc.braille()
    else:
        rc = rc.sextant()

    default_filter = r["block_filter"] if family == "block" else r["filter"]
    rc = rc.set_filter(args.filter or default_filter)
    rc = rc.set_contrast(r["contrast"] if args.contrast is None else args.contrast)
    rc = rc.set_brightness(r["brightness"] if args.brightness is None else args.brightness)
    rc = rc.set_size(args.width, args.height)
    if args.fullscreen:
        rc = rc.fullscreen()

    rc = rc.set_invert(args.invert)
    rc = rc.set_style(bold=args.bold, blink=args.blink, underline=args.underline)
    if getattr(args, "threshold", None) is not None:
        rc = rc.set_threshold(args.threshold)

    if getattr(args, "frgdcolor", None):
        rc = rc.set_foreground(tuple(args.frgdcolor))
    if getattr(args, "bkgdcolor", None):
        rc = rc.set_background(tuple(args.bkgdcolor))
    if getattr(args, "rgbcolor", False):
        rc = rc.true_color()
    elif getattr(args, "termcolor", False):
        rc = rc.terminal_color()
    return rc


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    _check_colors(parser, args)

    cfg = Config.load(args.config)
    setup_logging(cfg, verbose=args.verbose)

    if args.command == "config":
        if args.init:
            cfg.save()
            log.info("wrote %s", cfg.path)
        print(json.dumps(cfg.data, indent=2, sort_keys=True, ensure_ascii=False))
        return 0

    render_cfg = build_render_config(args, cfg)
    log.debug("render config: %s", render_cfg)
    try:
        result = convert(args.image, render_cfg)
        if cfg.echo and not args.noecho:
            result.print()
        for path in args.output:
            result.save(path)
    except AnsiArtError as e:
        print(e, file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
