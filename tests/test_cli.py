"""Command line entry point."""

import json

import pytest

from ansi_art import cli
from ansi_art.config import Config
from ansi_art.rendering.palette import ColorMode
from ansi_art.rendering.render_config import RenderConfig, RenderMode

pytestmark = pytest.mark.cli


@pytest.fixture
def white_png(solid, save_png):
    return save_png(solid((4, 3)), "white.png")


def _cfg(argv):
    args = cli.build_parser().parse_args(argv)
    return cli.build_render_config(args, Config.load())


def test_ascii_gradient_to_stdout(white_png, capsys):
    assert cli.main(["ascii", white_png, "-m", "gradient", "-c", "AB"]) == 0
    out = capsys.readouterr().out
    assert out.splitlines()[:3] == ["BBBB"] * 3


def test_noecho_and_output(white_png, tmp_path, capsys):
    target = tmp_path / "art.ans"
    assert cli.main(["braile", white_png, "-n", "-o", str(target), "-W", "2", "-H", "1"]) == 0
    assert capsys.readouterr().out == ""
    assert target.read_text(encoding="utf-8") == "\u28ff\u28ff\n"


def test_repeated_output_saves_every_file(white_png, tmp_path):
    first, second = tmp_path / "a.ans", tmp_path / "b.ans"
    argv = ["braile", white_png, "-n", "-o", str(first), "-o", str(second), "-W", "2", "-H", "1"]
    assert cli.main(argv) == 0
    assert first.read_text(encoding="utf-8") == "\u28ff\u28ff\n"
    assert second.read_text(encoding="utf-8") == first.read_text(encoding="utf-8")
    assert cli.build_parser().parse_args(["ascii", "x.png"]).output == []


def test_missing_image_exits_1(tmp_path, capsys):
    assert cli.main(["ascii", str(tmp_path / "missing.png")]) == 1
    assert capsys.readouterr().err.startswith('Error opening image: "')


def test_unwritable_output_exits_1(white_png, tmp_path, capsys):
    target = tmp_path / "no" / "such" / "dir.ans"
    assert cli.main(["block", white_png, "-n", "-o", str(target)]) == 1
    assert capsys.readouterr().err.startswith('Error creating save file "')


def test_aliases():
    assert _cfg(["braille", "x.png"]).mode is RenderMode.BRAILLE
    assert _cfg(["braile", "x.png"]).mode is RenderMode.BRAILLE
    assert _cfg(["uniblock", "x.png"]).mode is RenderMode.SEXTANT
    assert _cfg(["sextant", "x.png"]).mode is RenderMode.SEXTANT


def test_ascii_flags():
    cfg = _cfg(["ascii", "x.png", "-m", "PATTERN_SSIM", "-W", "80", "-C", "-20", "-S", "15",
                "-R", "lanczos", "-i", "-b", "-u", "-r"])
    assert cfg.mode is RenderMode.ASCII_SSIM
    assert cfg.size == (80, 0)
    assert cfg.contrast == -20.0 and cfg.brightness == 15
    assert cfg.filter == "LANCZOS"
    assert cfg.invert and cfg.bold and cfg.underline and not cfg.blink
    assert cfg.color is ColorMode.TRUECOLOR


def test_fixed_colors_from_flags():
    cfg = _cfg(["ascii", "x.png", "-F", "1", "2", "3", "-B", "4", "5", "6"])
    assert cfg.color is ColorMode.FIXED
    assert (cfg.foreground, cfg.background) == ((1, 2, 3), (4, 5, 6))


def test_fixed_and_sampled_colors_conflict(white_png):
    with pytest.raises(SystemExit) as exc:
        cli.main(["ascii", white_png, "-F", "1", "2", "3", "-t"])
    assert exc.value.code == 2


def test_color_byte_range():
    with pytest.raises(SystemExit):
        cli.build_parser().parse_args(["ascii", "x.png", "-F", "1", "2", "300"])


def test_threshold_flag():
    assert _cfg(["uniblock", "x.png", "-t", "90"]).threshold == 90
    assert _cfg(["braile", "x.png"]).threshold is None
    assert _cfg(["braile", "x.png", "--termcolor"]).color is ColorMode.PALETTE


def test_block_modes_and_filter_default():
    assert _cfg(["block", "x.png"]).mode is RenderMode.BLOCK_HALF
    assert _cfg(["block", "x.png", "-m", "whole"]).mode is RenderMode.BLOCK_WHOLE
    assert _cfg(["block", "x.png", "-m", "half", "-w"]).mode is RenderMode.BLOCK_WHOLE
    assert _cfg(["block", "x.png"]).filter == "NEAREST"
    assert _cfg(["block", "x.png", "-R", "lanczos"]).filter == "LANCZOS"
    for family in ("ascii", "braile", "uniblock"):
        assert _cfg([family, "x.png"]).filter == "LANCZOS"
    assert RenderConfig().filter == "NEAREST"
    assert _cfg(["block", "x.png", "-t"]).color is ColorMode.PALETTE


def test_config_file_supplies_defaults(isolated_config):
    cfg = Config.load()
    cfg.update({"render": {"ascii_mode": "GRADIENT", "charset": "xy", "contrast": 12}})
    cfg.save()
    rc = _cfg(["ascii", "x.png"])
    assert rc.mode is RenderMode.ASCII_GRADIENT
    assert rc.charset == "xy"
    assert rc.contrast == 12.0
    assert _cfg(["ascii", "x.png", "-c", "z"]).charset == "z"


def test_config_command(tmp_path, capsys):
    path = tmp_path / "written.json"
    assert cli.main(["--config", str(path), "config", "--init"]) == 0
    printed = json.loads(capsys.readouterr().out)
    assert printed["render"]["filter"] == "LANCZOS"
    assert printed["render"]["block_filter"] == "NEAREST"
    assert json.loads(path.read_text(encoding="utf-8")) == printed


def test_version(capsys):
    with pytest.raises(SystemExit) as exc:
        cli.main(["--version"])
    assert exc.value.code == 0
    assert "ansi-art v" in capsys.readouterr().out
