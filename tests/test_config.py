from __future__ import annotations

import pytest

from parapet.config import parse_args
from parapet.core.compositor import PlacementMode
from parapet.core.resample import Filter


def test_defaults():
    cfg = parse_args(["wall.png", "--display", "1920x1080+0+0"])
    assert cfg.image == "wall.png"
    assert cfg.mode is PlacementMode.MAX
    assert cfg.resample is Filter.NEAREST
    assert cfg.background == (0, 0, 0, 255)
    assert cfg.displays == ["1920x1080+0+0"]
    assert cfg.detect is False
    assert cfg.out_path == "parapet-background.png"
    assert cfg.setter is None
    assert cfg.workers is None
    assert cfg.log_level == "INFO"


def test_all_options():
    cfg = parse_args([
        "https://example.com/a.jpg",
        "--mode", "tile",
        "--filter", "lanczos",
        "--background", "#10203080",
        "--display", "800x600+0+0",
        "--display", "1024x768+800+0",
        "--detect",
        "--out", "/tmp/bg.png",
        "--setter", "feh --bg-tile {path}",
        "--workers", "2",
        "--timeout", "3.5",
        "--log-level", "debug",
    ])
    assert cfg.mode is PlacementMode.TILE
    assert cfg.resample is Filter.LANCZOS
    assert cfg.background == (16, 32, 48, 128)
    assert cfg.displays == ["800x600+0+0", "1024x768+800+0"]
    assert cfg.detect is True
    assert cfg.out_path == "/tmp/bg.png"
    assert cfg.setter == "feh --bg-tile {path}"
    assert cfg.workers == 2
    assert cfg.timeout == 3.5
    assert cfg.log_level == "DEBUG"


def test_detect_alone_is_enough():
    assert parse_args(["wall.png", "--detect"]).detect is True


@pytest.mark.parametrize(
    "argv",
    [
        ["wall.png"],
        ["wall.png", "--display", "10x10", "--mode", "stretch"],
        ["wall.png", "--display", "10x10", "--background", "red"],
        ["wall.png", "--display", "10x10", "--workers", "0"],
    ],
)
def test_bad_arguments_exit(argv):
    with pytest.raises(SystemExit):
        parse_args(argv)
