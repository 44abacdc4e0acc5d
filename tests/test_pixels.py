from __future__ import annotations

import numpy as np
import pytest
from PIL import Image

from parapet.core.pixels import PixelFormat, new_buffer, parse_color, rgba_to_bgra, to_bgra, to_rgba
from parapet.errors import UnsupportedFormat


def test_rgb_is_swapped_to_bgra():
    img = Image.new("RGB", (3, 2), (10, 20, 30))
    buf = to_bgra(img)
    assert buf.shape == (2, 3, 4)
    assert buf.dtype == np.uint8
    assert tuple(buf[1, 2]) == (30, 20, 10, 255)


def test_rgba_keeps_alpha():
    img = Image.new("RGBA", (1, 1), (1, 2, 3, 4))
    assert tuple(to_bgra(img)[0, 0]) == (3, 2, 1, 4)


def test_grayscale_expands():
    img = Image.new("L", (2, 2), 77)
    assert tuple(to_bgra(img)[0, 0]) == (77, 77, 77, 255)


def test_palette_resolves_colors():
    img = Image.new("P", (2, 1), 0)
    img.putpalette([200, 100, 50] + [0] * 765)
    assert tuple(to_bgra(img)[0, 1]) == (50, 100, 200, 255)


def test_bilevel():
    img = Image.new("1", (2, 1), 1)
    assert tuple(to_bgra(img)[0, 0]) == (255, 255, 255, 255)


def test_gray16_keeps_high_byte():
    img = Image.fromarray(np.full((2, 2), 0xABCD, dtype=np.uint16))
    assert img.mode == "I;16"
    assert tuple(to_bgra(img)[1, 1]) == (0xAB, 0xAB, 0xAB, 255)


@pytest.mark.parametrize("mode", ["F", "I"])
def test_unsupported_modes_raise(mode):
    with pytest.raises(UnsupportedFormat) as info:
        to_bgra(Image.new(mode, (2, 2)))
    assert mode in str(info.value)


def test_pixel_format_lookup():
    assert PixelFormat.from_mode("RGB") is PixelFormat.RGB
    with pytest.raises(UnsupportedFormat):
        PixelFormat.from_mode("BGR;24")


def test_result_is_a_fresh_buffer():
    img = Image.new("RGBA", (2, 2), (1, 2, 3, 4))
    buf = to_bgra(img)
    buf[0, 0] = 0
    assert img.getpixel((0, 0)) == (1, 2, 3, 4)


def test_new_buffer_fill():
    buf = new_buffer(3, 2, (1, 2, 3, 4))
    assert buf.shape == (2, 3, 4)
    assert (buf == np.array([1, 2, 3, 4], dtype=np.uint8)).all()


def test_to_rgba_swaps_back():
    buf = to_bgra(Image.new("RGB", (1, 1), (9, 8, 7)))
    assert tuple(to_rgba(buf)[0, 0]) == (9, 8, 7, 255)


def test_parse_color():
    assert parse_color("#102030") == (16, 32, 48, 255)
    assert parse_color("10203040") == (16, 32, 48, 64)
    assert parse_color("#fff") == (255, 255, 255, 255)
    with pytest.raises(ValueError):
        parse_color("#12345")
    with pytest.raises(ValueError):
        parse_color("#gggggg")


def test_rgba_to_bgra():
    assert rgba_to_bgra((1, 2, 3, 4)) == (3, 2, 1, 4)
