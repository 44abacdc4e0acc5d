from __future__ import annotations

import numpy as np
import pytest

from parapet.core.canvas import Canvas


def _bgra(w: int, h: int) -> np.ndarray:
    buf = np.zeros((h, w, 4), dtype=np.uint8)
    buf[...] = (30, 20, 10, 255)
    return buf


def test_from_bgra():
    canvas = Canvas.from_bgra(_bgra(3, 2))
    assert canvas.size == (3, 2)
    assert canvas.width == 3
    assert canvas.height == 2
    assert canvas.depth == 24
    assert canvas.stride == 12
    assert len(canvas.to_bytes()) == 24


def test_buffer_is_read_only():
    canvas = Canvas.from_bgra(_bgra(2, 2))
    view = canvas.buffer
    assert view.readonly
    with pytest.raises(TypeError):
        view[0] = 1


def test_ndarray_view_is_read_only():
    arr = Canvas.from_bgra(_bgra(2, 2)).to_ndarray()
    assert arr.shape == (2, 2, 4)
    assert not arr.flags.writeable


def test_canvas_does_not_alias_source_buffer():
    buf = _bgra(2, 2)
    canvas = Canvas.from_bgra(buf)
    buf[...] = 0
    assert canvas.to_ndarray()[0, 0, 0] == 30


def test_to_image_is_rgb():
    img = Canvas.from_bgra(_bgra(2, 2)).to_image()
    assert img.mode == "RGB"
    assert img.size == (2, 2)
    assert img.getpixel((1, 1)) == (10, 20, 30)


def test_wrong_buffer_length_rejected():
    with pytest.raises(ValueError):
        Canvas(2, 2, b"\x00" * 15)
