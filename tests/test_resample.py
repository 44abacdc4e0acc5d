from __future__ import annotations

import numpy as np
import pytest

from parapet.core.resample import Filter, fit_size, resize, resize_to_fill


@pytest.mark.parametrize(
    "src, target, expected",
    [
        ((200, 100), (100, 100), (100, 50)),
        ((50, 100), (100, 100), (50, 100)),
        ((8, 4), (10, 10), (10, 5)),
        ((5, 40), (16, 9), (1, 9)),
        ((1000, 1), (10, 10), (10, 1)),
        ((6, 3), (6, 3), (6, 3)),
    ],
)
def test_fit_size(src, target, expected):
    assert fit_size(*src, *target) == expected


def test_resize_keeps_channel_order():
    buf = np.zeros((4, 8, 4), dtype=np.uint8)
    buf[...] = (1, 2, 3, 255)
    out = resize(buf, 4, 4)
    assert out.shape == (2, 4, 4)
    assert tuple(out[1, 3]) == (1, 2, 3, 255)


def test_resize_to_fill_exact_size():
    buf = np.zeros((4, 8, 4), dtype=np.uint8)
    out = resize_to_fill(buf, 5, 5, Filter.BILINEAR)
    assert out.shape == (5, 5, 4)
    assert out.dtype == np.uint8


def test_filter_maps_to_pillow():
    from PIL import Image
    assert Filter.LANCZOS.resampling == Image.Resampling.LANCZOS
    assert Filter("nearest") is Filter.NEAREST
