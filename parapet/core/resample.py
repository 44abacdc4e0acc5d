from __future__ import annotations
from enum import Enum

import numpy as np
from PIL import Image, ImageOps


class Filter(Enum):
    NEAREST = "nearest"
    BILINEAR = "bilinear"
    BICUBIC = "bicubic"
    LANCZOS = "lanczos"

    @property
    def resampling(self) -> Image.Resampling:
        return {
            Filter.NEAREST: Image.Resampling.NEAREST,
            Filter.BILINEAR: Image.Resampling.BILINEAR,
            Filter.BICUBIC: Image.Resampling.BICUBIC,
            Filter.LANCZOS: Image.Resampling.LANCZOS,
        }[self]


# Pillow sees a BGRA buffer as RGBA. Resampling treats every channel the same
# way, so the channel order survives the round trip untouched.
def _as_image(buf: np.ndarray) -> Image.Image:
    return Image.fromarray(np.ascontiguousarray(buf))


def _as_buffer(img: Image.Image) -> np.ndarray:
    return np.array(img, dtype=np.uint8)


def fit_size(src_w: int, src_h: int, width: int, height: int) -> tuple[int, int]:
    """Size of src scaled by the largest ratio that keeps it inside width x height.

    Each side is at least one pixel so very thin sources stay drawable.
    """
    ratio = min(width / src_w, height / src_h)
    w = min(width, max(1, round(src_w * ratio)))
    h = min(height, max(1, round(src_h * ratio)))
    return w, h


def resize(buf: np.ndarray, width: int, height: int, filt: Filter = Filter.NEAREST) -> np.ndarray:
    """Largest aspect-preserving resize that fits inside width x height."""
    return _as_buffer(_as_image(buf).resize(fit_size(buf.shape[1], buf.shape[0], width, height), filt.resampling))


def resize_to_fill(buf: np.ndarray, width: int, height: int, filt: Filter = Filter.NEAREST) -> np.ndarray:
    """Aspect-preserving resize covering width x height, excess cropped evenly."""
    img = ImageOps.fit(_as_image(buf), (width, height), method=filt.resampling)
    return _as_buffer(img)
