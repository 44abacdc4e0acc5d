from __future__ import annotations
from enum import Enum

import numpy as np
from PIL import Image

from parapet.errors import UnsupportedFormat

# Internal working format: (height, width, 4) uint8, channels B, G, R, A.
CHANNELS = 4
BGRA_ORDER = [2, 1, 0, 3]


class PixelFormat(Enum):
    """Source pixel layouts we know how to normalize, keyed by Pillow mode."""
    BILEVEL = "1"
    GRAY = "L"
    GRAY_ALPHA = "LA"
    GRAY16 = "I;16"
    PALETTE = "P"
    PALETTE_ALPHA = "PA"
    RGB = "RGB"
    RGBA = "RGBA"
    RGBX = "RGBX"
    CMYK = "CMYK"
    YCBCR = "YCbCr"
    HSV = "HSV"

    @classmethod
    def from_mode(cls, mode: str) -> "PixelFormat":
        try:
            return cls(mode)
        except ValueError:
            raise UnsupportedFormat(mode) from None


def new_buffer(width: int, height: int, fill: tuple[int, int, int, int] = (0, 0, 0, 0)) -> np.ndarray:
    buf = np.empty((height, width, CHANNELS), dtype=np.uint8)
    buf[...] = fill
    return buf


def to_bgra(image: Image.Image) -> np.ndarray:
    """Normalize any supported Pillow image into a fresh BGRA buffer."""
    fmt = PixelFormat.from_mode(image.mode)

    if fmt is PixelFormat.RGBA:
        rgba = image
    elif fmt is PixelFormat.GRAY16:
        # Pillow clips 16-bit samples when converting; keep the high byte instead
        wide = np.asarray(image, dtype=np.uint16)
        rgba = Image.fromarray((wide >> 8).astype(np.uint8)).convert("RGBA")
    elif fmt in (PixelFormat.HSV, PixelFormat.YCBCR, PixelFormat.CMYK):
        rgba = image.convert("RGB").convert("RGBA")
    else:
        rgba = image.convert("RGBA")

    arr = np.asarray(rgba, dtype=np.uint8)
    if arr.ndim != 3 or arr.shape[2] != CHANNELS:
        raise UnsupportedFormat(image.mode)
    return np.ascontiguousarray(arr[..., BGRA_ORDER])


def to_rgba(buf: np.ndarray) -> np.ndarray:
    """BGRA -> RGBA. The swap is its own inverse."""
    return np.ascontiguousarray(buf[..., BGRA_ORDER])


def parse_color(value: str) -> tuple[int, int, int, int]:
    """Parse ``#rgb``, ``#rrggbb`` or ``#rrggbbaa`` into an RGBA tuple."""
    text = (value or "").strip().lstrip("#")
    if len(text) == 3:
        text = "".join(c * 2 for c in text)
    if len(text) == 6:
        text += "ff"
    if len(text) != 8:
        raise ValueError(f"invalid color: {value!r}")
    try:
        raw = bytes.fromhex(text)
    except ValueError:
        raise ValueError(f"invalid color: {value!r}") from None
    return raw[0], raw[1], raw[2], raw[3]


def rgba_to_bgra(color: tuple[int, int, int, int]) -> tuple[int, int, int, int]:
    r, g, b, a = color
    return b, g, r, a
