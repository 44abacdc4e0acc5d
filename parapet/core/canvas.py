from __future__ import annotations

import numpy as np
from PIL import Image

from parapet.core.pixels import CHANNELS, to_rgba

DEPTH = 24


class Canvas:
    """One display's finished frame: raw BGRA rows, 4 bytes per pixel.

    Depth is always 24; the fourth byte of every pixel is padding as far as
    the display is concerned.
    """

    def __init__(self, width: int, height: int, data: bytes, depth: int = DEPTH):
        expected = width * height * CHANNELS
        if len(data) != expected:
            raise ValueError(f"buffer holds {len(data)} bytes, {width}x{height} needs {expected}")
        self._width = int(width)
        self._height = int(height)
        self._depth = int(depth)
        self._data = bytes(data)

    @classmethod
    def from_bgra(cls, buf: np.ndarray) -> "Canvas":
        h, w = buf.shape[:2]
        return cls(w, h, np.ascontiguousarray(buf, dtype=np.uint8).tobytes())

    @property
    def width(self) -> int:
        return self._width

    @property
    def height(self) -> int:
        return self._height

    @property
    def depth(self) -> int:
        return self._depth

    @property
    def size(self) -> tuple[int, int]:
        return self._width, self._height

    @property
    def stride(self) -> int:
        return self._width * CHANNELS

    @property
    def buffer(self) -> memoryview:
        return memoryview(self._data)

    def to_bytes(self) -> bytes:
        return self._data

    def to_ndarray(self) -> np.ndarray:
        # frombuffer over immutable bytes is already read-only
        return np.frombuffer(self._data, dtype=np.uint8).reshape(self._height, self._width, CHANNELS)

    def to_image(self) -> Image.Image:
        """RGB copy for anything that wants a Pillow image (savers, setters)."""
        return Image.fromarray(to_rgba(self.to_ndarray())).convert("RGB")

    def __repr__(self) -> str:
        return f"Canvas({self._width}x{self._height}, depth={self._depth})"
