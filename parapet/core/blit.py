from __future__ import annotations

import numpy as np

from parapet.core.rect import Rect


def buffer_rect(buf: np.ndarray) -> Rect:
    h, w = buf.shape[:2]
    return Rect(0, 0, w, h)


def replace_area(dest: np.ndarray, src: np.ndarray, x_pos: int, y_pos: int, area: Rect) -> Rect:
    """Copy ``area`` of ``src`` onto ``dest`` with its top-left at (x_pos, y_pos).

    The copied block is clipped against both buffers, so nothing outside
    either one is ever touched. Returns the source rect actually copied;
    an empty rect means nothing was written.
    """
    if x_pos < 0 or y_pos < 0:
        raise ValueError(f"blit offset must be >= 0, got ({x_pos}, {y_pos})")

    area = buffer_rect(src).clamp(area)

    dest_h, dest_w = dest.shape[:2]
    writable = Rect(area.x, area.y, max(0, dest_w - x_pos), max(0, dest_h - y_pos))
    area = writable.clamp(area)

    if area.is_empty():
        return area

    dest[y_pos:y_pos + area.height, x_pos:x_pos + area.width] = \
        src[area.y:area.bottom, area.x:area.right]
    return area


def replace(dest: np.ndarray, src: np.ndarray, x_pos: int, y_pos: int) -> Rect:
    """Copy all of ``src`` onto ``dest`` at (x_pos, y_pos), clipped."""
    return replace_area(dest, src, x_pos, y_pos, buffer_rect(src))
