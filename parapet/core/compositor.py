from __future__ import annotations
import logging
from concurrent.futures import ThreadPoolExecutor
from enum import Enum
from typing import Iterable, List, Tuple, Union

import numpy as np
from PIL import Image

from parapet.core.blit import buffer_rect, replace, replace_area
from parapet.core.canvas import Canvas
from parapet.core.pixels import CHANNELS, new_buffer, to_bgra
from parapet.core.rect import Position, Rect
from parapet.core.resample import Filter, resize, resize_to_fill
from parapet.errors import DegenerateTarget, UnsupportedFormat

logger = logging.getLogger(__name__)

Source = Union[Image.Image, np.ndarray]
Color = Tuple[int, int, int, int]  # b, g, r, a

BLANK: Color = (0, 0, 0, 0)


def ceil_div(a: int, b: int) -> int:
    """ceil(a / b) that yields 0 for a == 0 rather than an extra step."""
    if a <= 0:
        return 0
    return 1 + (a - 1) // b


def normalize(source: Source) -> np.ndarray:
    """Accept a Pillow image or an already-normalized BGRA buffer."""
    if isinstance(source, np.ndarray):
        if source.ndim != 3 or source.shape[2] != CHANNELS or source.dtype != np.uint8:
            raise UnsupportedFormat(f"ndarray{source.shape}:{source.dtype}")
        buf = source
    else:
        if 0 in source.size:
            raise UnsupportedFormat(f"empty {source.size[0]}x{source.size[1]} image")
        buf = to_bgra(source)
    # nothing to scale or repeat
    if buf.shape[0] == 0 or buf.shape[1] == 0:
        raise UnsupportedFormat(f"empty {buf.shape[1]}x{buf.shape[0]} image")
    return buf


class PlacementMode(Enum):
    MAX = "max"
    FILL = "fill"
    CENTER = "center"
    TILE = "tile"

    def apply(
        self,
        image: Source,
        width: int,
        height: int,
        *,
        resample: Filter = Filter.NEAREST,
        background: Color = BLANK,
    ) -> Canvas:
        """Place ``image`` on a fresh ``width`` x ``height`` canvas."""
        if width <= 0 or height <= 0:
            raise DegenerateTarget(width, height)

        source = normalize(image)
        screen = Rect.from_size(width, height)
        logger.debug("%s: %dx%d source onto %dx%d", self.value, source.shape[1], source.shape[0], width, height)

        if self is PlacementMode.MAX:
            out = _max(source, screen, resample)
        elif self is PlacementMode.FILL:
            out = _fill(source, screen, resample, background)
        elif self is PlacementMode.TILE:
            out = _tile(source, screen, background)
        else:
            out = _center(source, screen, background)
        return Canvas.from_bgra(out)


# ---------- strategies ----------
def _max(source: np.ndarray, screen: Rect, resample: Filter) -> np.ndarray:
    return resize_to_fill(source, screen.width, screen.height, resample)


def _fill(source: np.ndarray, screen: Rect, resample: Filter, background: Color) -> np.ndarray:
    resized = resize(source, screen.width, screen.height, resample)
    dim = buffer_rect(resized)
    canvas = new_buffer(screen.width, screen.height, background)
    center = screen.relative(Position.CENTER, dim.width, dim.height)
    replace(canvas, resized, center.x, center.y)
    return canvas


def _center(source: np.ndarray, screen: Rect, background: Color) -> np.ndarray:
    src = buffer_rect(source)
    dim = screen.clamp(src)
    canvas = new_buffer(screen.width, screen.height, background)
    center = screen.relative(Position.CENTER, dim.width, dim.height)
    crop = Rect((src.width - dim.width) // 2, (src.height - dim.height) // 2, dim.width, dim.height)
    replace_area(canvas, source, center.x, center.y, crop)
    return canvas


def _tile(source: np.ndarray, screen: Rect, background: Color) -> np.ndarray:
    dim = buffer_rect(source)
    if not screen.contains_width(dim) and not screen.contains_height(dim):
        logger.debug("tile: %dx%d source exceeds screen on both axes, centering", dim.width, dim.height)
        return _center(source, screen, background)

    sw, sh = dim.width, dim.height

    # one column of vertically repeated tiles, centered on the screen's middle row
    column = new_buffer(sw, screen.height, background)
    col = Rect.from_size(sw, screen.height)
    middle = col.relative(Position.CENTER, sw, sh)
    replace(column, source, middle.x, middle.y)

    above = col.clamp(middle.relative(Position.TOP, sw, sh))
    below = col.clamp(middle.relative(Position.BOTTOM, sw, sh))
    rows = ceil_div(max(middle.y, col.bottom - middle.bottom, 0), sh)

    for _ in range(rows):
        replace_area(column, source, above.x, above.y, Rect(0, sh - above.height, above.width, above.height))
        replace_area(column, source, below.x, below.y, Rect(0, 0, below.width, below.height))
        above = col.clamp(above.relative(Position.TOP, sw, sh))
        below = col.clamp(below.relative(Position.BOTTOM, sw, sh))

    # repeat the column sideways from the screen's middle column
    canvas = new_buffer(screen.width, screen.height, background)
    # a column wider than the screen saturates to x=0 and is clipped on the right
    x = screen.relative(Position.CENTER, sw, sh).x
    placed = Rect(x, 0, sw, screen.height)
    replace(canvas, column, placed.x, placed.y)

    left = screen.clamp(placed.relative(Position.LEFT, sw, screen.height))
    right = screen.clamp(placed.relative(Position.RIGHT, sw, screen.height))
    cols = ceil_div(max(placed.x, screen.right - placed.right, 0), sw)

    for _ in range(cols):
        replace_area(canvas, column, left.x, left.y, Rect(sw - left.width, 0, left.width, left.height))
        replace_area(canvas, column, right.x, right.y, Rect(0, 0, right.width, right.height))
        left = screen.clamp(left.relative(Position.LEFT, sw, screen.height))
        right = screen.clamp(right.relative(Position.RIGHT, sw, screen.height))

    return canvas


# ---------- front door ----------
def compose(
    image: Source,
    width: int,
    height: int,
    mode: PlacementMode = PlacementMode.MAX,
    *,
    resample: Filter = Filter.NEAREST,
    background: Color = BLANK,
) -> Canvas:
    return mode.apply(image, width, height, resample=resample, background=background)


class Compositor:
    """Composes one source image onto many display-sized canvases.

    The source is normalized once and shared read-only between workers; every
    call allocates its own destination, so no locking is needed.
    """

    def __init__(
        self,
        mode: PlacementMode = PlacementMode.MAX,
        resample: Filter = Filter.NEAREST,
        background: Color = BLANK,
        workers: int | None = None,
    ):
        self.mode = mode
        self.resample = resample
        self.background = background
        self.workers = workers

    def compose(self, image: Source, width: int, height: int) -> Canvas:
        return self.mode.apply(image, width, height, resample=self.resample, background=self.background)

    def compose_all(self, image: Source, sizes: Iterable[Tuple[int, int]]) -> List[Canvas]:
        """Canvases in the same order as ``sizes``."""
        targets = list(sizes)
        if not targets:
            return []
        for w, h in targets:
            if w <= 0 or h <= 0:
                raise DegenerateTarget(w, h)

        source = normalize(image).view()
        source.setflags(write=False)
        workers = self.workers or len(targets)
        if workers <= 1 or len(targets) == 1:
            return [self.compose(source, w, h) for w, h in targets]

        with ThreadPoolExecutor(max_workers=workers, thread_name_prefix="parapet") as pool:
            futures = [pool.submit(self.compose, source, w, h) for w, h in targets]
            return [f.result() for f in futures]
