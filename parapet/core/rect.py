from __future__ import annotations
from dataclasses import dataclass
from enum import Enum
from typing import Tuple


class Position(Enum):
    CENTER = "center"
    LEFT = "left"
    RIGHT = "right"
    TOP = "top"
    BOTTOM = "bottom"


@dataclass(frozen=True)
class Rect:
    """Axis-aligned rectangle on the unsigned pixel grid.

    Every field is a non-negative int. Arithmetic that would go below zero
    saturates at zero instead, so derived rects are always valid.
    """
    x: int
    y: int
    width: int
    height: int

    def __post_init__(self):
        for name in ("x", "y", "width", "height"):
            if getattr(self, name) < 0:
                raise ValueError(f"Rect.{name} must be >= 0, got {getattr(self, name)}")

    @classmethod
    def from_size(cls, width: int, height: int) -> "Rect":
        return cls(0, 0, width, height)

    # ---------- derived ----------
    @property
    def right(self) -> int:
        return self.x + self.width

    @property
    def bottom(self) -> int:
        return self.y + self.height

    @property
    def center(self) -> Tuple[int, int]:
        return self.x + self.width // 2, self.y + self.height // 2

    @property
    def size(self) -> Tuple[int, int]:
        return self.width, self.height

    def is_empty(self) -> bool:
        return self.width == 0 or self.height == 0

    # ---------- placement ----------
    def relative(self, pos: Position, width: int, height: int) -> "Rect":
        """Return a ``width`` x ``height`` rect anchored against this one."""
        if pos is Position.CENTER:
            return self._at_center(width, height)
        if pos is Position.LEFT:
            return self._at_left(width, height)
        if pos is Position.RIGHT:
            return Rect(self.right, self.y, width, height)
        if pos is Position.TOP:
            return self._at_top(width, height)
        if pos is Position.BOTTOM:
            return Rect(self.x, self.bottom, width, height)
        raise ValueError(f"unknown position: {pos!r}")

    def _at_center(self, width: int, height: int) -> "Rect":
        cx, cy = self.center
        hw, hh = width // 2, height // 2
        x = 0 if hw > cx else cx - hw
        y = 0 if hh > cy else cy - hh
        return Rect(x, y, width, height)

    def _at_left(self, width: int, height: int) -> "Rect":
        # nothing can sit left of column 0
        width = min(width, self.x)
        return Rect(self.x - width, self.y, width, height)

    def _at_top(self, width: int, height: int) -> "Rect":
        height = min(height, self.y)
        return Rect(self.x, self.y - height, width, height)

    # ---------- containment ----------
    def clamp(self, other: "Rect") -> "Rect":
        """Shrink ``other`` so it ends inside this rect.

        An ``other`` whose origin lies outside collapses to an empty rect at
        the origin.
        """
        if not self.contains_point(other.x, other.y):
            return Rect(0, 0, 0, 0)
        width, height = other.width, other.height
        if other.bottom > self.bottom:
            height = max(0, self.bottom - other.y)
        if other.right > self.right:
            width = max(0, self.right - other.x)
        return Rect(other.x, other.y, width, height)

    def contains_width(self, other: "Rect") -> bool:
        return self.x <= other.x and self.width >= other.width

    def contains_height(self, other: "Rect") -> bool:
        return self.y <= other.y and self.height >= other.height

    def contains_point(self, x: int, y: int) -> bool:
        # inclusive on right/bottom: a point on the far edge still counts
        return self.x <= x <= self.right and self.y <= y <= self.bottom
