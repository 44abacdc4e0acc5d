from __future__ import annotations


class ParapetError(Exception):
    """Base class for everything parapet raises on purpose."""


class UnsupportedFormat(ParapetError):
    def __init__(self, mode: str):
        super().__init__(f"unsupported image format: {mode}")
        self.mode = mode


class DegenerateTarget(ParapetError, ValueError):
    def __init__(self, width: int, height: int):
        super().__init__(f"target size must be positive, got {width}x{height}")
        self.width = width
        self.height = height


class ImageLoadError(ParapetError):
    pass


class DisplayError(ParapetError):
    pass
