# Wallpaper compositor: places one image on every display's canvas
from parapet.core import Canvas, Compositor, Filter, PlacementMode, Position, Rect, compose
from parapet.errors import DegenerateTarget, ImageLoadError, DisplayError, ParapetError, UnsupportedFormat

__version__ = "0.1.0"
