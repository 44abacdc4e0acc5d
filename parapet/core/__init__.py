from .rect import Position, Rect
from .canvas import Canvas
from .compositor import Compositor, PlacementMode, compose
from .resample import Filter
