"""
Core canvas module - UI-agnostic annotation surface.

This module provides the raster surface, its snapshot history, the shared
entity store and the painters the tools draw with.
"""

from .events import CanvasEvent, EventType, EventEmitter
from .geometry import Point, Rect
from .history import HistoryStack
from .scheduler import FrameScheduler
from .state import EntityStore, Group, Pin, TransitLine, TransitOption
from .surface import RasterSurface, RenderContext

__all__ = [
    "CanvasEvent",
    "EventType",
    "EventEmitter",
    "EntityStore",
    "FrameScheduler",
    "Group",
    "HistoryStack",
    "Pin",
    "Point",
    "RasterSurface",
    "Rect",
    "RenderContext",
    "TransitLine",
    "TransitOption",
]
