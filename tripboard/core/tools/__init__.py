"""
Surface tools.

Each tool is a state machine over pointer events implementing the
``CanvasTool`` contract.
"""

from .base import (
    CanvasTool,
    ControlKind,
    CursorElement,
    PointerEvent,
    ToolbarControl,
    ToolDeps,
    ToolName,
    find_control,
)
from .doodle import DoodleTool
from .eraser import EraserTool
from .group import GroupTool
from .location import LocationTool, suggest_destinations
from .transit import TransitTool
from .transit_options import generate_transit_options

__all__ = [
    "CanvasTool",
    "ControlKind",
    "CursorElement",
    "DoodleTool",
    "EraserTool",
    "GroupTool",
    "LocationTool",
    "PointerEvent",
    "ToolbarControl",
    "ToolDeps",
    "ToolName",
    "TransitTool",
    "find_control",
    "generate_transit_options",
    "suggest_destinations",
]
