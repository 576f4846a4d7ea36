"""
Freehand drawing tool.
"""

import logging
from gettext import gettext as _
from typing import List, Optional

from easydict import EasyDict as edict

from ..canvas.geometry import Point
from ..canvas.surface import SOURCE_OVER, RasterSurface
from .base import (
    CanvasTool,
    ControlKind,
    PointerEvent,
    ToolbarControl,
    ToolDeps,
    ToolName,
)

logger = logging.getLogger(__name__)


class DoodleTool(CanvasTool):
    """
    Idle -> Drawing -> Idle.

    Segments are painted as the pointer moves; the stroke is committed to
    history when the pointer is released or leaves the surface.
    """

    name = ToolName.DOODLE

    def __init__(self, cfg: edict):
        self.color: str = cfg.color
        self.size: int = int(cfg.size)
        self.min_size: int = int(cfg.min_size)
        self.max_size: int = int(cfg.max_size)
        self.is_drawing = False
        self.path: List[Point] = []

    def set_color(self, color: str):
        self.color = color

    def set_size(self, size):
        self.size = int(min(self.max_size, max(self.min_size, int(size))))

    def _paint_segment(self, surface: RasterSurface, p1: Point, p2: Point):
        ctx = surface.context
        ctx.composite_operation = SOURCE_OVER
        ctx.line(p1, p2, self.color, self.size)

    def on_pointer_down(
        self, surface: Optional[RasterSurface], event: PointerEvent, deps: ToolDeps
    ):
        if surface is None:
            return
        self.path = [Point(event.x, event.y)]
        self.is_drawing = True
        logger.debug("Stroke started at (%.1f, %.1f)", event.x, event.y)

    def on_pointer_move(
        self, surface: Optional[RasterSurface], event: PointerEvent, deps: ToolDeps
    ):
        if not self.is_drawing or surface is None:
            return
        point = Point(event.x, event.y)
        self._paint_segment(surface, self.path[-1], point)
        self.path.append(point)

    def _finish(self, deps: ToolDeps):
        if not self.is_drawing:
            return
        self.is_drawing = False
        logger.debug("Stroke finished with %d points", len(self.path))
        self.path = []
        deps.commit_snapshot()

    def on_pointer_up(
        self, surface: Optional[RasterSurface], event: PointerEvent, deps: ToolDeps
    ):
        self._finish(deps)

    def on_pointer_leave(
        self, surface: Optional[RasterSurface], event: PointerEvent, deps: ToolDeps
    ):
        # leaving keeps the stroke, exactly like releasing
        self._finish(deps)

    def deactivate(self, surface: Optional[RasterSurface], deps: ToolDeps):
        self._finish(deps)

    @property
    def toolbar(self):
        return [
            ToolbarControl(
                ControlKind.COLOR,
                "color",
                _("Color:"),
                value=self.color,
                on_change=self.set_color,
            ),
            ToolbarControl(
                ControlKind.RANGE,
                "size",
                _("Size: {size}px").format(size=self.size),
                value=self.size,
                on_change=self.set_size,
                minimum=self.min_size,
                maximum=self.max_size,
            ),
        ]
