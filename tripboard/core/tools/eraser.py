"""
Eraser tool.

Works like the doodle tool but removes pixels with "destination-out"
compositing, and shows a ring cursor the size of the eraser.
"""

import logging
from gettext import gettext as _
from typing import List, Optional

from easydict import EasyDict as edict

from ..canvas.geometry import Point
from ..canvas.surface import DESTINATION_OUT, SOURCE_OVER, RasterSurface
from .base import (
    CanvasTool,
    ControlKind,
    CursorElement,
    PointerEvent,
    ToolbarControl,
    ToolDeps,
    ToolName,
)

logger = logging.getLogger(__name__)


class EraserTool(CanvasTool):
    name = ToolName.ERASER

    def __init__(self, cfg: edict):
        self.size: int = int(cfg.size)
        self.min_size: int = int(cfg.min_size)
        self.max_size: int = int(cfg.max_size)
        self.is_erasing = False
        self.path: List[Point] = []
        self.cursor_position: Optional[Point] = None
        self.cursor_visible = False

    def set_size(self, size):
        self.size = int(min(self.max_size, max(self.min_size, int(size))))

    def on_pointer_down(
        self, surface: Optional[RasterSurface], event: PointerEvent, deps: ToolDeps
    ):
        if surface is None:
            return
        surface.context.composite_operation = DESTINATION_OUT
        self.path = [Point(event.x, event.y)]
        self.is_erasing = True

    def on_pointer_move(
        self, surface: Optional[RasterSurface], event: PointerEvent, deps: ToolDeps
    ):
        point = Point(event.x, event.y)
        self.cursor_position = point
        self.cursor_visible = True

        if not self.is_erasing or surface is None:
            return
        ctx = surface.context
        ctx.composite_operation = DESTINATION_OUT
        ctx.line(self.path[-1], point, "#000000", self.size)
        self.path.append(point)

    def _finish(self, surface: Optional[RasterSurface], deps: ToolDeps):
        if surface is not None:
            surface.context.composite_operation = SOURCE_OVER
        if not self.is_erasing:
            return
        self.is_erasing = False
        self.path = []
        logger.debug("Erase stroke committed")
        deps.commit_snapshot()

    def on_pointer_up(
        self, surface: Optional[RasterSurface], event: PointerEvent, deps: ToolDeps
    ):
        self._finish(surface, deps)

    def on_pointer_leave(
        self, surface: Optional[RasterSurface], event: PointerEvent, deps: ToolDeps
    ):
        self.cursor_visible = False
        self._finish(surface, deps)

    def deactivate(self, surface: Optional[RasterSurface], deps: ToolDeps):
        self.cursor_visible = False
        self._finish(surface, deps)

    @property
    def toolbar(self):
        return [
            ToolbarControl(
                ControlKind.RANGE,
                "size",
                _("Eraser Size: {size}px").format(size=self.size),
                value=self.size,
                on_change=self.set_size,
                minimum=self.min_size,
                maximum=self.max_size,
            ),
        ]

    @property
    def cursor(self) -> str:
        return "none"

    @property
    def cursor_element(self) -> Optional[CursorElement]:
        if not self.cursor_visible or self.cursor_position is None:
            return None
        return CursorElement(
            x=self.cursor_position.x,
            y=self.cursor_position.y,
            diameter=self.size,
        )
