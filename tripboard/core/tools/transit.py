"""
Transit-line tool.

Connects two pins with a dashed arrow. While the free end is snapped to a
pin the midpoint shows an animated loader, then the distance together with
a ranked panel of travel options.
"""

import logging
from gettext import gettext as _
from typing import List, Optional

from easydict import EasyDict as edict

from ..canvas.drawing import DisplayMode, draw_transit_line
from ..canvas.geometry import Point, Rect, distance, find_point_at, midpoint, pixels_to_km
from ..canvas.scheduler import FrameScheduler
from ..canvas.state import EntityStore, TransitOption
from ..canvas.surface import RasterSurface, RenderContext, Snapshot
from .base import (
    CanvasTool,
    ControlKind,
    PointerEvent,
    ToolbarControl,
    ToolDeps,
    ToolName,
)
from .transit_options import MODE_LABELS, describe_option, generate_transit_options

logger = logging.getLogger(__name__)

PANEL_OFFSET_Y = 12
PANEL_WIDTH = 220
PANEL_ROW_HEIGHT = 22
PANEL_FONT_SIZE = 12


def options_panel_rows(start, end, count: int) -> List[Rect]:
    """Row rectangles of the options panel anchored below the line midpoint."""
    mid = midpoint(start, end)
    left = mid.x - PANEL_WIDTH / 2
    top = mid.y + PANEL_OFFSET_Y
    return [
        Rect(left, top + i * PANEL_ROW_HEIGHT, PANEL_WIDTH, PANEL_ROW_HEIGHT)
        for i in range(count)
    ]


class TransitTool(CanvasTool):
    """
    Draws transit lines between pins.

    Only reads the pin list. A line is recorded only when the gesture starts
    on one pin and is released on a different one; anything else puts the
    buffer back to how it was before the gesture.
    """

    name = ToolName.TRANSIT

    def __init__(self, store: EntityStore, scheduler: FrameScheduler, cfg: edict):
        self.store = store
        self.scheduler = scheduler
        self.color: str = cfg.color
        self.width: int = int(cfg.width)
        self.min_width: int = int(cfg.min_width)
        self.max_width: int = int(cfg.max_width)
        self.snap_radius: float = float(cfg.snap_radius)
        self.km_per_pixel: float = float(cfg.km_per_pixel)
        self.loader_delay: float = float(cfg.loader_delay)

        self.is_drawing = False
        self.start_point: Optional[Point] = None
        self.start_pin_id: Optional[int] = None
        self.current_point: Optional[Point] = None
        self.anchor_pin_id: Optional[int] = None
        self.hover_index: Optional[int] = None
        self.pre_line: Optional[Snapshot] = None

        self.display_mode = DisplayMode.NONE
        self.animation_frame = 0
        self.options: List[TransitOption] = []
        self.selected_option_index = 0
        self._frame_handle: Optional[int] = None
        self._loader_timer: Optional[int] = None
        self._surface: Optional[RasterSurface] = None

    def find_pin_at(self, x: float, y: float) -> Optional[int]:
        return find_point_at(x, y, self.store.pin_positions(), self.snap_radius)

    def calculate_distance(self, p1, p2) -> int:
        return pixels_to_km(distance(p1, p2), self.km_per_pixel)

    @property
    def is_animating(self) -> bool:
        return self._frame_handle is not None

    # Display state machine

    def _start_loader(self):
        self.display_mode = DisplayMode.LOADER
        self.animation_frame = 0
        self._frame_handle = self.scheduler.request_frame(self._animate)
        self._loader_timer = self.scheduler.call_later(
            self.loader_delay, self._on_loader_elapsed
        )

    def _stop_animation(self):
        if self._frame_handle is not None:
            self.scheduler.cancel(self._frame_handle)
            self._frame_handle = None
        self.animation_frame = 0

    def _reset_display(self):
        if self._loader_timer is not None:
            self.scheduler.cancel(self._loader_timer)
            self._loader_timer = None
        self._stop_animation()
        self.display_mode = DisplayMode.NONE
        self.options = []
        self.selected_option_index = 0

    def _animate(self, frame: int):
        self._frame_handle = None
        if self.display_mode is not DisplayMode.LOADER or not self.is_drawing:
            return
        self.animation_frame += 1
        self._redraw()
        self._frame_handle = self.scheduler.request_frame(self._animate)

    def _on_loader_elapsed(self):
        self._loader_timer = None
        if not self.is_drawing or self.anchor_pin_id is None:
            return
        self._stop_animation()
        self.display_mode = DisplayMode.DISTANCE
        self.options = generate_transit_options(
            self.calculate_distance(self.start_point, self.current_point)
        )
        self.selected_option_index = 0
        self._redraw()

    # Rendering

    def _panel_rows(self) -> List[Rect]:
        return options_panel_rows(self.start_point, self.current_point, len(self.options))

    def _draw_panel(self, ctx: RenderContext):
        rows = self._panel_rows()
        if not rows:
            return
        panel = rows[0].union(rows[-1])
        ctx.fill_rect(panel, "#ffffff", alpha=0.95)
        ctx.stroke_rect(panel, self.color, 1)
        for index, (row, option) in enumerate(zip(rows, self.options)):
            if index == self.selected_option_index:
                ctx.fill_rect(row, self.color, alpha=0.15)
            ctx.text(
                describe_option(option),
                (row.x + 6, row.y + row.height / 2),
                "#000000",
                size=PANEL_FONT_SIZE,
            )

    def _redraw(self):
        surface = self._surface
        if surface is None or self.pre_line is None or not self.is_drawing:
            return
        surface.restore(self.pre_line)
        draw_transit_line(
            surface.context,
            self.start_point,
            self.current_point,
            self.color,
            self.width,
            self.calculate_distance(self.start_point, self.current_point),
            self.display_mode,
            self.animation_frame,
        )
        if self.display_mode is DisplayMode.DISTANCE:
            self._draw_panel(surface.context)

    def row_at(self, x: float, y: float) -> Optional[int]:
        """Index of the options-panel row under the pointer, if shown."""
        if self.display_mode is not DisplayMode.DISTANCE:
            return None
        for index, row in enumerate(self._panel_rows()):
            if row.contains(x, y):
                return index
        return None

    def select_option(self, index: int):
        """Change the highlighted option without ending the gesture."""
        if 0 <= index < len(self.options):
            self.selected_option_index = index
            self._redraw()

    # Pointer handlers

    def on_pointer_down(
        self, surface: Optional[RasterSurface], event: PointerEvent, deps: ToolDeps
    ):
        if surface is None:
            return
        self._surface = surface

        if self.is_drawing:
            row = self.row_at(event.x, event.y)
            if row is not None:
                self.select_option(row)
            return

        index = self.find_pin_at(event.x, event.y)
        if index is None:
            return

        pin = self.store.pins[index]
        self.pre_line = surface.snapshot()
        self.start_point = pin.position
        self.start_pin_id = pin.id
        self.current_point = pin.position
        self.anchor_pin_id = None
        self.display_mode = DisplayMode.NONE
        self.is_drawing = True
        logger.debug("Transit line started at pin %d", pin.id)

    def on_pointer_move(
        self, surface: Optional[RasterSurface], event: PointerEvent, deps: ToolDeps
    ):
        self.hover_index = self.find_pin_at(event.x, event.y)
        if not self.is_drawing or surface is None or self.pre_line is None:
            return
        self._surface = surface

        anchor = None
        if self.hover_index is not None:
            pin = self.store.pins[self.hover_index]
            if pin.id != self.start_pin_id:
                anchor = pin

        # the options panel keeps the anchor while the pointer is over it
        if anchor is None and self.row_at(event.x, event.y) is not None:
            return

        if anchor is not None:
            self.current_point = anchor.position
            if anchor.id != self.anchor_pin_id:
                self._reset_display()
                self.anchor_pin_id = anchor.id
                self._start_loader()
        else:
            self.current_point = Point(event.x, event.y)
            self.anchor_pin_id = None
            self._reset_display()

        self._redraw()

    def on_pointer_up(
        self, surface: Optional[RasterSurface], event: PointerEvent, deps: ToolDeps
    ):
        """
        Finish the line on a pin other than the start pin.

        A release over an options-panel row selects that option and keeps
        the gesture open, so the line can still be finished on a pin.
        """
        if not self.is_drawing:
            return
        if surface is None:
            self._end_gesture()
            return

        end_index = self.find_pin_at(event.x, event.y)
        end_pin = self.store.pins[end_index] if end_index is not None else None
        if end_pin is not None and end_pin.id == self.start_pin_id:
            end_pin = None

        if end_pin is None:
            row = self.row_at(event.x, event.y)
            if row is not None:
                self.select_option(row)
                return

        if end_pin is not None:
            end_point = end_pin.position
            line_distance = self.calculate_distance(self.start_point, end_point)
            options = generate_transit_options(line_distance)
            selected = 0
            if end_pin.id == self.anchor_pin_id and options == self.options:
                selected = self.selected_option_index
            caption = None
            if options:
                caption = MODE_LABELS.get(options[selected].mode, options[selected].mode)

            surface.restore(self.pre_line)
            draw_transit_line(
                surface.context,
                self.start_point,
                end_point,
                self.color,
                self.width,
                line_distance,
                DisplayMode.DISTANCE,
                caption=caption,
            )
            line = self.store.add_line(
                self.start_point,
                end_point,
                line_distance,
                options,
                selected_option_index=selected,
                start_pin_id=self.start_pin_id,
                end_pin_id=end_pin.id,
            )
            logger.debug("Transit line %d committed (%d km)", line.id, line_distance)
            self._end_gesture()
            deps.commit_snapshot()
            return

        surface.restore(self.pre_line)
        logger.debug("Transit line cancelled")
        self._end_gesture()

    def _cancel(self, surface: Optional[RasterSurface]):
        if self.is_drawing and surface is not None and self.pre_line is not None:
            surface.restore(self.pre_line)
        self._end_gesture()

    def _end_gesture(self):
        self._reset_display()
        self.is_drawing = False
        self.start_point = None
        self.start_pin_id = None
        self.current_point = None
        self.anchor_pin_id = None
        self.pre_line = None

    def on_pointer_leave(
        self, surface: Optional[RasterSurface], event: PointerEvent, deps: ToolDeps
    ):
        self.hover_index = None
        self._cancel(surface)

    def activate(self, surface: Optional[RasterSurface], deps: ToolDeps):
        self._surface = surface

    def deactivate(self, surface: Optional[RasterSurface], deps: ToolDeps):
        self.hover_index = None
        self._cancel(surface)
        self._surface = None

    # Toolbar

    def set_color(self, color: str):
        self.color = color

    def set_width(self, width):
        self.width = int(min(self.max_width, max(self.min_width, int(width))))

    @property
    def toolbar(self):
        return [
            ToolbarControl(
                ControlKind.COLOR,
                "color",
                _("Line Color:"),
                value=self.color,
                on_change=self.set_color,
            ),
            ToolbarControl(
                ControlKind.RANGE,
                "width",
                _("Line Width: {width}px").format(width=self.width),
                value=self.width,
                on_change=self.set_width,
                minimum=self.min_width,
                maximum=self.max_width,
            ),
        ]

    @property
    def cursor(self) -> str:
        return "pointer" if self.hover_index is not None else "crosshair"
