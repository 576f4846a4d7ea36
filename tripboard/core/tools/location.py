"""
Location-pin tool.

Places labeled pins, drags existing ones and edits their labels in place.
"""

import logging
from dataclasses import dataclass
from gettext import gettext as _
from typing import Dict, List, Optional, Tuple

import numpy as np
from easydict import EasyDict as edict

from ..canvas.drawing import draw_pin, pin_glyph_bounds
from ..canvas.geometry import Point, distance, find_point_at
from ..canvas.state import EntityStore, Pin
from ..canvas.surface import RasterSurface, Snapshot
from .base import (
    CanvasTool,
    ControlKind,
    PointerEvent,
    ToolbarControl,
    ToolDeps,
    ToolName,
)

logger = logging.getLogger(__name__)

DESTINATIONS = sorted(
    [
        "Paris, France",
        "Tokyo, Japan",
        "New York, USA",
        "London, UK",
        "Rome, Italy",
        "Barcelona, Spain",
        "Dubai, UAE",
        "Singapore",
        "Sydney, Australia",
        "Bangkok, Thailand",
        "Istanbul, Turkey",
        "Amsterdam, Netherlands",
        "Los Angeles, USA",
        "Hong Kong",
        "Berlin, Germany",
        "Vienna, Austria",
        "Prague, Czech Republic",
        "Bali, Indonesia",
        "Santorini, Greece",
        "Maldives",
        "Reykjavik, Iceland",
        "Cairo, Egypt",
        "Marrakech, Morocco",
        "Mumbai, India",
        "Rio de Janeiro, Brazil",
        "Cape Town, South Africa",
        "Seoul, South Korea",
        "Mexico City, Mexico",
        "Venice, Italy",
        "Florence, Italy",
    ]
)


def suggest_destinations(query: str, limit: int = 5) -> List[str]:
    """
    Case-insensitive substring match against the destination list.

    Args:
        query: Text typed so far
        limit: Maximum number of suggestions

    Returns:
        Matching destinations in alphabetical order; empty for a blank query
    """
    needle = query.strip().lower()
    if not needle:
        return []
    return [d for d in DESTINATIONS if needle in d.lower()][:limit]


@dataclass
class Footprint:
    """Device pixels under and over a pin glyph at the moment it was drawn."""

    surface: RasterSurface
    scale: float
    box: Tuple[int, int, int, int]
    under: np.ndarray
    over: np.ndarray


class LocationTool(CanvasTool):
    """
    Pointer-down on empty space drops a pin; on a pin it starts a drag.

    A drag that never travels ``drag_threshold`` pixels from where it
    started is a click: the buffer is put back exactly as it was and the
    pin becomes the target of label edits.

    Whenever the tool paints a glyph it keeps the pixels that were under
    it. Moving or relabeling the pin puts those back, except where
    something was painted over the glyph since.
    """

    name = ToolName.LOCATION_PIN

    def __init__(self, store: EntityStore, cfg: edict):
        self.store = store
        self.color: str = cfg.color
        self.label: str = ""
        self.default_label: str = cfg.default_label
        self.hit_radius: float = float(cfg.hit_radius)
        self.drag_threshold: float = float(cfg.drag_threshold)
        self.pin_size: float = float(cfg.pin_size)
        self.max_suggestions: int = int(cfg.max_suggestions)

        self.selected_pin_id: Optional[int] = None
        self.hover_index: Optional[int] = None
        self.is_dragging = False
        self.moved = False
        self.down_position: Optional[Point] = None
        self.last_pointer: Optional[Point] = None
        self.pre_drag: Optional[Snapshot] = None
        self._drag_base: Optional[Snapshot] = None
        self._surface: Optional[RasterSurface] = None
        self._footprints: Dict[int, Footprint] = {}

    def find_pin_at(self, x: float, y: float) -> Optional[int]:
        return find_point_at(x, y, self.store.pin_positions(), self.hit_radius)

    @property
    def selected_pin(self) -> Optional[Pin]:
        if self.selected_pin_id is None:
            return None
        try:
            return self.store.get_pin(self.selected_pin_id)
        except KeyError:
            self.selected_pin_id = None
            return None

    def _stamp(self, surface: RasterSurface, pin: Pin, x: float, y: float):
        """Draw ``pin`` at (x, y) and remember the pixels it covered."""
        ctx = surface.context
        box = ctx.pixel_box(pin_glyph_bounds(ctx, x, y, pin.label, self.pin_size))
        under = None
        if box is not None:
            x0, y0, x1, y1 = box
            under = surface.buffer[y0:y1, x0:x1].copy()
        draw_pin(ctx, x, y, pin.color, pin.label, self.pin_size)
        if box is None:
            self._footprints.pop(pin.id, None)
            return
        self._footprints[pin.id] = Footprint(
            surface, surface.scale, box, under, surface.buffer[y0:y1, x0:x1].copy()
        )

    def _lift(self, surface: RasterSurface, pin: Pin) -> bool:
        """
        Take the glyph of ``pin`` off the buffer.

        Returns:
            False when there is no usable record of what was under it
        """
        footprint = self._footprints.get(pin.id)
        if footprint is None or footprint.surface is not surface:
            return False
        if footprint.scale != surface.scale:
            return False
        x0, y0, x1, y1 = footprint.box
        region = surface.buffer[y0:y1, x0:x1]
        if region.shape != footprint.under.shape:
            return False
        untouched = np.all(region == footprint.over, axis=-1)
        region[untouched] = footprint.under[untouched]
        return True

    def _render_drag_frame(self, surface: RasterSurface, point: Point):
        surface.restore(self._drag_base)
        pin = self.selected_pin
        if pin is not None:
            draw_pin(surface.context, point.x, point.y, pin.color, pin.label, self.pin_size)

    # Pointer handlers

    def activate(self, surface: Optional[RasterSurface], deps: ToolDeps):
        self._surface = surface

    def on_pointer_down(
        self, surface: Optional[RasterSurface], event: PointerEvent, deps: ToolDeps
    ):
        if surface is None:
            return
        self._surface = surface
        point = Point(event.x, event.y)
        self.last_pointer = point

        index = self.find_pin_at(point.x, point.y)
        if index is not None:
            pin = self.store.pins[index]
            self.selected_pin_id = pin.id
            self.label = pin.label
            self.pre_drag = surface.snapshot()
            # drag frames start from the buffer without the dragged glyph
            if self._lift(surface, pin):
                self._drag_base = surface.snapshot()
                surface.restore(self.pre_drag)
            else:
                self._drag_base = self.pre_drag

            self.is_dragging = True
            self.moved = False
            self.down_position = point
            logger.debug("Drag started on pin %d", pin.id)
            return

        self.selected_pin_id = None
        label = self.label or self.default_label
        pin = self.store.add_pin(point.x, point.y, label, self.color)
        self._stamp(surface, pin, point.x, point.y)
        deps.commit_snapshot()

    def on_pointer_move(
        self, surface: Optional[RasterSurface], event: PointerEvent, deps: ToolDeps
    ):
        point = Point(event.x, event.y)
        self.last_pointer = point

        if self.is_dragging and surface is not None and self._drag_base is not None:
            if distance(self.down_position, point) >= self.drag_threshold:
                self.moved = True
            self._render_drag_frame(surface, point)
        else:
            self.hover_index = self.find_pin_at(point.x, point.y)

    def _end_drag(
        self, surface: Optional[RasterSurface], point: Optional[Point], deps: ToolDeps
    ):
        if not self.is_dragging:
            return
        if point is not None and distance(self.down_position, point) >= self.drag_threshold:
            self.moved = True

        pin = self.selected_pin
        if surface is not None and pin is not None:
            if self.moved:
                surface.restore(self._drag_base)
                self._stamp(surface, pin, point.x, point.y)
                self.store.move_pin(pin.id, point.x, point.y)
                logger.debug("Pin %d moved to (%.1f, %.1f)", pin.id, point.x, point.y)
                deps.commit_snapshot()
            else:
                surface.restore(self.pre_drag)
                logger.debug("Pin %d selected for label editing", pin.id)

        self.is_dragging = False
        self.moved = False
        self.down_position = None
        self.pre_drag = None
        self._drag_base = None

    def on_pointer_up(
        self, surface: Optional[RasterSurface], event: PointerEvent, deps: ToolDeps
    ):
        point = Point(event.x, event.y)
        self.last_pointer = point
        self._end_drag(surface, point, deps)

    def on_pointer_leave(
        self, surface: Optional[RasterSurface], event: PointerEvent, deps: ToolDeps
    ):
        point = Point(event.x, event.y)
        self.last_pointer = point
        self.hover_index = None
        self._end_drag(surface, point, deps)

    def deactivate(self, surface: Optional[RasterSurface], deps: ToolDeps):
        self.hover_index = None
        self._end_drag(surface, self.last_pointer or self.down_position, deps)
        self._surface = None

    # Toolbar actions

    def set_color(self, color: str):
        self.color = color

    def set_label(self, text: str):
        """
        Update the label field.

        With a pin selected the pin is relabeled and its glyph repainted in
        place; no history snapshot is taken.
        """
        self.label = text
        pin = self.selected_pin
        if pin is None:
            return
        if self.is_dragging:
            # the next drag frame repaints the glyph
            self.store.relabel_pin(pin.id, text)
            return

        surface = self._surface
        if surface is not None and not self._lift(surface, pin):
            surface.context.clear_rect(
                pin_glyph_bounds(surface.context, pin.x, pin.y, pin.label, self.pin_size)
            )
        self.store.relabel_pin(pin.id, text)
        if surface is not None:
            self._stamp(surface, pin, pin.x, pin.y)

    def suggestions(self) -> List[str]:
        return suggest_destinations(self.label, self.max_suggestions)

    @property
    def toolbar(self):
        return [
            ToolbarControl(
                ControlKind.COLOR,
                "color",
                _("Pin Color:"),
                value=self.color,
                on_change=self.set_color,
            ),
            ToolbarControl(
                ControlKind.TEXT,
                "label",
                _("Pin Location:"),
                value=self.label,
                on_change=self.set_label,
                placeholder=_("Enter location..."),
                options=self.suggestions(),
            ),
        ]

    @property
    def cursor(self) -> str:
        return "move" if self.hover_index is not None else "crosshair"
