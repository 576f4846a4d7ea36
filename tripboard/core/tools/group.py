"""
Group tool.

Toggles pins into a selection set and turns the selection into named,
coloured groups. Selected and grouped pins get a radial glow.
"""

import logging
from gettext import gettext as _
from typing import List, Optional, Set

import numpy as np
from easydict import EasyDict as edict

from ..canvas.drawing import draw_glow
from ..canvas.geometry import find_point_at
from ..canvas.state import EntityStore, Group
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


class GroupTool(CanvasTool):
    """
    Selection and grouping of pins.

    Glows are never stacked: every redraw starts from a cached base buffer
    and paints only the glows that are not part of that base yet. Creating
    or deleting a group rebuilds the base in two synchronous phases: repaint
    from the glow-free buffer, then recapture.
    """

    name = ToolName.GROUP

    def __init__(self, store: EntityStore, cfg: edict):
        self.store = store
        self.color: str = cfg.color
        self.label: str = ""
        self.hit_radius: float = float(cfg.hit_radius)
        self.glow_size: float = float(cfg.glow_size)

        self.selected_pin_ids: Set[int] = set()
        self.hover_index: Optional[int] = None
        self.active_group_id: Optional[int] = None

        # glow-free buffer, and the buffer that redraws start from
        self._clean: Optional[Snapshot] = None
        self._base: Optional[Snapshot] = None
        # groups whose glow is already painted into _base
        self._baked: Set[int] = set()
        # groups whose glow has ever been painted into the buffer
        self._painted: Set[int] = set()
        self._last_frame: Optional[Snapshot] = None
        self._surface: Optional[RasterSurface] = None

    def find_pin_at(self, x: float, y: float) -> Optional[int]:
        return find_point_at(x, y, self.store.pin_positions(), self.hit_radius)

    # Glow cache

    def _ensure_cache(self, surface: RasterSurface):
        stale = self._last_frame is not None and not np.array_equal(
            surface.buffer, self._last_frame
        )
        if self._base is None or stale:
            if stale:
                logger.debug("Surface changed under the group tool, recapturing base")
            self._clean = surface.snapshot()
            self._base = self._clean
            group_ids = {group.id for group in self.store.groups}
            self._baked = self._painted & group_ids

    def _draw_group_glows(self, surface: RasterSurface, groups: List[Group]):
        ctx = surface.context
        for group in groups:
            members = set(group.pin_ids)
            for pin in self.store.pins:
                if pin.id in members:
                    draw_glow(ctx, pin.x, pin.y, group.color, self.glow_size)

    def redraw_glow(self, surface: Optional[RasterSurface] = None):
        """Restore the cached base and paint the current glow set on top."""
        surface = surface or self._surface
        if surface is None:
            return
        self._ensure_cache(surface)
        surface.restore(self._base)

        ctx = surface.context
        for pin in self.store.pins:
            if pin.id in self.selected_pin_ids:
                draw_glow(ctx, pin.x, pin.y, self.color, self.glow_size)
        self._draw_group_glows(
            surface, [g for g in self.store.groups if g.id not in self._baked]
        )
        self._last_frame = surface.snapshot()

    def _rebuild_base(self, surface: RasterSurface):
        self._ensure_cache(surface)
        # phase one: repaint every group glow over the glow-free buffer
        surface.restore(self._clean)
        self._draw_group_glows(surface, self.store.groups)
        # phase two: that becomes the new base
        self._base = surface.snapshot()
        self._baked = {group.id for group in self.store.groups}
        self._painted |= self._baked
        self._last_frame = self._base

    # Selection and groups

    def toggle_pin(self, pin_id: int):
        if pin_id in self.selected_pin_ids:
            self.selected_pin_ids.discard(pin_id)
        else:
            self.selected_pin_ids.add(pin_id)
        self.redraw_glow()

    def create_group(self) -> Optional[Group]:
        """
        Turn the current selection into a group.

        Returns:
            The new group, or None when nothing is selected
        """
        if not self.selected_pin_ids:
            return None

        label = self.label or _("Group {n}").format(n=len(self.store.groups) + 1)
        pin_ids = [pin.id for pin in self.store.pins if pin.id in self.selected_pin_ids]
        group = self.store.add_group(self.color, label, pin_ids)
        self.active_group_id = group.id
        self.selected_pin_ids = set()
        self.label = ""
        logger.debug("Group %d created with %d pins", group.id, len(pin_ids))

        if self._surface is not None:
            self._rebuild_base(self._surface)
            self.redraw_glow()
        return group

    def delete_group(self, group_id: int):
        """Remove a group; its glow disappears from the buffer and the base."""
        self.store.remove_group(group_id)
        if self.active_group_id == group_id:
            self.active_group_id = None
        self._painted.discard(group_id)
        logger.debug("Group %d deleted", group_id)

        if self._surface is not None:
            self._rebuild_base(self._surface)
            self.redraw_glow()

    def update_group_label(self, group_id: int, label: str):
        self.store.relabel_group(group_id, label)

    def set_color(self, color: str):
        self.color = color

    def set_label(self, text: str):
        self.label = text

    # Pointer handlers

    def on_pointer_down(
        self, surface: Optional[RasterSurface], event: PointerEvent, deps: ToolDeps
    ):
        if surface is None:
            return
        self._surface = surface
        index = self.find_pin_at(event.x, event.y)
        if index is not None:
            self.toggle_pin(self.store.pins[index].id)

    def on_pointer_move(
        self, surface: Optional[RasterSurface], event: PointerEvent, deps: ToolDeps
    ):
        self.hover_index = self.find_pin_at(event.x, event.y)
        if surface is None:
            return
        self._surface = surface
        if self._base is not None or self.selected_pin_ids or self.store.groups:
            self.redraw_glow(surface)

    def on_pointer_up(
        self, surface: Optional[RasterSurface], event: PointerEvent, deps: ToolDeps
    ):
        pass

    def on_pointer_leave(
        self, surface: Optional[RasterSurface], event: PointerEvent, deps: ToolDeps
    ):
        self.hover_index = None

    def activate(self, surface: Optional[RasterSurface], deps: ToolDeps):
        self._surface = surface

    def deactivate(self, surface: Optional[RasterSurface], deps: ToolDeps):
        self.hover_index = None
        # selection glow is transient; leave only the baked group glows behind
        if surface is not None and self._base is not None:
            self._ensure_cache(surface)
            surface.restore(self._base)
        self._clean = None
        self._base = None
        self._last_frame = None
        self._surface = None

    # Toolbar

    @property
    def toolbar(self):
        count = len(self.selected_pin_ids)
        controls = [
            ToolbarControl(
                ControlKind.COLOR,
                "color",
                _("Group Color:"),
                value=self.color,
                on_change=self.set_color,
            ),
            ToolbarControl(
                ControlKind.TEXT,
                "label",
                _("Group Label:"),
                value=self.label,
                on_change=self.set_label,
                placeholder=_("e.g., Europe Trip"),
            ),
            ToolbarControl(
                ControlKind.BUTTON,
                "create_group",
                _("Create Group ({count} pins selected)").format(count=count),
                on_change=self.create_group,
                enabled=count > 0,
            ),
        ]
        for group in self.store.groups:
            controls.append(
                ToolbarControl(
                    ControlKind.TEXT,
                    "group_label",
                    f"({len(group.pin_ids)})",
                    value=group.label,
                    on_change=lambda text, gid=group.id: self.update_group_label(
                        gid, text
                    ),
                    key=group.id,
                )
            )
            controls.append(
                ToolbarControl(
                    ControlKind.BUTTON,
                    "delete_group",
                    _("Delete"),
                    on_change=lambda gid=group.id: self.delete_group(gid),
                    key=group.id,
                )
            )
        return controls

    @property
    def cursor(self) -> str:
        return "pointer" if self.hover_index is not None else "default"
