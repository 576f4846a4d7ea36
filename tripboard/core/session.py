"""
Canvas session management.

Core logic for hosting the annotation surface: owns the raster surface and
its history, routes pointer events to the active tool and exposes the
toolbar/cursor the frontend should render.
UI-agnostic - can be used with any interface (GUI, Web, CLI).
"""

import logging
from gettext import gettext as _
from typing import Any, Dict, List, Optional, Union

import numpy as np
from easydict import EasyDict as edict

from ..config import load_config
from .canvas.events import CanvasEvent, EventEmitter, EventType
from .canvas.history import HistoryStack
from .canvas.scheduler import FrameScheduler
from .canvas.state import EntityStore
from .canvas.surface import RasterSurface
from .tools.base import (
    CanvasTool,
    ControlKind,
    CursorElement,
    PointerEvent,
    ToolbarControl,
    ToolDeps,
    ToolName,
)
from .tools.doodle import DoodleTool
from .tools.eraser import EraserTool
from .tools.group import GroupTool
from .tools.location import LocationTool
from .tools.transit import TransitTool

logger = logging.getLogger(__name__)

DEFAULT_CURSOR = "crosshair"


class CanvasSession:
    """
    Surface host.

    This class handles:
    - Surface lifecycle (mount, resize, unmount)
    - Snapshot history for undo/redo/clear
    - Routing pointer events to the active tool
    - Event emission for UI updates

    Only the active tool sees pointer events. Tools are built once per
    session and share one entity store.
    """

    def __init__(
        self,
        cfg: Optional[edict] = None,
        scheduler: Optional[FrameScheduler] = None,
    ):
        """
        Initialize the session.

        Args:
            cfg: Configuration tree, defaults to ``load_config()``
            scheduler: Clock driving loader animations and timers
        """
        self.cfg = cfg if cfg is not None else load_config()
        self.events = EventEmitter()
        self.store = EntityStore(self.events)
        self.scheduler = scheduler or FrameScheduler(self.cfg.scheduler.fps)

        self.surface: Optional[RasterSurface] = None
        self.history: Optional[HistoryStack] = None
        self.origin = (0.0, 0.0)

        self.tools: Dict[ToolName, CanvasTool] = {
            ToolName.DOODLE: DoodleTool(self.cfg.doodle),
            ToolName.ERASER: EraserTool(self.cfg.eraser),
            ToolName.LOCATION_PIN: LocationTool(self.store, self.cfg.location),
            ToolName.TRANSIT: TransitTool(
                self.store, self.scheduler, self.cfg.transit
            ),
            ToolName.GROUP: GroupTool(self.store, self.cfg.group),
        }
        self.active_tool_name = ToolName.DOODLE

        self.deps = ToolDeps(
            commit_snapshot=self.commit_snapshot,
            clear=self.clear,
            undo=self.undo,
            redo=self.redo,
        )

    def _emit(self, event_type: EventType, **data):
        self.events.emit(CanvasEvent(event_type, data))

    @property
    def is_mounted(self) -> bool:
        return self.surface is not None

    @property
    def active_tool(self) -> CanvasTool:
        return self.tools[self.active_tool_name]

    # Surface lifecycle

    def mount(
        self,
        width: int,
        height: int,
        scale: Optional[float] = None,
        origin=(0.0, 0.0),
    ):
        """
        Create the surface and its history.

        Args:
            width: Logical container width
            height: Logical container height
            scale: Device pixel ratio
            origin: Container's (left, top) in client coordinates
        """
        if self.surface is not None:
            self.unmount()
        self.surface = RasterSurface(
            scale=scale or self.cfg.surface.scale,
            background=self.cfg.surface.background,
        )
        self.history = HistoryStack(self.surface, self.cfg.history.max_size)
        self.origin = tuple(origin)
        self._emit(EventType.SURFACE_MOUNTED)
        self.resize(width, height)
        self.active_tool.activate(self.surface, self.deps)

    def unmount(self):
        if self.surface is None:
            return
        # tools hold on to the surface they last drew on
        for tool in self.tools.values():
            tool.deactivate(self.surface, self.deps)
        self.scheduler.cancel_all()
        self.surface = None
        self.history = None
        self._emit(EventType.SURFACE_UNMOUNTED)

    def resize(self, width: int, height: int, scale: Optional[float] = None):
        """
        Follow the container size.

        The first resize that gives the surface a non-empty size pushes the
        baseline history snapshot.
        """
        if self.surface is None:
            return
        if not self.surface.resize(width, height, scale):
            return
        if not self.surface.is_empty and len(self.history) == 0:
            self.history.commit()
        self._emit(
            EventType.SURFACE_RESIZED,
            width=self.surface.width,
            height=self.surface.height,
            scale=self.surface.scale,
        )

    def set_origin(self, left: float, top: float):
        self.origin = (left, top)

    def to_local(self, client_x: float, client_y: float) -> PointerEvent:
        """Translate client coordinates using the container's bounding box."""
        return PointerEvent(
            x=client_x - self.origin[0],
            y=client_y - self.origin[1],
            client_x=client_x,
            client_y=client_y,
        )

    # Shared dependencies

    def commit_snapshot(self):
        if self.history is None:
            return
        self.history.commit()
        self._emit(EventType.SNAPSHOT_COMMITTED, step=self.history.step)

    def clear(self):
        if self.surface is None:
            return
        self.surface.clear()
        self.commit_snapshot()
        self._emit(EventType.CLEARED)

    def undo(self) -> bool:
        if self.history is None or not self.history.undo():
            return False
        self._emit(EventType.UNDONE, step=self.history.step)
        return True

    def redo(self) -> bool:
        if self.history is None or not self.history.redo():
            return False
        self._emit(EventType.REDONE, step=self.history.step)
        return True

    # Tools

    def set_tool(self, name: Union[ToolName, str]):
        """
        Activate a tool.

        The outgoing tool is deactivated first so in-flight gestures are
        finished or cancelled instead of leaking into the next tool.
        """
        try:
            name = ToolName(name)
        except ValueError:
            raise ValueError(f"Unknown tool: {name}") from None
        if name == self.active_tool_name:
            return
        self.active_tool.deactivate(self.surface, self.deps)
        previous = self.active_tool_name
        self.active_tool_name = name
        self.active_tool.activate(self.surface, self.deps)
        logger.debug("Tool changed: %s -> %s", previous.value, name.value)
        self._emit(EventType.TOOL_CHANGED, previous=previous.value, tool=name.value)

    def pointer_down(self, client_x: float, client_y: float):
        self.active_tool.on_pointer_down(
            self.surface, self.to_local(client_x, client_y), self.deps
        )

    def pointer_move(self, client_x: float, client_y: float):
        self.active_tool.on_pointer_move(
            self.surface, self.to_local(client_x, client_y), self.deps
        )

    def pointer_up(self, client_x: float, client_y: float):
        self.active_tool.on_pointer_up(
            self.surface, self.to_local(client_x, client_y), self.deps
        )

    def pointer_leave(self, client_x: float, client_y: float):
        self.active_tool.on_pointer_leave(
            self.surface, self.to_local(client_x, client_y), self.deps
        )

    def tick(self, seconds: float):
        """Advance timers and repaint loops; call from the frontend's loop."""
        self.scheduler.advance(seconds)

    # Frontend data

    @property
    def toolbar(self) -> List[ToolbarControl]:
        """Active tool's controls followed by the history controls."""
        controls = list(self.active_tool.toolbar)
        history = self.history
        controls.extend(
            [
                ToolbarControl(
                    ControlKind.BUTTON,
                    "undo",
                    _("Undo"),
                    on_change=self.undo,
                    enabled=history is not None and history.can_undo,
                ),
                ToolbarControl(
                    ControlKind.BUTTON,
                    "redo",
                    _("Redo"),
                    on_change=self.redo,
                    enabled=history is not None and history.can_redo,
                ),
                ToolbarControl(
                    ControlKind.BUTTON,
                    "clear",
                    _("Clear"),
                    on_change=self.clear,
                    enabled=self.surface is not None,
                ),
            ]
        )
        return controls

    @property
    def cursor(self) -> str:
        return self.active_tool.cursor or DEFAULT_CURSOR

    @property
    def cursor_element(self) -> Optional[CursorElement]:
        return self.active_tool.cursor_element

    def get_buffer(self) -> Optional[np.ndarray]:
        if self.surface is None:
            return None
        return self.surface.buffer

    def get_visualization_data(self) -> Dict[str, Any]:
        """
        Get data needed for visualization.

        Returns:
            Dictionary with visualization data
        """
        return {
            "buffer": self.get_buffer(),
            "tool": self.active_tool_name.value,
            "cursor": self.cursor,
            "cursor_element": self.cursor_element,
            "can_undo": self.history is not None and self.history.can_undo,
            "can_redo": self.history is not None and self.history.can_redo,
            "entities": self.store.to_dict(),
        }
