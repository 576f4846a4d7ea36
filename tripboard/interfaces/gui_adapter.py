"""
GUI adapter for the canvas session.

Bridges the CanvasSession with a pixel-pushing GUI toolkit.
"""

from typing import Any, Callable, Dict, List, Optional

import cv2
import numpy as np

from ..core.canvas import CanvasEvent, EventType
from ..core.canvas.surface import parse_color
from ..core.session import CanvasSession

REFRESH_EVENTS = (
    EventType.SURFACE_RESIZED,
    EventType.SNAPSHOT_COMMITTED,
    EventType.UNDONE,
    EventType.REDONE,
    EventType.CLEARED,
    EventType.TOOL_CHANGED,
    EventType.GROUP_CREATED,
    EventType.GROUP_DELETED,
)


class GUICanvasAdapter:
    """
    Adapter connecting CanvasSession to a GUI.

    Provides a compatibility layer that:
    - Translates session events to a single refresh callback
    - Flattens the RGBA buffer for display and overlays the custom cursor
    - Serialises toolbar controls for generic rendering
    """

    def __init__(
        self,
        session: CanvasSession,
        update_image_callback: Optional[Callable] = None,
        page_color: str = "#ffffff",
    ):
        """
        Initialize adapter.

        Args:
            session: Core canvas session
            update_image_callback: Callback to update GUI image
            page_color: Colour shown through erased (transparent) pixels
        """
        self.session = session
        self.update_image_callback = update_image_callback
        self.page_color = page_color

        # Subscribe to session events
        self._setup_event_handlers()

    def _setup_event_handlers(self):
        """Setup event handlers for session events."""
        for event_type in REFRESH_EVENTS:
            self.session.events.on(event_type, self._on_refresh)

    def _on_refresh(self, event: CanvasEvent):
        if self.update_image_callback:
            self.update_image_callback()

    # Compatibility methods for GUI code

    def select_tool(self, name: str):
        self.session.set_tool(name)

    def mouse_down(self, x: float, y: float):
        self.session.pointer_down(x, y)

    def mouse_move(self, x: float, y: float):
        self.session.pointer_move(x, y)

    def mouse_up(self, x: float, y: float):
        self.session.pointer_up(x, y)

    def mouse_leave(self, x: float, y: float):
        self.session.pointer_leave(x, y)

    def toolbar_spec(self) -> List[Dict[str, Any]]:
        """
        Describe the toolbar as plain data.

        Returns:
            One dictionary per control, in display order
        """
        return [
            {
                "kind": control.kind.value,
                "name": control.name,
                "label": control.label,
                "value": control.value,
                "min": control.minimum,
                "max": control.maximum,
                "enabled": control.enabled,
                "placeholder": control.placeholder,
                "options": list(control.options),
                "key": control.key,
            }
            for control in self.session.toolbar
        ]

    def get_visualization(self) -> Optional[np.ndarray]:
        """
        Get visualization for display.

        Returns:
            RGB image with transparency flattened onto the page colour and
            the tool's cursor overlay drawn on top, or None when unmounted
        """
        buffer = self.session.get_buffer()
        if buffer is None:
            return None

        alpha = buffer[..., 3:4].astype(np.float32) / 255.0
        page = np.array(parse_color(self.page_color)[:3], dtype=np.float32)
        vis = np.round(
            buffer[..., :3].astype(np.float32) * alpha + page * (1.0 - alpha)
        ).astype(np.uint8)

        element = self.session.cursor_element
        if element is not None:
            scale = self.session.surface.scale
            center = (int(round(element.x * scale)), int(round(element.y * scale)))
            radius = max(1, int(round(element.diameter * scale / 2)))
            vis = np.ascontiguousarray(vis)
            # Draw ring with a light halo so it reads on any background
            cv2.circle(vis, center, radius + 1, (255, 255, 255), 1, cv2.LINE_AA)
            cv2.circle(vis, center, radius, (0, 0, 0), 1, cv2.LINE_AA)

        return vis

    @property
    def cursor(self) -> str:
        return self.session.cursor
