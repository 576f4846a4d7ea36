"""
Event system for the annotation surface.

Provides a decoupled way for the engine to notify frontends about state
changes without depending on specific UI frameworks.
"""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, Dict, List, Optional

logger = logging.getLogger(__name__)


class EventType(Enum):
    """Types of events that can occur on the surface."""

    # Surface lifecycle
    SURFACE_MOUNTED = "surface_mounted"
    SURFACE_RESIZED = "surface_resized"
    SURFACE_UNMOUNTED = "surface_unmounted"

    # History
    SNAPSHOT_COMMITTED = "snapshot_committed"
    UNDONE = "undone"
    REDONE = "redone"
    CLEARED = "cleared"

    # Tools
    TOOL_CHANGED = "tool_changed"

    # Entities
    PIN_ADDED = "pin_added"
    PIN_MOVED = "pin_moved"
    PIN_RELABELED = "pin_relabeled"
    PIN_REMOVED = "pin_removed"
    LINE_ADDED = "line_added"
    LINE_REMOVED = "line_removed"
    LINE_OPTION_SELECTED = "line_option_selected"
    GROUP_CREATED = "group_created"
    GROUP_RELABELED = "group_relabeled"
    GROUP_DELETED = "group_deleted"


@dataclass
class CanvasEvent:
    """Event that occurs on the surface."""

    event_type: EventType
    data: Optional[Dict[str, Any]] = None

    def __post_init__(self):
        if self.data is None:
            self.data = {}


class EventEmitter:
    """
    Simple event emitter for pub/sub pattern.

    Allows components to subscribe to events without tight coupling.
    """

    def __init__(self):
        self._listeners: Dict[EventType, List[Callable]] = {}

    def on(self, event_type: EventType, callback: Callable[[CanvasEvent], None]):
        """Subscribe to an event type."""
        if event_type not in self._listeners:
            self._listeners[event_type] = []
        self._listeners[event_type].append(callback)

    def off(self, event_type: EventType, callback: Callable[[CanvasEvent], None]):
        """Unsubscribe from an event type."""
        if event_type in self._listeners:
            self._listeners[event_type].remove(callback)

    def emit(self, event: CanvasEvent):
        """Emit an event to all subscribers."""
        if event.event_type in self._listeners:
            for callback in list(self._listeners[event.event_type]):
                try:
                    callback(event)
                except Exception:
                    # a broken listener must not break the pointer handler
                    logger.warning(
                        "Error in event listener for %s",
                        event.event_type.value,
                        exc_info=True,
                    )

    def clear(self):
        """Clear all event listeners."""
        self._listeners.clear()
