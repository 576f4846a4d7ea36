"""
Tool contract.

Every tool is a small state machine driven by pointer events. The host
forwards each event together with the surface and a dependency bag; tools
never reach into the host directly.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Callable, List, Optional

from ..canvas.surface import RasterSurface


class ToolName(Enum):
    DOODLE = "DOODLE"
    ERASER = "ERASER"
    LOCATION_PIN = "LOCATION_PIN"
    TRANSIT = "TRANSIT"
    GROUP = "GROUP"


@dataclass
class PointerEvent:
    """Pointer position in surface-local logical coordinates."""

    x: float
    y: float
    client_x: Optional[float] = None
    client_y: Optional[float] = None


@dataclass
class ToolDeps:
    """Host operations a tool may call but must not reimplement."""

    commit_snapshot: Callable[[], None]
    clear: Callable[[], None]
    undo: Callable[[], Any]
    redo: Callable[[], Any]


class ControlKind(Enum):
    COLOR = "color"
    RANGE = "range"
    TEXT = "text"
    BUTTON = "button"


@dataclass
class ToolbarControl:
    """
    Description of one toolbar widget.

    Frontends render controls generically; ``on_change`` receives the new
    value (colour string, number, text) and is called with no argument for
    buttons.
    """

    kind: ControlKind
    name: str
    label: str
    value: Any = None
    on_change: Optional[Callable[..., None]] = None
    minimum: Optional[float] = None
    maximum: Optional[float] = None
    enabled: bool = True
    placeholder: str = ""
    options: List[str] = field(default_factory=list)
    key: Optional[Any] = None

    def trigger(self, *args):
        if not self.enabled or self.on_change is None:
            return
        self.on_change(*args)


def find_control(
    controls: List[ToolbarControl], name: str, key: Optional[Any] = None
) -> ToolbarControl:
    """Look up a control by name (and key, for per-item controls)."""
    for control in controls:
        if control.name == name and (key is None or control.key == key):
            return control
    raise ValueError(f"Unknown toolbar control: {name}")


@dataclass
class CursorElement:
    """Custom cursor overlay drawn by the frontend at the pointer position."""

    x: float
    y: float
    diameter: float
    shape: str = "ring"


class CanvasTool(ABC):
    """
    Base class for surface tools.

    Handlers receive the surface (None while unmounted), the pointer event
    and the dependency bag. Handlers must no-op when the surface is missing.
    """

    name: ToolName

    @abstractmethod
    def on_pointer_down(
        self, surface: Optional[RasterSurface], event: PointerEvent, deps: ToolDeps
    ):
        ...

    @abstractmethod
    def on_pointer_move(
        self, surface: Optional[RasterSurface], event: PointerEvent, deps: ToolDeps
    ):
        ...

    @abstractmethod
    def on_pointer_up(
        self, surface: Optional[RasterSurface], event: PointerEvent, deps: ToolDeps
    ):
        ...

    @abstractmethod
    def on_pointer_leave(
        self, surface: Optional[RasterSurface], event: PointerEvent, deps: ToolDeps
    ):
        ...

    def activate(self, surface: Optional[RasterSurface], deps: ToolDeps):
        """Called by the host when the tool becomes active on a surface."""

    def deactivate(self, surface: Optional[RasterSurface], deps: ToolDeps):
        """Called by the host when another tool becomes active."""

    @property
    def toolbar(self) -> List[ToolbarControl]:
        return []

    @property
    def cursor(self) -> Optional[str]:
        return None

    @property
    def cursor_element(self) -> Optional[CursorElement]:
        return None
