"""
Entities shared across tools.

Contains data classes for pins, transit lines and groups, and the store
that owns them.
"""

from dataclasses import dataclass, field
from typing import Dict, List, Optional, Tuple

from .events import CanvasEvent, EventEmitter, EventType
from .geometry import Point
from ...utils.misc import incrf


@dataclass
class Pin:
    """A labeled location marker."""

    id: int
    x: float
    y: float
    label: str
    color: str = "#FF0000"

    @property
    def position(self) -> Point:
        return Point(self.x, self.y)

    def to_dict(self):
        """Convert to dictionary for serialization."""
        return {
            "id": self.id,
            "x": self.x,
            "y": self.y,
            "label": self.label,
            "color": self.color,
        }


@dataclass(frozen=True)
class TransitOption:
    """One way of travelling a transit line."""

    mode: str
    duration: float  # hours
    cost: float

    def to_dict(self):
        return {"mode": self.mode, "duration": self.duration, "cost": self.cost}


@dataclass
class TransitLine:
    """A committed connection between two pins."""

    id: int
    start_point: Point
    end_point: Point
    distance: int
    transit_options: List[TransitOption] = field(default_factory=list)
    selected_option_index: int = 0
    start_pin_id: Optional[int] = None
    end_pin_id: Optional[int] = None

    @property
    def selected_option(self) -> Optional[TransitOption]:
        if 0 <= self.selected_option_index < len(self.transit_options):
            return self.transit_options[self.selected_option_index]
        return None

    def to_dict(self):
        """Convert to dictionary for serialization."""
        return {
            "id": self.id,
            "start_point": list(self.start_point),
            "end_point": list(self.end_point),
            "distance": self.distance,
            "transit_options": [o.to_dict() for o in self.transit_options],
            "selected_option_index": self.selected_option_index,
            "start_pin_id": self.start_pin_id,
            "end_pin_id": self.end_pin_id,
        }


@dataclass
class Group:
    """A named, coloured set of pin ids. Does not own its pins."""

    id: int
    color: str
    label: str
    pin_ids: List[int] = field(default_factory=list)

    def to_dict(self):
        return {
            "id": self.id,
            "color": self.color,
            "label": self.label,
            "pin_ids": list(self.pin_ids),
        }


class EntityStore:
    """
    Single owner of every pin, line and group on the surface.

    Injected into the tools that need it; tools never keep their own copies.
    """

    def __init__(self, events: Optional[EventEmitter] = None):
        self.pins: List[Pin] = []
        self.lines: List[TransitLine] = []
        self.groups: List[Group] = []
        self.events = events if events is not None else EventEmitter()
        self._pin_ids = incrf()
        self._line_ids = incrf()
        self._group_ids = incrf()

    def _emit(self, event_type: EventType, **data):
        self.events.emit(CanvasEvent(event_type, data))

    # Pins

    def pin_positions(self) -> List[Tuple[float, float]]:
        return [(pin.x, pin.y) for pin in self.pins]

    def get_pin(self, pin_id: int) -> Pin:
        for pin in self.pins:
            if pin.id == pin_id:
                return pin
        raise KeyError(pin_id)

    def add_pin(self, x: float, y: float, label: str, color: str = "#FF0000") -> Pin:
        pin = Pin(id=next(self._pin_ids), x=x, y=y, label=label, color=color)
        self.pins.append(pin)
        self._emit(EventType.PIN_ADDED, pin=pin.to_dict())
        return pin

    def move_pin(self, pin_id: int, x: float, y: float) -> Pin:
        pin = self.get_pin(pin_id)
        pin.x, pin.y = x, y
        self._emit(EventType.PIN_MOVED, pin=pin.to_dict())
        return pin

    def relabel_pin(self, pin_id: int, label: str) -> Pin:
        pin = self.get_pin(pin_id)
        pin.label = label
        self._emit(EventType.PIN_RELABELED, pin=pin.to_dict())
        return pin

    def remove_pin(self, pin_id: int) -> Pin:
        """
        Delete a pin and prune every reference to it.

        Groups lose the id; transit lines that start or end on the pin are
        removed. Raster content is left untouched.
        """
        pin = self.get_pin(pin_id)
        self.pins.remove(pin)
        for group in self.groups:
            if pin_id in group.pin_ids:
                group.pin_ids.remove(pin_id)
        for line in [
            ln for ln in self.lines if pin_id in (ln.start_pin_id, ln.end_pin_id)
        ]:
            self.lines.remove(line)
            self._emit(EventType.LINE_REMOVED, line_id=line.id)
        self._emit(EventType.PIN_REMOVED, pin_id=pin_id)
        return pin

    # Transit lines

    def get_line(self, line_id: int) -> TransitLine:
        for line in self.lines:
            if line.id == line_id:
                return line
        raise KeyError(line_id)

    def add_line(
        self,
        start_point: Point,
        end_point: Point,
        distance: int,
        transit_options: List[TransitOption],
        selected_option_index: int = 0,
        start_pin_id: Optional[int] = None,
        end_pin_id: Optional[int] = None,
    ) -> TransitLine:
        line = TransitLine(
            id=next(self._line_ids),
            start_point=Point(*start_point),
            end_point=Point(*end_point),
            distance=distance,
            transit_options=list(transit_options),
            selected_option_index=selected_option_index,
            start_pin_id=start_pin_id,
            end_pin_id=end_pin_id,
        )
        self.lines.append(line)
        self._emit(EventType.LINE_ADDED, line=line.to_dict())
        return line

    def select_line_option(self, line_id: int, index: int) -> TransitLine:
        line = self.get_line(line_id)
        if not 0 <= index < len(line.transit_options):
            raise IndexError(index)
        line.selected_option_index = index
        self._emit(EventType.LINE_OPTION_SELECTED, line_id=line_id, index=index)
        return line

    # Groups

    def get_group(self, group_id: int) -> Group:
        for group in self.groups:
            if group.id == group_id:
                return group
        raise KeyError(group_id)

    def add_group(self, color: str, label: str, pin_ids) -> Group:
        group = Group(
            id=next(self._group_ids), color=color, label=label, pin_ids=list(pin_ids)
        )
        self.groups.append(group)
        self._emit(EventType.GROUP_CREATED, group=group.to_dict())
        return group

    def relabel_group(self, group_id: int, label: str) -> Group:
        group = self.get_group(group_id)
        group.label = label
        self._emit(EventType.GROUP_RELABELED, group=group.to_dict())
        return group

    def remove_group(self, group_id: int) -> Group:
        group = self.get_group(group_id)
        self.groups.remove(group)
        self._emit(EventType.GROUP_DELETED, group_id=group_id)
        return group

    def to_dict(self) -> Dict[str, list]:
        """Convert to dictionary for serialization."""
        return {
            "pins": [p.to_dict() for p in self.pins],
            "lines": [ln.to_dict() for ln in self.lines],
            "groups": [g.to_dict() for g in self.groups],
        }
