"""
Glyph painters shared by the tools.

Every function draws through a ``RenderContext`` in logical coordinates
and leaves the context's compositing state as it found it.
"""

from enum import Enum
from typing import Optional, Tuple

from .geometry import Point, Rect, arrow_head, dash_segments, midpoint
from .surface import SOURCE_OVER, RenderContext

PIN_SIZE = 30
PIN_OUTLINE_WIDTH = 1.5
PIN_LABEL_FONT_SIZE = 14
PIN_LABEL_HEIGHT = 18
PIN_LABEL_PADDING = 4
PIN_LABEL_GAP = 8

LINE_DASH = (10, 5)
ARROW_LENGTH = 15
END_DOT_RADIUS = 5
LABEL_OFFSET_Y = -15
DISTANCE_PADDING = 6
LOADER_RADIUS = 8
LOADER_DOT_RADIUS = 2
LOADER_DOT_SPACING = 6
LOADER_FRAMES_PER_DOT = 4

GLOW_LAYERS = 3
GLOW_OFFSET_Y = -15


class DisplayMode(Enum):
    """What is shown at the midpoint of a transit line."""

    NONE = "none"
    LOADER = "loader"
    DISTANCE = "distance"


def _pin_label_rect(
    ctx: RenderContext, x: float, y: float, label: str, size: float
) -> Rect:
    text_width, _ = ctx.measure_text(label, PIN_LABEL_FONT_SIZE)
    text_x = x + size / 2 + PIN_LABEL_GAP
    text_y = y - size / 2
    return Rect(
        text_x - PIN_LABEL_PADDING,
        text_y - PIN_LABEL_HEIGHT / 2 - PIN_LABEL_PADDING,
        text_width + PIN_LABEL_PADDING * 2,
        PIN_LABEL_HEIGHT + PIN_LABEL_PADDING * 2,
    )


def pin_glyph_bounds(
    ctx: RenderContext, x: float, y: float, label: str, size: float = PIN_SIZE
) -> Rect:
    """Bounding box of everything ``draw_pin`` paints, with antialias margin."""
    body_radius = size / 3
    glyph = Rect(
        x - body_radius,
        y - size / 2 - body_radius,
        body_radius * 2,
        size / 2 + body_radius + size / 4,
    )
    if label:
        glyph = glyph.union(_pin_label_rect(ctx, x, y, label, size))
    return glyph.inflate(PIN_OUTLINE_WIDTH + 2)


def draw_pin(
    ctx: RenderContext,
    x: float,
    y: float,
    color: str,
    label: str,
    size: float = PIN_SIZE,
):
    """
    Draw a location pin with its label.

    Args:
        ctx: Render context
        x: Tip X of the pin
        y: Tip Y of the pin
        color: Body colour
        label: Text shown to the right of the pin (skipped when empty)
        size: Overall glyph size
    """
    with ctx.saved():
        ctx.composite_operation = SOURCE_OVER
        head = (x, y - size / 2)
        point = [
            (x - size / 4, y - size / 4),
            (x, y + size / 4),
            (x + size / 4, y - size / 4),
        ]

        ctx.fill_circle(head, size / 3, color)
        ctx.fill_polygon(point, color)
        ctx.fill_circle(head, size / 6, "#ffffff")

        ctx.stroke_circle(head, size / 3, "#000000", PIN_OUTLINE_WIDTH)
        ctx.polyline(point, "#000000", PIN_OUTLINE_WIDTH, closed=True)

        if label:
            box = _pin_label_rect(ctx, x, y, label, size)
            ctx.fill_rect(box, "#ffffff", alpha=0.9)
            ctx.stroke_rect(box, "#e0e0e0", 1)
            ctx.text(
                label,
                (x + size / 2 + PIN_LABEL_GAP, y - size / 2),
                "#000000",
                size=PIN_LABEL_FONT_SIZE,
            )


def draw_glow(ctx: RenderContext, x: float, y: float, color: str, size: float = 40):
    """Multi-layer radial glow centred on a pin head."""
    with ctx.saved():
        ctx.composite_operation = SOURCE_OVER
        for i in range(GLOW_LAYERS, -1, -1):
            radius = size + i * 5
            alpha = 0.15 - i * 0.03
            ctx.fill_circle((x, y + GLOW_OFFSET_Y), radius, color, alpha=alpha)


def line_label_anchor(start, end) -> Point:
    mid = midpoint(start, end)
    return Point(mid.x, mid.y + LABEL_OFFSET_Y)


def _draw_distance_label(ctx: RenderContext, anchor: Point, text: str, color: str):
    text_width, _ = ctx.measure_text(text, 14, bold=True)
    box = Rect(
        anchor.x - text_width / 2 - DISTANCE_PADDING,
        anchor.y - 18,
        text_width + DISTANCE_PADDING * 2,
        22,
    )
    ctx.fill_rect(box, "#ffffff", alpha=0.95)
    ctx.stroke_rect(box, color, 2)
    ctx.text(text, anchor, color, size=14, bold=True, align="center", baseline="bottom")


def loader_dot_opacities(frame: int) -> Tuple[float, float, float]:
    """Opacity of each loader dot for an animation frame."""
    cycle = (frame // LOADER_FRAMES_PER_DOT) % 3
    opacities = []
    for i in range(3):
        if i == cycle:
            opacities.append(1.0)
        elif i == (cycle + 2) % 3:
            opacities.append(0.5)
        else:
            opacities.append(0.3)
    return tuple(opacities)


def _draw_loader(ctx: RenderContext, anchor: Point, color: str, frame: int):
    ctx.fill_circle(anchor, LOADER_RADIUS + 4, "#ffffff", alpha=0.95)
    ctx.stroke_circle(anchor, LOADER_RADIUS + 4, color, 2)
    for i, opacity in enumerate(loader_dot_opacities(frame)):
        dot_x = anchor.x - LOADER_DOT_SPACING + i * LOADER_DOT_SPACING
        ctx.fill_circle((dot_x, anchor.y), LOADER_DOT_RADIUS, color, alpha=opacity)


def draw_transit_line(
    ctx: RenderContext,
    start,
    end,
    color: str,
    width: float,
    distance: int,
    mode: DisplayMode = DisplayMode.NONE,
    frame: int = 0,
    caption: Optional[str] = None,
):
    """
    Draw a dashed arrow between two points with an optional midpoint badge.

    Args:
        ctx: Render context
        start: Line start (x, y)
        end: Line end (x, y)
        color: Stroke colour
        width: Stroke width
        distance: Distance shown in DISTANCE mode (km)
        mode: Midpoint display mode
        frame: Animation frame used by the loader
        caption: Text appended to the distance badge
    """
    with ctx.saved():
        ctx.composite_operation = SOURCE_OVER
        for p1, p2 in dash_segments(start, end, LINE_DASH):
            ctx.line(p1, p2, color, width)

        ctx.fill_polygon(arrow_head(start, end, ARROW_LENGTH), color)

        anchor = line_label_anchor(start, end)
        if mode is DisplayMode.DISTANCE:
            text = f"{distance} km"
            if caption:
                text = f"{text} - {caption}"
            _draw_distance_label(ctx, anchor, text, color)
        elif mode is DisplayMode.LOADER:
            _draw_loader(ctx, anchor, color, frame)

        ctx.fill_circle(start, END_DOT_RADIUS, color)
        ctx.fill_circle(end, END_DOT_RADIUS, color)
