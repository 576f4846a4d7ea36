"""
Raster surface and render context.

The surface owns an RGBA pixel buffer sized to the host container's logical
size times the device scale factor. Tools draw through the ``RenderContext``
bound to it, always in logical coordinates.
"""

import logging
import math
from contextlib import contextmanager
from functools import lru_cache
from typing import Optional, Sequence, Tuple

import cv2
import numpy as np
from matplotlib.colors import to_rgba

from .geometry import Rect

logger = logging.getLogger(__name__)

SOURCE_OVER = "source-over"
DESTINATION_OUT = "destination-out"

FONT = cv2.FONT_HERSHEY_SIMPLEX
# Hershey simplex glyphs are roughly 22px tall at font scale 1.0
FONT_PIXEL_HEIGHT = 22.0

Snapshot = np.ndarray


@lru_cache(maxsize=256)
def parse_color(color: str) -> Tuple[int, int, int, int]:
    """
    Parse a CSS-style colour string.

    Args:
        color: "#RRGGBB", "#RRGGBBAA" or a named colour

    Returns:
        (r, g, b, a) with components in [0, 255]
    """
    r, g, b, a = to_rgba(color)
    return (
        int(round(r * 255)),
        int(round(g * 255)),
        int(round(b * 255)),
        int(round(a * 255)),
    )


class RasterSurface:
    """
    Pixel buffer with resize/rescale policy.

    The buffer is a ``(H, W, 4)`` uint8 array and is never smaller than 1x1.
    A surface that has not been sized yet is "empty" (zero logical size).
    """

    def __init__(self, scale: float = 1.0, background: str = "#ffffff"):
        if scale <= 0:
            raise ValueError(f"Scale factor must be positive, got {scale}")
        self.width = 0
        self.height = 0
        self.scale = float(scale)
        self.background = background
        self.buffer = self._allocate(1, 1)
        self.context = RenderContext(self)
        # content kept aside while the container is collapsed to zero size
        self._retained: Optional[np.ndarray] = None
        self._retained_scale = self.scale

    @property
    def is_empty(self) -> bool:
        return self.width <= 0 or self.height <= 0

    @property
    def pixel_size(self) -> Tuple[int, int]:
        """(width, height) of the buffer in device pixels."""
        return self.buffer.shape[1], self.buffer.shape[0]

    def _allocate(self, pixel_width: int, pixel_height: int) -> np.ndarray:
        buffer = np.empty((max(1, pixel_height), max(1, pixel_width), 4), dtype=np.uint8)
        buffer[:] = parse_color(self.background)
        return buffer

    @staticmethod
    def _rescale(pixels: np.ndarray, ratio: float) -> np.ndarray:
        if ratio == 1.0:
            return pixels
        return cv2.resize(
            pixels,
            (
                max(1, int(round(pixels.shape[1] * ratio))),
                max(1, int(round(pixels.shape[0] * ratio))),
            ),
            interpolation=cv2.INTER_LINEAR,
        )

    def resize(
        self, width: int, height: int, scale: Optional[float] = None
    ) -> bool:
        """
        Resize to a new logical size, keeping the rendered content.

        Collapsing to zero size keeps the last content aside; it comes back
        on the next resize to a non-empty size.

        Args:
            width: Logical container width
            height: Logical container height
            scale: Device pixel ratio, unchanged when None

        Returns:
            True if the buffer was reallocated, False if nothing changed
        """
        width = max(0, int(width))
        height = max(0, int(height))
        new_scale = self.scale if scale is None else float(scale)
        if new_scale <= 0:
            raise ValueError(f"Scale factor must be positive, got {new_scale}")
        if (width, height, new_scale) == (self.width, self.height, self.scale):
            return False

        if self.is_empty:
            content, content_scale = self._retained, self._retained_scale
        else:
            content, content_scale = self.buffer, self.scale

        self.width = width
        self.height = height
        self.scale = new_scale
        self.buffer = self._allocate(
            int(math.ceil(width * new_scale)), int(math.ceil(height * new_scale))
        )

        if self.is_empty:
            self._retained, self._retained_scale = content, content_scale
        else:
            self._retained = None
            if content is not None:
                self._blit(self._rescale(content, new_scale / content_scale))

        logger.debug(
            "Surface resized to %dx%d (scale %.2f, buffer %dx%d)",
            width,
            height,
            new_scale,
            self.buffer.shape[1],
            self.buffer.shape[0],
        )
        return True

    def _blit(self, pixels: np.ndarray):
        h = min(pixels.shape[0], self.buffer.shape[0])
        w = min(pixels.shape[1], self.buffer.shape[1])
        self.buffer[:h, :w] = pixels[:h, :w]

    def snapshot(self) -> Snapshot:
        """Return a read-only copy of the current buffer."""
        snap = self.buffer.copy()
        snap.setflags(write=False)
        return snap

    def restore(self, snapshot: Snapshot, scale: Optional[float] = None):
        """
        Overwrite the buffer with a previously taken snapshot.

        Args:
            snapshot: Pixels from ``snapshot()``
            scale: Scale factor the snapshot was taken at; it is resampled
                to the current scale when they differ
        """
        if scale is not None and scale != self.scale:
            snapshot = self._rescale(snapshot, self.scale / scale)
        if snapshot.shape == self.buffer.shape:
            np.copyto(self.buffer, snapshot)
            return
        # taken before a resize: paint what overlaps, background elsewhere
        self.buffer[:] = parse_color(self.background)
        self._blit(snapshot)

    def clear(self):
        """Reset the whole buffer to the background fill."""
        self.buffer[:] = parse_color(self.background)
        self.context.composite_operation = SOURCE_OVER


class RenderContext:
    """
    Minimal 2D drawing API over a ``RasterSurface``.

    Every primitive is rasterised into a coverage mask with OpenCV and then
    composited into the buffer according to ``composite_operation``.
    """

    def __init__(self, surface: RasterSurface):
        self.surface = surface
        self.composite_operation = SOURCE_OVER
        self.global_alpha = 1.0

    @contextmanager
    def saved(self):
        """Restore compositing state on exit, like ctx.save()/ctx.restore()."""
        state = (self.composite_operation, self.global_alpha)
        try:
            yield self
        finally:
            self.composite_operation, self.global_alpha = state

    # Coordinate helpers

    def _px(self, value: float) -> int:
        return int(round(value * self.surface.scale))

    def _pt(self, point: Sequence[float]) -> Tuple[int, int]:
        return self._px(point[0]), self._px(point[1])

    def _thickness(self, width: float) -> int:
        return max(1, self._px(width))

    def _new_mask(self) -> np.ndarray:
        return np.zeros(self.surface.buffer.shape[:2], dtype=np.uint8)

    def _composite(self, mask: np.ndarray, color: str, alpha: float = 1.0):
        x, y, w, h = cv2.boundingRect(mask)
        if w == 0 or h == 0:
            return
        region = self.surface.buffer[y : y + h, x : x + w]
        r, g, b, a = parse_color(color)
        coverage = (
            mask[y : y + h, x : x + w].astype(np.float32)
            / 255.0
            * alpha
            * self.global_alpha
            * (a / 255.0)
        )
        if self.composite_operation == DESTINATION_OUT:
            region[..., 3] = np.round(region[..., 3] * (1.0 - coverage)).astype(
                np.uint8
            )
            return
        cov = coverage[..., None]
        rgb = np.array([r, g, b], dtype=np.float32)
        region[..., :3] = np.round(
            rgb * cov + region[..., :3].astype(np.float32) * (1.0 - cov)
        ).astype(np.uint8)
        region[..., 3] = np.round(
            255.0 * coverage + region[..., 3].astype(np.float32) * (1.0 - coverage)
        ).astype(np.uint8)

    # Primitives

    def line(self, p1, p2, color: str, width: float = 1.0, alpha: float = 1.0):
        mask = self._new_mask()
        cv2.line(
            mask, self._pt(p1), self._pt(p2), 255, self._thickness(width), cv2.LINE_AA
        )
        self._composite(mask, color, alpha)

    def polyline(self, points, color: str, width: float = 1.0, closed: bool = False):
        if len(points) < 2:
            return
        mask = self._new_mask()
        pts = np.array([self._pt(p) for p in points], dtype=np.int32)
        cv2.polylines(mask, [pts], closed, 255, self._thickness(width), cv2.LINE_AA)
        self._composite(mask, color)

    def fill_circle(self, center, radius: float, color: str, alpha: float = 1.0):
        mask = self._new_mask()
        cv2.circle(
            mask, self._pt(center), max(1, self._px(radius)), 255, -1, cv2.LINE_AA
        )
        self._composite(mask, color, alpha)

    def stroke_circle(self, center, radius: float, color: str, width: float = 1.0):
        mask = self._new_mask()
        cv2.circle(
            mask,
            self._pt(center),
            max(1, self._px(radius)),
            255,
            self._thickness(width),
            cv2.LINE_AA,
        )
        self._composite(mask, color)

    def fill_polygon(self, points, color: str, alpha: float = 1.0):
        mask = self._new_mask()
        pts = np.array([self._pt(p) for p in points], dtype=np.int32)
        cv2.fillPoly(mask, [pts], 255, cv2.LINE_AA)
        self._composite(mask, color, alpha)

    def fill_rect(self, rect: Rect, color: str, alpha: float = 1.0):
        mask = self._new_mask()
        cv2.rectangle(
            mask,
            self._pt((rect.x, rect.y)),
            self._pt((rect.right, rect.bottom)),
            255,
            -1,
        )
        self._composite(mask, color, alpha)

    def stroke_rect(self, rect: Rect, color: str, width: float = 1.0):
        mask = self._new_mask()
        cv2.rectangle(
            mask,
            self._pt((rect.x, rect.y)),
            self._pt((rect.right, rect.bottom)),
            255,
            self._thickness(width),
        )
        self._composite(mask, color)

    def pixel_box(self, rect: Rect) -> Optional[Tuple[int, int, int, int]]:
        """Device-pixel (x0, y0, x1, y1) covering ``rect``, clipped; None if empty."""
        buf = self.surface.buffer
        scale = self.surface.scale
        x0 = max(0, int(math.floor(rect.x * scale)))
        y0 = max(0, int(math.floor(rect.y * scale)))
        x1 = min(buf.shape[1], int(math.ceil(rect.right * scale)))
        y1 = min(buf.shape[0], int(math.ceil(rect.bottom * scale)))
        if x1 <= x0 or y1 <= y0:
            return None
        return x0, y0, x1, y1

    def clear_rect(self, rect: Rect):
        """Repaint a rectangle with the background fill, ignoring compositing."""
        box = self.pixel_box(rect)
        if box is None:
            return
        x0, y0, x1, y1 = box
        self.surface.buffer[y0:y1, x0:x1] = parse_color(self.surface.background)

    # Text

    @staticmethod
    def _font_scale(size: float) -> float:
        return size / FONT_PIXEL_HEIGHT

    def measure_text(self, text: str, size: float = 14, bold: bool = False):
        """Return the (width, height) of ``text`` in logical pixels."""
        (w, h), _baseline = cv2.getTextSize(
            text, FONT, self._font_scale(size), 2 if bold else 1
        )
        return float(w), float(h)

    def text(
        self,
        text: str,
        origin,
        color: str,
        size: float = 14,
        bold: bool = False,
        align: str = "left",
        baseline: str = "middle",
    ):
        """
        Draw a single line of text.

        Args:
            text: Text to draw
            origin: Anchor point (x, y)
            color: Text colour
            size: Approximate glyph height in logical pixels
            bold: Use a heavier stroke
            align: "left", "center" or "right" relative to the anchor
            baseline: "top", "middle" or "bottom" relative to the anchor
        """
        if not text:
            return
        width, height = self.measure_text(text, size, bold)
        x, y = origin
        if align == "center":
            x -= width / 2
        elif align == "right":
            x -= width
        if baseline == "middle":
            y += height / 2
        elif baseline == "top":
            y += height
        scale = self.surface.scale
        mask = self._new_mask()
        cv2.putText(
            mask,
            text,
            self._pt((x, y)),
            FONT,
            self._font_scale(size) * scale,
            255,
            max(1, int(round((2 if bold else 1) * scale))),
            cv2.LINE_AA,
        )
        self._composite(mask, color)
