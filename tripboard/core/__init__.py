"""
Core engine - UI-agnostic annotation surface and tools.
"""

from .session import CanvasSession

__all__ = ["CanvasSession"]
