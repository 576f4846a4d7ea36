"""
Interfaces module - UI adapters for the canvas core.

Provides adapters to connect the core annotation surface
with different UI frameworks (Qt, Tkinter, Web, etc).
"""

from .gui_adapter import GUICanvasAdapter

__all__ = ['GUICanvasAdapter']
