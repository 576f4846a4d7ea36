"""
Tests for the eraser tool.
"""

import pytest

from tripboard.core.canvas import Rect
from tripboard.core.canvas.surface import DESTINATION_OUT, SOURCE_OVER
from tripboard.core.tools import EraserTool

from ..conftest import pointer


@pytest.fixture
def tool(cfg):
    return EraserTool(cfg.eraser)


class TestEraserTool:
    def test_erases_to_transparent(self, tool, surface, deps):
        surface.context.fill_rect(Rect(0, 0, 200, 150), "#000000")
        tool.on_pointer_down(surface, pointer(50, 75), deps)
        assert surface.context.composite_operation == DESTINATION_OUT
        tool.on_pointer_move(surface, pointer(150, 75), deps)

        assert surface.buffer[75, 100, 3] == 0
        assert surface.buffer[10, 100, 3] == 255

    def test_release_restores_compositing_and_commits(self, tool, surface, deps):
        tool.on_pointer_down(surface, pointer(50, 75), deps)
        tool.on_pointer_move(surface, pointer(60, 75), deps)
        tool.on_pointer_up(surface, pointer(60, 75), deps)
        assert surface.context.composite_operation == SOURCE_OVER
        deps.commit_snapshot.assert_called_once()

    def test_leave_commits_and_hides_cursor(self, tool, surface, deps):
        tool.on_pointer_down(surface, pointer(50, 75), deps)
        tool.on_pointer_move(surface, pointer(60, 75), deps)
        tool.on_pointer_leave(surface, pointer(200, 75), deps)
        assert surface.context.composite_operation == SOURCE_OVER
        deps.commit_snapshot.assert_called_once()
        assert tool.cursor_element is None

    def test_cursor_ring_follows_pointer(self, tool, surface, deps):
        assert tool.cursor == "none"
        assert tool.cursor_element is None
        tool.on_pointer_move(surface, pointer(40, 30), deps)
        element = tool.cursor_element
        assert (element.x, element.y, element.diameter) == (40, 30, 20)
        tool.set_size(60)
        assert tool.cursor_element.diameter == 60

    def test_hover_does_not_commit(self, tool, surface, deps):
        tool.on_pointer_move(surface, pointer(40, 30), deps)
        tool.on_pointer_up(surface, pointer(40, 30), deps)
        deps.commit_snapshot.assert_not_called()
