"""
Tests for the freehand drawing tool.
"""

import numpy as np
import pytest

from tripboard.core.tools import DoodleTool, find_control

from ..conftest import painted, pointer


@pytest.fixture
def tool(cfg):
    return DoodleTool(cfg.doodle)


class TestDoodleTool:
    def test_stroke_paints_and_commits_once(self, tool, surface, deps):
        tool.on_pointer_down(surface, pointer(20, 20), deps)
        tool.on_pointer_move(surface, pointer(80, 60), deps)
        tool.on_pointer_move(surface, pointer(120, 60), deps)
        assert painted(surface.buffer) > 0
        deps.commit_snapshot.assert_not_called()

        tool.on_pointer_up(surface, pointer(120, 60), deps)
        deps.commit_snapshot.assert_called_once()
        assert not tool.is_drawing

    def test_leave_commits_like_release(self, tool, surface, deps):
        tool.on_pointer_down(surface, pointer(20, 20), deps)
        tool.on_pointer_move(surface, pointer(80, 60), deps)
        tool.on_pointer_leave(surface, pointer(199, 60), deps)
        deps.commit_snapshot.assert_called_once()

        tool.on_pointer_up(surface, pointer(199, 60), deps)
        deps.commit_snapshot.assert_called_once()

    def test_move_without_press_does_nothing(self, tool, surface, deps):
        before = surface.snapshot()
        tool.on_pointer_move(surface, pointer(80, 60), deps)
        tool.on_pointer_up(surface, pointer(80, 60), deps)
        assert np.array_equal(surface.buffer, before)
        deps.commit_snapshot.assert_not_called()

    def test_unmounted_surface_is_ignored(self, tool, deps):
        tool.on_pointer_down(None, pointer(20, 20), deps)
        tool.on_pointer_move(None, pointer(30, 30), deps)
        tool.on_pointer_up(None, pointer(30, 30), deps)
        deps.commit_snapshot.assert_not_called()

    def test_deactivate_finishes_stroke(self, tool, surface, deps):
        tool.on_pointer_down(surface, pointer(20, 20), deps)
        tool.deactivate(surface, deps)
        deps.commit_snapshot.assert_called_once()

    def test_uses_selected_color(self, tool, surface, deps):
        tool.set_color("#ff0000")
        tool.set_size(10)
        tool.on_pointer_down(surface, pointer(20, 50), deps)
        tool.on_pointer_move(surface, pointer(100, 50), deps)
        assert tuple(surface.buffer[50, 60]) == (255, 0, 0, 255)

    def test_toolbar(self, tool):
        size = find_control(tool.toolbar, "size")
        assert size.label == "Size: 2px"
        size.trigger(500)
        assert tool.size == 50
        size.trigger(0)
        assert tool.size == 1
        find_control(tool.toolbar, "color").trigger("#00ff00")
        assert tool.color == "#00ff00"
