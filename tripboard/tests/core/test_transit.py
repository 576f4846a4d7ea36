"""
Tests for the transit-line tool.

Two pins 160px apart give an 80 km line, whose options are
bus (4.00), public transit (6.40) and drive (12.00).
"""

import numpy as np
import pytest

from tripboard.core.canvas.drawing import DisplayMode
from tripboard.core.tools import TransitTool, find_control, generate_transit_options
from tripboard.core.tools.transit import options_panel_rows

from ..conftest import assert_same_pixels, pointer

START = (20, 75)
END = (180, 75)


@pytest.fixture
def pins(store):
    return store.add_pin(*START, "A"), store.add_pin(*END, "B")


@pytest.fixture
def tool(store, scheduler, cfg, pins):
    return TransitTool(store, scheduler, cfg.transit)


def drag_to_end(tool, surface, deps):
    tool.on_pointer_down(surface, pointer(*START), deps)
    tool.on_pointer_move(surface, pointer(100, 60), deps)
    tool.on_pointer_move(surface, pointer(*END), deps)


class TestCommit:
    def test_line_between_pins(self, tool, store, surface, deps, pins):
        before = surface.snapshot()
        drag_to_end(tool, surface, deps)
        tool.on_pointer_up(surface, pointer(*END), deps)

        (line,) = store.lines
        assert line.distance == 80
        assert line.transit_options == generate_transit_options(80)
        assert (line.start_pin_id, line.end_pin_id) == (pins[0].id, pins[1].id)
        assert line.start_point == START and line.end_point == END
        assert not np.array_equal(surface.buffer, before)
        deps.commit_snapshot.assert_called_once()
        assert not tool.is_drawing

    def test_release_snaps_to_pin(self, tool, store, surface, deps, pins):
        drag_to_end(tool, surface, deps)
        tool.on_pointer_up(surface, pointer(170, 80), deps)
        assert store.lines[0].end_point == END

    @pytest.mark.parametrize("release", [(100, 20), (25, 75)])
    def test_release_elsewhere_restores_buffer(self, tool, store, surface, deps, release):
        before = surface.snapshot()
        tool.on_pointer_down(surface, pointer(*START), deps)
        tool.on_pointer_move(surface, pointer(100, 20), deps)
        tool.on_pointer_move(surface, pointer(*release), deps)
        tool.on_pointer_up(surface, pointer(*release), deps)

        assert_same_pixels(surface.buffer, before)
        assert store.lines == []
        deps.commit_snapshot.assert_not_called()

    def test_press_away_from_pins_does_nothing(self, tool, surface, deps):
        before = surface.snapshot()
        tool.on_pointer_down(surface, pointer(100, 20), deps)
        tool.on_pointer_move(surface, pointer(120, 40), deps)
        assert not tool.is_drawing
        assert_same_pixels(surface.buffer, before)

    def test_leave_cancels(self, tool, store, surface, deps):
        before = surface.snapshot()
        drag_to_end(tool, surface, deps)
        tool.on_pointer_leave(surface, pointer(199, 75), deps)
        assert_same_pixels(surface.buffer, before)
        assert not tool.is_drawing
        assert store.lines == []

    def test_deactivate_cancels(self, tool, store, surface, deps, scheduler):
        before = surface.snapshot()
        drag_to_end(tool, surface, deps)
        tool.deactivate(surface, deps)
        assert_same_pixels(surface.buffer, before)
        assert scheduler.pending == 0


class TestMidpointDisplay:
    def test_loader_then_distance(self, tool, surface, deps, scheduler):
        drag_to_end(tool, surface, deps)
        assert tool.display_mode is DisplayMode.LOADER
        assert tool.is_animating

        scheduler.advance(0.125)
        assert tool.display_mode is DisplayMode.LOADER
        loading = surface.snapshot()

        scheduler.advance(0.375)
        assert tool.display_mode is DisplayMode.DISTANCE
        assert not tool.is_animating
        assert tool.options == generate_transit_options(80)
        assert not np.array_equal(surface.buffer, loading)

    def test_loader_animates(self, tool, surface, deps, scheduler):
        drag_to_end(tool, surface, deps)
        scheduler.advance(0.2)
        assert tool.animation_frame > 0

    def test_leaving_pin_stops_animation(self, tool, surface, deps, scheduler):
        drag_to_end(tool, surface, deps)
        tool.on_pointer_move(surface, pointer(100, 20), deps)
        assert tool.display_mode is DisplayMode.NONE
        assert not tool.is_animating
        assert scheduler.pending == 0

        scheduler.advance(1.0)
        assert tool.display_mode is DisplayMode.NONE

    def test_no_loader_over_start_pin(self, tool, surface, deps):
        tool.on_pointer_down(surface, pointer(*START), deps)
        tool.on_pointer_move(surface, pointer(START[0] + 5, START[1]), deps)
        assert tool.display_mode is DisplayMode.NONE


class TestOptionsPanel:
    def test_rows_sit_below_midpoint(self):
        rows = options_panel_rows(START, END, 3)
        assert len(rows) == 3
        assert rows[0].y > 75
        assert rows[1].y == rows[0].bottom
        assert rows[0].contains(100, rows[0].y + 1)

    def test_selected_option_is_recorded(self, tool, store, surface, deps, scheduler):
        drag_to_end(tool, surface, deps)
        scheduler.advance(0.5)
        row = options_panel_rows(START, END, len(tool.options))[1]
        x, y = 100, row.y + row.height / 2

        tool.on_pointer_move(surface, pointer(x, y), deps)
        assert tool.anchor_pin_id is not None
        tool.on_pointer_up(surface, pointer(x, y), deps)
        assert tool.is_drawing
        assert tool.selected_option_index == 1

        tool.on_pointer_move(surface, pointer(*END), deps)
        tool.on_pointer_up(surface, pointer(*END), deps)

        (line,) = store.lines
        assert line.selected_option_index == 1
        assert line.selected_option.mode == "transit"

    def test_row_hit_only_in_distance_mode(self, tool, surface, deps):
        drag_to_end(tool, surface, deps)
        assert tool.row_at(100, 100) is None


class TestToolbar:
    def test_width_is_clamped(self, tool):
        width = find_control(tool.toolbar, "width")
        assert width.label == "Line Width: 3px"
        width.trigger(99)
        assert tool.width == 10
        width.trigger(0)
        assert tool.width == 1

    def test_cursor(self, tool, surface, deps):
        tool.on_pointer_move(surface, pointer(*START), deps)
        assert tool.cursor == "pointer"
        tool.on_pointer_move(surface, pointer(100, 20), deps)
        assert tool.cursor == "crosshair"
