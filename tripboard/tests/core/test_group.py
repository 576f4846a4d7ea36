"""
Tests for the group tool and its glow cache.
"""

import numpy as np
import pytest

from tripboard.core.canvas import Rect
from tripboard.core.tools import GroupTool, find_control

from ..conftest import assert_same_pixels, pointer


@pytest.fixture
def pins(store):
    return store.add_pin(50, 90, "A"), store.add_pin(150, 90, "B")


@pytest.fixture
def tool(store, cfg, pins):
    return GroupTool(store, cfg.group)


def select(tool, surface, deps, *pins):
    for pin in pins:
        tool.on_pointer_down(surface, pointer(pin.x, pin.y), deps)


class TestSelection:
    def test_toggle_adds_and_removes_glow(self, tool, surface, deps, pins):
        blank = surface.snapshot()
        select(tool, surface, deps, pins[0])
        assert tool.selected_pin_ids == {pins[0].id}
        assert not np.array_equal(surface.buffer, blank)

        select(tool, surface, deps, pins[0])
        assert tool.selected_pin_ids == set()
        assert_same_pixels(surface.buffer, blank)

    def test_redraw_is_idempotent(self, tool, surface, deps, pins):
        select(tool, surface, deps, *pins)
        once = surface.snapshot()
        tool.redraw_glow()
        tool.redraw_glow()
        assert_same_pixels(surface.buffer, once)

    def test_hover_does_not_stack_glows(self, tool, surface, deps, pins):
        select(tool, surface, deps, pins[0])
        once = surface.snapshot()
        for x in range(0, 200, 20):
            tool.on_pointer_move(surface, pointer(x, 10), deps)
        assert_same_pixels(surface.buffer, once)

    def test_press_on_empty_space_does_nothing(self, tool, surface, deps):
        before = surface.snapshot()
        tool.on_pointer_down(surface, pointer(100, 20), deps)
        assert tool.selected_pin_ids == set()
        assert_same_pixels(surface.buffer, before)

    def test_tool_never_commits(self, tool, surface, deps, pins):
        select(tool, surface, deps, *pins)
        tool.create_group()
        deps.commit_snapshot.assert_not_called()


class TestGroups:
    def test_create_group_defaults(self, tool, store, surface, deps, pins):
        select(tool, surface, deps, *pins)
        group = tool.create_group()

        assert group.label == "Group 1"
        assert group.pin_ids == [pins[0].id, pins[1].id]
        assert group.color == "#FFD700"
        assert tool.active_group_id == group.id
        assert tool.selected_pin_ids == set()
        assert store.groups == [group]

    def test_create_group_uses_label_field(self, tool, surface, deps, pins):
        tool.set_label("Europe Trip")
        select(tool, surface, deps, pins[0])
        group = tool.create_group()
        assert group.label == "Europe Trip"
        assert tool.label == ""

    def test_create_group_requires_selection(self, tool, store):
        assert tool.create_group() is None
        button = find_control(tool.toolbar, "create_group")
        assert not button.enabled
        button.trigger()
        assert store.groups == []

    def test_group_glow_stays_after_creation(self, tool, surface, deps, pins):
        blank = surface.snapshot()
        select(tool, surface, deps, *pins)
        tool.create_group()
        assert not np.array_equal(surface.buffer, blank)

        after = surface.snapshot()
        tool.redraw_glow()
        assert_same_pixels(surface.buffer, after)

    def test_delete_group_removes_glow(self, tool, store, surface, deps, pins):
        blank = surface.snapshot()
        select(tool, surface, deps, *pins)
        group = tool.create_group()

        find_control(tool.toolbar, "delete_group", key=group.id).trigger()

        assert store.groups == []
        assert tool.active_group_id is None
        assert_same_pixels(surface.buffer, blank)

    def test_rename_group_from_toolbar(self, tool, surface, deps, pins):
        select(tool, surface, deps, pins[0])
        group = tool.create_group()
        find_control(tool.toolbar, "group_label", key=group.id).trigger("Asia")
        assert group.label == "Asia"

    def test_keeps_drawing_made_by_other_tools(self, tool, surface, deps, pins):
        select(tool, surface, deps, pins[0])
        tool.create_group()
        surface.context.fill_rect(Rect(0, 0, 10, 10), "#0000ff")

        tool.on_pointer_move(surface, pointer(100, 10), deps)
        assert tuple(surface.buffer[5, 5]) == (0, 0, 255, 255)


class TestDeactivate:
    def test_selection_glow_is_removed(self, tool, surface, deps, pins):
        blank = surface.snapshot()
        select(tool, surface, deps, pins[0])
        tool.deactivate(surface, deps)
        assert_same_pixels(surface.buffer, blank)
        assert tool.cursor == "default"

    def test_cursor_over_pin(self, tool, surface, deps, pins):
        tool.on_pointer_move(surface, pointer(pins[1].x, pins[1].y), deps)
        assert tool.cursor == "pointer"
