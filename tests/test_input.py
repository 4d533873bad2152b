"""
Tests for input events, key mapping and the screen-to-grid transform.
"""

import pytest

from turnkeep.core.channels import ViewChannel
from turnkeep.core.viewport import Viewport, screen_to_grid
from turnkeep.entities.components import Position
from turnkeep.input.handler import DEFAULT_KEYS, InputEvent, InputHandler, InputType


class TestInputEvent:
    """Input values."""

    def test_default_is_none(self):
        event = InputEvent()
        assert event.type is InputType.NONE
        assert event.point is None
        assert event.channel is None

    def test_search_carries_point(self):
        event = InputEvent.search(64, 96)
        assert event.type is InputType.SEARCH
        assert event.point == (64, 96)

    def test_close_view_carries_channel(self):
        channel = ViewChannel()
        event = InputEvent.close_view(channel)
        assert event.type is InputType.CLOSE_VIEW
        assert event.channel is channel


class TestKeyMapping:
    """Translating raw keys."""

    def test_default_keys(self):
        handler = InputHandler(DEFAULT_KEYS)

        assert handler.map_key("w").type is InputType.MOVE_UP
        assert handler.map_key("j").type is InputType.MOVE_DOWN
        assert handler.map_key("a").type is InputType.MOVE_LEFT
        assert handler.map_key("l").type is InputType.MOVE_RIGHT
        assert handler.map_key("q").type is InputType.QUIT
        assert handler.map_key("x").type is InputType.CLOSE_VIEW

    def test_unknown_key_is_none(self):
        handler = InputHandler(DEFAULT_KEYS)
        assert handler.map_key("z").type is InputType.NONE

    def test_custom_keys(self):
        handler = InputHandler({"8": "move_up", "Q": "quit"})

        assert handler.map_key("8").type is InputType.MOVE_UP
        assert handler.map_key("w").type is InputType.NONE

    def test_invalid_action_name(self):
        with pytest.raises(ValueError):
            InputHandler({"w": "fly"})


class TestScreenToGrid:
    """Pixel to tile conversion."""

    def test_origin(self):
        assert screen_to_grid((0, 0), Viewport(0, 0, 32)) == Position(0, 0)

    def test_tile_edges(self):
        viewport = Viewport(0, 0, 32)
        assert screen_to_grid((31, 31), viewport) == Position(0, 0)
        assert screen_to_grid((32, 64), viewport) == Position(1, 2)

    def test_offset(self):
        viewport = Viewport(offset_x=100, offset_y=-32, tile_size=32)
        assert screen_to_grid((164, 0), viewport) == Position(2, 1)

    def test_left_of_viewport_is_negative(self):
        assert screen_to_grid((-1, 5), Viewport(0, 0, 32)) == Position(-1, 0)

    def test_default_tile_size(self):
        assert Viewport().tile_size == 32
