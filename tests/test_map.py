"""
Tests for tile semantics on the game map.
"""

import pytest

from turnkeep.entities.components import Position
from turnkeep.world.map import (
    TILE_CLOSED_DOOR,
    TILE_EMPTY,
    TILE_FLOOR,
    TILE_OPEN_DOOR,
    TILE_WALL,
    GameMap,
)


@pytest.fixture
def strip():
    """1x5 map: empty, wall, floor, closed door, open door."""
    game_map = GameMap(5, 1)
    for x, tile in enumerate([TILE_EMPTY, TILE_WALL, TILE_FLOOR, TILE_CLOSED_DOOR, TILE_OPEN_DOOR]):
        game_map.set_tile(Position(x, 0), tile)
    return game_map


class TestTilePredicates:
    """Walkable and passable are separate questions."""

    def test_walkable(self, strip):
        walkable = [strip.is_walkable(Position(x, 0)) for x in range(5)]
        assert walkable == [False, False, True, True, True]

    def test_passable_without_opening(self, strip):
        passable = [strip.is_passable(Position(x, 0)) for x in range(5)]
        assert passable == [False, False, True, False, True]

    def test_costs(self, strip):
        assert strip.cost_of(Position(2, 0)) == 1
        assert strip.cost_of(Position(3, 0)) == 4
        assert strip.cost_of(Position(4, 0)) == 1

    def test_new_map_is_empty(self):
        game_map = GameMap(3, 2)
        assert (game_map.tiles == TILE_EMPTY).all()
        assert not game_map.is_walkable(Position(1, 1))


class TestOutOfBounds:
    """Positions outside the grid."""

    @pytest.mark.parametrize("pos", [Position(-1, 0), Position(5, 0), Position(0, 1), Position(0, -1)])
    def test_not_walkable(self, strip, pos):
        assert not strip.is_walkable(pos)
        assert not strip.is_passable(pos)

    def test_tile_lookup_raises(self, strip):
        with pytest.raises(IndexError):
            strip.tile_at(Position(7, 0))
        with pytest.raises(IndexError):
            strip.cost_of(Position(-1, 0))

    def test_open_door_outside_is_noop(self, strip):
        assert strip.open_door_at(Position(9, 9)) is False


class TestDoors:
    """Opening doors."""

    def test_open_closed_door(self, strip):
        door = Position(3, 0)
        assert strip.open_door_at(door) is True
        assert strip.tile_at(door) == TILE_OPEN_DOOR
        assert strip.is_passable(door)
        assert strip.cost_of(door) == 1

    def test_open_is_idempotent(self, strip):
        door = Position(3, 0)
        strip.open_door_at(door)
        once = strip.tiles.copy()
        assert strip.open_door_at(door) is False
        assert (strip.tiles == once).all()

    def test_open_on_other_tiles_is_noop(self, strip):
        before = strip.tiles.copy()
        for x in (0, 1, 2, 4):
            assert strip.open_door_at(Position(x, 0)) is False
        assert (strip.tiles == before).all()


class TestBlood:
    """Blood stains are cosmetic."""

    def test_stain_keeps_walkability(self, strip):
        floor = Position(2, 0)
        strip.stain(floor)
        assert strip.is_stained(floor)
        assert strip.is_walkable(floor)
        assert strip.cost_of(floor) == 1

    def test_unstained_by_default(self, strip):
        assert not strip.is_stained(Position(2, 0))

    def test_char_at(self, strip):
        assert strip.char_at(Position(1, 0)) == "#"
        assert strip.char_at(Position(3, 0)) == "|"
        assert strip.char_at(Position(30, 0)) == " "
