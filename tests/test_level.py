"""
Tests for the monster mapping kept by Level.
"""

import pytest

from turnkeep.entities.components import Position


class TestMonsterMap:
    """Keys always follow monster positions."""

    def test_move_monster(self, arena):
        rat = arena.monsters[Position(6, 3)]

        arena.move_monster(rat, Position(5, 3))

        assert Position(6, 3) not in arena.monsters
        assert arena.monsters[Position(5, 3)] is rat
        assert rat.pos == Position(5, 3)

    def test_move_onto_monster_rejected(self, make_level):
        level = make_level(["@RS"])
        rat = level.monsters[Position(1, 0)]

        with pytest.raises(ValueError):
            level.move_monster(rat, Position(2, 0))
        assert rat.pos == Position(1, 0)
        assert level.monsters[Position(1, 0)] is rat

    def test_move_unregistered_monster(self, arena, entity_factory):
        stray = entity_factory.create_monster(3, 3, "rat")
        with pytest.raises(KeyError):
            arena.move_monster(stray, Position(4, 3))

    def test_add_duplicate_position(self, arena, entity_factory):
        with pytest.raises(ValueError):
            arena.add_monster(entity_factory.create_monster(6, 3, "spider"))

    def test_remove_monster(self, arena):
        rat = arena.monsters[Position(6, 3)]
        arena.remove_monster(rat)

        assert arena.monster_at(Position(6, 3)) is None
        with pytest.raises(KeyError):
            arena.remove_monster(rat)
