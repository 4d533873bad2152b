"""
The level: tile grid, player, monsters and the debug overlay in one place.
"""

from collections import deque
from dataclasses import dataclass, replace
from types import MappingProxyType
from typing import Dict, FrozenSet, Iterable, Mapping, Optional, Set, Tuple

import numpy as np

from turnkeep.entities.components import Actor, Monster, Player, Position
from turnkeep.world.map import GameMap
from turnkeep.world.pathfinding import PathResult, find_path


@dataclass(frozen=True, eq=False)
class LevelSnapshot:
    """Read-only copy of a level as handed to views."""

    turn: int
    tiles: np.ndarray
    blood: np.ndarray
    tile_chars: Mapping[int, str]
    player: Actor
    monsters: Mapping[Position, Actor]
    debug: FrozenSet[Position]
    events: Tuple[str, ...]

    @property
    def width(self) -> int:
        return self.tiles.shape[1]

    @property
    def height(self) -> int:
        return self.tiles.shape[0]

    def char_at(self, pos: Position) -> str:
        """Character to draw at pos, actors taking precedence over terrain."""
        if pos == self.player.pos:
            return self.player.char
        monster = self.monsters.get(pos)
        if monster is not None:
            return monster.char
        return self.tile_chars[int(self.tiles[pos.y, pos.x])]


class Level:
    """Single source of truth for the current world state."""

    def __init__(
        self,
        game_map: GameMap,
        player: Player,
        monsters: Optional[Iterable[Monster]] = None,
        event_log_size: int = 50,
    ):
        self.game_map = game_map
        self.player = player
        self.monsters: Dict[Position, Monster] = {}
        # Tiles touched by the most recent pathfinding call
        self.debug: Set[Position] = set()
        self.events = deque(maxlen=event_log_size)
        self.turn = 0

        for monster in monsters or ():
            self.add_monster(monster)

    def add_events(self, *events: str):
        self.events.extend(events)

    def monster_at(self, pos: Position) -> Optional[Monster]:
        return self.monsters.get(pos)

    def add_monster(self, monster: Monster):
        if monster.pos in self.monsters:
            raise ValueError(f"Position ({monster.pos.x}, {monster.pos.y}) already holds a monster")
        self.monsters[monster.pos] = monster

    def move_monster(self, monster: Monster, to: Position):
        """Move a monster, keeping its map key equal to its position."""
        if self.monsters[monster.pos] is not monster:
            raise KeyError(f"{monster!r} is not registered at its position")
        if to in self.monsters:
            raise ValueError(f"Position ({to.x}, {to.y}) already holds a monster")
        del self.monsters[monster.pos]
        monster.actor.pos = to
        self.monsters[to] = monster

    def remove_monster(self, monster: Monster):
        if self.monsters.get(monster.pos) is not monster:
            raise KeyError(f"{monster!r} is not registered at its position")
        del self.monsters[monster.pos]

    def find_path(self, start: Position, goal: Position) -> PathResult:
        """Run A* and replace the debug overlay with the tiles it explored."""
        result = find_path(self.game_map, start, goal)
        self.debug = result.visited
        return result

    def snapshot(self) -> LevelSnapshot:
        tiles = self.game_map.tiles.copy()
        tiles.flags.writeable = False
        blood = self.game_map.blood.copy()
        blood.flags.writeable = False
        return LevelSnapshot(
            turn=self.turn,
            tiles=tiles,
            blood=blood,
            tile_chars=MappingProxyType(
                {tile_id: tile.char for tile_id, tile in self.game_map.tile_definitions.items()}
            ),
            player=replace(self.player.actor),
            monsters=MappingProxyType(
                {pos: replace(monster.actor) for pos, monster in self.monsters.items()}
            ),
            debug=frozenset(self.debug),
            events=tuple(self.events),
        )
