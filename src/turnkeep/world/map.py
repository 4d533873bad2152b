import numpy as np
from typing import Dict, Optional

from turnkeep.data.loader import DATA_LOADER, DataLoader
from turnkeep.entities.components import Position

# Tile types represented as integers for memory efficiency
TILE_EMPTY = 0
TILE_WALL = 1
TILE_FLOOR = 2
TILE_CLOSED_DOOR = 3
TILE_OPEN_DOOR = 4


class TileDef:
    """Static properties of one tile type."""

    __slots__ = ["tile_type", "name", "char", "walkable", "passable", "cost"]

    def __init__(
        self,
        tile_type: int,
        name: str,
        char: str,
        walkable: bool,
        passable: bool,
        cost: int = 1,
    ):
        self.tile_type = tile_type
        self.name = name
        self.char = char
        # Walkable: reachable at all, possibly after opening something.
        self.walkable = walkable
        # Passable: can be stepped onto right now without opening anything.
        self.passable = passable
        self.cost = cost


def load_tile_definitions(data_loader: DataLoader = DATA_LOADER) -> Dict[int, TileDef]:
    """Build tile definitions from tiles.json."""
    definitions = {}
    for key, data in data_loader.load_json("tiles").items():
        tile_id = int(key)
        definitions[tile_id] = TileDef(
            tile_type=tile_id,
            name=data.get("name", "unknown"),
            char=data.get("char", "?"),
            walkable=data.get("walkable", False),
            passable=data.get("passable", False),
            cost=int(data.get("cost", 1)),
        )
    return definitions


def symbol_table(data_loader: DataLoader = DATA_LOADER) -> Dict[str, int]:
    """Map each level-file symbol to the tile type it produces."""
    table = {}
    for key, data in data_loader.load_json("tiles").items():
        for symbol in data.get("symbols", []):
            table[symbol] = int(key)
    return table


class GameMap:
    """Rectangular tile grid. Cells never set explicitly are empty."""

    def __init__(
        self,
        width: int,
        height: int,
        tile_definitions: Optional[Dict[int, TileDef]] = None,
    ):
        self.width = width
        self.height = height
        self.tiles = np.full((height, width), TILE_EMPTY, dtype=np.uint8)
        # Cosmetic only, never consulted for movement
        self.blood = np.zeros((height, width), dtype=bool)
        self.tile_definitions = tile_definitions or load_tile_definitions()

    def in_bounds(self, pos: Position) -> bool:
        return 0 <= pos.x < self.width and 0 <= pos.y < self.height

    def tile_at(self, pos: Position) -> int:
        """Tile type at pos. Out-of-bounds access is a caller bug."""
        if not self.in_bounds(pos):
            raise IndexError(f"Position ({pos.x}, {pos.y}) is outside the map")
        return int(self.tiles[pos.y, pos.x])

    def set_tile(self, pos: Position, tile_type: int):
        if not self.in_bounds(pos):
            raise IndexError(f"Position ({pos.x}, {pos.y}) is outside the map")
        self.tiles[pos.y, pos.x] = tile_type

    def tile_def(self, pos: Position) -> TileDef:
        return self.tile_definitions[self.tile_at(pos)]

    def is_walkable(self, pos: Position) -> bool:
        """Check if a tile can be entered at all (closed doors included)."""
        if self.in_bounds(pos):
            return self.tile_def(pos).walkable
        return False

    def is_passable(self, pos: Position) -> bool:
        """Check if a tile can be entered without opening anything first."""
        if self.in_bounds(pos):
            return self.tile_def(pos).passable
        return False

    def is_closed_door(self, pos: Position) -> bool:
        return self.in_bounds(pos) and self.tile_at(pos) == TILE_CLOSED_DOOR

    def cost_of(self, pos: Position) -> int:
        """Movement cost of stepping onto pos."""
        return self.tile_def(pos).cost

    def open_door_at(self, pos: Position) -> bool:
        """Open a closed door at pos. Returns True if a door was opened."""
        if self.is_closed_door(pos):
            self.tiles[pos.y, pos.x] = TILE_OPEN_DOOR
            return True
        return False

    def stain(self, pos: Position):
        """Mark a tile as blood-stained."""
        if self.in_bounds(pos):
            self.blood[pos.y, pos.x] = True

    def is_stained(self, pos: Position) -> bool:
        return self.in_bounds(pos) and bool(self.blood[pos.y, pos.x])

    def char_at(self, pos: Position) -> str:
        """Get the character representation of a tile."""
        if self.in_bounds(pos):
            return self.tile_def(pos).char
        return " "
