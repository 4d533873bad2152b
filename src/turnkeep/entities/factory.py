from turnkeep.data.loader import DATA_LOADER, DataLoader
from turnkeep.entities.components import Actor, Monster, Player, Position


class EntityFactory:
    """Factory for creating actors from the archetypes in actors.json."""

    def __init__(self, data_loader: DataLoader = DATA_LOADER):
        self.data_loader = data_loader

    def _actor_from_data(self, pos: Position, data: dict) -> Actor:
        return Actor(
            pos=pos,
            char=data["symbol"],
            name=data["name"],
            hitpoints=int(data["hitpoints"]),
            strength=int(data["strength"]),
            speed=float(data["speed"]),
            max_action_points=int(data["max_action_points"]),
        )

    def create_player(self, x: int, y: int) -> Player:
        """Create the player at (x, y)."""
        data = self.data_loader.get_player_data()
        return Player(self._actor_from_data(Position(x, y), data))

    def create_monster(self, x: int, y: int, monster_type: str = "rat") -> Monster:
        """Create a monster of the given archetype at (x, y)."""
        data = self.data_loader.get_monster_data(monster_type)
        if data is None:
            raise ValueError(f"Unknown monster type: {monster_type}")
        return Monster(self._actor_from_data(Position(x, y), data), archetype=monster_type)

    def create_monster_for_symbol(self, x: int, y: int, symbol: str) -> Monster:
        """Create the monster whose start symbol is `symbol`."""
        return self.create_monster(x, y, self.data_loader.monster_symbols()[symbol])
