"""
AI system for monsters.
"""

from turnkeep.entities.combat import attack
from turnkeep.entities.components import Monster
from turnkeep.world.level import Level


class AISystem:
    """Runs one turn for every monster on a level."""

    def update(self, level: Level):
        """Update AI for all monsters."""
        for monster in list(level.monsters.values()):
            # Removed earlier in this pass
            if level.monsters.get(monster.pos) is not monster:
                continue

            if monster.actor.hitpoints <= 0:
                self._kill(level, monster)
                continue

            self._chase_player(level, monster)

    def _kill(self, level: Level, monster: Monster):
        monster.actor.alive = False
        level.game_map.stain(monster.pos)
        level.remove_monster(monster)

    def _chase_player(self, level: Level, monster: Monster):
        """Walk towards the player along the A* path, attacking on contact."""
        player = level.player
        result = level.find_path(monster.pos, player.pos)
        if not result.found or not player.alive:
            return

        actor = monster.actor
        actor.action_points = min(actor.action_points + actor.speed, actor.max_action_points)

        for step in result.path[1:]:
            cost = level.game_map.cost_of(step)
            if actor.action_points < cost:
                break

            if step == player.pos:
                level.add_events(*attack(monster, player))
                actor.action_points -= cost
                break

            if level.monster_at(step) is not None:
                break

            level.move_monster(monster, step)
            level.game_map.open_door_at(step)
            actor.action_points -= cost
