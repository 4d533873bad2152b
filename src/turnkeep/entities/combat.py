"""
Melee combat between actors.
"""

from typing import List, Union

from turnkeep.entities.components import ActorKind, Monster, Player

Combatant = Union[Player, Monster]


def _damage_line(attacker: Combatant, defender: Combatant, damage: int) -> str:
    if attacker.kind is ActorKind.PLAYER:
        return f"You hit the {defender.name} for {damage} damage."
    if defender.kind is ActorKind.PLAYER:
        return f"The {attacker.name} hits you for {damage} damage."
    return f"The {attacker.name} hits the {defender.name} for {damage} damage."


def _death_line(defender: Combatant) -> str:
    if defender.kind is ActorKind.PLAYER:
        return "You died."
    return f"The {defender.name} died."


def attack(attacker: Combatant, defender: Combatant) -> List[str]:
    """Resolve one attack and return the events it produced."""
    damage = attacker.actor.strength
    target = defender.actor
    target.hitpoints -= damage
    events = [_damage_line(attacker, defender, damage)]

    if target.hitpoints <= 0 and target.alive:
        target.alive = False
        events.append(_death_line(defender))

    return events
