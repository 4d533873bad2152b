"""
Actor and position definitions shared by the player and monsters.
"""

import itertools
from dataclasses import dataclass, field
from enum import Enum
from typing import ClassVar

_monster_ids = itertools.count(1)


@dataclass(frozen=True, slots=True, order=True)
class Position:
    """Integer grid coordinate."""

    x: int
    y: int

    def offset(self, dx: int, dy: int) -> "Position":
        return Position(self.x + dx, self.y + dy)


class ActorKind(Enum):
    """Tag used where player and monster behaviour differs."""

    PLAYER = "player"
    MONSTER = "monster"


@dataclass(slots=True)
class Actor:
    """State shared by everything that moves and fights."""

    pos: Position
    char: str
    name: str
    hitpoints: int
    strength: int  # Attack power
    speed: float  # Action points regained per turn
    max_action_points: int
    action_points: float = 0.0
    alive: bool = True


@dataclass(slots=True)
class Player:
    """The single player character of a level."""

    actor: Actor
    kind: ClassVar[ActorKind] = ActorKind.PLAYER

    @property
    def pos(self) -> Position:
        return self.actor.pos

    @property
    def name(self) -> str:
        return self.actor.name

    @property
    def alive(self) -> bool:
        return self.actor.alive


@dataclass(slots=True, eq=False)
class Monster:
    """A hostile actor. Compared by identity, not by stats."""

    actor: Actor
    archetype: str = "rat"
    monster_id: int = field(default_factory=lambda: next(_monster_ids))
    kind: ClassVar[ActorKind] = ActorKind.MONSTER

    @property
    def pos(self) -> Position:
        return self.actor.pos

    @property
    def name(self) -> str:
        return self.actor.name

    @property
    def alive(self) -> bool:
        return self.actor.alive

    def __repr__(self) -> str:
        return f"Monster({self.archetype}#{self.monster_id} at {self.pos.x},{self.pos.y})"
