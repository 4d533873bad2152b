"""
A* pathfinding over the tile grid.

Movement is 4-directional. Each step costs the destination tile's cost, so a
route through a closed door is only chosen when going around is more expensive.
Ties in the frontier are broken by insertion order, which keeps results stable
across runs.
"""

import heapq
import itertools
import logging
from dataclasses import dataclass, field
from typing import Dict, List, Set

from turnkeep.entities.components import Position
from turnkeep.world.map import GameMap

logger = logging.getLogger(__name__)

# Up, down, left, right. Order matters for tie-breaking.
DIRECTIONS = [(0, -1), (0, 1), (-1, 0), (1, 0)]


@dataclass
class PathResult:
    """Result of a pathfinding query."""

    path: List[Position] = field(default_factory=list)
    visited: Set[Position] = field(default_factory=set)
    found: bool = False

    def total_cost(self, game_map: GameMap) -> int:
        """Summed step cost of the path (the start tile is free)."""
        return sum(game_map.cost_of(pos) for pos in self.path[1:])


def heuristic(a: Position, b: Position) -> int:
    return abs(a.x - b.x) + abs(a.y - b.y)


def get_neighbours(game_map: GameMap, pos: Position) -> List[Position]:
    """Walkable orthogonal neighbours of pos."""
    neighbours = []
    for dx, dy in DIRECTIONS:
        next_pos = pos.offset(dx, dy)
        if game_map.is_walkable(next_pos):
            neighbours.append(next_pos)
    return neighbours


def find_path(game_map: GameMap, start: Position, goal: Position) -> PathResult:
    """Find the cheapest path from start to goal, both in grid coordinates."""
    counter = itertools.count()
    frontier = []
    heapq.heappush(frontier, (0, next(counter), start))
    came_from: Dict[Position, Position] = {start: start}
    cost_so_far: Dict[Position, int] = {start: 0}
    visited = {start}

    while frontier:
        _, _, current = heapq.heappop(frontier)

        if current == goal:
            path = [current]
            while current != start:
                current = came_from[current]
                path.append(current)
            path.reverse()
            return PathResult(path=path, visited=visited, found=True)

        for next_pos in get_neighbours(game_map, current):
            new_cost = cost_so_far[current] + game_map.cost_of(next_pos)
            if next_pos not in cost_so_far or new_cost < cost_so_far[next_pos]:
                cost_so_far[next_pos] = new_cost
                priority = new_cost + heuristic(next_pos, goal)
                heapq.heappush(frontier, (priority, next(counter), next_pos))
                came_from[next_pos] = current
                visited.add(next_pos)
                logger.debug(
                    "{%d, %d} to {%d, %d} cost: %d",
                    current.x, current.y, next_pos.x, next_pos.y, new_cost,
                )

    return PathResult(visited=visited)

