"""Wall placement legality."""

from __future__ import annotations

from typing import Optional

from .board import GameState, Wall
from .edges import blocked_edges
from .pathfinding import has_path_to_goal


OUT_OF_BOUNDS = "out_of_bounds"
DUPLICATE = "duplicate"
CROSSING = "crossing"
OVERLAP = "overlap"
BLOCKS_PATH = "blocks_path"


def anchor_in_bounds(board_size: int, wall: Wall) -> bool:
    return 0 <= wall.row < board_size - 1 and 0 <= wall.col < board_size - 1


def wall_rejection(state: GameState, wall: Wall) -> Optional[str]:
    """Return why ``wall`` cannot be placed, or ``None`` if it can.

    Checks run cheapest first and stop at the first failure.
    """

    if not anchor_in_bounds(state.board_size, wall):
        return OUT_OF_BOUNDS

    for existing in state.walls:
        if existing.anchor == wall.anchor:
            # Opposite orientations on one anchor cross at the midpoint.
            return DUPLICATE if existing.orientation is wall.orientation else CROSSING

    if blocked_edges(state.walls) & blocked_edges([wall]):
        return OVERLAP

    walls = state.walls + (wall,)
    for player in state.players:
        if not has_path_to_goal(state.board_size, player.pos, player.goal.reached, walls):
            return BLOCKS_PATH

    return None


def can_place_wall(state: GameState, wall: Wall) -> bool:
    return wall_rejection(state, wall) is None
