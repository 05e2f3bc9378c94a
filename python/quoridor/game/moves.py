"""Legal pawn moves, including straight jumps and diagonal hops."""

from __future__ import annotations

from typing import List

from ..geometry import DIRECTIONS, Coord, edge_key, in_bounds, laterals
from .board import GameState, PlayerId
from .edges import blocked_edges


def get_legal_moves(state: GameState, player_id: PlayerId) -> List[Coord]:
    """Every cell ``player_id`` may move to, in direction order.

    An unknown player has no moves rather than raising.
    """

    player = state.player(player_id)
    if player is None:
        return []

    size = state.board_size
    blocked = blocked_edges(state.walls)
    occupied = state.occupied()
    origin = player.pos
    moves: List[Coord] = []

    for direction in DIRECTIONS:
        neighbor = origin.step(direction)
        if not in_bounds(size, neighbor):
            continue
        if edge_key(origin, neighbor) in blocked:
            continue

        if neighbor not in occupied:
            moves.append(neighbor)
            continue

        # Pawn in the way: jump straight over it when possible.
        beyond = neighbor.step(direction)
        if (
            in_bounds(size, beyond)
            and edge_key(neighbor, beyond) not in blocked
            and beyond not in occupied
        ):
            moves.append(beyond)
            continue

        # Straight jump unavailable: hop sideways around the pawn.
        for lateral in laterals(direction):
            diagonal = neighbor.step(lateral)
            if not in_bounds(size, diagonal):
                continue
            if diagonal in occupied:
                continue
            if edge_key(neighbor, diagonal) in blocked:
                continue
            moves.append(diagonal)

    return moves
