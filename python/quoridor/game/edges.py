"""Translate placed walls into the cell adjacencies they sever."""

from __future__ import annotations

from typing import Iterable, Set, Tuple

from ..geometry import Coord, Edge, edge_key
from .board import Orientation, Wall


def severed_pairs(wall: Wall) -> Tuple[Tuple[Coord, Coord], Tuple[Coord, Coord]]:
    """The two undirected cell pairs a wall separates."""

    r, c = wall.row, wall.col
    if wall.orientation is Orientation.HORIZONTAL:
        # Between rows r and r+1, under columns c and c+1.
        return (
            (Coord(r, c), Coord(r + 1, c)),
            (Coord(r, c + 1), Coord(r + 1, c + 1)),
        )
    # Between columns c and c+1, beside rows r and r+1.
    return (
        (Coord(r, c), Coord(r, c + 1)),
        (Coord(r + 1, c), Coord(r + 1, c + 1)),
    )


def blocked_edges(walls: Iterable[Wall]) -> Set[Edge]:
    """Every directed edge severed by ``walls``; four entries per wall."""

    edges: Set[Edge] = set()
    for wall in walls:
        for a, b in severed_pairs(wall):
            edges.add(edge_key(a, b))
            edges.add(edge_key(b, a))
    return edges
