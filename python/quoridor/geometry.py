"""Grid geometry for the Quoridor board graph.

Cells are addressed by ``(row, col)`` pairs and two orthogonally adjacent
cells share an edge. Walls are modelled as removed edges, so the rest of the
package only needs the helpers below to walk the grid.
"""

from __future__ import annotations

from typing import List, NamedTuple, Tuple


class Coord(NamedTuple):
    """A board cell, 0-indexed from the top-left corner."""

    row: int
    col: int

    def step(self, delta: "Coord") -> "Coord":
        return Coord(self.row + delta.row, self.col + delta.col)


Edge = Tuple[Coord, Coord]


UP = Coord(-1, 0)
DOWN = Coord(1, 0)
LEFT = Coord(0, -1)
RIGHT = Coord(0, 1)

# Search order used by move generation and path finding.
DIRECTIONS: Tuple[Coord, ...] = (UP, DOWN, LEFT, RIGHT)


def in_bounds(board_size: int, coord: Coord) -> bool:
    """Return ``True`` when both axes of ``coord`` fall inside the board."""

    return 0 <= coord.row < board_size and 0 <= coord.col < board_size


def edge_key(a: Coord, b: Coord) -> Edge:
    """Directed key for the adjacency ``a -> b``.

    Keys are order sensitive: whoever blocks an edge must record both
    ``edge_key(a, b)`` and ``edge_key(b, a)``.
    """

    return (Coord(*a), Coord(*b))


def laterals(direction: Coord) -> Tuple[Coord, Coord]:
    """The two directions orthogonal to ``direction``."""

    if direction.row == 0:
        return UP, DOWN
    return LEFT, RIGHT


def neighbors(board_size: int, coord: Coord) -> List[Coord]:
    """All in-bounds orthogonal neighbours of ``coord``."""

    return [nxt for nxt in (coord.step(d) for d in DIRECTIONS) if in_bounds(board_size, nxt)]

