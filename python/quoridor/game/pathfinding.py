from __future__ import annotations

from collections import deque
from typing import Callable, Deque, Iterable, Set

from ..geometry import Coord, edge_key, neighbors
from .board import Wall
from .edges import blocked_edges


def has_path_to_goal(
    board_size: int,
    start: Coord,
    goal_check: Callable[[Coord], bool],
    walls: Iterable[Wall],
) -> bool:
    """Breadth-first search from ``start`` over the wall-pruned grid.

    Piece positions are ignored; only walls cut the graph.
    """

    blocked = blocked_edges(walls)
    start = Coord(*start)
    seen: Set[Coord] = {start}
    queue: Deque[Coord] = deque([start])

    while queue:
        current = queue.popleft()
        if goal_check(current):
            return True
        for nxt in neighbors(board_size, current):
            if edge_key(current, nxt) in blocked:
                continue
            if nxt in seen:
                continue
            seen.add(nxt)
            queue.append(nxt)

    return False
