from __future__ import annotations

from dataclasses import dataclass, field, replace
from enum import Enum
from typing import FrozenSet, Optional, Tuple

from ..geometry import Coord


PlayerId = str


class Orientation(str, Enum):
    HORIZONTAL = "H"
    VERTICAL = "V"


class Axis(str, Enum):
    ROW = "r"
    COL = "c"


@dataclass(frozen=True)
class Goal:
    """The line a player must reach: ``axis`` coordinate equal to ``value``."""

    axis: Axis
    value: int

    def __post_init__(self) -> None:
        object.__setattr__(self, "axis", Axis(self.axis))

    def reached(self, coord: Coord) -> bool:
        if self.axis is Axis.ROW:
            return coord.row == self.value
        return coord.col == self.value


@dataclass(frozen=True)
class Wall:
    """A two-cell wall anchored at its top-left cell.

    Horizontal walls sit between rows ``row`` and ``row + 1`` spanning
    columns ``col`` and ``col + 1``; vertical walls sit between columns
    ``col`` and ``col + 1`` spanning rows ``row`` and ``row + 1``.
    """

    id: str
    orientation: Orientation
    row: int
    col: int

    def __post_init__(self) -> None:
        object.__setattr__(self, "orientation", Orientation(self.orientation))

    @property
    def anchor(self) -> Coord:
        return Coord(self.row, self.col)


@dataclass(frozen=True)
class Player:
    id: PlayerId
    pos: Coord
    goal: Goal
    walls_remaining: int
    start_pos: Optional[Coord] = None
    name: Optional[str] = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "pos", Coord(*self.pos))
        if self.start_pos is not None:
            object.__setattr__(self, "start_pos", Coord(*self.start_pos))

    def moved_to(self, pos: Coord) -> "Player":
        return replace(self, pos=Coord(*pos))

    def spend_wall(self) -> "Player":
        return replace(self, walls_remaining=self.walls_remaining - 1)

    def has_won(self) -> bool:
        return self.goal.reached(self.pos)


@dataclass(frozen=True)
class GameState:
    board_size: int
    players: Tuple[Player, ...]
    walls: Tuple[Wall, ...] = field(default_factory=tuple)
    turn_index: int = 0

    def __post_init__(self) -> None:
        # Accept lists from callers but always store tuples.
        object.__setattr__(self, "players", tuple(self.players))
        object.__setattr__(self, "walls", tuple(self.walls))

    def player(self, player_id: PlayerId) -> Optional[Player]:
        return next((p for p in self.players if p.id == player_id), None)

    def index_of(self, player_id: PlayerId) -> Optional[int]:
        for idx, p in enumerate(self.players):
            if p.id == player_id:
                return idx
        return None

    @property
    def to_move(self) -> Player:
        return self.players[self.turn_index]

    def occupied(self) -> FrozenSet[Coord]:
        return frozenset(p.pos for p in self.players)

    def next_turn_index(self) -> int:
        return (self.turn_index + 1) % len(self.players)
