from __future__ import annotations

import random
from dataclasses import dataclass
from typing import Optional

from .game.board import GameState, PlayerId
from .game.moves import get_legal_moves
from .geometry import Coord


@dataclass(frozen=True)
class PlannedMove:
    player_id: PlayerId
    target: Coord


class RandomAgent:
    """Picks uniformly among the legal pawn moves; never places walls."""

    def __init__(self, player_id: PlayerId, rng: Optional[random.Random] = None) -> None:
        self.player_id = player_id
        self.rng = rng or random.Random()

    def choose_move(self, state: GameState) -> Optional[PlannedMove]:
        moves = get_legal_moves(state, self.player_id)
        if not moves:
            return None
        return PlannedMove(player_id=self.player_id, target=self.rng.choice(moves))

    @property
    def description(self) -> str:
        return "Random"


__all__ = ["PlannedMove", "RandomAgent"]
