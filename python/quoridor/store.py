"""Keyed storage for live games."""

from __future__ import annotations

import logging
import uuid
from abc import ABC, abstractmethod
from typing import Dict, Iterator, Optional

from .game.board import GameState


LOG = logging.getLogger("quoridor.store")


def new_game_id() -> str:
    return uuid.uuid4().hex


class GameStore(ABC):
    """Get/put access to game snapshots by id.

    Stores hold whole :class:`GameState` snapshots; a transition replaces
    the stored value rather than editing it.
    """

    @abstractmethod
    def get(self, game_id: str) -> Optional[GameState]:
        ...

    @abstractmethod
    def put(self, game_id: str, state: GameState) -> None:
        ...

    @abstractmethod
    def delete(self, game_id: str) -> None:
        ...

    @abstractmethod
    def ids(self) -> Iterator[str]:
        ...

    def __contains__(self, game_id: object) -> bool:
        return isinstance(game_id, str) and self.get(game_id) is not None


class InMemoryGameStore(GameStore):
    def __init__(self) -> None:
        self._games: Dict[str, GameState] = {}

    def get(self, game_id: str) -> Optional[GameState]:
        return self._games.get(game_id)

    def put(self, game_id: str, state: GameState) -> None:
        LOG.debug("Storing game %s (turn %d)", game_id, state.turn_index)
        self._games[game_id] = state

    def delete(self, game_id: str) -> None:
        self._games.pop(game_id, None)

    def ids(self) -> Iterator[str]:
        return iter(list(self._games))

    def __len__(self) -> int:
        return len(self._games)
