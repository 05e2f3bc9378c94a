"""Game rooms, seat claiming and turn serialization on top of the rules engine."""

from __future__ import annotations

import asyncio
import logging
import uuid
from dataclasses import dataclass, field
from typing import Callable, Dict, List, Optional, Tuple

from .config import GameDefaults
from .game.board import GameState, Orientation, PlayerId, Wall
from .game.errors import RuleViolation
from .game.rules import apply_move, apply_place_wall, check_winner, create_initial_state
from .geometry import Coord
from .store import GameStore, InMemoryGameStore, new_game_id


LOG = logging.getLogger("quoridor.lobby")


class LobbyError(RuntimeError):
    def __init__(self, code: str, message: Optional[str] = None) -> None:
        self.code = code
        super().__init__(message or code)


@dataclass(frozen=True)
class GameUpdate:
    game_id: str
    state: GameState
    winner: Optional[PlayerId] = None


@dataclass
class GameRoom:
    game_id: str
    seats: Dict[PlayerId, str] = field(default_factory=dict)
    lock: asyncio.Lock = field(default_factory=asyncio.Lock)
    subscribers: List["asyncio.Queue[GameUpdate]"] = field(default_factory=list)

    def seat_of(self, username: str) -> Optional[PlayerId]:
        for player_id, owner in self.seats.items():
            if owner == username:
                return player_id
        return None


class Lobby:
    def __init__(
        self,
        store: Optional[GameStore] = None,
        defaults: Optional[GameDefaults] = None,
    ) -> None:
        self.store = store if store is not None else InMemoryGameStore()
        self.defaults = defaults or GameDefaults()
        self.rooms: Dict[str, GameRoom] = {}
        self._lock = asyncio.Lock()

    async def create_game(
        self,
        player_count: int = 2,
        board_size: Optional[int] = None,
    ) -> Tuple[str, GameState]:
        try:
            state = create_initial_state(player_count, board_size, self.defaults)
        except ValueError as exc:
            raise LobbyError("invalid_game", str(exc)) from exc

        async with self._lock:
            game_id = new_game_id()
            self.store.put(game_id, state)
            self.rooms[game_id] = GameRoom(game_id=game_id)

        LOG.info("Created game %s (%d players, %dx%d)", game_id, player_count, state.board_size, state.board_size)
        return game_id, state

    def get_game(self, game_id: str) -> GameState:
        state = self.store.get(game_id)
        if state is None:
            raise LobbyError("not_found", f"no such game: {game_id}")
        return state

    def _room(self, game_id: str) -> GameRoom:
        self.get_game(game_id)
        # Games written to the store by someone else get a room lazily.
        room = self.rooms.get(game_id)
        if room is None:
            room = self.rooms[game_id] = GameRoom(game_id=game_id)
        return room

    def slots(self, game_id: str) -> Dict[PlayerId, str]:
        return dict(self._room(game_id).seats)

    async def claim_slot(
        self,
        game_id: str,
        username: str,
        player_id: Optional[PlayerId] = None,
    ) -> PlayerId:
        if not isinstance(username, str) or not username.strip():
            raise LobbyError("invalid_name")

        room = self._room(game_id)
        async with room.lock:
            state = self.get_game(game_id)
            existing = room.seat_of(username)

            if player_id is None:
                if existing is not None:
                    return existing
                free = [p.id for p in state.players if p.id not in room.seats]
                if not free:
                    raise LobbyError("no_free_slots")
                player_id = free[0]
            elif state.player(player_id) is None:
                raise LobbyError("unknown_player", f"no seat {player_id} in game {game_id}")

            owner = room.seats.get(player_id)
            if owner == username:
                return player_id
            if owner is not None:
                raise LobbyError("slot_taken", f"{player_id} is held by {owner}")

            if existing is not None:
                # Switching seats gives up the old one.
                del room.seats[existing]
            room.seats[player_id] = username

        LOG.info("%s claimed %s in game %s", username, player_id, game_id)
        return player_id

    async def release_slot(self, game_id: str, username: str) -> None:
        room = self._room(game_id)
        async with room.lock:
            seat = room.seat_of(username)
            if seat is not None:
                del room.seats[seat]
                LOG.info("%s left %s in game %s", username, seat, game_id)

    async def submit_move(self, game_id: str, username: str, to: Coord) -> GameUpdate:
        if (
            not isinstance(to, (tuple, list))
            or len(to) != 2
            or any(isinstance(v, bool) or not isinstance(v, int) for v in to)
        ):
            raise LobbyError("invalid_move_payload", "move target must be two integers")
        target = Coord(*to)
        return await self._transition(
            game_id,
            username,
            lambda state, player_id: apply_move(state, player_id, target),
        )

    async def submit_wall(
        self,
        game_id: str,
        username: str,
        orientation: str,
        row: int,
        col: int,
        wall_id: Optional[str] = None,
    ) -> GameUpdate:
        if not isinstance(row, int) or not isinstance(col, int):
            raise LobbyError("invalid_wall_payload", "wall anchor must be integers")
        try:
            wall = Wall(
                id=wall_id or uuid.uuid4().hex[:12],
                orientation=Orientation(orientation),
                row=row,
                col=col,
            )
        except ValueError as exc:
            raise LobbyError("invalid_wall_payload", str(exc)) from exc

        return await self._transition(
            game_id,
            username,
            lambda state, player_id: apply_place_wall(state, wall, player_id=player_id),
        )

    async def _transition(
        self,
        game_id: str,
        username: str,
        action: Callable[[GameState, PlayerId], GameState],
    ) -> GameUpdate:
        room = self._room(game_id)
        async with room.lock:
            state = self.get_game(game_id)

            player_id = room.seat_of(username)
            if player_id is None:
                raise LobbyError("not_seated", f"{username} has no seat in game {game_id}")
            if check_winner(state) is not None:
                raise LobbyError("game_over")
            if state.to_move.id != player_id:
                raise LobbyError("not_your_turn")

            try:
                next_state = action(state, player_id)
            except RuleViolation as exc:
                LOG.debug("Rejected action by %s in game %s: %s", username, game_id, exc)
                raise LobbyError(exc.code, str(exc)) from exc

            self.store.put(game_id, next_state)
            update = GameUpdate(game_id=game_id, state=next_state, winner=check_winner(next_state))
            self._publish(room, update)

        if update.winner is not None:
            LOG.info("Game %s won by %s", game_id, update.winner)
        return update

    def subscribe(self, game_id: str) -> "asyncio.Queue[GameUpdate]":
        queue: "asyncio.Queue[GameUpdate]" = asyncio.Queue()
        self._room(game_id).subscribers.append(queue)
        return queue

    def unsubscribe(self, game_id: str, queue: "asyncio.Queue[GameUpdate]") -> None:
        room = self.rooms.get(game_id)
        if room is not None and queue in room.subscribers:
            room.subscribers.remove(queue)

    def _publish(self, room: GameRoom, update: GameUpdate) -> None:
        for queue in room.subscribers:
            queue.put_nowait(update)

    async def remove_game(self, game_id: str) -> None:
        async with self._lock:
            self.store.delete(game_id)
            self.rooms.pop(game_id, None)
        LOG.info("Removed game %s", game_id)
