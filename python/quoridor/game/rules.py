"""State transitions built on top of :mod:`quoridor.game.moves` and :mod:`quoridor.game.walls`.

Every function takes a :class:`GameState` and returns a new one; inputs are
never mutated. Rule violations raise subclasses of
:class:`~quoridor.game.errors.RuleViolation`.
"""

from __future__ import annotations

from dataclasses import replace
from typing import List, Optional

from ..config import MIN_BOARD_SIZE, SUPPORTED_PLAYER_COUNTS, GameDefaults
from ..geometry import Coord
from .board import Axis, GameState, Goal, Player, PlayerId, Wall
from .errors import IllegalMove, IllegalWallPlacement, NoWallsRemaining, NotYourTurn, UnknownPlayer
from .moves import get_legal_moves
from .walls import wall_rejection


def _layout(player_count: int, size: int) -> List[tuple]:
    # (id, start, goal) in turn order: bottom, top, left, right.
    mid = size // 2
    last = size - 1
    seats = [
        ("p1", Coord(last, mid), Goal(Axis.ROW, 0)),
        ("p2", Coord(0, mid), Goal(Axis.ROW, last)),
        ("p3", Coord(mid, 0), Goal(Axis.COL, last)),
        ("p4", Coord(mid, last), Goal(Axis.COL, 0)),
    ]
    return seats[:player_count]


def create_initial_state(
    player_count: int = 2,
    board_size: Optional[int] = None,
    defaults: Optional[GameDefaults] = None,
) -> GameState:
    defaults = defaults or GameDefaults()
    if player_count not in SUPPORTED_PLAYER_COUNTS:
        raise ValueError(f"Unsupported player count: {player_count}")
    size = defaults.board_size if board_size is None else board_size
    if size < MIN_BOARD_SIZE:
        raise ValueError(f"Board size must be at least {MIN_BOARD_SIZE}, got {size}")

    walls = defaults.walls_for(player_count)
    players = [
        Player(id=pid, pos=start, start_pos=start, goal=goal, walls_remaining=walls)
        for pid, start, goal in _layout(player_count, size)
    ]
    return GameState(board_size=size, players=tuple(players), walls=(), turn_index=0)


def current_player(state: GameState) -> Player:
    return state.to_move


def _require_turn(state: GameState, player_id: PlayerId) -> int:
    idx = state.index_of(player_id)
    if idx is None:
        raise UnknownPlayer(f"unknown player: {player_id}")
    if idx != state.turn_index:
        raise NotYourTurn(f"it is {state.to_move.id}'s turn, not {player_id}'s")
    return idx


def apply_move(state: GameState, player_id: PlayerId, to: Coord) -> GameState:
    idx = _require_turn(state, player_id)
    wanted = Coord(*to)
    # Keep the generated coordinate so stored positions stay integral.
    target = next((m for m in get_legal_moves(state, player_id) if m == wanted), None)
    if target is None:
        raise IllegalMove(f"{player_id} cannot move to {tuple(wanted)}")

    players = list(state.players)
    players[idx] = players[idx].moved_to(target)
    return replace(state, players=tuple(players), turn_index=state.next_turn_index())


def apply_place_wall(
    state: GameState,
    wall: Wall,
    player_id: Optional[PlayerId] = None,
) -> GameState:
    """Place ``wall`` on behalf of the player at ``turn_index``.

    ``player_id``, when given, must name that player.
    """

    if player_id is not None:
        _require_turn(state, player_id)

    reason = wall_rejection(state, wall)
    if reason is not None:
        raise IllegalWallPlacement(reason)

    idx = state.turn_index
    actor = state.players[idx]
    if actor.walls_remaining <= 0:
        raise NoWallsRemaining(f"{actor.id} has no walls left")

    players = list(state.players)
    players[idx] = actor.spend_wall()
    return replace(
        state,
        players=tuple(players),
        walls=state.walls + (wall,),
        turn_index=state.next_turn_index(),
    )


def check_winner(state: GameState) -> Optional[PlayerId]:
    # First in turn order wins if several somehow qualify at once.
    for player in state.players:
        if player.has_won():
            return player.id
    return None
