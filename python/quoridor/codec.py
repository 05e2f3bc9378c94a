"""JSON wire format for :class:`~quoridor.game.board.GameState` snapshots.

The dictionary shape matches what browser clients already exchange::

    {"boardSize": 9,
     "players": [{"id": "p1", "pos": {"r": 8, "c": 4}, "startPos": {...},
                  "wallsRemaining": 10, "goal": {"axis": "r", "value": 0}}],
     "walls": [{"id": "w1", "orientation": "H", "r": 1, "c": 3}],
     "turnIndex": 0}
"""

from __future__ import annotations

import json
from typing import Any, Dict, List, Optional

from .config import MIN_BOARD_SIZE
from .game.board import Axis, GameState, Goal, Orientation, Player, Wall
from .geometry import Coord


Message = Dict[str, Any]
ENCODING = "utf-8"


class CodecError(ValueError):
    pass


def _coord_to_dict(coord: Coord) -> Dict[str, int]:
    return {"r": coord.row, "c": coord.col}


def _int(data: Message, key: str) -> int:
    try:
        value = data[key]
    except (KeyError, TypeError) as exc:
        raise CodecError(f"Missing field: {key}") from exc
    if isinstance(value, bool) or not isinstance(value, int):
        raise CodecError(f"Field {key!r} must be an integer")
    return value


def _coord(data: Any, key: str) -> Coord:
    if not isinstance(data, dict):
        raise CodecError(f"Field {key!r} must be an object")
    return Coord(_int(data, "r"), _int(data, "c"))


def state_to_dict(state: GameState) -> Message:
    players: List[Message] = []
    for p in state.players:
        entry: Message = {
            "id": p.id,
            "pos": _coord_to_dict(p.pos),
            "wallsRemaining": p.walls_remaining,
            "goal": {"axis": p.goal.axis.value, "value": p.goal.value},
        }
        if p.start_pos is not None:
            entry["startPos"] = _coord_to_dict(p.start_pos)
        if p.name is not None:
            entry["name"] = p.name
        players.append(entry)

    return {
        "boardSize": state.board_size,
        "players": players,
        "walls": [
            {"id": w.id, "orientation": w.orientation.value, "r": w.row, "c": w.col}
            for w in state.walls
        ],
        "turnIndex": state.turn_index,
    }


def _infer_goal(board_size: int, ref: Coord) -> Dict[str, Any]:
    last = board_size - 1
    if ref.row == last:
        return {"axis": "r", "value": 0}
    if ref.row == 0:
        return {"axis": "r", "value": last}
    if ref.col == 0:
        return {"axis": "c", "value": last}
    if ref.col == last:
        return {"axis": "c", "value": 0}
    # Off the edges: head for the far half by row.
    if ref.row >= board_size // 2:
        return {"axis": "r", "value": 0}
    return {"axis": "r", "value": last}


def migrate_goals(data: Message) -> Message:
    """Fill in ``goal`` (and ``startPos``) for snapshots saved without them.

    Returns a new dictionary; players that already carry a goal are left
    untouched.
    """

    board_size = _int(data, "boardSize")
    players = data.get("players")
    if not isinstance(players, list):
        raise CodecError("Field 'players' must be a list")

    migrated = []
    for raw in players:
        if not isinstance(raw, dict):
            raise CodecError("Player entries must be objects")
        entry = dict(raw)
        if entry.get("goal") is None:
            if entry.get("startPos") is None:
                entry["startPos"] = dict(entry.get("pos") or {})
            ref = _coord(entry["startPos"], "startPos")
            entry["goal"] = _infer_goal(board_size, ref)
        migrated.append(entry)

    result = dict(data)
    result["players"] = migrated
    return result


def _player_from_dict(data: Message) -> Player:
    goal_data = data.get("goal")
    if not isinstance(goal_data, dict):
        raise CodecError("Field 'goal' must be an object")
    value = _int(goal_data, "value")
    try:
        axis = Axis(goal_data.get("axis"))
    except ValueError as exc:
        raise CodecError(f"Invalid goal axis: {goal_data.get('axis')!r}") from exc
    goal = Goal(axis, value)

    player_id = data.get("id")
    if not isinstance(player_id, str):
        raise CodecError("Player 'id' must be a string")

    walls_remaining = _int(data, "wallsRemaining")
    if walls_remaining < 0:
        raise CodecError("Field 'wallsRemaining' cannot be negative")

    start: Optional[Coord] = None
    if data.get("startPos") is not None:
        start = _coord(data["startPos"], "startPos")

    return Player(
        id=player_id,
        pos=_coord(data.get("pos"), "pos"),
        goal=goal,
        walls_remaining=walls_remaining,
        start_pos=start,
        name=data.get("name"),
    )


def _wall_from_dict(data: Any) -> Wall:
    if not isinstance(data, dict):
        raise CodecError("Wall entries must be objects")
    try:
        orientation = Orientation(data.get("orientation"))
    except ValueError as exc:
        raise CodecError(f"Invalid wall orientation: {data.get('orientation')!r}") from exc
    return Wall(id=str(data.get("id", "")), orientation=orientation, row=_int(data, "r"), col=_int(data, "c"))


def state_from_dict(data: Message) -> GameState:
    if not isinstance(data, dict):
        raise CodecError("Game state must be an object")

    board_size = _int(data, "boardSize")
    if board_size < MIN_BOARD_SIZE:
        raise CodecError(f"boardSize must be at least {MIN_BOARD_SIZE}, got {board_size}")

    data = migrate_goals(data)
    players = tuple(_player_from_dict(p) for p in data["players"])
    if not players:
        raise CodecError("Game state has no players")
    ids = [p.id for p in players]
    if len(set(ids)) != len(ids):
        raise CodecError(f"Duplicate player ids: {ids}")

    walls_data = data.get("walls", [])
    if not isinstance(walls_data, list):
        raise CodecError("Field 'walls' must be a list")
    walls = tuple(_wall_from_dict(w) for w in walls_data)

    turn_index = _int(data, "turnIndex")
    if not 0 <= turn_index < len(players):
        raise CodecError(f"turnIndex {turn_index} out of range")

    return GameState(
        board_size=board_size,
        players=players,
        walls=walls,
        turn_index=turn_index,
    )


def encode(state: GameState) -> bytes:
    """Serialize a state to bytes with a trailing newline."""

    return (json.dumps(state_to_dict(state), separators=(",", ":")) + "\n").encode(ENCODING)


def decode(payload: bytes) -> GameState:
    """Parse bytes produced by :func:`encode` (or a compatible client)."""

    try:
        data = json.loads(payload.decode(ENCODING))
    except (UnicodeDecodeError, json.JSONDecodeError) as exc:
        raise CodecError("Malformed payload") from exc
    return state_from_dict(data)
