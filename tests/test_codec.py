import json

import pytest

from quoridor.codec import CodecError, decode, encode, migrate_goals, state_from_dict, state_to_dict
from quoridor.game.board import Axis, Goal, Orientation, Wall
from quoridor.game.rules import apply_move, apply_place_wall, create_initial_state
from quoridor.geometry import Coord


def _played_state():
    state = create_initial_state(3, 9)
    state = apply_move(state, "p1", Coord(7, 4))
    return apply_place_wall(state, Wall(id="w1", orientation=Orientation.VERTICAL, row=3, col=3))


def test_dict_round_trip():
    state = _played_state()
    assert state_from_dict(state_to_dict(state)) == state


def test_bytes_round_trip():
    state = _played_state()
    payload = encode(state)
    assert payload.endswith(b"\n")
    assert decode(payload) == state


def test_wire_shape():
    data = state_to_dict(_played_state())
    assert set(data) == {"boardSize", "players", "walls", "turnIndex"}
    assert data["walls"] == [{"id": "w1", "orientation": "V", "r": 3, "c": 3}]
    p1 = data["players"][0]
    assert p1["pos"] == {"r": 7, "c": 4}
    assert p1["startPos"] == {"r": 8, "c": 4}
    assert p1["goal"] == {"axis": "r", "value": 0}
    assert p1["wallsRemaining"] == 7
    assert data["turnIndex"] == 2


def _legacy(players):
    return {"boardSize": 9, "players": players, "walls": [], "turnIndex": 0}


def test_migration_prefers_start_position():
    data = _legacy([
        {"id": "p1", "pos": {"r": 3, "c": 4}, "startPos": {"r": 8, "c": 4}, "wallsRemaining": 10},
        {"id": "p3", "pos": {"r": 4, "c": 6}, "startPos": {"r": 4, "c": 0}, "wallsRemaining": 10},
        {"id": "p4", "pos": {"r": 4, "c": 2}, "startPos": {"r": 4, "c": 8}, "wallsRemaining": 10},
    ])
    state = state_from_dict(data)
    assert [p.goal for p in state.players] == [
        Goal(Axis.ROW, 0),
        Goal(Axis.COL, 8),
        Goal(Axis.COL, 0),
    ]


def test_migration_falls_back_to_position_and_backfills_start():
    migrated = migrate_goals(_legacy([
        {"id": "p2", "pos": {"r": 0, "c": 4}, "wallsRemaining": 10},
        {"id": "p1", "pos": {"r": 6, "c": 4}, "wallsRemaining": 10},
        {"id": "px", "pos": {"r": 2, "c": 4}, "wallsRemaining": 10},
    ]))
    goals = [p["goal"] for p in migrated["players"]]
    assert goals == [
        {"axis": "r", "value": 8},
        {"axis": "r", "value": 0},
        {"axis": "r", "value": 8},
    ]
    assert migrated["players"][1]["startPos"] == {"r": 6, "c": 4}


def test_migration_keeps_explicit_goals_and_input():
    raw = _legacy([{"id": "p1", "pos": {"r": 8, "c": 4}, "wallsRemaining": 1, "goal": {"axis": "c", "value": 3}}])
    before = json.dumps(raw, sort_keys=True)
    migrated = migrate_goals(raw)
    assert migrated["players"][0]["goal"] == {"axis": "c", "value": 3}
    assert json.dumps(raw, sort_keys=True) == before


@pytest.mark.parametrize("mutate", [
    lambda d: d.pop("boardSize"),
    lambda d: d.__setitem__("turnIndex", 5),
    lambda d: d.__setitem__("walls", [{"id": "w", "orientation": "X", "r": 0, "c": 0}]),
    lambda d: d["players"][0].__setitem__("goal", {"axis": "z", "value": 0}),
    lambda d: d["players"][0].__setitem__("pos", {"r": "8", "c": 4}),
    lambda d: d["players"][0].__setitem__("wallsRemaining", -1),
    lambda d: d.__setitem__("players", []),
    lambda d: d.__setitem__("boardSize", 2),
    lambda d: d["players"][1].__setitem__("id", "p1"),
])
def test_invalid_snapshots_raise(mutate):
    data = state_to_dict(create_initial_state(2, 9))
    mutate(data)
    with pytest.raises(CodecError):
        state_from_dict(data)


def test_malformed_payload():
    with pytest.raises(CodecError):
        decode(b"{not json")
    with pytest.raises(CodecError):
        decode(b"[1, 2]")
