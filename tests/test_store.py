from quoridor.game.rules import create_initial_state
from quoridor.store import InMemoryGameStore, new_game_id


def test_put_get_delete():
    store = InMemoryGameStore()
    state = create_initial_state(2, 9)

    assert store.get("g1") is None
    assert "g1" not in store

    store.put("g1", state)
    assert store.get("g1") is state
    assert "g1" in store
    assert list(store.ids()) == ["g1"]
    assert len(store) == 1

    store.delete("g1")
    store.delete("g1")
    assert store.get("g1") is None
    assert len(store) == 0


def test_put_replaces_snapshot():
    store = InMemoryGameStore()
    first = create_initial_state(2, 9)
    second = create_initial_state(4, 9)
    store.put("g", first)
    store.put("g", second)
    assert store.get("g") is second


def test_game_ids_are_unique_hex():
    ids = {new_game_id() for _ in range(50)}
    assert len(ids) == 50
    assert all(len(i) == 32 and int(i, 16) >= 0 for i in ids)
