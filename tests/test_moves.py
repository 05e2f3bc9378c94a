from quoridor.game.board import Axis, GameState, Goal, Orientation, Player, Wall
from quoridor.game.moves import get_legal_moves
from quoridor.game.rules import create_initial_state
from quoridor.geometry import Coord


def _state(size, positions, walls=()):
    players = tuple(
        Player(id=f"p{idx + 1}", pos=Coord(*pos), goal=Goal(Axis.ROW, 0), walls_remaining=10)
        for idx, pos in enumerate(positions)
    )
    return GameState(board_size=size, players=players, walls=tuple(walls))


def H(row, col):
    return Wall(id=f"h{row}{col}", orientation=Orientation.HORIZONTAL, row=row, col=col)


def V(row, col):
    return Wall(id=f"v{row}{col}", orientation=Orientation.VERTICAL, row=row, col=col)


def test_opening_moves_on_standard_board():
    state = create_initial_state(2, 9)
    assert get_legal_moves(state, "p1") == [Coord(7, 4), Coord(8, 3), Coord(8, 5)]
    assert get_legal_moves(state, "p2") == [Coord(1, 4), Coord(0, 3), Coord(0, 5)]


def test_unknown_player_has_no_moves():
    assert get_legal_moves(create_initial_state(2, 9), "p9") == []


def test_wall_blocks_plain_step():
    state = _state(5, [(2, 2), (0, 0)], walls=[H(1, 2)])
    assert Coord(1, 2) not in get_legal_moves(state, "p1")


def test_straight_jump_over_adjacent_pawn():
    state = _state(5, [(2, 2), (2, 3)])
    moves = get_legal_moves(state, "p1")
    assert moves == [Coord(1, 2), Coord(3, 2), Coord(2, 1), Coord(2, 4)]
    assert Coord(1, 3) not in moves
    assert Coord(3, 3) not in moves


def test_vertical_jump():
    state = _state(5, [(4, 2), (3, 2)])
    assert get_legal_moves(state, "p1") == [Coord(2, 2), Coord(4, 1), Coord(4, 3)]


def test_diagonal_hops_when_wall_behind_pawn():
    state = _state(5, [(2, 2), (2, 3)], walls=[V(2, 3)])
    moves = get_legal_moves(state, "p1")
    assert moves == [Coord(1, 2), Coord(3, 2), Coord(2, 1), Coord(1, 3), Coord(3, 3)]
    assert Coord(2, 4) not in moves


def test_diagonal_hops_sideways_from_vertical_approach():
    state = _state(5, [(4, 2), (3, 2)], walls=[H(2, 1)])
    assert get_legal_moves(state, "p1") == [Coord(3, 1), Coord(3, 3), Coord(4, 1), Coord(4, 3)]


def test_diagonals_blocked_by_walls():
    state = _state(5, [(2, 2), (2, 3)], walls=[V(2, 3), H(1, 3), H(2, 3)])
    moves = get_legal_moves(state, "p1")
    assert Coord(1, 3) not in moves
    assert Coord(3, 3) not in moves
    assert Coord(2, 4) not in moves


def test_each_diagonal_is_judged_on_its_own():
    # H(2, 2) cuts (2,3)-(3,3) and also p1's own step down.
    state = _state(5, [(2, 2), (2, 3)], walls=[V(2, 3), H(2, 2)])
    assert get_legal_moves(state, "p1") == [Coord(1, 2), Coord(2, 1), Coord(1, 3)]


def test_board_edge_behind_pawn_allows_diagonals():
    state = _state(5, [(2, 3), (2, 4)])
    moves = get_legal_moves(state, "p1")
    assert Coord(1, 4) in moves
    assert Coord(3, 4) in moves


def test_pawn_behind_pawn_allows_diagonals():
    state = _state(5, [(2, 2), (2, 3), (2, 4)])
    moves = get_legal_moves(state, "p1")
    assert Coord(2, 4) not in moves
    assert Coord(1, 3) in moves
    assert Coord(3, 3) in moves


def test_occupied_diagonal_is_skipped():
    state = _state(5, [(2, 2), (2, 3), (1, 3)], walls=[V(2, 3)])
    moves = get_legal_moves(state, "p1")
    assert Coord(1, 3) not in moves
    assert Coord(3, 3) in moves


def test_no_jump_through_a_wall_in_front():
    state = _state(5, [(2, 2), (2, 3)], walls=[V(1, 2)])
    assert get_legal_moves(state, "p1") == [Coord(1, 2), Coord(3, 2), Coord(2, 1)]


def test_diagonals_off_the_board_are_dropped():
    state = _state(3, [(0, 1), (0, 2)])
    # Right neighbour occupied, beyond is off-board, and only the lower diagonal exists.
    assert get_legal_moves(state, "p1") == [Coord(1, 1), Coord(0, 0), Coord(1, 2)]
