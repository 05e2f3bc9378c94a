from quoridor.game.board import Axis, Goal, Orientation, Wall
from quoridor.game.pathfinding import has_path_to_goal
from quoridor.geometry import Coord


def H(row, col):
    return Wall(id=f"h{row}{col}", orientation=Orientation.HORIZONTAL, row=row, col=col)


def V(row, col):
    return Wall(id=f"v{row}{col}", orientation=Orientation.VERTICAL, row=row, col=col)


def test_open_board_reaches_goal():
    assert has_path_to_goal(9, Coord(8, 4), Goal(Axis.ROW, 0).reached, [])


def test_start_on_goal_is_immediately_true():
    assert has_path_to_goal(5, Coord(0, 2), Goal(Axis.ROW, 0).reached, [H(0, 0)])


def test_walls_force_a_detour():
    assert has_path_to_goal(4, Coord(3, 0), Goal(Axis.ROW, 0).reached, [H(1, 0)])


def test_full_barrier_means_no_path():
    assert not has_path_to_goal(4, Coord(3, 0), Goal(Axis.ROW, 0).reached, [H(1, 0), H(1, 2)])


def test_barrier_only_matters_for_goals_behind_it():
    walls = [H(1, 0), H(1, 2)]
    assert has_path_to_goal(4, Coord(3, 0), Goal(Axis.COL, 3).reached, walls)
    assert has_path_to_goal(4, Coord(0, 0), Goal(Axis.ROW, 0).reached, walls)


def test_accepts_tuple_start_and_any_predicate():
    corner = Coord(3, 3)
    assert has_path_to_goal(4, (0, 0), lambda c: c == corner, [V(0, 0)])
    assert not has_path_to_goal(4, (0, 0), lambda c: False, [])
