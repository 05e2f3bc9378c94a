import random

from quoridor.ai import RandomAgent
from quoridor.game.board import Axis, GameState, Goal, Orientation, Player, Wall
from quoridor.game.moves import get_legal_moves
from quoridor.game.rules import create_initial_state
from quoridor.geometry import Coord


def test_choice_is_a_legal_move():
    state = create_initial_state(2, 9)
    agent = RandomAgent("p1", rng=random.Random(3))
    legal = get_legal_moves(state, "p1")
    for _ in range(20):
        planned = agent.choose_move(state)
        assert planned.player_id == "p1"
        assert planned.target in legal


def test_seeded_agents_agree():
    state = create_initial_state(4, 9)
    a = RandomAgent("p3", rng=random.Random(42))
    b = RandomAgent("p3", rng=random.Random(42))
    assert [a.choose_move(state) for _ in range(5)] == [b.choose_move(state) for _ in range(5)]


def test_boxed_in_pawn_has_no_choice():
    state = GameState(
        board_size=3,
        players=(
            Player(id="p1", pos=Coord(0, 0), goal=Goal(Axis.ROW, 2), walls_remaining=0),
            Player(id="p2", pos=Coord(2, 2), goal=Goal(Axis.ROW, 0), walls_remaining=0),
        ),
        walls=(
            Wall(id="a", orientation=Orientation.HORIZONTAL, row=0, col=0),
            Wall(id="b", orientation=Orientation.VERTICAL, row=0, col=0),
        ),
    )
    assert RandomAgent("p1").choose_move(state) is None
    assert RandomAgent("nobody").choose_move(state) is None
