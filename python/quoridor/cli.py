"""Command-line interface for hot-seat Quoridor, optionally against random bots."""

from __future__ import annotations

import argparse
import logging
import random
import sys
from dataclasses import dataclass
from typing import Callable, Dict, List, Optional, Tuple

from .ai import RandomAgent
from .config import SUPPORTED_PLAYER_COUNTS, load_defaults
from .game.board import GameState, Orientation, PlayerId, Wall
from .game.edges import blocked_edges
from .game.errors import RuleViolation
from .game.moves import get_legal_moves
from .game.rules import apply_move, apply_place_wall, check_winner, create_initial_state
from .geometry import Coord, edge_key


LOG = logging.getLogger("quoridor.cli")

HELP = """Commands:
  m ROW COL        move your pawn
  w H|V ROW COL    place a wall anchored at ROW COL
  moves            list your legal moves
  q                quit"""


class CommandError(ValueError):
    pass


@dataclass(frozen=True)
class Command:
    kind: str
    coord: Optional[Coord] = None
    orientation: Optional[Orientation] = None


def _ints(parts: List[str]) -> Coord:
    try:
        row, col = (int(p) for p in parts)
    except ValueError as exc:
        raise CommandError("Row and column must be numbers.") from exc
    return Coord(row, col)


def parse_command(text: str) -> Command:
    parts = text.strip().split()
    if not parts:
        raise CommandError("Type a command, or 'help'.")

    head = parts[0].lower()
    if head in {"q", "quit", "exit"}:
        return Command("quit")
    if head in {"h", "help", "?"}:
        return Command("help")
    if head == "moves":
        return Command("moves")
    if head in {"m", "move"}:
        if len(parts) != 3:
            raise CommandError("Usage: m ROW COL")
        return Command("move", coord=_ints(parts[1:]))
    if head in {"w", "wall"}:
        if len(parts) != 4:
            raise CommandError("Usage: w H|V ROW COL")
        try:
            orientation = Orientation(parts[1].upper())
        except ValueError as exc:
            raise CommandError("Wall orientation must be H or V.") from exc
        return Command("wall", coord=_ints(parts[2:]), orientation=orientation)
    raise CommandError(f"Unknown command: {parts[0]!r}. Type 'help'.")


def render_board(state: GameState) -> str:
    size = state.board_size
    blocked = blocked_edges(state.walls)
    glyphs = {p.pos: str(idx + 1) for idx, p in enumerate(state.players)}

    lines = ["    " + " ".join(str(c % 10) for c in range(size))]
    for r in range(size):
        row_text = []
        for c in range(size):
            row_text.append(glyphs.get(Coord(r, c), "."))
            if c < size - 1:
                row_text.append("|" if edge_key(Coord(r, c), Coord(r, c + 1)) in blocked else " ")
        lines.append(f"{r:2}  " + "".join(row_text))

        if r < size - 1:
            gap = []
            for c in range(size):
                gap.append("-" if edge_key(Coord(r, c), Coord(r + 1, c)) in blocked else " ")
                if c < size - 1:
                    gap.append(" ")
            lines.append(("    " + "".join(gap)).rstrip())
    return "\n".join(lines)


def _format_moves(moves: List[Coord]) -> str:
    return ", ".join(f"({m.row},{m.col})" for m in moves) or "none"


def play(
    state: GameState,
    bots: Dict[PlayerId, RandomAgent],
    prompt: Callable[[str], str] = input,
    output: Callable[[str], None] = print,
) -> Tuple[Optional[PlayerId], GameState]:
    """Run turns until someone wins or the human quits.

    Returns the winner (``None`` when the match was abandoned) and the last
    state.
    """

    while True:
        winner = check_winner(state)
        if winner is not None:
            output(render_board(state))
            output(f"{winner} wins!")
            return winner, state

        player = state.to_move
        agent = bots.get(player.id)
        if agent is not None:
            planned = agent.choose_move(state)
            if planned is None:
                output(f"{player.id} (bot) is boxed in. Ending match.")
                return None, state
            state = apply_move(state, player.id, planned.target)
            output(f"{player.id} (bot) moves to ({planned.target.row},{planned.target.col}).")
            continue

        output(render_board(state))
        try:
            text = prompt(f"{player.id} [{player.walls_remaining} walls] > ")
        except EOFError:
            return None, state

        try:
            command = parse_command(text)
        except CommandError as exc:
            output(str(exc))
            continue

        if command.kind == "quit":
            return None, state
        if command.kind == "help":
            output(HELP)
            continue
        if command.kind == "moves":
            output("Legal moves: " + _format_moves(get_legal_moves(state, player.id)))
            continue

        try:
            if command.kind == "move":
                state = apply_move(state, player.id, command.coord)
            else:
                wall = Wall(
                    id=f"w{len(state.walls) + 1}",
                    orientation=command.orientation,
                    row=command.coord.row,
                    col=command.coord.col,
                )
                state = apply_place_wall(state, wall, player_id=player.id)
        except RuleViolation as exc:
            output(f"Rejected ({exc.code}): {exc}")
            continue


def main(argv: Optional[List[str]] = None) -> int:
    parser = argparse.ArgumentParser(description="Quoridor in the terminal")
    parser.add_argument("--players", type=int, default=2, choices=SUPPORTED_PLAYER_COUNTS)
    parser.add_argument("--board-size", type=int, default=None)
    parser.add_argument("--bot", action="append", default=[], metavar="PLAYER_ID",
                        help="let a random bot play this seat (repeatable)")
    parser.add_argument("--seed", type=int, default=None)
    parser.add_argument("--log-level", default="WARNING")
    args = parser.parse_args(argv)

    logging.basicConfig(level=getattr(logging, args.log_level.upper(), logging.WARNING))

    try:
        defaults = load_defaults()
        state = create_initial_state(args.players, args.board_size, defaults)
    except ValueError as exc:
        parser.error(str(exc))

    rng = random.Random(args.seed)
    bots = {}
    for player_id in args.bot:
        if state.player(player_id) is None:
            parser.error(f"unknown seat for --bot: {player_id}")
        bots[player_id] = RandomAgent(player_id, rng=rng)

    LOG.info("Starting %d-player game on %dx%d, bots: %s", args.players, state.board_size, state.board_size, sorted(bots))
    print("Game start! Type 'help' for commands.")
    play(state, bots)
    print("Thanks for playing!")
    return 0


if __name__ == "__main__":  # pragma: no cover - CLI invocation
    sys.exit(main())
