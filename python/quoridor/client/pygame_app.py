"""Pygame front-end for local Quoridor games."""

from __future__ import annotations

import argparse
import logging
import random
import sys
from dataclasses import dataclass
from typing import List, Optional, Tuple

try:
    import pygame
except ImportError as exc:  # pragma: no cover - handled at runtime
    raise SystemExit(
        "Pygame is required for the graphical client. Install it with 'pip install pygame'."
    ) from exc

from ..ai import RandomAgent
from ..config import SUPPORTED_PLAYER_COUNTS, load_defaults
from ..game.board import GameState, Orientation, Wall
from ..game.errors import RuleViolation
from ..game.moves import get_legal_moves
from ..game.rules import apply_move, apply_place_wall, check_winner, create_initial_state
from ..game.walls import can_place_wall
from ..geometry import Coord


LOG = logging.getLogger("quoridor.client")


# ---------------------------------------------------------------------------
# Rendering configuration
# ---------------------------------------------------------------------------

WINDOW_WIDTH = 1020
WINDOW_HEIGHT = 760
FPS = 30

BOARD_LEFT = 280
BOARD_TOP = 20
BOARD_PIXELS = 700

BOT_DELAY_MS = 600

BOARD_BG = (243, 243, 243)
CELL_FILL = (207, 216, 220)
GOAL_TINT = (225, 236, 240)
WALL_COLOR = (93, 64, 55)
WALL_PREVIEW_OK = (129, 199, 132, 170)
WALL_PREVIEW_BAD = (239, 83, 80, 170)
HIGHLIGHT_MOVE = (129, 199, 132, 140)
PIECE_COLORS = [(211, 47, 47), (46, 125, 50), (25, 118, 210), (251, 192, 45)]
PIECE_OUTLINE = (38, 50, 56)
SELECTION_COLOR = (255, 152, 0)
TEXT_COLOR = (33, 33, 33)


# ---------------------------------------------------------------------------
# Pixel <-> board mapping
# ---------------------------------------------------------------------------

def cell_size(board_size: int) -> float:
    return BOARD_PIXELS / board_size


def cell_at(pos: Tuple[int, int], board_size: int) -> Optional[Coord]:
    """The cell under a screen position, or ``None`` outside the board."""

    x, y = pos
    if not (BOARD_LEFT <= x < BOARD_LEFT + BOARD_PIXELS and BOARD_TOP <= y < BOARD_TOP + BOARD_PIXELS):
        return None
    size = cell_size(board_size)
    row = min(int((y - BOARD_TOP) // size), board_size - 1)
    col = min(int((x - BOARD_LEFT) // size), board_size - 1)
    return Coord(row, col)


def wall_anchor_at(pos: Tuple[int, int], board_size: int) -> Optional[Coord]:
    """Anchor of the wall centred on the grid intersection nearest ``pos``.

    The intersection below-right of cell ``(r, c)`` is the midpoint of any
    wall anchored there. Returns ``None`` when no interior intersection is
    close enough.
    """

    x, y = pos
    size = cell_size(board_size)
    row = round((y - BOARD_TOP) / size) - 1
    col = round((x - BOARD_LEFT) / size) - 1
    if 0 <= row < board_size - 1 and 0 <= col < board_size - 1:
        return Coord(row, col)
    return None


def wall_rect(wall: Wall, board_size: int) -> pygame.Rect:
    size = cell_size(board_size)
    thickness = max(4, int(size * 0.18))
    left = BOARD_LEFT + wall.col * size
    top = BOARD_TOP + wall.row * size
    if wall.orientation is Orientation.HORIZONTAL:
        return pygame.Rect(int(left), int(top + size - thickness / 2), int(size * 2), thickness)
    return pygame.Rect(int(left + size - thickness / 2), int(top), thickness, int(size * 2))


@dataclass
class Button:
    label: str
    rect: pygame.Rect

    def draw(self, surface: pygame.Surface, font: pygame.font.Font, hovered: bool) -> None:
        base_color = (76, 175, 80) if "Bot" in self.label else (33, 150, 243)
        color = tuple(min(c + 40, 255) for c in base_color) if hovered else base_color
        pygame.draw.rect(surface, color, self.rect, border_radius=6)
        pygame.draw.rect(surface, (13, 71, 161), self.rect, width=2, border_radius=6)
        text_surf = font.render(self.label, True, (255, 255, 255))
        surface.blit(text_surf, text_surf.get_rect(center=self.rect.center))

    def contains(self, pos: Tuple[int, int]) -> bool:
        return self.rect.collidepoint(pos)


class QuoridorPygameApp:
    def __init__(self, player_count: int = 2, board_size: Optional[int] = None, seed: Optional[int] = None) -> None:
        pygame.init()
        pygame.display.set_caption("Quoridor")
        self.screen = pygame.display.set_mode((WINDOW_WIDTH, WINDOW_HEIGHT))
        self.clock = pygame.time.Clock()

        self.font_small = pygame.font.Font(None, 24)
        self.font_medium = pygame.font.Font(None, 32)

        self.buttons = [
            Button("New Game", pygame.Rect(40, WINDOW_HEIGHT - 70, 140, 45)),
            Button(f"Players: {player_count}", pygame.Rect(40, WINDOW_HEIGHT - 130, 140, 45)),
            Button("Bots: on", pygame.Rect(40, WINDOW_HEIGHT - 190, 140, 45)),
        ]

        self.defaults = load_defaults()
        self.board_size = board_size
        self.player_count = player_count
        self.rng = random.Random(seed)
        self.bots_enabled = True

        self.state: GameState = create_initial_state(player_count, board_size, self.defaults)
        self.wall_mode: Optional[Orientation] = None
        self.highlight_moves: List[Coord] = []
        self.message: Optional[str] = None
        self.winner: Optional[str] = None
        self._bot_due: Optional[int] = None
        self._refresh_highlights()

    # ------------------------------------------------------------------
    # Game flow helpers
    # ------------------------------------------------------------------
    def reset(self) -> None:
        self.state = create_initial_state(self.player_count, self.board_size, self.defaults)
        self.wall_mode = None
        self.message = None
        self.winner = None
        self._bot_due = None
        self._refresh_highlights()
        LOG.info("New %d-player game", self.player_count)

    def cycle_player_count(self) -> None:
        counts = list(SUPPORTED_PLAYER_COUNTS)
        self.player_count = counts[(counts.index(self.player_count) + 1) % len(counts)]
        self.buttons[1].label = f"Players: {self.player_count}"
        self.reset()

    def toggle_bots(self) -> None:
        self.bots_enabled = not self.bots_enabled
        self.buttons[2].label = f"Bots: {'on' if self.bots_enabled else 'off'}"
        self._refresh_highlights()

    def _is_bot_turn(self) -> bool:
        # Seat p1 is always the human; every other seat is a bot when enabled.
        return self.bots_enabled and self.state.turn_index != 0

    def _refresh_highlights(self) -> None:
        if self.winner is not None or self._is_bot_turn() or self.wall_mode is not None:
            self.highlight_moves = []
        else:
            self.highlight_moves = get_legal_moves(self.state, self.state.to_move.id)

    def _after_transition(self, next_state: GameState) -> None:
        self.state = next_state
        self.winner = check_winner(next_state)
        if self.winner is not None:
            self.message = f"{self.winner} wins!"
        self._refresh_highlights()

    # ------------------------------------------------------------------
    # Input handling
    # ------------------------------------------------------------------
    def handle_click(self, pos: Tuple[int, int]) -> None:
        for button in self.buttons:
            if button.contains(pos):
                self._handle_button(button)
                return

        if self.winner is not None or self._is_bot_turn():
            return

        player_id = self.state.to_move.id
        if self.wall_mode is not None:
            anchor = wall_anchor_at(pos, self.state.board_size)
            if anchor is None:
                return
            wall = Wall(
                id=f"w{len(self.state.walls) + 1}",
                orientation=self.wall_mode,
                row=anchor.row,
                col=anchor.col,
            )
            try:
                next_state = apply_place_wall(self.state, wall, player_id=player_id)
            except RuleViolation as exc:
                self.message = f"Wall rejected: {exc.code}"
                return
            self.wall_mode = None
            self.message = f"{player_id} placed a wall at ({anchor.row},{anchor.col})"
            self._after_transition(next_state)
            return

        clicked = cell_at(pos, self.state.board_size)
        if clicked is None or clicked not in self.highlight_moves:
            return
        try:
            next_state = apply_move(self.state, player_id, clicked)
        except RuleViolation as exc:
            self.message = f"Illegal move: {exc.code}"
            return
        self.message = f"{player_id} moved to ({clicked.row},{clicked.col})"
        self._after_transition(next_state)

    def handle_key(self, key: int) -> None:
        if key == pygame.K_h:
            self._toggle_wall_mode(Orientation.HORIZONTAL)
        elif key == pygame.K_v:
            self._toggle_wall_mode(Orientation.VERTICAL)
        elif key == pygame.K_ESCAPE:
            self.wall_mode = None
            self._refresh_highlights()
        elif key == pygame.K_n:
            self.reset()

    def _toggle_wall_mode(self, orientation: Orientation) -> None:
        self.wall_mode = None if self.wall_mode is orientation else orientation
        self._refresh_highlights()

    def _handle_button(self, button: Button) -> None:
        if button.label.startswith("New"):
            self.reset()
        elif button.label.startswith("Players"):
            self.cycle_player_count()
        elif button.label.startswith("Bots"):
            self.toggle_bots()

    # ------------------------------------------------------------------
    # Bot turns
    # ------------------------------------------------------------------
    def update_bots(self) -> None:
        if self.winner is not None or not self._is_bot_turn():
            self._bot_due = None
            return

        now = pygame.time.get_ticks()
        if self._bot_due is None:
            self._bot_due = now + BOT_DELAY_MS
            return
        if now < self._bot_due:
            return
        self._bot_due = None

        player_id = self.state.to_move.id
        planned = RandomAgent(player_id, rng=self.rng).choose_move(self.state)
        if planned is None:
            self.message = f"{player_id} is boxed in"
            self.bots_enabled = False
            self.buttons[2].label = "Bots: off"
            return
        self.message = f"{player_id} (bot) moved to ({planned.target.row},{planned.target.col})"
        self._after_transition(apply_move(self.state, player_id, planned.target))

    # ------------------------------------------------------------------
    # Rendering helpers
    # ------------------------------------------------------------------
    def draw(self) -> None:
        self.screen.fill((250, 250, 250))
        board_rect = pygame.Rect(BOARD_LEFT - 8, BOARD_TOP - 8, BOARD_PIXELS + 16, BOARD_PIXELS + 16)
        pygame.draw.rect(self.screen, BOARD_BG, board_rect, border_radius=12)

        self._draw_cells()
        self._draw_highlights()
        self._draw_pieces()
        self._draw_walls()
        self._draw_wall_preview()
        self._draw_ui()

    def _draw_cells(self) -> None:
        n = self.state.board_size
        size = cell_size(n)
        goal = self.state.to_move.goal
        for row in range(n):
            for col in range(n):
                rect = pygame.Rect(
                    int(BOARD_LEFT + col * size + 3),
                    int(BOARD_TOP + row * size + 3),
                    int(size - 6),
                    int(size - 6),
                )
                fill = GOAL_TINT if goal.reached(Coord(row, col)) else CELL_FILL
                pygame.draw.rect(self.screen, fill, rect, border_radius=4)

    def _cell_center(self, coord: Coord) -> Tuple[int, int]:
        size = cell_size(self.state.board_size)
        return (int(BOARD_LEFT + (coord.col + 0.5) * size), int(BOARD_TOP + (coord.row + 0.5) * size))

    def _draw_highlights(self) -> None:
        radius = int(cell_size(self.state.board_size) * 0.3)
        for target in self.highlight_moves:
            x, y = self._cell_center(target)
            surf = pygame.Surface((radius * 2, radius * 2), pygame.SRCALPHA)
            pygame.draw.circle(surf, HIGHLIGHT_MOVE, (radius, radius), radius)
            self.screen.blit(surf, (x - radius, y - radius))

    def _draw_pieces(self) -> None:
        radius = int(cell_size(self.state.board_size) * 0.32)
        for idx, player in enumerate(self.state.players):
            center = self._cell_center(player.pos)
            pygame.draw.circle(self.screen, PIECE_COLORS[idx % len(PIECE_COLORS)], center, radius)
            pygame.draw.circle(self.screen, PIECE_OUTLINE, center, radius, 3)
            if idx == self.state.turn_index:
                pygame.draw.circle(self.screen, SELECTION_COLOR, center, radius + 5, width=3)

    def _draw_walls(self) -> None:
        for wall in self.state.walls:
            pygame.draw.rect(self.screen, WALL_COLOR, wall_rect(wall, self.state.board_size), border_radius=3)

    def _draw_wall_preview(self) -> None:
        if self.wall_mode is None:
            return
        anchor = wall_anchor_at(pygame.mouse.get_pos(), self.state.board_size)
        if anchor is None:
            return
        candidate = Wall(id="preview", orientation=self.wall_mode, row=anchor.row, col=anchor.col)
        rect = wall_rect(candidate, self.state.board_size)
        color = WALL_PREVIEW_OK if can_place_wall(self.state, candidate) else WALL_PREVIEW_BAD
        surf = pygame.Surface(rect.size, pygame.SRCALPHA)
        surf.fill(color)
        self.screen.blit(surf, rect.topleft)

    def _draw_ui(self) -> None:
        mouse_pos = pygame.mouse.get_pos()
        for button in self.buttons:
            button.draw(self.screen, self.font_small, button.contains(mouse_pos))

        mode = {None: "move", Orientation.HORIZONTAL: "wall (H)", Orientation.VERTICAL: "wall (V)"}[self.wall_mode]
        status_lines = [
            f"Turn: {self.state.to_move.id}{' (bot)' if self._is_bot_turn() else ''}",
            f"Mode: {mode}",
        ]
        for idx, line in enumerate(status_lines):
            text = self.font_medium.render(line, True, TEXT_COLOR)
            self.screen.blit(text, (40, 40 + idx * 32))

        for idx, player in enumerate(self.state.players):
            text = self.font_small.render(
                f"{player.id}: walls {player.walls_remaining}", True, PIECE_COLORS[idx % len(PIECE_COLORS)]
            )
            self.screen.blit(text, (40, 120 + idx * 26))

        hint = self.font_small.render("H / V: wall mode   Esc: cancel   N: new game", True, TEXT_COLOR)
        self.screen.blit(hint, (40, 240))

        if self.message:
            msg = self.font_small.render(self.message, True, (94, 53, 177))
            self.screen.blit(msg, (40, 280))

    # ------------------------------------------------------------------
    # Main loop
    # ------------------------------------------------------------------
    def run(self) -> None:
        running = True
        while running:
            for event in pygame.event.get():
                if event.type == pygame.QUIT:
                    running = False
                elif event.type == pygame.MOUSEBUTTONDOWN and event.button == 1:
                    self.handle_click(event.pos)
                elif event.type == pygame.KEYDOWN:
                    self.handle_key(event.key)

            self.update_bots()
            self.draw()
            pygame.display.flip()
            self.clock.tick(FPS)

        pygame.quit()


def main(argv: Optional[List[str]] = None) -> int:
    parser = argparse.ArgumentParser(description="Quoridor graphical client")
    parser.add_argument("--players", type=int, default=2, choices=SUPPORTED_PLAYER_COUNTS)
    parser.add_argument("--board-size", type=int, default=None)
    parser.add_argument("--seed", type=int, default=None)
    parser.add_argument("--log-level", default="INFO")
    args = parser.parse_args(argv)

    logging.basicConfig(level=getattr(logging, args.log_level.upper(), logging.INFO))

    app = QuoridorPygameApp(player_count=args.players, board_size=args.board_size, seed=args.seed)
    app.run()
    return 0


if __name__ == "__main__":  # pragma: no cover - manual execution
    sys.exit(main())
