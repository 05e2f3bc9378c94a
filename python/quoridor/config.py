"""Game defaults, overridable from the environment."""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from typing import Dict, Mapping, Optional


MIN_BOARD_SIZE = 3
SUPPORTED_PLAYER_COUNTS = (2, 3, 4)


class ConfigError(ValueError):
    pass


def _default_walls() -> Dict[int, int]:
    return {2: 10, 3: 7, 4: 5}


@dataclass(frozen=True)
class GameDefaults:
    board_size: int = 9
    walls_by_player_count: Dict[int, int] = field(default_factory=_default_walls)

    def walls_for(self, player_count: int) -> int:
        try:
            return self.walls_by_player_count[player_count]
        except KeyError as exc:
            raise ConfigError(f"No wall allowance configured for {player_count} players") from exc


def _read_int(environ: Mapping[str, str], name: str, fallback: int, minimum: int) -> int:
    raw = environ.get(name, "").strip()
    if not raw:
        return fallback
    try:
        value = int(raw)
    except ValueError as exc:
        raise ConfigError(f"{name} must be an integer, got {raw!r}") from exc
    if value < minimum:
        raise ConfigError(f"{name} must be at least {minimum}, got {value}")
    return value


def load_defaults(environ: Optional[Mapping[str, str]] = None) -> GameDefaults:
    """Build :class:`GameDefaults` from ``QUORIDOR_*`` environment variables.

    Unset variables keep the built-in values.
    """

    env = os.environ if environ is None else environ
    base = GameDefaults()

    board_size = _read_int(env, "QUORIDOR_BOARD_SIZE", base.board_size, MIN_BOARD_SIZE)
    walls = {
        count: _read_int(env, f"QUORIDOR_WALLS_{count}P", base.walls_for(count), 0)
        for count in SUPPORTED_PLAYER_COUNTS
    }
    return GameDefaults(board_size=board_size, walls_by_player_count=walls)
