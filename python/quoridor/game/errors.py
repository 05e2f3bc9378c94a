"""Rule violations raised by the state-transition functions.

Every exception carries a stable ``code`` string so callers can map it to
a user-facing message without parsing text.
"""

from __future__ import annotations

from typing import Optional


class RuleViolation(Exception):
    code = "rule_violation"

    def __init__(self, message: Optional[str] = None) -> None:
        super().__init__(message or self.code)


class IllegalMove(RuleViolation):
    code = "illegal_move"


class IllegalWallPlacement(RuleViolation):
    code = "illegal_wall"

    def __init__(self, reason: str, message: Optional[str] = None) -> None:
        self.reason = reason
        super().__init__(message or f"illegal wall: {reason}")


class NoWallsRemaining(RuleViolation):
    code = "no_walls_remaining"


class UnknownPlayer(RuleViolation):
    code = "unknown_player"


class NotYourTurn(RuleViolation):
    code = "not_your_turn"
