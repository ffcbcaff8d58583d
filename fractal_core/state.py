from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from .board import Nested
from .player import Player


@dataclass(frozen=True)
class Outcome:
    """How a finished game ended. `winner` is None for a stalemate."""
    winner: Optional[Player] = None

    @property
    def is_stalemate(self) -> bool:
        return self.winner is None


@dataclass(frozen=True)
class Status:
    """Either in progress (no outcome) or over with an outcome."""
    outcome: Optional[Outcome] = None

    @property
    def in_progress(self) -> bool:
        return self.outcome is None

    @property
    def is_over(self) -> bool:
        return self.outcome is not None

    @classmethod
    def won(cls, player: Player) -> 'Status':
        return cls(Outcome(winner=player))

    @classmethod
    def stalemate(cls) -> 'Status':
        return cls(Outcome(winner=None))


IN_PROGRESS = Status()


@dataclass
class GameState:
    """The mutable game session. Owns the root board exclusively."""
    board: Nested
    depth: int
    turn: Player = Player.FIRST
    moves_made: int = 0
    moves_left: int = 0
    status: Status = IN_PROGRESS


def describe_status(status: Status) -> str:
    """Human-readable status line, as shown in the game-over dialog."""
    if status.in_progress:
        return 'Game in progress'
    if status.outcome.is_stalemate:
        return 'A stalemate has occurred, nobody wins'
    return f'{status.outcome.winner} won the game!'
