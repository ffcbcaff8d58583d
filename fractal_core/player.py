from __future__ import annotations

from enum import Enum


class Player(Enum):
    """The two marks. FIRST always opens the game."""
    FIRST = "Circle"
    SECOND = "Cross"

    def other(self) -> 'Player':
        return Player.SECOND if self is Player.FIRST else Player.FIRST

    def __str__(self) -> str:
        return self.value
