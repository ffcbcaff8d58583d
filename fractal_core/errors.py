from __future__ import annotations


class RulesError(ValueError):
    """Base class for every rejected request. The game state is never modified."""


class InvalidDepth(RulesError):
    """A board was requested with fewer than one level."""


class GameOver(RulesError):
    """A move was attempted after the game was decided."""


class InvalidPath(RulesError):
    """The move path does not address an open, unmarked leaf."""
