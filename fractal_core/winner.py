from __future__ import annotations

from typing import List, Optional, Sequence

from .board import SIZE, Nested, Node, Resolved, visit_children
from .player import Player

Grid = Sequence[Sequence[Optional[Player]]]  # grid[x][y]


def _owns_line(player: Player, grid: Grid) -> bool:
    """Checks whether `player` holds a full column, row or diagonal."""
    for column in grid:
        if all(mark is player for mark in column):
            return True
    for y in range(SIZE):
        if all(grid[x][y] is player for x in range(SIZE)):
            return True
    if all(grid[i][i] is player for i in range(SIZE)):
        return True
    if all(grid[SIZE - 1 - i][i] is player for i in range(SIZE)):
        return True
    return False


def find_winner(grid: Grid) -> Optional[Player]:
    """Returns the player holding a complete line, or None.

    FIRST is checked before SECOND, so a grid that somehow holds lines for
    both players reports FIRST.
    """
    for player in (Player.FIRST, Player.SECOND):
        if _owns_line(player, grid):
            return player
    return None


def effective_mark(node: Node) -> Optional[Player]:
    """Who owns this position: a leaf's mark, or the winner of a nested sub-game."""
    if isinstance(node, Resolved):
        return node.mark
    return find_winner(derived_grid(node))


def derived_grid(node: Nested) -> List[List[Optional[Player]]]:
    grid: List[List[Optional[Player]]] = [[None] * SIZE for _ in range(SIZE)]
    for (x, y), child in visit_children(node):
        grid[x][y] = effective_mark(child)
    return grid
