from __future__ import annotations

# Facade module that re-exports the fractal tic-tac-toe core.
# The Flask app and tests import from here; single-responsibility modules
# live under fractal_core/*.

from fractal_core.player import Player
from fractal_core.errors import RulesError, InvalidDepth, GameOver, InvalidPath
from fractal_core.board import (
    Coord,
    Path,
    Node,
    Nested,
    Resolved,
    build,
    visit_children,
    node_at,
    iter_leaves,
)
from fractal_core.winner import find_winner, derived_grid, effective_mark
from fractal_core.collapse import collapse, is_stalemate, count_remaining
from fractal_core.state import GameState, Status, Outcome, IN_PROGRESS, describe_status
from fractal_core.moves import (
    new_game,
    apply_move,
    current_turn,
    status,
    remaining_moves,
    legal_paths,
)

__all__ = [
    'Player',
    'RulesError',
    'InvalidDepth',
    'GameOver',
    'InvalidPath',
    'Coord',
    'Path',
    'Node',
    'Nested',
    'Resolved',
    'build',
    'visit_children',
    'node_at',
    'iter_leaves',
    'find_winner',
    'derived_grid',
    'effective_mark',
    'collapse',
    'is_stalemate',
    'count_remaining',
    'GameState',
    'Status',
    'Outcome',
    'IN_PROGRESS',
    'describe_status',
    'new_game',
    'apply_move',
    'current_turn',
    'status',
    'remaining_moves',
    'legal_paths',
]
