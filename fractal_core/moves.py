from __future__ import annotations

import logging
from typing import Any, List, Sequence

from .board import SIZE, Coord, Nested, Path, Resolved, build, visit_children
from .collapse import collapse, count_remaining, is_stalemate
from .errors import GameOver, InvalidPath
from .player import Player
from .state import IN_PROGRESS, GameState, Status
from .winner import derived_grid, find_winner

logger = logging.getLogger(__name__)


def new_game(depth: int) -> GameState:
    """Starts a fresh game on an empty board `depth` levels deep. FIRST moves first."""
    board = build(depth)
    return GameState(
        board=board,
        depth=depth,
        turn=Player.FIRST,
        moves_made=0,
        moves_left=count_remaining(board),
        status=IN_PROGRESS,
    )


def _normalize_coord(raw: Any) -> Coord:
    try:
        x, y = raw
    except (TypeError, ValueError):
        raise InvalidPath(f'Expected an (x, y) pair, got {raw!r}') from None
    for v in (x, y):
        if not isinstance(v, int) or isinstance(v, bool) or not 0 <= v < SIZE:
            raise InvalidPath(f'Coordinate out of range: {raw!r}')
    return x, y


def _validate_path(state: GameState, path: Sequence[Any]) -> Path:
    """Checks that `path` leads through open sub-boards to an unmarked leaf. Read-only."""
    try:
        coords = tuple(_normalize_coord(c) for c in path)
    except TypeError:
        raise InvalidPath(f'Path must be a sequence of (x, y) pairs, got {path!r}') from None
    if len(coords) != state.depth:
        raise InvalidPath(f'Path has {len(coords)} steps, board depth is {state.depth}')

    node: Nested = state.board
    for level, (x, y) in enumerate(coords):
        child = node.at(x, y)
        last = level == len(coords) - 1
        if isinstance(child, Resolved):
            if not last:
                raise InvalidPath(f'Sub-board at {coords[:level + 1]} is already decided')
            if child.is_marked:
                raise InvalidPath(f'Cell at {coords} is already marked by {child.mark}')
            return coords
        if last:
            raise InvalidPath(f'Path {coords} ends on a sub-board, not a cell')
        if is_stalemate(child):
            raise InvalidPath(f'Sub-board at {coords[:level + 1]} is stalemated')
        node = child
    return coords


def apply_move(state: GameState, path: Sequence[Any]) -> Status:
    """
    Marks the leaf at `path` for the player to move and advances the game.

    Raises GameOver or InvalidPath without touching `state` when the move is
    rejected. On success every decided sub-board is collapsed, the root is
    checked for a win or stalemate, the turn passes to the other player (also
    after the final move) and the counters are refreshed.
    """
    if state.status.is_over:
        raise GameOver(f'Game is over: {state.status.outcome}')
    coords = _validate_path(state, path)

    parent = state.board
    for x, y in coords[:-1]:
        parent = parent.at(x, y)  # type: ignore[assignment]
    leaf_x, leaf_y = coords[-1]
    parent.put(leaf_x, leaf_y, Resolved(state.turn))

    collapsed = collapse(state.board)
    winner = find_winner(derived_grid(state.board))
    if winner is not None:
        state.status = Status.won(winner)
    elif is_stalemate(state.board):
        state.status = Status.stalemate()

    logger.debug('%s played %s (%d sub-boards collapsed)', state.turn, coords, collapsed)
    state.turn = state.turn.other()
    state.moves_made += 1
    state.moves_left = count_remaining(state.board)
    if state.status.is_over:
        logger.info('Game over after %d moves: %s', state.moves_made, state.status.outcome)
    return state.status


def current_turn(state: GameState) -> Player:
    return state.turn


def status(state: GameState) -> Status:
    return state.status


def remaining_moves(state: GameState) -> int:
    return state.moves_left


def legal_paths(state: GameState) -> List[Path]:
    """Lists every path apply_move would accept right now, in column-major order."""
    if state.status.is_over:
        return []
    results: List[Path] = []

    def walk(node: Nested, prefix: Path) -> None:
        for coord, child in visit_children(node):
            path = prefix + (coord,)
            if isinstance(child, Resolved):
                if not child.is_marked and len(path) == state.depth:
                    results.append(path)
            elif not is_stalemate(child):
                walk(child, path)

    walk(state.board, ())
    return results
