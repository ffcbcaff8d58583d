from __future__ import annotations

import logging

from .board import Nested, Node, Resolved, visit_children
from .winner import derived_grid, effective_mark, find_winner

logger = logging.getLogger(__name__)


def collapse(root: Nested) -> int:
    """
    Rewrites every decided sub-board below `root` into a resolved leaf.

    Depth-first and post-order: a child's own sub-boards are collapsed before
    the child itself is judged, so a win can cascade upward in a single pass.
    Stalemated sub-boards are left nested. The root is never replaced; its
    winner is read by the caller. Returns the number of sub-boards collapsed.
    """
    collapsed = 0
    for (x, y), child in visit_children(root):
        if isinstance(child, Resolved):
            continue
        collapsed += collapse(child)
        winner = find_winner(derived_grid(child))
        if winner is not None:
            root.put(x, y, Resolved(winner))
            collapsed += 1
            logger.debug('Collapsed sub-board at %s to %s', (x, y), winner)
    return collapsed


def is_stalemate(node: Node) -> bool:
    """A nested node is stalemated when every child is closed and nobody has won it."""
    if isinstance(node, Resolved):
        return False
    for _, child in visit_children(node):
        if isinstance(child, Resolved):
            if not child.is_marked:
                return False
        elif effective_mark(child) is None and not is_stalemate(child):
            return False
    return find_winner(derived_grid(node)) is None


def count_remaining(node: Node) -> int:
    """Counts the unmarked leaves still reachable below `node`."""
    total = 0
    for _, child in visit_children(node):
        if isinstance(child, Resolved):
            total += 0 if child.is_marked else 1
        else:
            total += count_remaining(child)
    return total
