from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterator, List, Optional, Sequence, Tuple, Union

from .errors import InvalidDepth
from .player import Player

Coord = Tuple[int, int]  # (column, row), each 0..2
Path = Tuple[Coord, ...]

SIZE = 3


@dataclass(frozen=True)
class Resolved:
    """A terminal position: unmarked, or owned by a player."""
    mark: Optional[Player] = None

    @property
    def is_marked(self) -> bool:
        return self.mark is not None


@dataclass
class Nested:
    """An undecided position holding a full 3x3 sub-game, indexed cells[x][y]."""
    cells: List[List['Node']] = field(default_factory=list)

    def at(self, x: int, y: int) -> 'Node':
        return self.cells[x][y]

    def put(self, x: int, y: int, node: 'Node') -> None:
        """Replaces the child at (x, y). Used to mark leaves and collapse sub-boards."""
        self.cells[x][y] = node


Node = Union[Resolved, Nested]


def build(depth: int) -> Nested:
    """Builds an empty board whose leaves all sit exactly `depth` levels below the root."""
    if not isinstance(depth, int) or isinstance(depth, bool) or depth < 1:
        raise InvalidDepth(f'Board depth must be a positive integer, got {depth!r}')
    if depth == 1:
        return Nested([[Resolved() for _ in range(SIZE)] for _ in range(SIZE)])
    return Nested([[build(depth - 1) for _ in range(SIZE)] for _ in range(SIZE)])


def visit_children(node: Node) -> Iterator[Tuple[Coord, Node]]:
    """Iterates over the nine ((x, y), child) pairs of a nested node.

    A resolved node has no children. Callers recurse themselves.
    """
    if isinstance(node, Resolved):
        return
    for x, column in enumerate(node.cells):
        for y, child in enumerate(column):
            yield (x, y), child


def node_at(root: Node, prefix: Sequence[Coord]) -> Optional[Node]:
    """Follows `prefix` down from `root`. Returns None if it runs past a resolved node."""
    node = root
    for x, y in prefix:
        if isinstance(node, Resolved):
            return None
        node = node.at(x, y)
    return node


def iter_leaves(node: Node, prefix: Path = ()) -> Iterator[Tuple[Path, Resolved]]:
    """Yields (path, leaf) for every resolved node below `node`, collapsed sub-boards included."""
    for coord, child in visit_children(node):
        path = prefix + (coord,)
        if isinstance(child, Resolved):
            yield path, child
        else:
            yield from iter_leaves(child, path)
