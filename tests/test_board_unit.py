import copy
import unittest

from game import (
    Player,
    Nested,
    Resolved,
    InvalidDepth,
    build,
    visit_children,
    node_at,
    iter_leaves,
    find_winner,
    derived_grid,
    effective_mark,
    collapse,
    is_stalemate,
    count_remaining,
)

MARKS = {'O': Player.FIRST, 'X': Player.SECOND, '.': None}


def make_grid(rows):
    # rows are written top to bottom; the grid is indexed grid[x][y]
    return [[MARKS[rows[y][x]] for y in range(3)] for x in range(3)]


def make_leaf_board(rows):
    grid = make_grid(rows)
    return Nested([[Resolved(grid[x][y]) for y in range(3)] for x in range(3)])


class TestBoardTree(unittest.TestCase):
    def test_given_depth_one_when_building_then_nine_unmarked_leaves(self):
        board = build(1)
        children = list(visit_children(board))
        self.assertEqual(len(children), 9)
        self.assertEqual([c for c, _ in children], [(x, y) for x in range(3) for y in range(3)])
        for _, child in children:
            self.assertEqual(child, Resolved(None))

    def test_given_depths_one_to_five_when_building_then_every_leaf_at_exact_depth(self):
        for depth in range(1, 6):
            board = build(depth)
            depths = {len(path) for path, _ in iter_leaves(board)}
            self.assertEqual(depths, {depth})
            self.assertEqual(count_remaining(board), 9 ** depth)

    def test_given_zero_or_negative_depth_when_building_then_invalid_depth(self):
        for bad in (0, -1, True, 1.5, None):
            with self.assertRaises(InvalidDepth):
                build(bad)

    def test_given_built_tree_when_mutating_one_sibling_then_others_unaffected(self):
        board = build(2)
        first = board.at(0, 0)
        first.put(1, 1, Resolved(Player.FIRST))
        for (x, y), child in visit_children(board):
            if (x, y) != (0, 0):
                self.assertIsNot(child, first)
                self.assertEqual(child.at(1, 1), Resolved(None))

    def test_given_resolved_node_when_visiting_children_then_nothing_yielded(self):
        self.assertEqual(list(visit_children(Resolved(Player.SECOND))), [])

    def test_given_prefixes_when_following_node_at_then_expected_nodes(self):
        board = build(2)
        board.put(2, 2, Resolved(Player.FIRST))
        self.assertIs(node_at(board, ()), board)
        self.assertIs(node_at(board, [(0, 1)]), board.at(0, 1))
        self.assertEqual(node_at(board, [(0, 1), (2, 0)]), Resolved(None))
        self.assertEqual(node_at(board, [(2, 2)]), Resolved(Player.FIRST))
        self.assertIsNone(node_at(board, [(2, 2), (0, 0)]))


class TestWinDetector(unittest.TestCase):
    def test_given_empty_grid_when_checking_then_no_winner(self):
        self.assertIsNone(find_winner(make_grid(['...', '...', '...'])))

    def test_given_each_line_when_checking_then_owner_reported(self):
        lines = [
            ['O..', 'O..', 'O..'],  # column x=0
            ['..O', '..O', '..O'],  # column x=2
            ['OOO', '...', '...'],  # row y=0
            ['...', 'OOO', '...'],  # row y=1
            ['O..', '.O.', '..O'],  # diagonal
            ['..O', '.O.', 'O..'],  # anti-diagonal
        ]
        for rows in lines:
            self.assertIs(find_winner(make_grid(rows)), Player.FIRST, rows)
            flipped = [r.replace('O', 'X') for r in rows]
            self.assertIs(find_winner(make_grid(flipped)), Player.SECOND, flipped)

    def test_given_mixed_or_incomplete_line_when_checking_then_no_winner(self):
        self.assertIsNone(find_winner(make_grid(['OXO', 'XOX', 'XOX'])))
        self.assertIsNone(find_winner(make_grid(['OO.', '...', '...'])))

    def test_given_lines_for_both_players_when_checking_then_first_wins_tie(self):
        grid = make_grid(['OOO', 'XXX', '...'])
        self.assertIs(find_winner(grid), Player.FIRST)

    def test_given_nested_children_when_deriving_grid_then_winners_of_subgames_used(self):
        board = build(2)
        board.put(0, 0, make_leaf_board(['X..', 'X..', 'X..']))
        board.put(1, 1, Resolved(Player.FIRST))
        grid = derived_grid(board)
        self.assertIs(grid[0][0], Player.SECOND)
        self.assertIs(grid[1][1], Player.FIRST)
        self.assertIsNone(grid[2][2])
        self.assertIsNone(effective_mark(board))
        self.assertIs(effective_mark(board.at(0, 0)), Player.SECOND)


class TestCollapseAndStalemate(unittest.TestCase):
    def test_given_won_subboard_when_collapsing_then_replaced_by_resolved_leaf(self):
        board = build(2)
        board.put(0, 0, make_leaf_board(['OX.', 'OX.', 'O..']))
        self.assertEqual(collapse(board), 1)
        self.assertEqual(board.at(0, 0), Resolved(Player.FIRST))
        self.assertIsInstance(board.at(1, 1), Nested)

    def test_given_deep_win_when_collapsing_then_cascades_upward_in_one_pass(self):
        board = build(3)
        middle = board.at(1, 1)
        middle.put(0, 0, Resolved(Player.SECOND))
        middle.put(1, 1, Resolved(Player.SECOND))
        middle.put(2, 2, make_leaf_board(['X..', '.X.', '..X']))
        self.assertEqual(collapse(board), 2)
        self.assertEqual(board.at(1, 1), Resolved(Player.SECOND))

    def test_given_collapsed_tree_when_collapsing_again_then_unchanged(self):
        board = build(2)
        board.put(0, 0, make_leaf_board(['OX.', 'OX.', 'O..']))
        board.put(2, 1, make_leaf_board(['XO.', '.O.', 'X..']))
        collapse(board)
        once = copy.deepcopy(board)
        self.assertEqual(collapse(board), 0)
        self.assertEqual(board, once)

    def test_given_draw_pattern_when_checking_then_stalemate(self):
        board = make_leaf_board(['OXO', 'OXX', 'XOO'])
        self.assertIsNone(find_winner(derived_grid(board)))
        self.assertTrue(is_stalemate(board))

    def test_given_empty_cell_when_checking_then_never_stalemate(self):
        board = make_leaf_board(['OXO', 'OXX', 'XO.'])
        self.assertFalse(is_stalemate(board))

    def test_given_won_board_when_checking_then_not_stalemate(self):
        board = make_leaf_board(['OXX', 'OXO', 'OOX'])
        self.assertFalse(is_stalemate(board))

    def test_given_stalemated_subboards_when_checking_parent_then_stalemate_propagates(self):
        board = build(2)
        marks = ['OXO', 'OXX', 'XOO']
        for (x, y), _ in list(visit_children(board)):
            mark = MARKS[marks[y][x]]
            if (x, y) == (1, 1):
                # owned by nobody, so the outer grid has no complete line either
                board.put(x, y, make_leaf_board(marks))
            else:
                board.put(x, y, Resolved(mark))
        self.assertTrue(is_stalemate(board.at(1, 1)))
        self.assertTrue(is_stalemate(board))
        self.assertIsInstance(board.at(1, 1), Nested)
        self.assertEqual(count_remaining(board), 0)

    def test_given_marked_and_nested_children_when_counting_then_only_empty_leaves(self):
        board = build(2)
        board.put(0, 0, Resolved(Player.FIRST))
        board.at(1, 0).put(2, 2, Resolved(Player.SECOND))
        self.assertEqual(count_remaining(board), 81 - 9 - 1)


if __name__ == '__main__':
    unittest.main(verbosity=2)
